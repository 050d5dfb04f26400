from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from underwriting.domain.mortgage.underwrite import LoanApplication, UnderwriteOutcome


class LoanApplicationRequest(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    name: str = Field(max_length=100)
    monthly_income: float = Field(ge=0)
    monthly_debts: float = Field(ge=0)
    loan_amount: float = Field(ge=0)
    property_value: float = Field(ge=0)
    credit_score: int
    occupancy: str = Field(max_length=50)

    def to_application(self) -> LoanApplication:
        return LoanApplication(
            borrower_name=self.name,
            monthly_income=self.monthly_income,
            monthly_debts=self.monthly_debts,
            loan_amount=self.loan_amount,
            property_value=self.property_value,
            credit_score=self.credit_score,
            occupancy=self.occupancy,
        )


class LoanDecisionResponse(BaseModel):
    decision: str
    dti: float
    ltv: float
    reason: str
    request_id: str


class NewLoanRecord(BaseModel):
    name: str
    monthly_income: float
    monthly_debts: float
    loan_amount: float
    property_value: float
    credit_score: int
    occupancy: str
    decision: str
    dti: float
    ltv: float
    reason: str

    @classmethod
    def from_outcome(
        cls, application: LoanApplication, outcome: UnderwriteOutcome
    ) -> NewLoanRecord:
        return cls(
            name=application.borrower_name,
            monthly_income=application.monthly_income,
            monthly_debts=application.monthly_debts,
            loan_amount=application.loan_amount,
            property_value=application.property_value,
            credit_score=application.credit_score,
            occupancy=application.occupancy,
            decision=outcome.decision.outcome.value,
            dti=outcome.ratios.dti,
            ltv=outcome.ratios.ltv,
            reason=outcome.decision.reason,
        )


class LoanRecord(NewLoanRecord):
    id: int
    created_at: datetime
