from __future__ import annotations

from dataclasses import dataclass

from underwriting.domain.mortgage.ratios import RatioResult, compute_dti, compute_ltv
from underwriting.domain.mortgage.rules import Decision, evaluate_loan_decision


@dataclass(frozen=True)
class LoanApplication:
    borrower_name: str
    monthly_income: float
    monthly_debts: float
    loan_amount: float
    property_value: float
    credit_score: int
    occupancy: str


@dataclass(frozen=True)
class UnderwriteOutcome:
    ratios: RatioResult
    decision: Decision


def compute_ratios(application: LoanApplication) -> RatioResult:
    return RatioResult(
        dti=compute_dti(application.monthly_debts, application.monthly_income),
        ltv=compute_ltv(application.loan_amount, application.property_value),
    )


def underwrite_application(application: LoanApplication) -> UnderwriteOutcome:
    """Compute ratios, then decide.

    Raises ``InvalidInputError`` before any rule runs when a ratio has a
    zero denominator.
    """
    ratios = compute_ratios(application)
    decision = evaluate_loan_decision(
        application.credit_score,
        ratios.dti,
        ratios.ltv,
        application.occupancy,
        application.loan_amount,
        application.property_value,
    )
    return UnderwriteOutcome(ratios=ratios, decision=decision)
