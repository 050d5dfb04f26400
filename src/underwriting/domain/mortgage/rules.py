"""Underwriting rule table.

Rules are evaluated in a fixed order and the first match decides. Each
rule is a member of :class:`DecisionRule` carrying its outcome and the
reason message shown to borrowers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

MIN_PROPERTY_VALUE = 75000
MIN_LOAN_AMOUNT = 50000

EXCELLENT_CREDIT_SCORE = 740
EXCELLENT_CREDIT_MAX_DTI = 0.45
EXCELLENT_CREDIT_MAX_LTV = 0.95

PRIMARY_MIN_CREDIT_SCORE = 620
NON_PRIMARY_MIN_CREDIT_SCORE = 680
PRIMARY_MAX_LTV = 0.90
NON_PRIMARY_MAX_LTV = 0.80

GOOD_CREDIT_SCORE = 700
BELOW_GOOD_CREDIT_MAX_DTI = 0.36
ABSOLUTE_MAX_DTI = 0.50
STANDARD_MAX_DTI = 0.43

PRIMARY = "primary"
SECONDARY = "secondary"
INVESTMENT = "investment"
KNOWN_OCCUPANCIES = (PRIMARY, SECONDARY, INVESTMENT)
_NON_PRIMARY = {SECONDARY, INVESTMENT}


class Outcome(str, Enum):
    APPROVE = "Approve"
    REFER = "Refer"
    DECLINE = "Decline"


class DecisionRule(Enum):
    PROPERTY_VALUE_BELOW_MINIMUM = (
        Outcome.DECLINE,
        "Property value below minimum ($75,000)",
    )
    LOAN_AMOUNT_BELOW_MINIMUM = (
        Outcome.DECLINE,
        "Loan amount below minimum ($50,000)",
    )
    EXCELLENT_CREDIT = (Outcome.APPROVE, "Excellent credit allows higher LTV")
    PRIMARY_CREDIT_TOO_LOW = (
        Outcome.DECLINE,
        "Credit score too low for primary residence",
    )
    NON_PRIMARY_CREDIT_TOO_LOW = (
        Outcome.DECLINE,
        "Credit score too low for secondary/investment property",
    )
    PRIMARY_LTV_TOO_HIGH = (Outcome.DECLINE, "LTV exceeds 90% for primary residence")
    NON_PRIMARY_LTV_TOO_HIGH = (
        Outcome.DECLINE,
        "LTV exceeds 80% for secondary/investment property",
    )
    DTI_TOO_HIGH_FOR_CREDIT = (
        Outcome.DECLINE,
        "DTI exceeds 36% for credit score below 700",
    )
    DTI_TOO_HIGH = (Outcome.DECLINE, "DTI exceeds 50%")
    STANDARD_APPROVAL = (Outcome.APPROVE, "Meets standard approval criteria")
    MANUAL_REVIEW = (Outcome.REFER, "Requires further review")

    def __init__(self, outcome: Outcome, message: str) -> None:
        self.outcome = outcome
        self.message = message


@dataclass(frozen=True)
class Decision:
    rule: DecisionRule

    @property
    def outcome(self) -> Outcome:
        return self.rule.outcome

    @property
    def reason(self) -> str:
        return self.rule.message

    @property
    def rule_id(self) -> str:
        return self.rule.name


def _match_rule(
    credit_score: int,
    dti: float,
    ltv: float,
    occupancy: str,
    loan_amount: float,
    property_value: float,
) -> DecisionRule:
    if property_value < MIN_PROPERTY_VALUE:
        return DecisionRule.PROPERTY_VALUE_BELOW_MINIMUM
    if loan_amount < MIN_LOAN_AMOUNT:
        return DecisionRule.LOAN_AMOUNT_BELOW_MINIMUM

    # Excellent credit overrides every occupancy, LTV and DTI limit below.
    if (
        credit_score >= EXCELLENT_CREDIT_SCORE
        and dti <= EXCELLENT_CREDIT_MAX_DTI
        and ltv <= EXCELLENT_CREDIT_MAX_LTV
    ):
        return DecisionRule.EXCELLENT_CREDIT

    # Unrecognised occupancy values fall through both occupancy checks.
    if occupancy == PRIMARY:
        if credit_score < PRIMARY_MIN_CREDIT_SCORE:
            return DecisionRule.PRIMARY_CREDIT_TOO_LOW
    elif occupancy in _NON_PRIMARY:
        if credit_score < NON_PRIMARY_MIN_CREDIT_SCORE:
            return DecisionRule.NON_PRIMARY_CREDIT_TOO_LOW

    if occupancy == PRIMARY:
        if ltv > PRIMARY_MAX_LTV:
            return DecisionRule.PRIMARY_LTV_TOO_HIGH
    elif occupancy in _NON_PRIMARY:
        if ltv > NON_PRIMARY_MAX_LTV:
            return DecisionRule.NON_PRIMARY_LTV_TOO_HIGH

    if credit_score < GOOD_CREDIT_SCORE and dti > BELOW_GOOD_CREDIT_MAX_DTI:
        return DecisionRule.DTI_TOO_HIGH_FOR_CREDIT
    if dti > ABSOLUTE_MAX_DTI:
        return DecisionRule.DTI_TOO_HIGH

    within_ltv = (occupancy == PRIMARY and ltv <= PRIMARY_MAX_LTV) or (
        ltv <= NON_PRIMARY_MAX_LTV
    )
    if credit_score >= GOOD_CREDIT_SCORE and dti <= STANDARD_MAX_DTI and within_ltv:
        return DecisionRule.STANDARD_APPROVAL

    return DecisionRule.MANUAL_REVIEW


def evaluate_loan_decision(
    credit_score: int,
    dti: float,
    ltv: float,
    occupancy: str,
    loan_amount: float,
    property_value: float,
) -> Decision:
    """Apply the rule table and return the first matching decision.

    Total over numeric inputs and any occupancy string; never raises.
    """
    return Decision(
        rule=_match_rule(
            credit_score, dti, ltv, occupancy, loan_amount, property_value
        )
    )
