from underwriting.domain.mortgage.rules import (
    DecisionRule,
    Outcome,
    evaluate_loan_decision,
)


def _decide(
    *,
    score: int = 700,
    dti: float = 0.3,
    ltv: float = 0.8,
    occupancy: str = "primary",
    loan_amount: float = 100000,
    property_value: float = 100000,
):
    return evaluate_loan_decision(
        score, dti, ltv, occupancy, loan_amount, property_value
    )


def test_decline_when_property_value_below_minimum() -> None:
    decision = _decide(property_value=70000)

    assert decision.outcome is Outcome.DECLINE
    assert decision.reason == "Property value below minimum ($75,000)"
    assert decision.rule is DecisionRule.PROPERTY_VALUE_BELOW_MINIMUM


def test_property_minimum_wins_over_excellent_credit() -> None:
    decision = _decide(score=800, dti=0.1, ltv=0.5, property_value=74999)

    assert decision.rule is DecisionRule.PROPERTY_VALUE_BELOW_MINIMUM


def test_decline_when_loan_amount_below_minimum() -> None:
    decision = _decide(loan_amount=40000)

    assert decision.outcome is Outcome.DECLINE
    assert decision.reason == "Loan amount below minimum ($50,000)"


def test_minimums_are_inclusive() -> None:
    decision = _decide(
        score=720, dti=0.3, ltv=0.5, loan_amount=50000, property_value=75000
    )

    assert decision.rule is DecisionRule.STANDARD_APPROVAL


def test_excellent_credit_approves_high_ltv() -> None:
    decision = _decide(
        score=750, dti=0.44, ltv=0.95, loan_amount=95000, property_value=100000
    )

    assert decision.outcome is Outcome.APPROVE
    assert decision.reason == "Excellent credit allows higher LTV"


def test_excellent_credit_overrides_non_primary_ltv_cap() -> None:
    decision = _decide(score=740, dti=0.45, ltv=0.95, occupancy="investment")

    assert decision.rule is DecisionRule.EXCELLENT_CREDIT


def test_excellent_credit_does_not_apply_above_its_ltv_limit() -> None:
    decision = _decide(score=760, dti=0.2, ltv=0.96)

    assert decision.rule is DecisionRule.PRIMARY_LTV_TOO_HIGH


def test_decline_low_credit_for_primary() -> None:
    decision = _decide(score=600)

    assert decision.outcome is Outcome.DECLINE
    assert decision.reason == "Credit score too low for primary residence"


def test_decline_low_credit_for_investment() -> None:
    decision = _decide(score=670, occupancy="investment")

    assert decision.reason == "Credit score too low for secondary/investment property"


def test_decline_low_credit_for_secondary() -> None:
    decision = _decide(score=679, occupancy="secondary")

    assert decision.rule is DecisionRule.NON_PRIMARY_CREDIT_TOO_LOW


def test_decline_high_ltv_for_primary() -> None:
    decision = _decide(ltv=0.91, loan_amount=91000)

    assert decision.reason == "LTV exceeds 90% for primary residence"


def test_decline_high_ltv_for_investment() -> None:
    decision = _decide(ltv=0.81, occupancy="investment", loan_amount=81000)

    assert decision.reason == "LTV exceeds 80% for secondary/investment property"


def test_decline_high_dti_for_credit_below_700() -> None:
    decision = _decide(score=650, dti=0.41, loan_amount=80000)

    assert decision.reason == "DTI exceeds 36% for credit score below 700"


def test_decline_dti_above_fifty_percent() -> None:
    decision = _decide(score=750, dti=0.51, loan_amount=80000)

    assert decision.outcome is Outcome.DECLINE
    assert decision.reason == "DTI exceeds 50%"


def test_standard_approval() -> None:
    decision = _decide(
        score=720, dti=0.42, ltv=0.85, loan_amount=85000, property_value=100000
    )

    assert decision.outcome is Outcome.APPROVE
    assert decision.reason == "Meets standard approval criteria"


def test_refer_when_no_rule_matches() -> None:
    decision = _decide(
        score=700, dti=0.44, ltv=0.85, loan_amount=85000, property_value=100000
    )

    assert decision.outcome is Outcome.REFER
    assert decision.reason == "Requires further review"


def test_refer_secondary_with_credit_below_700() -> None:
    decision = _decide(score=690, dti=0.3, ltv=0.75, occupancy="secondary")

    assert decision.rule is DecisionRule.MANUAL_REVIEW


def test_unknown_occupancy_skips_occupancy_limits() -> None:
    low_score = _decide(score=500, dti=0.2, ltv=0.7, occupancy="vacation")
    high_ltv = _decide(score=720, dti=0.2, ltv=0.99, occupancy="vacation")

    assert low_score.rule is DecisionRule.MANUAL_REVIEW
    assert high_ltv.rule is DecisionRule.MANUAL_REVIEW


def test_unknown_occupancy_can_still_get_standard_approval() -> None:
    decision = _decide(score=720, dti=0.3, ltv=0.8, occupancy="vacation")

    assert decision.rule is DecisionRule.STANDARD_APPROVAL


def test_occupancy_match_is_case_sensitive() -> None:
    decision = _decide(score=600, dti=0.2, ltv=0.7, occupancy="Primary")

    assert decision.rule is DecisionRule.MANUAL_REVIEW


def test_evaluation_is_deterministic() -> None:
    first = _decide(score=705, dti=0.4, ltv=0.88)
    second = _decide(score=705, dti=0.4, ltv=0.88)

    assert first == second
    assert (first.outcome, first.reason) == (second.outcome, second.reason)


def test_every_rule_has_a_reason() -> None:
    for rule in DecisionRule:
        assert rule.message
        assert isinstance(rule.outcome, Outcome)


def test_rule_id_is_the_rule_name() -> None:
    decision = _decide(property_value=1)

    assert decision.rule_id == "PROPERTY_VALUE_BELOW_MINIMUM"


def test_outcome_values_match_wire_format() -> None:
    assert [outcome.value for outcome in Outcome] == ["Approve", "Refer", "Decline"]


def test_primary_ltv_at_ninety_percent_is_not_declined() -> None:
    decision = _decide(score=720, dti=0.3, ltv=0.90)

    assert decision.rule is DecisionRule.STANDARD_APPROVAL


def test_secondary_ltv_at_eighty_percent_is_not_declined() -> None:
    decision = _decide(score=720, dti=0.3, ltv=0.80, occupancy="secondary")

    assert decision.rule is DecisionRule.STANDARD_APPROVAL


def test_dti_at_thirty_six_percent_below_700_is_not_declined() -> None:
    decision = _decide(score=699, dti=0.36, ltv=0.8)

    assert decision.rule is DecisionRule.MANUAL_REVIEW


def test_dti_at_fifty_percent_is_not_declined() -> None:
    at_limit = _decide(score=710, dti=0.50, ltv=0.8)
    above_limit = _decide(score=710, dti=0.5001, ltv=0.8)

    assert at_limit.rule is DecisionRule.MANUAL_REVIEW
    assert above_limit.rule is DecisionRule.DTI_TOO_HIGH


def test_standard_approval_at_700_and_forty_three_percent_dti() -> None:
    decision = _decide(score=700, dti=0.43, ltv=0.8)

    assert decision.rule is DecisionRule.STANDARD_APPROVAL
