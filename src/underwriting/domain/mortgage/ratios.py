"""Debt-to-income and loan-to-value ratios.

Pure arithmetic, no I/O. Ratios are returned raw: callers compare them
against underwriting thresholds, so nothing here rounds or clamps.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


class InvalidInputError(ValueError):
    """A ratio cannot be computed from the supplied figures."""

    def __init__(self, ratio: str, message: str) -> None:
        super().__init__(message)
        self.ratio = ratio


@dataclass(frozen=True)
class RatioResult:
    dti: float
    ltv: float


def compute_dti(monthly_debts: float, monthly_income: float) -> float:
    """Return ``monthly_debts / monthly_income``; may exceed 1.0."""
    if monthly_income == 0:
        raise InvalidInputError("DTI", "monthly income cannot be zero")
    dti = monthly_debts / monthly_income
    if not math.isfinite(dti):
        raise InvalidInputError("DTI", "debt-to-income ratio is not a finite number")
    return dti


def compute_ltv(loan_amount: float, property_value: float) -> float:
    """Return ``loan_amount / property_value``."""
    if property_value == 0:
        raise InvalidInputError("LTV", "property value cannot be zero")
    ltv = loan_amount / property_value
    if not math.isfinite(ltv):
        raise InvalidInputError("LTV", "loan-to-value ratio is not a finite number")
    return ltv
