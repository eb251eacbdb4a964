"""
Compounding — growth for investment goals.

Growth lands on the prior balance before the month's allocation, so a new
contribution earns nothing until the following month.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from core.schema import GROWTH_CATEGORY
from core.utils import annual_to_monthly_growth


def monthly_growth_rate(annual_percent: Optional[float]) -> float:
    """(1 + p/100)^(1/12) - 1, or 0 for a missing / non-positive rate."""
    if annual_percent is None:
        return 0.0
    return float(annual_to_monthly_growth(annual_percent))


def goal_growth_rates(categories: np.ndarray, annual_percent: np.ndarray) -> np.ndarray:
    """Per-goal monthly rate; zero for every category except investment."""
    rates = annual_to_monthly_growth(annual_percent)
    return np.where(np.asarray(categories) == GROWTH_CATEGORY, rates, 0.0)


def compound(balance, monthly_rate, allocation):
    """balance * (1 + r) + allocation (vectorized)."""
    return np.asarray(balance, dtype=float) * (1.0 + np.asarray(monthly_rate, dtype=float)) + allocation
