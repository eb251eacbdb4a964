"""
Allocation weighting — splits one month's surplus across the goals eligible
that month.

For each eligible goal:
  remaining            = max(0, target - balance)
  months_until         = max(1, deadline_month - month)
  monthly_requirement  = remaining / months_until
  time_pressure        = max(0.1, 12 / months_until)
  weight               = monthly_requirement * urgency * time_pressure

Each goal receives surplus * weight / sum(weights). When every weight is zero
(all eligible goals already funded) nobody receives anything that month.

Weights depend on balances, which depend on earlier allocations, so this is
evaluated one month at a time in simulation order.
"""

from __future__ import annotations

import numpy as np

MIN_MONTHS_UNTIL_DEADLINE = 1
MIN_TIME_PRESSURE = 0.1
PRESSURE_HORIZON_MONTHS = 12.0


def months_until_deadline(deadline_month: np.ndarray, month: int) -> np.ndarray:
    """Months left before the deadline, floored at 1 (overdue goals count as 1)."""
    return np.maximum(MIN_MONTHS_UNTIL_DEADLINE, np.asarray(deadline_month) - month)


def time_pressure(months_until: np.ndarray) -> np.ndarray:
    return np.maximum(MIN_TIME_PRESSURE, PRESSURE_HORIZON_MONTHS / np.asarray(months_until, dtype=float))


def allocation_weights(
    target: np.ndarray,
    balance: np.ndarray,
    deadline_month: np.ndarray,
    urgency: np.ndarray,
    month: int,
) -> np.ndarray:
    """Priority weight per goal for `month`. All inputs are aligned 1-D arrays."""
    remaining = np.maximum(0.0, np.asarray(target, dtype=float) - np.asarray(balance, dtype=float))
    months_until = months_until_deadline(deadline_month, month)
    monthly_requirement = remaining / months_until
    return monthly_requirement * np.asarray(urgency, dtype=float) * time_pressure(months_until)


def distribute_surplus(surplus: float, weights: np.ndarray) -> np.ndarray:
    """Normalize weights to shares of `surplus`; all zeros when the weights sum to zero."""
    weights = np.asarray(weights, dtype=float)
    total = float(weights.sum())
    if total <= 0.0:
        return np.zeros_like(weights)
    return surplus * (weights / total)
