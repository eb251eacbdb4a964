"""
Goal state tracker — transient per-goal simulation state.

One row per active goal, stored column-wise as numpy arrays (struct of arrays).
Month fields are indices relative to the simulation origin (month 0 = the
origin month); start months before the origin are negative.

Lifecycle per goal: NOT_STARTED -> ACTIVE -> COMPLETED (terminal).

The per-month allocation ledger and end-of-month balance cache are dense
(n_goals x horizon) arrays indexed by month.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import numpy as np
import pandas as pd

from core.schema import ACTIVE, COMPLETED, DEFAULT_URGENCY_SCORE, NOT_COMPLETED, NOT_STARTED
from core.utils import month_start, months_between

from .compounding import goal_growth_rates


def _raw_or_none(value) -> Optional[str]:
    if value is None or pd.isna(value):
        return None
    if isinstance(value, pd.Timestamp):
        return value.strftime("%Y-%m-%d")
    s = str(value).strip()
    return s or None


@dataclass
class GoalStateTable:
    goal_ids: List[str]
    titles: List[str]
    categories: np.ndarray        # (n,) str
    target: np.ndarray            # (n,) target_amount
    initial_balance: np.ndarray   # (n,) current_amount at the origin
    balance: np.ndarray           # (n,) evolving balance
    urgency: np.ndarray           # (n,) urgency_score, missing or <= 0 -> 3
    monthly_rate: np.ndarray      # (n,) monthly growth rate (0 unless investment)
    start_month: np.ndarray       # (n,) int
    deadline_month: np.ndarray    # (n,) int
    completion_month: np.ndarray  # (n,) int, NOT_COMPLETED until set
    allocations: np.ndarray       # (n, horizon) ledger
    balances: np.ndarray          # (n, horizon) end-of-month balance cache
    start_dates: List[pd.Timestamp]
    deadline_raw: List[Optional[str]]
    start_date_raw: List[Optional[str]]

    @classmethod
    def from_goals(cls, goals: pd.DataFrame, origin: pd.Timestamp, horizon: int) -> "GoalStateTable":
        """
        Build state for each row of an (already active-filtered) goal frame.

        start month = month of start_date, or the origin month when absent
        deadline month = month of deadline
        balance = current_amount, completion unset
        """
        origin = pd.Timestamp(origin)
        n = len(goals)

        start_dates: List[pd.Timestamp] = []
        start_month = np.zeros(n, dtype=int)
        deadline_month = np.zeros(n, dtype=int)
        for k, (start_raw, deadline_raw) in enumerate(zip(goals["start_date"], goals["deadline"])):
            start = month_start(start_raw)
            if start is None:
                start = origin
            deadline = month_start(deadline_raw)
            if deadline is None:
                raise ValueError(f"Goal {goals['id'].iloc[k]!r} has no parseable deadline.")
            start_dates.append(start)
            start_month[k] = months_between(origin, start)
            deadline_month[k] = months_between(origin, deadline)

        current = pd.to_numeric(goals["current_amount"], errors="coerce").fillna(0.0).to_numpy(dtype=float)
        urgency = pd.to_numeric(goals["urgency_score"], errors="coerce").to_numpy(dtype=float)
        # missing, zero and negative scores fall back to the default
        urgency = np.where(urgency > 0, urgency, float(DEFAULT_URGENCY_SCORE))
        categories = goals["category"].astype(str).to_numpy()
        rates = goal_growth_rates(
            categories, pd.to_numeric(goals["interest_rate"], errors="coerce").to_numpy(dtype=float)
        )

        return cls(
            goal_ids=goals["id"].astype(str).tolist(),
            titles=goals["title"].fillna("").astype(str).tolist(),
            categories=categories,
            target=pd.to_numeric(goals["target_amount"], errors="coerce").to_numpy(dtype=float),
            initial_balance=current.copy(),
            balance=current.copy(),
            urgency=urgency,
            monthly_rate=rates,
            start_month=start_month,
            deadline_month=deadline_month,
            completion_month=np.full(n, NOT_COMPLETED, dtype=int),
            allocations=np.zeros((n, horizon), dtype=float),
            balances=np.tile(current[:, None], (1, horizon)) if horizon > 0 else np.zeros((n, 0)),
            start_dates=start_dates,
            deadline_raw=[_raw_or_none(v) for v in goals["deadline"]],
            start_date_raw=[_raw_or_none(v) for v in goals["start_date"]],
        )

    def __len__(self) -> int:
        return len(self.goal_ids)

    @property
    def horizon(self) -> int:
        return self.allocations.shape[1]

    # --- queries used by the driver ---

    def is_completed(self) -> np.ndarray:
        return self.completion_month != NOT_COMPLETED

    def eligible(self, month: int) -> np.ndarray:
        """Started by `month` and not yet completed."""
        return (self.start_month <= month) & ~self.is_completed()

    def just_crossed_target(self) -> np.ndarray:
        """Balance at or above target with completion not yet recorded."""
        return (self.balance >= self.target) & ~self.is_completed()

    # --- per-month views used by the snapshot generator ---

    def lifecycle(self, i: int, month: int) -> str:
        if month < self.start_month[i]:
            return NOT_STARTED
        done = self.completion_month[i]
        if done != NOT_COMPLETED and month >= done:
            return COMPLETED
        return ACTIVE

    def balance_at(self, i: int, month: int) -> float:
        """Balance at the end of `month` as computed by the forward pass."""
        return float(self.balances[i, month])

    def allocation_at(self, i: int, month: int) -> float:
        return float(self.allocations[i, month])
