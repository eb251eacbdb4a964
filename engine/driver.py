"""
Simulation driver — advances every goal together, one month at a time, from
the origin month through the full horizon.

Per month M:
  1. eligible = goals started by M and not completed
     (skip the month when none are eligible)
  2. weights from current balances (engine.weighting)
  3. allocation_i = surplus_M * weight_i / sum(weights)
  4. balance_i = balance_i * (1 + r_i) + allocation_i   (engine.compounding)
  5. goals whose balance reached target complete in M; they get nothing after.

Overshoot in the completion month is kept as-is; it is not redistributed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd

from core.config import ProjectionConfig
from core.schema import NOT_COMPLETED

from .compounding import compound
from .goal_state import GoalStateTable
from .summarizer import MonthlyTotals
from .weighting import allocation_weights, distribute_surplus

logger = logging.getLogger("surplus_planner.engine")


@dataclass
class SimulationResult:
    """Everything the snapshot generator needs after the forward pass."""
    states: GoalStateTable
    totals: MonthlyTotals
    config: ProjectionConfig
    month_dates: pd.DatetimeIndex   # (horizon,) month starts from the origin
    income: np.ndarray              # (horizon,)
    surplus: np.ndarray             # (horizon,)
    allocated: np.ndarray           # (horizon,) total handed to goals each month

    @property
    def horizon(self) -> int:
        return len(self.month_dates)

    def to_frame(self) -> pd.DataFrame:
        """Long goal x month table of the forward pass (for CSV export and inspection)."""
        st = self.states
        n, h = len(st), self.horizon
        months = np.tile(np.arange(h), n)
        goal_idx = np.repeat(np.arange(n), h)
        start = st.start_month[goal_idx]
        done = st.completion_month[goal_idx]
        status = np.where(
            months < start,
            "not_started",
            np.where((done != NOT_COMPLETED) & (months >= done), "completed", "active"),
        )
        return pd.DataFrame(
            {
                "goal_id": np.repeat(np.asarray(st.goal_ids, dtype=object), h),
                "month_index": months,
                "month": np.tile(self.month_dates.strftime("%Y-%m").to_numpy(), n),
                "allocation": st.allocations.reshape(-1),
                "end_balance": st.balances.reshape(-1),
                "target_amount": st.target[goal_idx],
                "status": status,
            }
        )


def simulate(states: GoalStateTable, totals: MonthlyTotals, config: ProjectionConfig) -> SimulationResult:
    """
    Run the forward pass over config.horizon months. Mutates `states`
    (balances, ledger, completion months) and returns the result wrapper.
    """
    horizon = states.horizon
    income = totals.income_series(horizon)
    surplus = totals.surplus_series(horizon)
    allocated = np.zeros(horizon, dtype=float)

    for month in range(horizon):
        eligible = states.eligible(month)
        if eligible.any():
            idx = np.flatnonzero(eligible)
            weights = allocation_weights(
                states.target[idx],
                states.balance[idx],
                states.deadline_month[idx],
                states.urgency[idx],
                month,
            )
            alloc = distribute_surplus(float(surplus[month]), weights)

            states.allocations[idx, month] = alloc
            states.balance[idx] = compound(states.balance[idx], states.monthly_rate[idx], alloc)
            allocated[month] = float(alloc.sum())

            finished = states.just_crossed_target() & eligible
            states.completion_month[finished] = month
            if finished.any():
                logger.debug(
                    "Month %d: %d goal(s) completed: %s",
                    month,
                    int(finished.sum()),
                    [states.goal_ids[i] for i in np.flatnonzero(finished)],
                )

        # not-started and completed goals carry their balance forward unchanged
        states.balances[:, month] = states.balance

    return SimulationResult(
        states=states,
        totals=totals,
        config=config,
        month_dates=pd.date_range(config.origin, periods=horizon, freq="MS"),
        income=income,
        surplus=surplus,
        allocated=allocated,
    )
