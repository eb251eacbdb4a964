"""
Projection runner — orchestrates one projection request end to end.

  records -> canonical frames (data_prep)
          -> MonthlyTotals (summarizer) + GoalStateTable (goal_state)
          -> forward pass over the full horizon (driver)
          -> per-month snapshots for the display window (reporting)

Nothing is persisted between calls; the same records and config always give
the same response.
"""

from __future__ import annotations

import logging
from typing import Optional

import pandas as pd

from core.config import ProjectionConfig
from data_prep.frames import Records, build_goal_frame, filter_active
from reporting.schema import ProjectionResponse
from reporting.snapshots import build_monthly_snapshots, financial_only_snapshots

from .driver import SimulationResult, simulate
from .goal_state import GoalStateTable
from .summarizer import summarize_financials

logger = logging.getLogger("surplus_planner.engine")


def active_goals(goals: Records) -> pd.DataFrame:
    """Canonical goal frame restricted to status == 'active'."""
    return filter_active(build_goal_frame(goals))


def simulate_projection(
    goals: Records,
    income_sources: Records = None,
    side_projects: Records = None,
    recurring_expenses: Records = None,
    transactions: Records = None,
    *,
    config: Optional[ProjectionConfig] = None,
) -> SimulationResult:
    """Run the forward pass only; returns the raw goal x month state."""
    cfg = config or ProjectionConfig()
    goal_frame = active_goals(goals)
    totals = summarize_financials(
        income_sources, side_projects, recurring_expenses, transactions, config=cfg
    )
    states = GoalStateTable.from_goals(goal_frame, cfg.origin, cfg.horizon)
    return simulate(states, totals, cfg)


def run_projection(
    goals: Records,
    income_sources: Records = None,
    side_projects: Records = None,
    recurring_expenses: Records = None,
    transactions: Records = None,
    *,
    config: Optional[ProjectionConfig] = None,
) -> ProjectionResponse:
    """
    Monthly goal projection for the window config.month_offset ..
    config.month_offset + config.months - 1.

    Parameters
    ----------
    goals : DataFrame or list of dicts
        Goal records; only status == "active" goals take part.
    income_sources, side_projects, recurring_expenses, transactions
        The user's income and obligation records (see engine.summarizer).
    config : ProjectionConfig, optional
        Window and origin. Defaults to 12 months from the current month.

    Returns
    -------
    ProjectionResponse
        Ordered monthly snapshots plus the echoed offset and active goal count.
    """
    cfg = config or ProjectionConfig()
    goal_frame = active_goals(goals)
    totals = summarize_financials(
        income_sources, side_projects, recurring_expenses, transactions, config=cfg
    )

    if goal_frame.empty:
        logger.info("No active goals; returning %d financial-only months", cfg.window_months)
        return ProjectionResponse(
            monthly_projections=financial_only_snapshots(totals, cfg),
            current_month_offset=cfg.month_offset,
            total_goals=0,
        )

    states = GoalStateTable.from_goals(goal_frame, cfg.origin, cfg.horizon)
    sim = simulate(states, totals, cfg)
    snapshots = build_monthly_snapshots(sim)

    logger.info(
        "Projected %d goals over %d months (offset %d, horizon %d)",
        len(states),
        len(snapshots),
        cfg.month_offset,
        sim.horizon,
    )
    return ProjectionResponse(
        monthly_projections=snapshots,
        current_month_offset=cfg.month_offset,
        total_goals=len(states),
    )
