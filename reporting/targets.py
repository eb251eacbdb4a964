"""
Daily savings target — what the user needs to put aside per day to stay on
track with every active goal and recurring obligation, compared with what
their income sources suggest they actually earn.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np
import pandas as pd

from core.schema import DAYS_PER_MONTH, RECURRING_INCOME_CATEGORIES, WEEKS_PER_MONTH
from core.utils import round_half_away, to_naive_datetime
from data_prep.frames import (
    build_expense_frame,
    build_goal_frame,
    build_income_source_frame,
    build_side_project_frame,
    build_transaction_frame,
    column_total,
    filter_active,
)
from data_prep.income import summarize_income_sources

logger = logging.getLogger("surplus_planner.reporting")

FALLBACK_LOOKBACK_DAYS = 30


@dataclass(frozen=True)
class DailyTarget:
    daily_target: float
    monthly_goal_obligations: float
    monthly_recurring_total: float
    total_monthly_obligations: float
    estimated_monthly_income: float
    monthly_project_income: float
    monthly_surplus_deficit: float
    daily_surplus_deficit: float
    active_goals_count: int
    recurring_expenses_count: int
    has_commission_income: bool
    income_estimate_low: float
    income_estimate_mid: float
    income_estimate_high: float

    def to_dict(self) -> Dict[str, object]:
        return {
            "dailyTarget": self.daily_target,
            "monthlyGoalObligations": self.monthly_goal_obligations,
            "monthlyRecurringTotal": self.monthly_recurring_total,
            "totalMonthlyObligations": self.total_monthly_obligations,
            "estimatedMonthlyIncome": self.estimated_monthly_income,
            "monthlyProjectIncome": self.monthly_project_income,
            "monthlySurplusDeficit": self.monthly_surplus_deficit,
            "dailySurplusDeficit": self.daily_surplus_deficit,
            "activeGoalsCount": self.active_goals_count,
            "recurringExpensesCount": self.recurring_expenses_count,
            "hasCommissionIncome": self.has_commission_income,
            "incomeEstimateLow": self.income_estimate_low,
            "incomeEstimateMid": self.income_estimate_mid,
            "incomeEstimateHigh": self.income_estimate_high,
        }


def months_left(deadlines: pd.Series, as_of: pd.Timestamp) -> np.ndarray:
    """Whole months (rounded, at least 1) from `as_of` to each deadline."""
    deadline_ts = to_naive_datetime(deadlines)
    days = (deadline_ts - pd.Timestamp(as_of)).dt.total_seconds().to_numpy(dtype=float) / 86400.0
    months = np.floor(days / DAYS_PER_MONTH + 0.5)
    months = np.where(np.isfinite(months), months, 1.0)
    return np.maximum(1.0, months)


def monthly_goal_obligations(goals: pd.DataFrame, as_of: pd.Timestamp) -> float:
    """Sum over goals of max(0, remaining / months_left)."""
    if goals.empty:
        return 0.0
    target = pd.to_numeric(goals["target_amount"], errors="coerce").fillna(0.0).to_numpy(dtype=float)
    current = pd.to_numeric(goals["current_amount"], errors="coerce").fillna(0.0).to_numpy(dtype=float)
    required = (target - current) / months_left(goals["deadline"], as_of)
    return float(np.maximum(0.0, required).sum())


def transaction_income_estimate(transactions: pd.DataFrame, as_of: pd.Timestamp) -> float:
    """
    Monthly income implied by recent recurring-income transactions:
    mean amount of salary/freelance/business income in the last 30 days x 4.33.
    """
    if transactions.empty:
        return 0.0
    cutoff = pd.Timestamp(as_of) - pd.Timedelta(days=FALLBACK_LOOKBACK_DAYS)
    dates = to_naive_datetime(transactions["transaction_date"])
    mask = (
        (transactions["type"] == "income")
        & transactions["category"].isin(RECURRING_INCOME_CATEGORIES)
        & (dates >= cutoff)
    )
    recent = pd.to_numeric(transactions.loc[mask, "amount"], errors="coerce").dropna()
    if recent.empty:
        return 0.0
    return float(recent.mean()) * WEEKS_PER_MONTH


def calculate_daily_target(
    goals=None,
    income_sources=None,
    side_projects=None,
    recurring_expenses=None,
    transactions=None,
    *,
    as_of: Optional[pd.Timestamp] = None,
) -> DailyTarget:
    """
    Daily savings target for the user's active goals and recurring expenses.

    Parameters
    ----------
    goals, income_sources, side_projects, recurring_expenses, transactions
        Record collections (DataFrames or lists of dicts); any may be omitted.
    as_of : pd.Timestamp, optional
        Reference date for months-left and the transaction lookback. Defaults to today.

    Returns
    -------
    DailyTarget
        All money figures rounded to cents.
    """
    as_of = pd.Timestamp.today().normalize() if as_of is None else pd.Timestamp(as_of)
    if as_of.tzinfo is not None:
        as_of = as_of.tz_convert(None)

    active_goals = filter_active(build_goal_frame(goals))
    expenses = filter_active(build_expense_frame(recurring_expenses))
    projects = filter_active(build_side_project_frame(side_projects))
    income = summarize_income_sources(build_income_source_frame(income_sources))

    goal_obligations = monthly_goal_obligations(active_goals, as_of)
    recurring_total = column_total(expenses, "amount")
    total_obligations = goal_obligations + recurring_total
    project_income = column_total(projects, "current_monthly_earnings")

    base_income = income.total_monthly_mid
    if base_income <= 0:
        base_income = transaction_income_estimate(build_transaction_frame(transactions), as_of)
        logger.debug("No income-source estimate; transaction fallback gives %.2f/month", base_income)

    estimated_income = base_income + project_income
    surplus = estimated_income - total_obligations

    return DailyTarget(
        daily_target=round_half_away(total_obligations / DAYS_PER_MONTH),
        monthly_goal_obligations=round_half_away(goal_obligations),
        monthly_recurring_total=round_half_away(recurring_total),
        total_monthly_obligations=round_half_away(total_obligations),
        estimated_monthly_income=round_half_away(estimated_income),
        monthly_project_income=round_half_away(project_income),
        monthly_surplus_deficit=round_half_away(surplus),
        daily_surplus_deficit=round_half_away(surplus / DAYS_PER_MONTH),
        active_goals_count=len(active_goals),
        recurring_expenses_count=len(expenses),
        has_commission_income=income.has_commission_income,
        income_estimate_low=income.total_monthly_low,
        income_estimate_mid=income.total_monthly_mid,
        income_estimate_high=income.total_monthly_high,
    )
