"""
Income/expense summarizer — reduces the user's income and obligation records
to the scalar monthly totals the simulation runs on.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
import pandas as pd

from core.config import ProjectionConfig
from data_prep.frames import (
    build_expense_frame,
    build_income_source_frame,
    build_side_project_frame,
    build_transaction_frame,
    column_total,
    filter_active,
    transactions_in_month,
)
from data_prep.income import ESTIMATE_COLUMNS, fill_income_estimates

logger = logging.getLogger("surplus_planner.engine")


@dataclass(frozen=True)
class MonthlyTotals:
    """Recurring monthly income/expense totals plus the origin month's one-time net."""
    base_monthly_income: float
    side_project_income: float
    monthly_expenses: float
    one_time_net: float = 0.0

    def income_for_month(self, month_index: int) -> float:
        one_time = self.one_time_net if month_index == 0 else 0.0
        return self.base_monthly_income + self.side_project_income + one_time

    def surplus_for_month(self, month_index: int) -> float:
        return max(0.0, self.income_for_month(month_index) - self.monthly_expenses)

    def income_series(self, n_months: int) -> np.ndarray:
        income = np.full(n_months, self.base_monthly_income + self.side_project_income, dtype=float)
        if n_months > 0:
            income[0] += self.one_time_net
        return income

    def surplus_series(self, n_months: int) -> np.ndarray:
        return np.maximum(0.0, self.income_series(n_months) - self.monthly_expenses)


def one_time_net(transactions: pd.DataFrame) -> float:
    """Net of one-time income minus one-time expenses."""
    if transactions.empty:
        return 0.0
    amounts = pd.to_numeric(transactions["amount"], errors="coerce").fillna(0.0).to_numpy(dtype=float)
    signs = np.where(transactions["type"].astype(str).str.lower().to_numpy() == "income", 1.0, -1.0)
    return float((amounts * signs).sum())


def summarize_financials(
    income_sources: Optional[pd.DataFrame] = None,
    side_projects: Optional[pd.DataFrame] = None,
    recurring_expenses: Optional[pd.DataFrame] = None,
    transactions: Optional[pd.DataFrame] = None,
    *,
    config: ProjectionConfig,
) -> MonthlyTotals:
    """
    Reduce the user's records to MonthlyTotals.

    Parameters
    ----------
    income_sources : pd.DataFrame
        Income-source records; active ones contribute their monthly estimate
        (config.income_estimate, "mid" by default).
    side_projects : pd.DataFrame
        Side-income records; active ones contribute current_monthly_earnings.
    recurring_expenses : pd.DataFrame
        Recurring obligations; active ones are summed by amount.
    transactions : pd.DataFrame
        One-time income/expense transactions. Only those dated in the origin
        month count.
    """
    sources = fill_income_estimates(filter_active(build_income_source_frame(income_sources)))
    projects = filter_active(build_side_project_frame(side_projects))
    expenses = filter_active(build_expense_frame(recurring_expenses))
    txns = transactions_in_month(build_transaction_frame(transactions), config.origin)

    totals = MonthlyTotals(
        base_monthly_income=column_total(sources, ESTIMATE_COLUMNS[config.income_estimate]),
        side_project_income=column_total(projects, "current_monthly_earnings"),
        monthly_expenses=column_total(expenses, "amount"),
        one_time_net=one_time_net(txns),
    )
    logger.debug(
        "Monthly totals: income=%.2f side=%.2f expenses=%.2f one_time=%.2f",
        totals.base_monthly_income,
        totals.side_project_income,
        totals.monthly_expenses,
        totals.one_time_net,
    )
    return totals
