"""
Build canonical record frames from raw collaborator records.

Records arrive either as DataFrames (CSV loads) or as lists of dicts (JSON
payloads, often with camelCase keys). Everything is normalized to the
snake_case columns in core.schema before it reaches the engine.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Tuple, Union

import numpy as np
import pandas as pd

from core.schema import (
    GOAL_COLUMNS,
    INCOME_SOURCE_COLUMNS,
    OPTIONAL_COLUMNS,
    RECURRING_EXPENSE_COLUMNS,
    SIDE_PROJECT_COLUMNS,
    TRANSACTION_COLUMNS,
)
from core.utils import require_columns, to_naive_datetime

logger = logging.getLogger("surplus_planner.data_prep")

Records = Union[pd.DataFrame, Iterable[Mapping[str, object]], None]

_COLUMN_ALIASES: Dict[str, str] = {
    # identifiers
    "goalId": "id",
    "goal_id": "id",
    # goal amounts
    "targetAmount": "target_amount",
    "target": "target_amount",
    "currentAmount": "current_amount",
    "current": "current_amount",
    # goal dates
    "startDate": "start_date",
    "deadlineDate": "deadline",
    "deadline_date": "deadline",
    # goal priority / growth
    "urgencyScore": "urgency_score",
    "urgency": "urgency_score",
    "interestRate": "interest_rate",
    # income sources
    "incomeType": "income_type",
    "payFrequency": "pay_frequency",
    "baseAmount": "base_amount",
    "hoursPerWeek": "hours_per_week",
    "isCommissionBased": "is_commission_based",
    "commissionLow": "commission_low",
    "commissionHigh": "commission_high",
    "commissionFrequencyPerPeriod": "commission_frequency_per_period",
    "estimatedMonthlyLow": "estimated_monthly_low",
    "estimatedMonthlyMid": "estimated_monthly_mid",
    "estimatedMonthlyHigh": "estimated_monthly_high",
    "isPrimary": "is_primary",
    # side projects
    "currentMonthlyEarnings": "current_monthly_earnings",
    # transactions
    "transactionDate": "transaction_date",
    "date": "transaction_date",
}

_NUMERIC_COLUMNS: Tuple[str, ...] = (
    "target_amount",
    "current_amount",
    "urgency_score",
    "interest_rate",
    "base_amount",
    "hours_per_week",
    "commission_low",
    "commission_high",
    "commission_frequency_per_period",
    "estimated_monthly_low",
    "estimated_monthly_mid",
    "estimated_monthly_high",
    "current_monthly_earnings",
    "amount",
)

_BOOL_COLUMNS: Tuple[str, ...] = ("is_commission_based", "is_primary")


def canonicalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Return a copy with common column name aliases normalized and duplicates coalesced."""
    if df.empty and len(df.columns) == 0:
        return df.copy()

    ren = {c: _COLUMN_ALIASES.get(c, c) for c in df.columns}
    out = df.rename(columns=ren).copy()

    # Renaming can produce duplicates (both "targetAmount" and "target_amount");
    # keep the first non-null value per row.
    if out.columns.duplicated().any():
        new_cols: List[str] = []
        parts: List[pd.Series] = []
        seen: set[str] = set()
        cols = list(out.columns)
        for name in cols:
            if name in seen:
                continue
            idxs = [i for i, c in enumerate(cols) if c == name]
            s = out.iloc[:, idxs[0]]
            for j in idxs[1:]:
                s = s.combine_first(out.iloc[:, j])
            new_cols.append(name)
            parts.append(s)
            seen.add(name)
        out = pd.concat(parts, axis=1)
        out.columns = new_cols

    return out


def records_to_frame(records: Records) -> pd.DataFrame:
    if records is None:
        return pd.DataFrame()
    if isinstance(records, pd.DataFrame):
        return records.copy()
    return pd.DataFrame(list(records))


def select_record_columns(
    records: Records,
    *,
    columns: Tuple[str, ...],
) -> pd.DataFrame:
    """Return a canonical frame containing ONLY `columns`.

    Columns listed in core.schema.OPTIONAL_COLUMNS are filled with their
    default when missing; any other missing column raises ValueError.
    """
    df = canonicalize_columns(records_to_frame(records))
    for col in columns:
        if col not in df.columns and col in OPTIONAL_COLUMNS:
            df[col] = OPTIONAL_COLUMNS[col]
    if len(df) == 0:
        # an empty collection is a valid input
        for col in columns:
            if col not in df.columns:
                df[col] = pd.Series(dtype=object)
    require_columns(df, columns)
    out = df.loc[:, list(columns)].copy()

    for col in _NUMERIC_COLUMNS:
        if col in out.columns:
            out[col] = pd.to_numeric(out[col], errors="coerce")
    for col in _BOOL_COLUMNS:
        if col in out.columns:
            out[col] = out[col].fillna(False).astype(bool)
    for col in ("id", "status", "category", "type"):
        if col in out.columns:
            out[col] = out[col].fillna(OPTIONAL_COLUMNS.get(col, "")).astype(str).str.strip()
    if "status" in out.columns:
        out["status"] = out["status"].str.lower()
    return out.reset_index(drop=True)


def filter_active(df: pd.DataFrame, *, status_col: str = "status") -> pd.DataFrame:
    """Keep only rows whose status is 'active'."""
    if status_col not in df.columns:
        return df.copy()
    mask = df[status_col].astype(str).str.lower() == "active"
    n_dropped = int((~mask).sum())
    if n_dropped:
        logger.debug("Filtered out %d non-active records", n_dropped)
    return df.loc[mask].reset_index(drop=True)


def build_goal_frame(records: Records) -> pd.DataFrame:
    return select_record_columns(records, columns=GOAL_COLUMNS)


def build_income_source_frame(records: Records) -> pd.DataFrame:
    return select_record_columns(records, columns=INCOME_SOURCE_COLUMNS)


def build_side_project_frame(records: Records) -> pd.DataFrame:
    return select_record_columns(records, columns=SIDE_PROJECT_COLUMNS)


def build_expense_frame(records: Records) -> pd.DataFrame:
    return select_record_columns(records, columns=RECURRING_EXPENSE_COLUMNS)


def build_transaction_frame(records: Records) -> pd.DataFrame:
    df = select_record_columns(records, columns=TRANSACTION_COLUMNS)
    df["type"] = df["type"].str.lower()
    df["transaction_date"] = to_naive_datetime(df["transaction_date"])
    return df


def transactions_in_month(
    transactions: pd.DataFrame,
    month: pd.Timestamp,
    *,
    date_col: str = "transaction_date",
) -> pd.DataFrame:
    """Rows dated within the calendar month of `month`.

    Rows without a parseable date are assumed to be already scoped by the
    caller and are kept.
    """
    if transactions.empty or date_col not in transactions.columns:
        return transactions
    dates = to_naive_datetime(transactions[date_col])
    period = pd.Timestamp(month).to_period("M")
    in_month = dates.dt.to_period("M") == period
    keep = in_month | dates.isna()
    return transactions.loc[keep.to_numpy(dtype=bool)].reset_index(drop=True)


def column_total(df: pd.DataFrame, col: str) -> float:
    if df.empty or col not in df.columns:
        return 0.0
    vals = pd.to_numeric(df[col], errors="coerce").to_numpy(dtype=float)
    return float(np.nansum(vals))

