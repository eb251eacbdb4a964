"""
Data quality validation for user records before they enter the engine.

Catches problems early:
- Missing critical fields
- Non-positive targets, negative balances
- Urgency scores outside 1-5
- Deadlines that don't parse
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import pandas as pd

from core.schema import (
    GOAL_CATEGORIES,
    GOAL_COLUMNS,
    GROWTH_CATEGORY,
    MAX_URGENCY_SCORE,
    MIN_URGENCY_SCORE,
    PAY_FREQUENCY_MULTIPLIERS,
)
from core.utils import to_naive_datetime

from .frames import filter_active
from .loader import UserRecords


@dataclass
class ValidationResult:
    """Collects all validation warnings/errors for a set of records."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def extend(self, other: "ValidationResult") -> "ValidationResult":
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        return self

    def summary(self) -> str:
        lines = []
        if self.errors:
            lines.append(f"ERRORS ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"  ✗ {e}")
        if self.warnings:
            lines.append(f"WARNINGS ({len(self.warnings)}):")
            for w in self.warnings:
                lines.append(f"  ⚠ {w}")
        if not lines:
            lines.append("✓ All checks passed.")
        return "\n".join(lines)


def validate_goals(goals: pd.DataFrame) -> ValidationResult:
    """
    Run all checks on a goal frame. Only active goals are checked, since
    those are the only ones the engine reads.
    """
    result = ValidationResult()

    missing = [c for c in GOAL_COLUMNS if c not in goals.columns]
    if missing:
        result.errors.append(f"Missing goal columns: {missing}")
        return result

    active = filter_active(goals)
    if active.empty:
        return result

    # --- IDs ---
    ids = active["id"].replace({"": None, "nan": None})
    if ids.isna().any():
        result.errors.append(f"{int(ids.isna().sum())} active goals have no id.")
    n_dup = int(ids.dropna().duplicated().sum())
    if n_dup > 0:
        result.warnings.append(f"{n_dup} duplicate goal ids found.")

    # --- Amounts ---
    target = pd.to_numeric(active["target_amount"], errors="coerce")
    n_bad_target = int((target.isna() | (target <= 0)).sum())
    if n_bad_target > 0:
        result.errors.append(f"{n_bad_target} goals have a missing or non-positive target_amount.")

    current = pd.to_numeric(active["current_amount"], errors="coerce")
    n_neg = int((current < 0).sum())
    if n_neg > 0:
        result.errors.append(f"{n_neg} goals have negative current_amount.")
    n_null = int(current.isna().sum())
    if n_null > 0:
        result.warnings.append(f"{n_null} goals have null current_amount (treated as 0).")

    # --- Urgency ---
    urgency = pd.to_numeric(active["urgency_score"], errors="coerce")
    out_of_range = urgency.notna() & ((urgency < MIN_URGENCY_SCORE) | (urgency > MAX_URGENCY_SCORE))
    if out_of_range.any():
        result.errors.append(
            f"{int(out_of_range.sum())} goals have urgency_score outside "
            f"{MIN_URGENCY_SCORE}-{MAX_URGENCY_SCORE}."
        )
    non_integer = urgency.notna() & (urgency != urgency.round())
    if non_integer.any():
        result.warnings.append(f"{int(non_integer.sum())} goals have a fractional urgency_score.")

    # --- Dates ---
    deadlines = to_naive_datetime(active["deadline"])
    if deadlines.isna().any():
        result.errors.append(f"{int(deadlines.isna().sum())} goals have null/unparseable deadline.")

    raw_start = active["start_date"]
    starts = to_naive_datetime(raw_start)
    n_bad_start = int((starts.isna() & raw_start.notna() & (raw_start.astype(str).str.strip() != "")).sum())
    if n_bad_start > 0:
        result.warnings.append(f"{n_bad_start} goals have unparseable start_date (current month used).")
    n_inverted = int((starts.notna() & deadlines.notna() & (starts > deadlines)).sum())
    if n_inverted > 0:
        result.warnings.append(f"{n_inverted} goals start after their deadline.")

    # --- Category / growth rate ---
    bad_cat = ~active["category"].isin(GOAL_CATEGORIES)
    if bad_cat.any():
        result.warnings.append(
            f"{int(bad_cat.sum())} goals have unknown category "
            f"{sorted(active.loc[bad_cat, 'category'].unique().tolist())}."
        )
    rate = pd.to_numeric(active["interest_rate"], errors="coerce")
    ignored_rate = rate.notna() & (rate > 0) & (active["category"] != GROWTH_CATEGORY)
    if ignored_rate.any():
        result.warnings.append(
            f"{int(ignored_rate.sum())} non-investment goals have an interest_rate, which is ignored."
        )
    n_neg_rate = int((rate < 0).sum())
    if n_neg_rate > 0:
        result.warnings.append(f"{n_neg_rate} goals have a negative interest_rate (treated as 0).")

    return result


def validate_income_sources(sources: pd.DataFrame) -> ValidationResult:
    result = ValidationResult()
    active = filter_active(sources)
    if active.empty:
        return result

    if "base_amount" in active.columns:
        base = pd.to_numeric(active["base_amount"], errors="coerce")
        if (base < 0).any():
            result.errors.append(f"{int((base < 0).sum())} income sources have negative base_amount.")

    if "pay_frequency" in active.columns:
        unknown = ~active["pay_frequency"].isin(PAY_FREQUENCY_MULTIPLIERS.keys())
        if unknown.any():
            result.warnings.append(
                f"{int(unknown.sum())} income sources have unknown pay_frequency (monthly assumed)."
            )

    if "is_commission_based" in active.columns:
        comm = active.loc[active["is_commission_based"].astype(bool)]
        low = pd.to_numeric(comm["commission_low"], errors="coerce")
        high = pd.to_numeric(comm["commission_high"], errors="coerce")
        if (low > high).any():
            result.warnings.append(
                f"{int((low > high).sum())} commission sources have commission_low > commission_high."
            )
    return result


def validate_amount_records(frame: pd.DataFrame, *, label: str, amount_col: str = "amount") -> ValidationResult:
    """Shared check for expense / side-income / transaction amounts."""
    result = ValidationResult()
    if frame.empty or amount_col not in frame.columns:
        return result
    amounts = pd.to_numeric(frame[amount_col], errors="coerce")
    n_null = int(amounts.isna().sum())
    if n_null > 0:
        result.warnings.append(f"{n_null} {label} have null/unparseable {amount_col} (treated as 0).")
    n_neg = int((amounts < 0).sum())
    if n_neg > 0:
        result.errors.append(f"{n_neg} {label} have negative {amount_col}.")
    return result


def validate_records(records: UserRecords) -> ValidationResult:
    """Validate every section of a user's records."""
    result = validate_goals(records.goals)
    result.extend(validate_income_sources(records.income_sources))
    result.extend(validate_amount_records(
        filter_active(records.recurring_expenses), label="recurring expenses"))
    result.extend(validate_amount_records(
        filter_active(records.side_projects), label="side projects", amount_col="current_monthly_earnings"))
    result.extend(validate_amount_records(records.transactions, label="transactions"))

    if not records.transactions.empty:
        kinds = records.transactions["type"]
        bad = ~kinds.isin(["income", "expense"])
        if bad.any():
            result.errors.append(f"{int(bad.sum())} transactions have a type other than income/expense.")
    return result
