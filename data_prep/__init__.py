"""
Data preparation — loading raw records, canonical frames, income estimates, validation.
"""

from .loader import UserRecords, load_records_csv, load_user_records
from .frames import (
    canonicalize_columns,
    select_record_columns,
    filter_active,
    build_goal_frame,
    build_income_source_frame,
    build_side_project_frame,
    build_expense_frame,
    build_transaction_frame,
)
from .income import fill_income_estimates, monthly_estimates, summarize_income_sources
from .validators import ValidationResult, validate_goals, validate_records

__all__ = [
    "UserRecords",
    "load_records_csv",
    "load_user_records",
    "canonicalize_columns",
    "select_record_columns",
    "filter_active",
    "build_goal_frame",
    "build_income_source_frame",
    "build_side_project_frame",
    "build_expense_frame",
    "build_transaction_frame",
    "fill_income_estimates",
    "monthly_estimates",
    "summarize_income_sources",
    "ValidationResult",
    "validate_goals",
    "validate_records",
]
