"""
Reporting — caller-facing views derived from a finished projection:
monthly snapshots, pydantic response models, and the daily savings target.
"""

from .schema import (
    ActiveGoalProjection,
    CompletedGoal,
    UpcomingGoal,
    MonthlyFinancials,
    ProjectionSummary,
    MonthlyProjection,
    ProjectionResponse,
)
from .snapshots import build_monthly_snapshots, financial_only_snapshots
from .targets import DailyTarget, calculate_daily_target

__all__ = [
    "ActiveGoalProjection",
    "CompletedGoal",
    "UpcomingGoal",
    "MonthlyFinancials",
    "ProjectionSummary",
    "MonthlyProjection",
    "ProjectionResponse",
    "build_monthly_snapshots",
    "financial_only_snapshots",
    "DailyTarget",
    "calculate_daily_target",
]
