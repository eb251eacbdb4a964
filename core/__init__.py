"""
Core package — record schemas, configuration, and shared utilities.
No business logic lives here.
"""

from .schema import GOAL_COLUMNS, GOAL_CATEGORIES
from .config import ProjectionConfig
from .utils import require_columns, annual_to_monthly_growth, month_start, months_between

__all__ = [
    "GOAL_COLUMNS",
    "GOAL_CATEGORIES",
    "ProjectionConfig",
    "require_columns",
    "annual_to_monthly_growth",
    "month_start",
    "months_between",
]
