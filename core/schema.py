from __future__ import annotations

from typing import Dict, Tuple

# Canonical record columns. Loaders and validators check frames against these;
# the engine only reads the columns listed here.
GOAL_COLUMNS: Tuple[str, ...] = (
    "id",
    "title",
    "category",
    "target_amount",
    "current_amount",
    "start_date",
    "deadline",
    "urgency_score",
    "interest_rate",
    "status",
)

INCOME_SOURCE_COLUMNS: Tuple[str, ...] = (
    "id",
    "name",
    "income_type",
    "pay_frequency",
    "base_amount",
    "hours_per_week",
    "is_commission_based",
    "commission_low",
    "commission_high",
    "commission_frequency_per_period",
    "estimated_monthly_low",
    "estimated_monthly_mid",
    "estimated_monthly_high",
    "status",
    "is_primary",
)

SIDE_PROJECT_COLUMNS: Tuple[str, ...] = (
    "id",
    "name",
    "current_monthly_earnings",
    "status",
)

RECURRING_EXPENSE_COLUMNS: Tuple[str, ...] = (
    "id",
    "name",
    "amount",
    "category",
    "status",
)

TRANSACTION_COLUMNS: Tuple[str, ...] = (
    "id",
    "type",
    "amount",
    "category",
    "transaction_date",
)

# Columns a record may omit; select_record_columns fills them with defaults.
OPTIONAL_COLUMNS: Dict[str, object] = {
    "title": "",
    "name": "",
    "category": "other",
    "start_date": None,
    "urgency_score": None,
    "interest_rate": None,
    "status": "active",
    "income_type": "salary",
    "pay_frequency": "monthly",
    "base_amount": 0.0,
    "hours_per_week": 0.0,
    "is_commission_based": False,
    "commission_low": 0.0,
    "commission_high": 0.0,
    "commission_frequency_per_period": 0.0,
    "estimated_monthly_low": None,
    "estimated_monthly_mid": None,
    "estimated_monthly_high": None,
    "is_primary": False,
    "transaction_date": None,
}

GOAL_CATEGORIES: Tuple[str, ...] = (
    "emergency",
    "vacation",
    "car",
    "house",
    "debt",
    "investment",
    "other",
)

# Only this category compounds.
GROWTH_CATEGORY = "investment"

DEFAULT_URGENCY_SCORE = 3
MIN_URGENCY_SCORE = 1
MAX_URGENCY_SCORE = 5

# Monthly multipliers per pay period.
PAY_FREQUENCY_MULTIPLIERS: Dict[str, float] = {
    "weekly": 4.33,
    "biweekly": 2.17,
    "semimonthly": 2.0,
    "monthly": 1.0,
    "variable": 1.0,
}

WEEKS_PER_MONTH = 4.33
DAYS_PER_MONTH = 30.44

# Transaction categories treated as recurring income by the daily-target fallback.
RECURRING_INCOME_CATEGORIES: Tuple[str, ...] = ("salary", "freelance", "business")

# Goal lifecycle during a simulation. Month indices use NOT_COMPLETED
# until a goal reaches its target.
NOT_STARTED = "not_started"
ACTIVE = "active"
COMPLETED = "completed"
NOT_COMPLETED = -1
