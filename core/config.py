"""
Projection configuration.
Request window parameters plus the simulation origin.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional

import pandas as pd

DEFAULT_PROJECTION_MONTHS = 12
MAX_PROJECTION_MONTHS = 24


def _current_month() -> pd.Timestamp:
    return pd.Timestamp.today().normalize().to_period("M").to_timestamp(how="start")


@dataclass(frozen=True)
class ProjectionConfig:
    # simulation origin: month index 0 is the month containing as_of_date
    as_of_date: pd.Timestamp = field(default_factory=_current_month)

    # display window
    month_offset: int = 0
    months: int = DEFAULT_PROJECTION_MONTHS
    max_months: int = MAX_PROJECTION_MONTHS

    # which income-source estimate feeds base income
    income_estimate: Literal["low", "mid", "high"] = "mid"

    def __post_init__(self):
        # past months are never displayed
        object.__setattr__(self, "month_offset", max(0, int(self.month_offset)))
        object.__setattr__(self, "as_of_date", pd.Timestamp(self.as_of_date))

    @classmethod
    def from_request(
        cls,
        month_offset: Optional[int] = None,
        months: Optional[int] = None,
        *,
        as_of_date: Optional[pd.Timestamp] = None,
        income_estimate: Literal["low", "mid", "high"] = "mid",
    ) -> "ProjectionConfig":
        """Build a config from raw request parameters, applying the window clamps."""
        offset = 0 if month_offset is None else max(0, int(month_offset))
        n = DEFAULT_PROJECTION_MONTHS if months is None else int(months)
        n = min(max(n, 0), MAX_PROJECTION_MONTHS)
        kwargs = {}
        if as_of_date is not None:
            kwargs["as_of_date"] = pd.Timestamp(as_of_date)
        return cls(month_offset=offset, months=n, income_estimate=income_estimate, **kwargs)

    @property
    def origin(self) -> pd.Timestamp:
        """Month-start of the simulation origin."""
        return pd.Timestamp(self.as_of_date).to_period("M").to_timestamp(how="start")

    @property
    def window_months(self) -> int:
        return min(max(self.months, 0), self.max_months)

    @property
    def horizon(self) -> int:
        """Months simulated internally; one past the end of the display window."""
        return self.month_offset + self.window_months + 1
