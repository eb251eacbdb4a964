"""
Income-source monthly estimates.

A source is described by how it pays (frequency, hourly hours, commission
range); the projection only consumes its monthly low / mid / high estimates.
Sources that already carry estimates keep them; the rest are derived here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np
import pandas as pd

from core.schema import PAY_FREQUENCY_MULTIPLIERS, WEEKS_PER_MONTH
from core.utils import round_half_away

from .frames import filter_active

ESTIMATE_COLUMNS = {
    "low": "estimated_monthly_low",
    "mid": "estimated_monthly_mid",
    "high": "estimated_monthly_high",
}


def _amount(source, key: str) -> float:
    v = pd.to_numeric(source.get(key), errors="coerce")
    return 0.0 if pd.isna(v) else float(v)


def monthly_estimates(source) -> Dict[str, float]:
    """Return {"low", "mid", "high"} monthly income for one source record."""
    base_amount = _amount(source, "base_amount")
    frequency = source.get("pay_frequency") or "monthly"
    multiplier = PAY_FREQUENCY_MULTIPLIERS.get(frequency, 1.0)

    base_monthly = base_amount * multiplier
    hours = _amount(source, "hours_per_week")
    if source.get("income_type") == "hourly" and hours:
        base_monthly = base_amount * hours * WEEKS_PER_MONTH

    if not source.get("is_commission_based"):
        v = round_half_away(base_monthly)
        return {"low": v, "mid": v, "high": v}

    low = _amount(source, "commission_low")
    high = _amount(source, "commission_high")
    per_period = _amount(source, "commission_frequency_per_period")
    return {
        "low": round_half_away(base_monthly + low * per_period * multiplier),
        "mid": round_half_away(base_monthly + (low + high) / 2.0 * per_period * multiplier),
        "high": round_half_away(base_monthly + high * per_period * multiplier),
    }


def fill_income_estimates(sources: pd.DataFrame) -> pd.DataFrame:
    """Fill missing estimated_monthly_* columns from each source's pay structure."""
    out = sources.copy()
    if out.empty:
        return out
    for col in ESTIMATE_COLUMNS.values():
        if col not in out.columns:
            out[col] = np.nan
        out[col] = pd.to_numeric(out[col], errors="coerce")

    missing = out[list(ESTIMATE_COLUMNS.values())].isna().any(axis=1)
    for idx in out.index[missing]:
        est = monthly_estimates(out.loc[idx].to_dict())
        for key, col in ESTIMATE_COLUMNS.items():
            if pd.isna(out.at[idx, col]):
                out.at[idx, col] = est[key]
    return out


@dataclass(frozen=True)
class IncomeSummary:
    total_monthly_low: float
    total_monthly_mid: float
    total_monthly_high: float
    has_commission_income: bool
    primary_source_id: Optional[str]
    source_count: int

    def to_dict(self) -> dict:
        return {
            "totalMonthlyLow": self.total_monthly_low,
            "totalMonthlyMid": self.total_monthly_mid,
            "totalMonthlyHigh": self.total_monthly_high,
            "hasCommissionIncome": self.has_commission_income,
            "primarySourceId": self.primary_source_id,
            "sourceCount": self.source_count,
        }


def summarize_income_sources(sources: pd.DataFrame) -> IncomeSummary:
    active = fill_income_estimates(filter_active(sources))
    if active.empty:
        return IncomeSummary(0.0, 0.0, 0.0, False, None, 0)

    totals = {
        key: round_half_away(float(np.nansum(active[col].to_numpy(dtype=float))))
        for key, col in ESTIMATE_COLUMNS.items()
    }
    primary = active.loc[active["is_primary"].astype(bool)] if "is_primary" in active.columns else active.iloc[0:0]
    return IncomeSummary(
        total_monthly_low=totals["low"],
        total_monthly_mid=totals["mid"],
        total_monthly_high=totals["high"],
        has_commission_income=bool(active.get("is_commission_based", pd.Series(dtype=bool)).astype(bool).any()),
        primary_source_id=str(primary["id"].iloc[0]) if len(primary) else None,
        source_count=int(len(active)),
    )
