from __future__ import annotations

from typing import Iterable, Optional

import numpy as np
import pandas as pd
from dateutil.relativedelta import relativedelta


def require_columns(df: pd.DataFrame, cols: Iterable[str]) -> None:
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")


def annual_to_monthly_growth(annual_percent) -> np.ndarray:
    """Convert an annual percent to a compounding monthly rate via (1+p/100)^(1/12)-1.

    Missing, zero and negative rates map to 0.
    """
    p = np.asarray(annual_percent, dtype=float)
    p = np.where(np.isfinite(p) & (p > 0), p, 0.0)
    return np.power(1.0 + p / 100.0, 1.0 / 12.0) - 1.0


def month_start(value) -> Optional[pd.Timestamp]:
    """Truncate a date-like value to the first day of its month; None for missing values."""
    if value is None:
        return None
    ts = pd.to_datetime(value, errors="coerce")
    if pd.isna(ts):
        return None
    ts = pd.Timestamp(ts)
    if ts.tzinfo is not None:
        ts = ts.tz_convert(None)
    return pd.Timestamp(ts).to_period("M").to_timestamp(how="start")


def months_between(start: pd.Timestamp, end: pd.Timestamp) -> int:
    """Calendar-month difference end - start, ignoring the day of month."""
    s = pd.Timestamp(start)
    e = pd.Timestamp(end)
    return (e.year - s.year) * 12 + (e.month - s.month)


def add_months(origin: pd.Timestamp, n: int) -> pd.Timestamp:
    return pd.Timestamp(origin) + relativedelta(months=int(n))


def month_key(ts: pd.Timestamp) -> str:
    """'YYYY-MM' identifier."""
    return pd.Timestamp(ts).strftime("%Y-%m")


def month_label(ts: pd.Timestamp) -> str:
    """Human-readable month, e.g. 'Jan 2026'."""
    return pd.Timestamp(ts).strftime("%b %Y")


def round_half_away(x, decimals: int = 2):
    """Round half away from zero (vectorized); scalars come back as float."""
    m = 10 ** decimals
    arr = np.asarray(x, dtype=float)
    out = np.sign(arr) * (np.floor(np.abs(arr) * m + 0.5) / m)
    if out.ndim == 0:
        return float(out)
    return out


def savings_rate(surplus: float, income: float) -> float:
    """Surplus as a percent of income; 0 when there is no income."""
    return (surplus / income) * 100.0 if income > 0 else 0.0


def to_naive_datetime(values) -> pd.Series:
    """Parse dates to tz-naive timestamps; zoned values are converted to UTC first."""
    parsed = pd.to_datetime(pd.Series(values), errors="coerce", utc=True, format="mixed")
    return parsed.dt.tz_localize(None)
