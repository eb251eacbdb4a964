import pytest

from data_prep.frames import build_income_source_frame
from data_prep.income import fill_income_estimates, monthly_estimates, summarize_income_sources


@pytest.mark.parametrize(
    "frequency, expected",
    [("weekly", 2165.0), ("biweekly", 1085.0), ("semimonthly", 1000.0), ("monthly", 500.0), ("variable", 500.0)],
)
def test_pay_frequency_multipliers(frequency, expected):
    est = monthly_estimates({"base_amount": 500.0, "pay_frequency": frequency})
    assert est == {"low": expected, "mid": expected, "high": expected}


def test_hourly_uses_hours_per_week():
    est = monthly_estimates({
        "income_type": "hourly",
        "pay_frequency": "weekly",
        "base_amount": 20.0,
        "hours_per_week": 40.0,
    })
    assert est["mid"] == 3464.0


def test_commission_range():
    est = monthly_estimates({
        "pay_frequency": "biweekly",
        "base_amount": 1000.0,
        "is_commission_based": True,
        "commission_low": 100.0,
        "commission_high": 200.0,
        "commission_frequency_per_period": 3,
    })
    # base 2170, commission 3 x {100, 150, 200} x 2.17
    assert est == {"low": 2821.0, "mid": 3146.5, "high": 3472.0}


def test_existing_estimates_are_kept():
    frame = build_income_source_frame([
        {"id": "a", "base_amount": 100.0, "estimated_monthly_low": 1.0,
         "estimated_monthly_mid": 2.0, "estimated_monthly_high": 3.0},
        {"id": "b", "base_amount": 100.0, "pay_frequency": "weekly"},
    ])
    out = fill_income_estimates(frame)
    assert out["estimated_monthly_mid"].tolist() == [2.0, 433.0]


def test_summary_over_active_sources():
    frame = build_income_source_frame([
        {"id": "job", "base_amount": 4000.0, "is_primary": True},
        {"id": "gig", "base_amount": 500.0, "is_commission_based": True,
         "commission_low": 0.0, "commission_high": 400.0, "commission_frequency_per_period": 1},
        {"id": "old", "base_amount": 9000.0, "status": "inactive"},
    ])
    summary = summarize_income_sources(frame)
    assert summary.total_monthly_low == 4500.0
    assert summary.total_monthly_mid == 4700.0
    assert summary.total_monthly_high == 4900.0
    assert summary.has_commission_income is True
    assert summary.primary_source_id == "job"
    assert summary.source_count == 2
    assert summary.to_dict()["totalMonthlyMid"] == 4700.0


def test_summary_without_sources():
    summary = summarize_income_sources(build_income_source_frame([]))
    assert summary.source_count == 0
    assert summary.total_monthly_mid == 0.0
    assert summary.primary_source_id is None
