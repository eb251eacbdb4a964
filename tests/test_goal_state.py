import numpy as np
import pandas as pd
import pytest

from core.schema import ACTIVE, COMPLETED, NOT_COMPLETED, NOT_STARTED
from data_prep.frames import build_goal_frame
from engine.goal_state import GoalStateTable
from tests.helpers import goal

ORIGIN = pd.Timestamp("2026-01-01")


def _table(*goals, horizon=6):
    return GoalStateTable.from_goals(build_goal_frame(list(goals)), ORIGIN, horizon)


def test_month_indices_are_relative_to_origin():
    st = _table(
        goal("a", start_date="2026-03-14", deadline="2026-12-31"),
        goal("b", start_date="2025-11-02", deadline="2026-02-01"),
        goal("c", deadline="2026-05-20"),
    )
    assert st.start_month.tolist() == [2, -2, 0]
    assert st.deadline_month.tolist() == [11, 1, 4]
    assert st.start_dates[2] == ORIGIN


def test_initial_state():
    st = _table(goal("a", current_amount=250.0, urgency_score=None), horizon=4)
    assert len(st) == 1
    assert st.horizon == 4
    assert st.balance.tolist() == [250.0]
    assert st.urgency.tolist() == [3.0]
    assert st.completion_month.tolist() == [NOT_COMPLETED]
    assert st.allocations.shape == (1, 4)
    assert np.all(st.balances == 250.0)


def test_growth_rate_only_for_investment():
    st = _table(
        goal("inv", category="investment", interest_rate=12.0),
        goal("car", category="car", interest_rate=12.0),
    )
    assert st.monthly_rate[0] == pytest.approx(1.12 ** (1 / 12) - 1)
    assert st.monthly_rate[1] == 0.0


def test_unparseable_deadline_raises():
    with pytest.raises(ValueError, match="deadline"):
        _table(goal("a", deadline="someday"))


def test_lifecycle_and_eligibility():
    st = _table(goal("a", start_date="2026-02-01"), goal("b"))
    assert st.eligible(0).tolist() == [False, True]
    assert st.eligible(1).tolist() == [True, True]

    st.completion_month[1] = 2
    assert st.lifecycle(0, 0) == NOT_STARTED
    assert st.lifecycle(0, 1) == ACTIVE
    assert st.lifecycle(1, 1) == ACTIVE
    assert st.lifecycle(1, 2) == COMPLETED
    assert st.lifecycle(1, 5) == COMPLETED
    assert st.eligible(3).tolist() == [True, False]


def test_empty_goal_frame_builds_empty_table():
    st = GoalStateTable.from_goals(build_goal_frame([]), ORIGIN, 3)
    assert len(st) == 0
    assert st.allocations.shape == (0, 3)


def test_missing_datetime_start_is_reported_as_none():
    frame = build_goal_frame([goal("a", start_date="2026-02-15"), goal("b")])
    frame["start_date"] = pd.to_datetime(frame["start_date"])
    st = GoalStateTable.from_goals(frame, ORIGIN, 3)
    assert st.start_date_raw == ["2026-02-15", None]
    assert st.start_month.tolist() == [1, 0]


@pytest.mark.parametrize("score", [0, -2, None])
def test_non_positive_or_missing_urgency_uses_default(score):
    st = _table(goal("a", urgency_score=score))
    assert st.urgency.tolist() == [3.0]
