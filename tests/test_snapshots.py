import pytest

from core.config import ProjectionConfig
from engine.runner import run_projection, simulate_projection
from reporting.snapshots import goal_status
from tests.helpers import config, goal, surplus_of


def _project(goals, surplus=200.0, transactions=None, **cfg):
    records = surplus_of(surplus)
    response = run_projection(
        goals,
        records["income_sources"],
        None,
        records["recurring_expenses"],
        transactions,
        config=config(**cfg),
    )
    return response.to_payload()


def _active(month, goal_id):
    return next(g for g in month["activeGoals"] if g["goalId"] == goal_id)


def test_payload_uses_camel_case_keys():
    payload = _project([goal("g1")], months=2)
    assert set(payload) == {"monthlyProjections", "currentMonthOffset", "totalGoals"}
    month = payload["monthlyProjections"][0]
    assert set(month) == {
        "month", "monthLabel", "activeGoals", "completedGoals", "upcomingGoals", "financials", "summary",
    }
    assert set(month["financials"]) == {
        "totalMonthlyIncome", "totalMonthlyExpenses", "monthlySurplus", "savingsRate", "totalAllocatedToGoals",
    }
    assert set(month["activeGoals"][0]) == {
        "goalId", "title", "category", "targetAmount", "projectedBalance", "monthlyAllocation",
        "progressPercentage", "status", "deadline", "startDate", "isCompletedThisMonth",
        "isStartingThisMonth",
    }


def test_single_goal_lifecycle_through_completion():
    payload = _project([goal("g1", target_amount=1200.0, deadline="2026-07-01")])
    months = payload["monthlyProjections"]
    assert payload["totalGoals"] == 1
    assert [m["month"] for m in months[:3]] == ["2026-01", "2026-02", "2026-03"]
    assert months[0]["monthLabel"] == "Jan 2026"

    first = _active(months[0], "g1")
    assert first["isStartingThisMonth"] is True
    assert first["monthlyAllocation"] == 200.0
    assert first["projectedBalance"] == 200.0
    assert first["progressPercentage"] == 16.67
    assert first["status"] == "active"
    assert months[0]["summary"]["totalGoalProgress"] == 16.67

    done = _active(months[5], "g1")
    assert done["projectedBalance"] == 1200.0
    assert done["progressPercentage"] == 100.0
    assert done["status"] == "completed"
    assert done["isCompletedThisMonth"] is True

    after = months[6]
    assert after["activeGoals"] == []
    assert after["completedGoals"] == [{"goalId": "g1", "title": "Goal g1", "completedInMonth": "Jun 2026"}]
    assert after["financials"]["totalAllocatedToGoals"] == 0.0
    assert after["financials"]["monthlySurplus"] == 200.0
    assert after["summary"] == {
        "activeGoalsCount": 0,
        "completedGoalsCount": 1,
        "upcomingGoalsCount": 0,
        "totalGoalProgress": 0.0,
    }
    assert all(m["completedGoals"][0]["goalId"] == "g1" for m in months[6:])


def test_upcoming_goal_moves_to_active_in_start_month():
    payload = _project([goal("later", start_date="2026-04-10", deadline="2026-12-01")])
    months = payload["monthlyProjections"]
    assert months[0]["upcomingGoals"] == [{"goalId": "later", "title": "Goal later", "startsInMonth": "Apr 2026"}]
    assert months[0]["activeGoals"] == []
    assert months[0]["summary"]["upcomingGoalsCount"] == 1
    started = _active(months[3], "later")
    assert started["isStartingThisMonth"] is True
    assert started["monthlyAllocation"] == 200.0
    assert started["startDate"] == "2026-04-10"


def test_overdue_goal_is_at_risk():
    payload = _project([goal("late", target_amount=10000.0, deadline="2025-11-01")], months=3)
    statuses = [_active(m, "late")["status"] for m in payload["monthlyProjections"]]
    assert statuses == ["at_risk"] * 3


def test_goal_due_this_month_below_target_is_at_risk():
    payload = _project([goal("due", target_amount=5000.0, deadline="2026-01-31")], months=1)
    assert _active(payload["monthlyProjections"][0], "due")["status"] == "at_risk"


def test_goal_status_rules():
    assert goal_status(1000.0, 1000.0, -2) == "completed"
    assert goal_status(999.0, 1000.0, 0) == "at_risk"
    assert goal_status(999.0, 1000.0, 1) == "active"


def test_no_active_goals_returns_financial_only_months():
    paused = goal("p", status="paused")
    payload = _project([paused], months=4)
    months = payload["monthlyProjections"]
    assert payload["totalGoals"] == 0
    assert len(months) == 4
    for m in months:
        assert m["activeGoals"] == [] and m["completedGoals"] == [] and m["upcomingGoals"] == []
        assert m["financials"] == {
            "totalMonthlyIncome": 3000.0,
            "totalMonthlyExpenses": 2800.0,
            "monthlySurplus": 200.0,
            "savingsRate": 6.67,
            "totalAllocatedToGoals": 0.0,
        }


def test_offset_window_matches_full_simulation():
    goals = [
        goal("a", target_amount=5000.0, deadline="2026-10-01", urgency_score=4),
        goal("b", category="investment", target_amount=8000.0, current_amount=2000.0,
             deadline="2027-01-01", interest_rate=10.0),
    ]
    window = _project(goals, surplus=450.0, offset=3, months=3)
    assert window["currentMonthOffset"] == 3
    assert [m["month"] for m in window["monthlyProjections"]] == ["2026-04", "2026-05", "2026-06"]

    full = _project(goals, surplus=450.0, offset=0, months=6)["monthlyProjections"]
    longer = _project(goals, surplus=450.0, offset=0, months=12)["monthlyProjections"]
    for shown, reference, long_reference in zip(window["monthlyProjections"], full[3:6], longer[3:6]):
        assert shown == reference
        assert shown == long_reference


def test_projected_balance_matches_ledger_replay():
    goals = [
        goal("a", target_amount=5000.0, deadline="2026-10-01"),
        goal("b", category="investment", target_amount=8000.0, current_amount=2000.0,
             deadline="2027-01-01", interest_rate=10.0, start_date="2026-02-01"),
    ]
    records = surplus_of(450.0)
    sim = simulate_projection(goals, records["income_sources"], None, records["recurring_expenses"], None,
                              config=config(months=8))
    st = sim.states
    for i in range(len(st)):
        balance = st.initial_balance[i]
        for month in range(max(0, st.start_month[i]), sim.horizon):
            balance = balance * (1 + st.monthly_rate[i]) + st.allocations[i, month]
            if st.completion_month[i] != -1 and month > st.completion_month[i]:
                break
            assert st.balance_at(i, month) == pytest.approx(balance)


def test_month_zero_includes_one_time_net():
    txns = [
        {"id": "t1", "type": "income", "amount": 500.0, "category": "gift", "transaction_date": "2026-01-03"},
        {"id": "t2", "type": "expense", "amount": 150.0, "category": "repairs", "transaction_date": "2026-01-20"},
    ]
    payload = _project([goal("g1")], transactions=txns, months=2)
    first, second = payload["monthlyProjections"]
    assert first["financials"]["totalMonthlyIncome"] == 3350.0
    assert first["financials"]["monthlySurplus"] == 550.0
    assert _active(first, "g1")["monthlyAllocation"] == 550.0
    assert second["financials"]["totalMonthlyIncome"] == 3000.0
    assert second["financials"]["monthlySurplus"] == 200.0


def test_identical_inputs_give_identical_output():
    goals = [goal("a", target_amount=3000.0), goal("b", target_amount=900.0, urgency_score=5)]
    first = run_projection(goals, [{"id": "s", "base_amount": 2500.0}], None, [{"id": "e", "amount": 1900.0}],
                           config=config())
    second = run_projection(goals, [{"id": "s", "base_amount": 2500.0}], None, [{"id": "e", "amount": 1900.0}],
                            config=config())
    assert first.model_dump_json(by_alias=True) == second.model_dump_json(by_alias=True)


def test_directly_built_config_never_shows_past_months():
    records = surplus_of(200.0)
    goals = [goal("g1", target_amount=5000.0, start_date="2025-06-01", deadline="2026-12-01")]
    direct = ProjectionConfig(as_of_date="2026-01-15", month_offset=-2, months=4)
    payload = run_projection(goals, records["income_sources"], None, records["recurring_expenses"],
                             config=direct).to_payload()

    months = payload["monthlyProjections"]
    assert payload["currentMonthOffset"] == 0
    assert [m["month"] for m in months] == ["2026-01", "2026-02", "2026-03", "2026-04"]
    balances = [_active(m, "g1")["projectedBalance"] for m in months]
    assert balances == [200.0, 400.0, 600.0, 800.0]

    clamped = _project(goals, offset=0, months=4)
    assert payload == clamped
