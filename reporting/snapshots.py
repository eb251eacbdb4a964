"""
Monthly snapshot generator — turns a completed forward pass into the
per-month view callers consume.

For every month in the display window each goal lands in exactly one bucket:
  upcoming   not started yet
  completed  finished in a strictly earlier month
  active     everything else, including the month it starts and the month it
             finishes (flagged isStartingThisMonth / isCompletedThisMonth)

Balances come from the forward pass's end-of-month cache, which equals a
replay of the goal's allocation ledger (with compounding) from its start
month through the displayed month.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from core.config import ProjectionConfig
from core.schema import COMPLETED, NOT_COMPLETED, NOT_STARTED
from core.utils import add_months, month_key, month_label, round_half_away, savings_rate

from .schema import (
    ActiveGoalProjection,
    CompletedGoal,
    MonthlyFinancials,
    MonthlyProjection,
    ProjectionSummary,
    UpcomingGoal,
)

if TYPE_CHECKING:
    from engine.driver import SimulationResult
    from engine.summarizer import MonthlyTotals


def _financials(totals: "MonthlyTotals", month_index: int, allocated: float) -> MonthlyFinancials:
    income = totals.income_for_month(month_index)
    surplus = totals.surplus_for_month(month_index)
    return MonthlyFinancials(
        total_monthly_income=round_half_away(income),
        total_monthly_expenses=round_half_away(totals.monthly_expenses),
        monthly_surplus=round_half_away(surplus),
        savings_rate=round_half_away(savings_rate(surplus, income)),
        total_allocated_to_goals=round_half_away(allocated),
    )


def goal_status(balance: float, target: float, months_until_deadline: int) -> str:
    """Status of a goal shown in the active bucket."""
    if balance >= target:
        return "completed"
    if months_until_deadline <= 0:
        return "at_risk"
    return "active"


def financial_only_snapshots(totals: "MonthlyTotals", config: ProjectionConfig) -> List[MonthlyProjection]:
    """Snapshots for a user with no active goals: financials only, empty buckets."""
    out: List[MonthlyProjection] = []
    for i in range(config.window_months):
        month_index = config.month_offset + i
        month_date = add_months(config.origin, month_index)
        out.append(
            MonthlyProjection(
                month=month_key(month_date),
                month_label=month_label(month_date),
                financials=_financials(totals, month_index, 0.0),
            )
        )
    return out


def build_monthly_snapshots(sim: "SimulationResult") -> List[MonthlyProjection]:
    """One MonthlyProjection per month of the display window."""
    cfg = sim.config
    st = sim.states
    out: List[MonthlyProjection] = []

    for i in range(cfg.window_months):
        m = cfg.month_offset + i
        month_date = add_months(cfg.origin, m)

        active: List[ActiveGoalProjection] = []
        completed: List[CompletedGoal] = []
        upcoming: List[UpcomingGoal] = []

        for g in range(len(st)):
            state = st.lifecycle(g, m)
            done = int(st.completion_month[g])
            completed_this_month = done != NOT_COMPLETED and done == m

            if state == NOT_STARTED:
                upcoming.append(UpcomingGoal(
                    goal_id=st.goal_ids[g],
                    title=st.titles[g],
                    starts_in_month=month_label(st.start_dates[g]),
                ))
                continue

            if state == COMPLETED and not completed_this_month:
                completed.append(CompletedGoal(
                    goal_id=st.goal_ids[g],
                    title=st.titles[g],
                    completed_in_month=month_label(add_months(cfg.origin, done)),
                ))
                continue

            balance = st.balance_at(g, m)
            target = float(st.target[g])
            progress = (balance / target) * 100.0 if target > 0 else 0.0
            months_until = int(st.deadline_month[g]) - m
            status = "completed" if completed_this_month else goal_status(balance, target, months_until)

            active.append(ActiveGoalProjection(
                goal_id=st.goal_ids[g],
                title=st.titles[g],
                category=str(st.categories[g]),
                target_amount=target,
                projected_balance=round_half_away(balance),
                monthly_allocation=round_half_away(st.allocation_at(g, m)),
                progress_percentage=round_half_away(progress),
                status=status,
                deadline=st.deadline_raw[g],
                start_date=st.start_date_raw[g],
                is_completed_this_month=completed_this_month,
                is_starting_this_month=int(st.start_month[g]) == m,
            ))

        total_allocated = sum(a.monthly_allocation for a in active)
        avg_progress = (
            sum(a.progress_percentage for a in active) / len(active) if active else 0.0
        )

        out.append(
            MonthlyProjection(
                month=month_key(month_date),
                month_label=month_label(month_date),
                active_goals=active,
                completed_goals=completed,
                upcoming_goals=upcoming,
                financials=_financials(sim.totals, m, total_allocated),
                summary=ProjectionSummary(
                    active_goals_count=len(active),
                    completed_goals_count=len(completed),
                    upcoming_goals_count=len(upcoming),
                    total_goal_progress=round_half_away(avg_progress),
                ),
            )
        )
    return out
