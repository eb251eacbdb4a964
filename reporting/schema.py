from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

GoalStatus = Literal["active", "completed", "at_risk"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ActiveGoalProjection(_CamelModel):
    goal_id: str
    title: str
    category: str
    target_amount: float
    projected_balance: float
    monthly_allocation: float
    progress_percentage: float
    status: GoalStatus
    deadline: Optional[str] = None
    start_date: Optional[str] = None
    is_completed_this_month: bool = False
    is_starting_this_month: bool = False


class CompletedGoal(_CamelModel):
    goal_id: str
    title: str
    completed_in_month: str


class UpcomingGoal(_CamelModel):
    goal_id: str
    title: str
    starts_in_month: str


class MonthlyFinancials(_CamelModel):
    total_monthly_income: float
    total_monthly_expenses: float
    monthly_surplus: float
    savings_rate: float
    total_allocated_to_goals: float = 0.0


class ProjectionSummary(_CamelModel):
    active_goals_count: int = 0
    completed_goals_count: int = 0
    upcoming_goals_count: int = 0
    total_goal_progress: float = 0.0


class MonthlyProjection(_CamelModel):
    month: str
    month_label: str
    active_goals: List[ActiveGoalProjection] = Field(default_factory=list)
    completed_goals: List[CompletedGoal] = Field(default_factory=list)
    upcoming_goals: List[UpcomingGoal] = Field(default_factory=list)
    financials: MonthlyFinancials
    summary: ProjectionSummary = Field(default_factory=ProjectionSummary)


class ProjectionResponse(_CamelModel):
    monthly_projections: List[MonthlyProjection] = Field(default_factory=list)
    current_month_offset: int = 0
    total_goals: int = 0

    def to_payload(self) -> dict:
        """JSON-ready dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)
