"""
Projection engine — income summarizer, goal state, allocation weighting,
compounding, and the month-by-month simulation driver.
"""

from .summarizer import MonthlyTotals, summarize_financials
from .goal_state import GoalStateTable
from .weighting import allocation_weights, distribute_surplus
from .compounding import compound, monthly_growth_rate
from .driver import SimulationResult, simulate
from .runner import run_projection, simulate_projection

__all__ = [
    "MonthlyTotals",
    "summarize_financials",
    "GoalStateTable",
    "allocation_weights",
    "distribute_surplus",
    "compound",
    "monthly_growth_rate",
    "SimulationResult",
    "simulate",
    "run_projection",
    "simulate_projection",
]
