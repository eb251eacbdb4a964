from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

import pandas as pd

from .frames import (
    build_expense_frame,
    build_goal_frame,
    build_income_source_frame,
    build_side_project_frame,
    build_transaction_frame,
)

logger = logging.getLogger("surplus_planner.data_prep")

# Bundle keys and the CSV file names used for directory inputs.
BUNDLE_SECTIONS = (
    "goals",
    "income_sources",
    "side_projects",
    "recurring_expenses",
    "transactions",
)

_SECTION_ALIASES = {
    "incomeSources": "income_sources",
    "sideProjects": "side_projects",
    "recurringExpenses": "recurring_expenses",
    "oneTimeTransactions": "transactions",
}


@dataclass
class UserRecords:
    """Canonical frames for one user's projection inputs."""
    goals: pd.DataFrame = field(default_factory=lambda: build_goal_frame(None))
    income_sources: pd.DataFrame = field(default_factory=lambda: build_income_source_frame(None))
    side_projects: pd.DataFrame = field(default_factory=lambda: build_side_project_frame(None))
    recurring_expenses: pd.DataFrame = field(default_factory=lambda: build_expense_frame(None))
    transactions: pd.DataFrame = field(default_factory=lambda: build_transaction_frame(None))

    @classmethod
    def from_payload(cls, payload: dict) -> "UserRecords":
        sections = {_SECTION_ALIASES.get(k, k): v for k, v in payload.items()}
        unknown = sorted(set(sections) - set(BUNDLE_SECTIONS))
        if unknown:
            logger.warning("Ignoring unknown bundle sections: %s", unknown)
        return cls(
            goals=build_goal_frame(sections.get("goals")),
            income_sources=build_income_source_frame(sections.get("income_sources")),
            side_projects=build_side_project_frame(sections.get("side_projects")),
            recurring_expenses=build_expense_frame(sections.get("recurring_expenses")),
            transactions=build_transaction_frame(sections.get("transactions")),
        )


def load_records_csv(path: Union[str, Path], *, low_memory: bool = False) -> pd.DataFrame:
    """Load one record collection from CSV."""
    return pd.read_csv(path, low_memory=low_memory)


def load_user_records(path: Union[str, Path]) -> UserRecords:
    """
    Load a user's records from either a JSON bundle file
    ({"goals": [...], "income_sources": [...], ...}) or a directory holding
    one CSV per section (goals.csv, income_sources.csv, ...). Missing
    sections are treated as empty collections.
    """
    p = Path(path)
    if p.is_dir():
        payload = {}
        for section in BUNDLE_SECTIONS:
            csv_path = p / f"{section}.csv"
            if csv_path.exists():
                payload[section] = load_records_csv(csv_path)
        logger.info("Loaded %d record sections from %s", len(payload), p)
        return UserRecords.from_payload(payload)

    payload = json.loads(p.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError(f"Expected a JSON object with record sections in {p}")
    logger.info("Loaded record bundle from %s", p)
    return UserRecords.from_payload(payload)
