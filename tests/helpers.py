import copy
import json
from pathlib import Path

import pandas as pd

from core.config import ProjectionConfig

AS_OF = pd.Timestamp("2026-01-15")


def goal(goal_id: str = "g1", **overrides) -> dict:
    record = {
        "id": goal_id,
        "title": f"Goal {goal_id}",
        "category": "other",
        "target_amount": 1200.0,
        "current_amount": 0.0,
        "deadline": "2026-07-01",
        "urgency_score": 3,
        "status": "active",
    }
    record.update(overrides)
    return record


def salary(amount: float, source_id: str = "s1", **overrides) -> dict:
    record = {
        "id": source_id,
        "name": "Salary",
        "income_type": "salary",
        "pay_frequency": "monthly",
        "base_amount": amount,
        "status": "active",
    }
    record.update(overrides)
    return record


def expense(amount: float, expense_id: str = "e1", **overrides) -> dict:
    record = {"id": expense_id, "name": "Rent", "amount": amount, "category": "housing", "status": "active"}
    record.update(overrides)
    return record


def transaction(kind: str, amount: float, date: str, txn_id: str = "t1", category: str = "other") -> dict:
    return {"id": txn_id, "type": kind, "amount": amount, "category": category, "transaction_date": date}


def surplus_of(amount: float) -> dict:
    """Income/expense records leaving exactly `amount` surplus each month."""
    return {
        "income_sources": [salary(3000.0)],
        "recurring_expenses": [expense(3000.0 - amount)],
    }


def config(offset: int = 0, months: int = 12, **kwargs) -> ProjectionConfig:
    return ProjectionConfig.from_request(offset, months, as_of_date=AS_OF, **kwargs)


def write_bundle(tmp_path: Path, data: dict, filename: str = "records.json") -> Path:
    path = tmp_path / filename
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def clone(data: dict) -> dict:
    return copy.deepcopy(data)
