import json
from pathlib import Path

import pytest

SAMPLE_RECORDS = Path(__file__).resolve().parent.parent / "sample_data" / "records.json"


@pytest.fixture
def sample_records_path() -> Path:
    return SAMPLE_RECORDS


@pytest.fixture
def sample_records() -> dict:
    return json.loads(SAMPLE_RECORDS.read_text(encoding="utf-8"))
