"""
Pytest configuration and shared fixtures.
"""

import json
from pathlib import Path
from typing import Any, Dict, List

import pytest

from statuskit.logger import get_logger, reset_logger
from statuskit.status import reset_resolver


@pytest.fixture(autouse=True)
def clean_globals():
    """Each test starts with the built-in resolver and a fresh logger."""
    reset_resolver()
    reset_logger()
    get_logger(enable_console=False)
    yield
    reset_resolver()
    reset_logger()


@pytest.fixture
def sample_records() -> List[Dict[str, Any]]:
    """Records as they arrive from mixed upstream sources."""
    return [
        {"id": 1, "title": "Write release notes", "status": "Done"},
        {"id": 2, "title": "Fix login redirect", "status": "  in_progress "},
        {"id": 3, "title": "Plan Q3 roadmap", "status": "backlog"},
        {"id": 4, "title": "Old landing page", "status": "DELETED"},
        {"id": 5, "title": "Imported from tracker", "status": "Blocked"},
        {"id": 6, "title": "No status yet"},
    ]


@pytest.fixture
def invalid_record() -> Dict[str, Any]:
    """Record missing its title and carrying a non-scalar status."""
    return {"id": 7, "status": ["done"]}


@pytest.fixture
def records_file(tmp_path, sample_records) -> Path:
    path = tmp_path / "records.json"
    path.write_text(json.dumps(sample_records, indent=2))
    return path
