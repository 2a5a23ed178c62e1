"""Shared pytest configuration: path setup and lead fixtures."""

import sys
from pathlib import Path

import pytest

_ROOT = Path(__file__).resolve().parent.parent

# Allow ``from leadview import ...`` (src is the package root)
sys.path.insert(0, str(_ROOT / "src"))

# Allow ``from service.main import ...``
sys.path.insert(0, str(_ROOT))

# Keep the service quiet and deterministic under test
import os  # noqa: E402

os.environ.setdefault("LV_LOG_LEVEL", "WARNING")
os.environ.setdefault("LV_SEED_DEMO_LEADS", "true")

from leadview import Lead  # noqa: E402


def make_lead(analysis_type: str = "light", score: float = 50, **overrides) -> Lead:
    """Create a Lead for testing."""
    fields = {
        "id": "lead-001",
        "username": "test.handle",
        "full_name": "Test Handle",
        "analysis_type": analysis_type,
        "score": score,
        "followers_count": 1200,
        "following_count": 300,
        "posts_count": 45,
    }
    fields.update(overrides)
    return Lead(**fields)


def run_record(analysis_data: dict, **fields) -> dict:
    """Analysis record whose first run payload carries ``analysis_data``."""
    record = {"run_id": "run-001", "payloads": [{"analysis_data": analysis_data}]}
    record.update(fields)
    return record


@pytest.fixture
def light_lead():
    return make_lead("light", 40)


@pytest.fixture
def deep_lead():
    return make_lead("deep", 75)


@pytest.fixture
def xray_lead():
    return make_lead("xray", 92)
