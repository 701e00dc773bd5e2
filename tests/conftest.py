"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import random
import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from dailybias.core.models import Bias, BiasCategory, BiasSource


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")
    config.addinivalue_line("markers", "slow: Slow tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


def _make_bias(bias_id, category=BiasCategory.DECISION, source=BiasSource.CORE, summary=None):
    """Build a Bias with filler text."""
    return Bias(
        id=bias_id,
        title=f"Bias {bias_id}",
        category=category,
        summary=summary or f"People do {bias_id} things. Then they regret it.",
        why="Mental shortcuts.",
        counter="Slow down.",
        source=source,
    )


@pytest.fixture
def make_bias():
    """Factory for Bias values: make_bias(id, category=..., source=..., summary=...)."""
    return _make_bias


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def now():
    """Fixed clock: 2024-01-15 12:00 UTC."""
    return datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def rng():
    """Seeded random source."""
    return random.Random(1234)


@pytest.fixture
def small_catalog():
    """Three biases, one per category: decision, memory, social."""
    return [
        _make_bias("bias-1", BiasCategory.DECISION),
        _make_bias("bias-2", BiasCategory.MEMORY),
        _make_bias("bias-3", BiasCategory.SOCIAL),
    ]


@pytest.fixture
def quiz_catalog():
    """Ten biases over several categories, two of them user-authored."""
    return [
        _make_bias("anchoring", BiasCategory.DECISION),
        _make_bias("sunk-cost", BiasCategory.DECISION),
        _make_bias("framing", BiasCategory.DECISION),
        _make_bias("loss-aversion", BiasCategory.DECISION),
        _make_bias("hindsight", BiasCategory.MEMORY),
        _make_bias("rosy-retrospection", BiasCategory.MEMORY),
        _make_bias("bandwagon", BiasCategory.SOCIAL),
        _make_bias("halo-effect", BiasCategory.SOCIAL),
        _make_bias("my-bias", BiasCategory.PERCEPTION, BiasSource.USER),
        _make_bias("my-other-bias", BiasCategory.MISC, BiasSource.USER),
    ]
