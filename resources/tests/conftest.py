"""Pytest configuration for resources/tests.

Ensures the repository root is on sys.path so tests can import
helpers via absolute package path like `resources.tests.helpers`,
and provides the feature graphs shared by the unit tests.
"""

import logging
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from phonology.features.graph import FeatureGraph  # noqa: E402
from phonology.utils.config import reload_settings  # noqa: E402

from resources.tests.helpers.features import SMALL_FEATURES  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Start every test from default settings with diagnostics reaching caplog."""
    monkeypatch.delenv("PHONOLOGY_DIAGNOSTICS_ENABLED", raising=False)
    settings = reload_settings()
    logging.getLogger("phonology").propagate = True
    yield settings


@pytest.fixture
def graph() -> FeatureGraph:
    features = FeatureGraph()
    features.loads(SMALL_FEATURES)
    return features


@pytest.fixture
def default_graph() -> FeatureGraph:
    features = FeatureGraph()
    features.loadfile()
    return features
