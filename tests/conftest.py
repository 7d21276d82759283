"""Shared test fixtures for NutriScan scoring tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Test hermeticity
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _force_hermetic_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CATALOG_DIR", raising=False)
    monkeypatch.setenv("NUTRISCAN_LOG_LEVEL", "debug")

# Allow running tests without `pip install -e .` by making `src/` importable.
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_SRC_DIR = _PROJECT_ROOT / "src"
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from nutriscan.core.catalog.loader import load_bundled_catalog  # noqa: E402
from nutriscan.core.catalog.models import RuleCatalog  # noqa: E402
from nutriscan.domains.health.domain_logic.composite_scorer import CompositeScorer  # noqa: E402
from nutriscan.domains.health.domain_logic.trend_projector import TrendProjector  # noqa: E402


@pytest.fixture(scope="session")
def bundled_catalog() -> RuleCatalog:
    """The rule catalog shipped with the package."""
    return load_bundled_catalog()


@pytest.fixture
def scorer() -> CompositeScorer:
    return CompositeScorer()


@pytest.fixture
def projector() -> TrendProjector:
    return TrendProjector()
