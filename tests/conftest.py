"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import random
import sys
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from claimcheck.config import get_settings
from claimcheck.selection import Claim


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


def _make_claim(claim_id, difficulty="easy", subject="Biology", grade_level=None, **kwargs) -> Claim:
    """Build a claim with only the fields selection cares about."""
    return Claim(
        id=claim_id,
        text=kwargs.pop("text", f"Claim {claim_id}"),
        difficulty=difficulty,
        subject=subject,
        grade_level=grade_level,
        **kwargs,
    )


@pytest.fixture
def make_claim():
    """Factory for minimal claims."""
    return _make_claim


@pytest.fixture
def rng():
    """Seeded random source for reproducible selections."""
    return random.Random(1234)


@pytest.fixture
def tiered_catalog():
    """
    Provide a 30-claim catalog: 10 per tier, subjects alternating.

    Ids look like ``easy-00``; even indices are Biology, odd are History.
    """
    claims = []
    for tier in ("easy", "medium", "hard"):
        for i in range(10):
            subject = "Biology" if i % 2 == 0 else "History"
            claims.append(_make_claim(f"{tier}-{i:02d}", difficulty=tier, subject=subject))
    return claims


@pytest.fixture
def biology_fallback_catalog():
    """Ten claims where only 1-3 are Biology/easy."""
    claims = [_make_claim(str(i), difficulty="easy", subject="Biology") for i in range(1, 4)]
    claims += [
        _make_claim(str(i), difficulty="medium" if i % 2 else "hard", subject="History")
        for i in range(4, 11)
    ]
    return claims


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep settings away from the developer's home directory and .env."""
    monkeypatch.setenv("CLAIMCHECK_EXPOSURE_DB_PATH", str(tmp_path / "exposure.db"))
    monkeypatch.delenv("CLAIMCHECK_SELECTION_SEED", raising=False)
    monkeypatch.delenv("CLAIMCHECK_CATALOG_PATH", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
