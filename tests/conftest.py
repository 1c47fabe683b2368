"""
Test configuration — ensures repo root is in sys.path + config isolation.

This allows tests to import from top-level packages (jar, api, cli).
Every test runs with JAR_HOME pointed at a temp dir so a developer's
~/.the_jar/config/capacity.yaml never leaks into results.
"""

import sys
from datetime import date
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).parent.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from jar.capacity import BucketType, CapacityProfile, Commitment  # noqa: E402

# Monday
WEEK = date(2026, 10, 19)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user-level config and env overrides out of every test."""
    monkeypatch.setenv("JAR_HOME", str(tmp_path / "jar_home"))
    monkeypatch.delenv("JAR_CAPACITY_CONFIG", raising=False)
    monkeypatch.delenv("JAR_ENV", raising=False)
    monkeypatch.setattr("jar.config.JAR_ENV", "standard")


@pytest.fixture
def week():
    return WEEK


@pytest.fixture
def profile():
    """Default 40h profile with 20% whirlwind."""
    return CapacityProfile(nominal_weekly_hours=40, overhead_factor=0.2)


def make_commitment(cid, day, bucket, hours=None, **kwargs) -> Commitment:
    return Commitment(id=cid, date=day, bucket_type=bucket, hours_value=hours, **kwargs)


@pytest.fixture
def make():
    return make_commitment


@pytest.fixture
def two_rocks_one_pebble(week):
    """Two Rocks and a Pebble spread over Monday and Tuesday."""
    return [
        make_commitment("c1", week, BucketType.ROCK),
        make_commitment("c2", date(2026, 10, 20), BucketType.ROCK),
        make_commitment("c3", date(2026, 10, 20), BucketType.PEBBLE),
    ]
