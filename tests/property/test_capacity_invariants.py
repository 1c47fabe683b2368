"""
Property-based tests for capacity invariants using Hypothesis.

These tests stress the calculator with random commitment sets to find
edge cases in aggregation, fill level and bar segments.
"""

from datetime import date, timedelta

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from jar.capacity import (
    BucketType,
    CapacityProfile,
    Commitment,
    aggregate_by_bucket,
    compute_capacity,
    compute_fill_level,
    get_capacity_bar_segments,
    is_overloaded,
)

MONDAY = date(2026, 10, 19)

# ============================================================================
# Strategies
# ============================================================================

hours_st = st.one_of(
    st.none(),
    st.floats(min_value=0.25, max_value=12, allow_nan=False, allow_infinity=False),
)


@st.composite
def commitments_st(draw, max_size=30):
    n = draw(st.integers(min_value=0, max_value=max_size))
    return [
        Commitment(
            id=f"c{i}",
            date=MONDAY + timedelta(days=draw(st.integers(min_value=0, max_value=6))),
            bucket_type=draw(st.sampled_from(list(BucketType))),
            hours_value=draw(hours_st),
            completed=draw(st.booleans()),
        )
        for i in range(n)
    ]


profiles_st = st.builds(
    CapacityProfile,
    nominal_weekly_hours=st.floats(min_value=1, max_value=80, allow_nan=False),
    overhead_factor=st.floats(min_value=0, max_value=0.9, allow_nan=False),
)


# ============================================================================
# Aggregation
# ============================================================================


@given(commitments_st())
def test_weekly_load_is_sum_of_buckets(commitments):
    """weekly_load equals rock + pebble + sand."""
    result = compute_capacity(None, commitments, MONDAY)
    assert result.weekly_load == pytest.approx(
        result.rock_hours + result.pebble_hours + result.sand_hours
    )


@given(commitments_st(), st.randoms())
def test_aggregation_ignores_order(commitments, rnd):
    """Shuffling the snapshot never changes the totals."""
    shuffled = list(commitments)
    rnd.shuffle(shuffled)
    a, b = aggregate_by_bucket(commitments), aggregate_by_bucket(shuffled)
    assert a.rock_hours == pytest.approx(b.rock_hours)
    assert a.pebble_hours == pytest.approx(b.pebble_hours)
    assert a.sand_hours == pytest.approx(b.sand_hours)


@given(commitments_st())
def test_daily_loads_never_exceed_weekly_load(commitments):
    result = compute_capacity(None, commitments, MONDAY)
    assert sum(result.daily_loads.values()) <= result.weekly_load + 1e-9
    assert all(result.daily_loads[d] > 8 for d in result.overloaded_days)


# ============================================================================
# Fill level and shield
# ============================================================================


@given(
    st.floats(min_value=0, max_value=1000, allow_nan=False),
    st.floats(min_value=0.1, max_value=100, allow_nan=False),
)
def test_fill_level_is_clamped(load, real_capacity):
    fill = compute_fill_level(load, real_capacity)
    assert isinstance(fill, int)
    assert 0 <= fill <= 100


@given(st.floats(min_value=0.1, max_value=100, allow_nan=False))
def test_full_at_or_past_real_capacity(real_capacity):
    assert compute_fill_level(real_capacity, real_capacity) == 100
    assert compute_fill_level(real_capacity * 3, real_capacity) == 100


@given(
    st.floats(min_value=0, max_value=200, allow_nan=False),
    st.floats(min_value=0, max_value=50, allow_nan=False),
    st.floats(min_value=1, max_value=80, allow_nan=False),
)
def test_shield_is_monotonic(load, extra, nominal):
    """Adding work never lowers the shield."""
    if is_overloaded(load, nominal):
        assert is_overloaded(load + extra, nominal)


@given(profiles_st, commitments_st())
@settings(max_examples=50)
def test_result_is_consistent(profile, commitments):
    result = compute_capacity(profile, commitments, MONDAY)
    assert result.real_capacity + result.water_hours == pytest.approx(profile.nominal_weekly_hours)
    assert result.weekly_remaining >= 0
    assert 0 <= result.fill_level <= 100


@given(profiles_st, commitments_st())
@settings(max_examples=50)
def test_recompute_is_deterministic(profile, commitments):
    """Same snapshot in, same view-model out."""
    assert compute_capacity(profile, commitments, MONDAY) == compute_capacity(
        profile, commitments, MONDAY
    )


# ============================================================================
# Bar segments
# ============================================================================


@given(
    profiles_st,
    commitments_st(max_size=60),
    st.floats(min_value=1, max_value=500, allow_nan=False),
)
def test_bar_segments_fill_total_width(profile, commitments, width):
    result = compute_capacity(profile, commitments, MONDAY)
    segments = get_capacity_bar_segments(result, width)
    assert segments.total == pytest.approx(width)
    for value in segments.to_dict().values():
        assert value >= 0
