"""
Capacity Calculator - Weekly capacity, load and overload for one user.

Tracks:
- Real capacity (nominal hours minus whirlwind "water")
- Committed hours by bucket (Rock / Pebble / Sand)
- Weekly and per-day overload
- Jar fill level and bar segments for display

Every function is pure: inputs in, values out, no caching. Callers re-run
the computation whenever the underlying records change.
"""

import logging
import math
from collections.abc import Iterable
from datetime import date

from .errors import DegenerateCapacity
from .models import (
    BarSegments,
    BucketTotals,
    BucketType,
    CapacityProfile,
    CapacityResult,
    CapacityStatus,
    Commitment,
    DailyBreakdown,
)
from .thresholds import (
    DAILY_CAPACITY_HOURS,
    FILL_LEVEL_MAX,
    NEAR_CAPACITY_FILL,
    OVERLOAD_THRESHOLD,
    THRESHOLDS,
    WEEKLY_CAPACITY_DEFAULT,
    WHIRLWIND_FACTOR,
    CapacityThresholds,
)
from .weeks import business_days, current_week_start, in_week, start_of_week

logger = logging.getLogger(__name__)


def _nominal(nominal_hours, default_hours: float = WEEKLY_CAPACITY_DEFAULT) -> float:
    return default_hours if nominal_hours is None else nominal_hours


def compute_water_hours(
    nominal_hours: float | None = None,
    overhead_factor: float = WHIRLWIND_FACTOR,
) -> float:
    """Hours reserved for whirlwind work: nominal * overhead_factor."""
    return _nominal(nominal_hours) * overhead_factor


def compute_real_capacity(
    nominal_hours: float | None = None,
    overhead_factor: float = WHIRLWIND_FACTOR,
) -> float:
    """
    Deep-work hours available for commitments.

    real = nominal - water. With the defaults: 40 - 8 = 32.
    """
    nominal = _nominal(nominal_hours)
    return nominal - compute_water_hours(nominal, overhead_factor)


def aggregate_by_bucket(commitments: Iterable[Commitment]) -> BucketTotals:
    """Sum hours per bucket. Empty input gives all zeros."""
    totals = {bucket: 0.0 for bucket in BucketType}
    for c in commitments:
        totals[c.bucket_type] += c.hours_value
    return BucketTotals(
        rock_hours=totals[BucketType.ROCK],
        pebble_hours=totals[BucketType.PEBBLE],
        sand_hours=totals[BucketType.SAND],
    )


def compute_weekly_load(commitments: Iterable[Commitment]) -> float:
    """Total committed hours regardless of bucket."""
    return aggregate_by_bucket(commitments).total


def is_overloaded(
    weekly_load: float,
    nominal_hours: float | None = None,
    overload_threshold: float = OVERLOAD_THRESHOLD,
) -> bool:
    """
    Shield state: load above overload_threshold of nominal hours.

    With the defaults the line sits at real capacity: 40h * 0.8 = 32h.
    """
    return weekly_load > overload_threshold * _nominal(nominal_hours)


def is_day_overloaded(
    day_load: float,
    daily_capacity_hours: float = DAILY_CAPACITY_HOURS,
) -> bool:
    return day_load > daily_capacity_hours


def compute_fill_level(weekly_load: float, real_capacity: float) -> int:
    """
    Jar fill percentage, clamped to 0..100.

    A non-positive or non-finite real capacity cannot hold anything, so the
    jar reads as full.
    """
    if not math.isfinite(real_capacity) or real_capacity <= 0:
        logger.warning(
            "Degenerate real capacity, reporting a full jar",
            extra={"real_capacity": real_capacity, "weekly_load": weekly_load},
        )
        return FILL_LEVEL_MAX
    pct = min(FILL_LEVEL_MAX, weekly_load / real_capacity * 100)
    # half-up, so 62.5 reads as 63 on the gauge
    return max(0, math.floor(pct + 0.5))


def capacity_status(
    fill_level: int,
    near_capacity_fill: int = NEAR_CAPACITY_FILL,
) -> CapacityStatus:
    if fill_level >= FILL_LEVEL_MAX:
        return CapacityStatus.OVERLOADED
    if fill_level >= near_capacity_fill:
        return CapacityStatus.NEAR_CAPACITY
    return CapacityStatus.AVAILABLE


def compute_daily_breakdown(
    commitments: Iterable[Commitment],
    week_start,
    daily_capacity_hours: float = DAILY_CAPACITY_HOURS,
) -> DailyBreakdown:
    """
    Committed hours for Monday..Friday of week_start's week.

    Commitments on weekends or other weeks do not show up in any day.
    """
    days = business_days(week_start)
    daily_loads: dict[date, float] = {d: 0.0 for d in days}
    for c in commitments:
        if c.date in daily_loads:
            daily_loads[c.date] += c.hours_value

    overloaded_days = [
        d for d in days if is_day_overloaded(daily_loads[d], daily_capacity_hours)
    ]
    return DailyBreakdown(daily_loads=daily_loads, overloaded_days=overloaded_days)


def get_capacity_bar_segments(result: CapacityResult, total_width: float = 100) -> BarSegments:
    """
    Proportional widths for the stacked capacity bar.

    The bar spans real capacity plus water. Commitments that overflow the
    bar are scaled down so the segments always add up to total_width.

    Raises:
        DegenerateCapacity: If the bar has no length.
    """
    bar_hours = result.real_capacity + result.water_hours
    if not math.isfinite(bar_hours) or bar_hours <= 0:
        raise DegenerateCapacity(f"Capacity bar has no length ({bar_hours}h)")

    water = min(total_width, result.water_hours / bar_hours * total_width)
    rock = result.rock_hours / bar_hours * total_width
    pebble = result.pebble_hours / bar_hours * total_width
    sand = result.sand_hours / bar_hours * total_width

    room = total_width - water
    filled = rock + pebble + sand
    if filled > room:
        scale = room / filled
        rock, pebble, sand = rock * scale, pebble * scale, sand * scale
        filled = room

    empty = max(0.0, total_width - water - filled)
    return BarSegments(water=water, rock=rock, pebble=pebble, sand=sand, empty=empty)


def compute_capacity(
    profile: CapacityProfile | None,
    commitments: Iterable[Commitment],
    week_start=None,
    thresholds: CapacityThresholds = THRESHOLDS,
) -> CapacityResult:
    """
    Build the full capacity view-model for one user.

    Args:
        profile: The user's capacity setting (None = default profile)
        commitments: Snapshot of the user's commitments
        week_start: Any day of the week to scope to. When given, commitments
            outside Monday..Sunday of that week are ignored. When omitted,
            every commitment counts and the daily breakdown uses the week of
            the earliest one (or the current week if there are none).
        thresholds: Threshold values to compare against

    Returns:
        CapacityResult
    """
    if profile is None:
        profile = CapacityProfile.from_hours(
            None,
            overhead_factor=thresholds.overhead_factor,
            default_hours=thresholds.default_weekly_hours,
        )

    commitments = list(commitments)
    if week_start is not None:
        week_start = start_of_week(week_start)
        commitments = [c for c in commitments if in_week(c.date, week_start)]
    elif commitments:
        week_start = start_of_week(min(c.date for c in commitments))
    else:
        week_start = current_week_start()

    nominal = profile.nominal_weekly_hours
    water_hours = compute_water_hours(nominal, profile.overhead_factor)
    real_capacity = compute_real_capacity(nominal, profile.overhead_factor)

    buckets = aggregate_by_bucket(commitments)
    weekly_load = buckets.total
    weekly_remaining = max(0.0, real_capacity - weekly_load)
    overloaded = is_overloaded(
        weekly_load,
        nominal,
        overload_threshold=thresholds.overload_threshold,
    )
    fill_level = compute_fill_level(weekly_load, real_capacity)
    daily = compute_daily_breakdown(commitments, week_start, thresholds.daily_capacity_hours)

    result = CapacityResult(
        nominal_hours=nominal,
        real_capacity=real_capacity,
        water_hours=water_hours,
        rock_hours=buckets.rock_hours,
        pebble_hours=buckets.pebble_hours,
        sand_hours=buckets.sand_hours,
        weekly_load=weekly_load,
        weekly_remaining=weekly_remaining,
        is_overloaded=overloaded,
        fill_level=fill_level,
        status=capacity_status(fill_level, thresholds.near_capacity_fill),
        week_start=week_start,
        daily=daily,
    )
    logger.debug(
        "Capacity computed",
        extra={
            "week_start": week_start.isoformat(),
            "commitment_count": len(commitments),
            "weekly_load": weekly_load,
            "fill_level": fill_level,
            "is_overloaded": overloaded,
        },
    )
    return result


class CapacityEngine:
    """
    Capacity computations bound to one set of thresholds.

    Responsibilities:
    - Compute a user's CapacityResult for a week
    - Produce bar segments for the capacity bar
    - Build the team commitment board
    """

    def __init__(self, thresholds: CapacityThresholds | None = None):
        self.thresholds = thresholds or THRESHOLDS

    def profile(self, capacity_hours=None) -> CapacityProfile:
        """Profile from a stored capacity_hours value, using this engine's defaults."""
        return CapacityProfile.from_hours(
            capacity_hours,
            overhead_factor=self.thresholds.overhead_factor,
            default_hours=self.thresholds.default_weekly_hours,
        )

    def compute(self, profile, commitments, week_start=None) -> CapacityResult:
        return compute_capacity(profile, commitments, week_start, self.thresholds)

    def is_overloaded(self, weekly_load: float, nominal_hours: float | None = None) -> bool:
        return is_overloaded(
            weekly_load,
            _nominal(nominal_hours, self.thresholds.default_weekly_hours),
            overload_threshold=self.thresholds.overload_threshold,
        )

    def is_day_overloaded(self, day_load: float) -> bool:
        return is_day_overloaded(day_load, self.thresholds.daily_capacity_hours)

    def bar_segments(self, result: CapacityResult, total_width: float = 100) -> BarSegments:
        return get_capacity_bar_segments(result, total_width)

    def team_board(self, members, week_start=None):
        from .board import build_team_board

        return build_team_board(members, week_start, self.thresholds)
