"""
Capacity value objects.

Inputs (CapacityProfile, Commitment) are validated on construction so a
malformed record never reaches the aggregates. Outputs (BucketTotals,
DailyBreakdown, CapacityResult, BarSegments) are plain frozen dataclasses,
rebuilt on every computation.
"""

import math
from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from .errors import InvalidCapacityProfile, InvalidCommitment
from .thresholds import WEEKLY_CAPACITY_DEFAULT, WHIRLWIND_FACTOR
from .weeks import coerce_date


class BucketType(str, Enum):
    """Commitment size buckets: large, medium, small."""

    ROCK = "Rock"
    PEBBLE = "Pebble"
    SAND = "Sand"

    @classmethod
    def parse(cls, value) -> "BucketType":
        """Accept a BucketType or its name in any case ("rock", "Rock", "ROCK")."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            wanted = value.strip().lower()
            for member in cls:
                if member.value.lower() == wanted:
                    return member
        raise InvalidCommitment(
            f"Unknown bucket type {value!r}; expected one of {[m.value for m in cls]}"
        )


# Fixed hour value per bucket
BLOCK_HOURS: dict[BucketType, float] = {
    BucketType.ROCK: 4.0,
    BucketType.PEBBLE: 2.0,
    BucketType.SAND: 0.5,
}


class CapacityStatus(str, Enum):
    """Jar gauge state derived from the fill level."""

    AVAILABLE = "Available"
    NEAR_CAPACITY = "Near Capacity"
    OVERLOADED = "Overloaded"


def hours_for(bucket_type) -> float:
    """Lookup the fixed hour value of a bucket."""
    return BLOCK_HOURS[BucketType.parse(bucket_type)]


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class CapacityProfile:
    """
    A user's weekly capacity setting.

    nominal_weekly_hours: configured hours per week (None = absent, use default)
    overhead_factor: fraction of nominal hours lost to whirlwind work
    """

    nominal_weekly_hours: float = WEEKLY_CAPACITY_DEFAULT
    overhead_factor: float = WHIRLWIND_FACTOR

    def __post_init__(self):
        hours = self.nominal_weekly_hours
        if hours is None:
            hours = WEEKLY_CAPACITY_DEFAULT
        if not _is_number(hours) or not math.isfinite(hours) or hours <= 0:
            raise InvalidCapacityProfile(
                f"Nominal weekly hours must be a positive number, got {hours!r}"
            )
        factor = self.overhead_factor
        if not _is_number(factor) or not math.isfinite(factor) or not 0 <= factor <= 1:
            raise InvalidCapacityProfile(
                f"Overhead factor must be a fraction in [0, 1], got {factor!r}"
            )
        object.__setattr__(self, "nominal_weekly_hours", float(hours))
        object.__setattr__(self, "overhead_factor", float(factor))

    @classmethod
    def from_hours(
        cls,
        capacity_hours=None,
        overhead_factor: float = WHIRLWIND_FACTOR,
        default_hours: float = WEEKLY_CAPACITY_DEFAULT,
    ) -> "CapacityProfile":
        """Build a profile from a stored capacity_hours value (None = default)."""
        if capacity_hours is None:
            capacity_hours = default_hours
        return cls(nominal_weekly_hours=capacity_hours, overhead_factor=overhead_factor)


@dataclass(frozen=True)
class Commitment:
    """
    A time-boxed block on the weekly board.

    hours_value defaults to the bucket's fixed value. An explicit value is
    accepted as long as it is a positive, finite number.
    """

    id: str
    date: date
    bucket_type: BucketType
    hours_value: float | None = None
    completed: bool = False
    description: str | None = None
    rock_id: str | None = None
    engagement_id: str | None = None

    def __post_init__(self):
        if self.id is None or str(self.id).strip() == "":
            raise InvalidCommitment("Commitment id is required")
        object.__setattr__(self, "id", str(self.id))

        try:
            day = coerce_date(self.date)
        except (TypeError, ValueError) as e:
            raise InvalidCommitment(
                f"Commitment {self.id}: malformed date {self.date!r}"
            ) from e
        object.__setattr__(self, "date", day)

        bucket = BucketType.parse(self.bucket_type)
        object.__setattr__(self, "bucket_type", bucket)

        hours = self.hours_value
        if hours is None:
            hours = BLOCK_HOURS[bucket]
        if not _is_number(hours) or not math.isfinite(hours) or hours <= 0:
            raise InvalidCommitment(
                f"Commitment {self.id}: hours must be a positive number, got {hours!r}"
            )
        object.__setattr__(self, "hours_value", float(hours))

        if not isinstance(self.completed, bool):
            raise InvalidCommitment(
                f"Commitment {self.id}: completed must be a bool, got {self.completed!r}"
            )


@dataclass(frozen=True)
class BucketTotals:
    rock_hours: float = 0.0
    pebble_hours: float = 0.0
    sand_hours: float = 0.0

    @property
    def total(self) -> float:
        return self.rock_hours + self.pebble_hours + self.sand_hours


@dataclass(frozen=True)
class DailyBreakdown:
    """Committed hours per business day and the days over the daily cap."""

    daily_loads: dict[date, float] = field(default_factory=dict)
    overloaded_days: list[date] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "daily_loads": {d.isoformat(): hours for d, hours in self.daily_loads.items()},
            "overloaded_days": [d.isoformat() for d in self.overloaded_days],
        }


@dataclass(frozen=True)
class CapacityResult:
    """Derived capacity view-model for one user and one week."""

    nominal_hours: float
    real_capacity: float
    water_hours: float
    rock_hours: float
    pebble_hours: float
    sand_hours: float
    weekly_load: float
    weekly_remaining: float
    is_overloaded: bool
    fill_level: int
    status: CapacityStatus
    week_start: date
    daily: DailyBreakdown

    @property
    def buckets(self) -> BucketTotals:
        return BucketTotals(self.rock_hours, self.pebble_hours, self.sand_hours)

    @property
    def daily_loads(self) -> dict[date, float]:
        return self.daily.daily_loads

    @property
    def overloaded_days(self) -> list[date]:
        return self.daily.overloaded_days

    def to_dict(self) -> dict:
        return {
            "nominal_hours": self.nominal_hours,
            "real_capacity": self.real_capacity,
            "water_hours": self.water_hours,
            "rock_hours": self.rock_hours,
            "pebble_hours": self.pebble_hours,
            "sand_hours": self.sand_hours,
            "weekly_load": self.weekly_load,
            "weekly_remaining": self.weekly_remaining,
            "is_overloaded": self.is_overloaded,
            "fill_level": self.fill_level,
            "status": self.status.value,
            "week_start": self.week_start.isoformat(),
            **self.daily.to_dict(),
        }


@dataclass(frozen=True)
class BarSegments:
    """Widths of the stacked capacity bar, in units of the requested total width."""

    water: float
    rock: float
    pebble: float
    sand: float
    empty: float

    @property
    def total(self) -> float:
        return self.water + self.rock + self.pebble + self.sand + self.empty

    def to_dict(self) -> dict:
        return {
            "water": self.water,
            "rock": self.rock,
            "pebble": self.pebble,
            "sand": self.sand,
            "empty": self.empty,
        }
