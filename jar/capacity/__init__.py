"""
Capacity Module

Weekly capacity accounting for The Jar.

Objects:
- CapacityProfile (nominal weekly hours + whirlwind overhead)
- Commitment (Rock / Pebble / Sand block on a day)
- CapacityResult (derived view-model, recomputed on every call)
- TeamBoard (one row per member, one cell per business day)

Invariants:
- weekly_load == rock_hours + pebble_hours + sand_hours
- 0 <= fill_level <= 100
- Overload is a flag, never a cap
"""

from .board import (
    BoardCell,
    MemberLoad,
    TeamBoard,
    TeamMember,
    UtilizationBand,
    build_team_board,
    compute_utilization,
    utilization_band,
)
from .calculator import (
    CapacityEngine,
    aggregate_by_bucket,
    capacity_status,
    compute_capacity,
    compute_daily_breakdown,
    compute_fill_level,
    compute_real_capacity,
    compute_water_hours,
    compute_weekly_load,
    get_capacity_bar_segments,
    is_day_overloaded,
    is_overloaded,
)
from .errors import CapacityError, DegenerateCapacity, InvalidCapacityProfile, InvalidCommitment
from .models import (
    BLOCK_HOURS,
    BarSegments,
    BucketTotals,
    BucketType,
    CapacityProfile,
    CapacityResult,
    CapacityStatus,
    Commitment,
    DailyBreakdown,
    hours_for,
)
from .thresholds import CapacityThresholds, load_thresholds

__all__ = [
    # Engine
    "CapacityEngine",
    "compute_capacity",
    "compute_real_capacity",
    "compute_water_hours",
    "aggregate_by_bucket",
    "compute_weekly_load",
    "is_overloaded",
    "is_day_overloaded",
    "compute_fill_level",
    "compute_daily_breakdown",
    "get_capacity_bar_segments",
    "capacity_status",
    # Board
    "TeamMember",
    "TeamBoard",
    "MemberLoad",
    "BoardCell",
    "build_team_board",
    "UtilizationBand",
    "compute_utilization",
    "utilization_band",
    # Models
    "BLOCK_HOURS",
    "BucketType",
    "CapacityProfile",
    "Commitment",
    "BucketTotals",
    "DailyBreakdown",
    "CapacityResult",
    "CapacityStatus",
    "BarSegments",
    "hours_for",
    # Errors
    "CapacityError",
    "InvalidCapacityProfile",
    "InvalidCommitment",
    "DegenerateCapacity",
    # Thresholds
    "CapacityThresholds",
    "load_thresholds",
]
