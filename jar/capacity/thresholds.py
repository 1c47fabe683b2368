"""
Thresholds Module — Capacity Constants with Justifications.

Every number the capacity engine compares against lives here, named,
with a default and an environment-specific override.

THRESHOLD JUSTIFICATIONS:
========================

WEEKLY_CAPACITY_DEFAULT = 40
  - Why: Standard full-time week. Used whenever a profile has no
    capacity_hours set.

WHIRLWIND_FACTOR = 0.20 (20%)
  - Why: Share of the week lost to admin, email and unplanned work
    ("water"). Shown as its own bucket, never available for commitments.
  - Derived: real capacity = nominal - nominal * WHIRLWIND_FACTOR (32h of 40h).

OVERLOAD_THRESHOLD = REAL_CAPACITY_FACTOR (80% of nominal hours)
  - Why: The shield comes up once commitments exceed the deep-work hours
    of the week (32h of 40h). Compared against nominal hours so a profile
    with a different whirlwind share still gets the same shield line.
  - Risk: Lower values raise the shield while real capacity is still free.

DAILY_CAPACITY_HOURS = 8
  - Why: Hard per-day cap independent of the weekly setting. A single
    day above 8h of blocks cannot be delivered.

NEAR_CAPACITY_FILL = 80 (percent)
  - Why: Fill level at which the jar gauge switches to the warning state.
"""

import logging
import math
from dataclasses import asdict, dataclass
from pathlib import Path

import yaml

from jar import config, paths

from .errors import InvalidCapacityProfile

logger = logging.getLogger(__name__)

WEEKLY_CAPACITY_DEFAULT = 40.0
WHIRLWIND_FACTOR = 0.2
REAL_CAPACITY_FACTOR = 1 - WHIRLWIND_FACTOR
OVERLOAD_THRESHOLD = REAL_CAPACITY_FACTOR
DAILY_CAPACITY_HOURS = 8.0
NEAR_CAPACITY_FILL = 80
FILL_LEVEL_MAX = 100


@dataclass
class ThresholdConfig:
    """Configuration for a single threshold."""

    name: str
    value: float
    description: str
    justification: str


# =============================================================================
# THRESHOLD DEFINITIONS
# =============================================================================

DEFAULT_THRESHOLDS = {
    "default_weekly_hours": ThresholdConfig(
        name="default_weekly_hours",
        value=WEEKLY_CAPACITY_DEFAULT,
        description="Nominal weekly hours when a profile has none",
        justification="Standard full-time week",
    ),
    "overhead_factor": ThresholdConfig(
        name="overhead_factor",
        value=WHIRLWIND_FACTOR,
        description="Fraction of nominal hours reserved for whirlwind work",
        justification="20% of the week is lost to admin and unplanned work",
    ),
    "overload_threshold": ThresholdConfig(
        name="overload_threshold",
        value=OVERLOAD_THRESHOLD,
        description="Fraction of nominal hours above which the shield comes up",
        justification="Commitments past real capacity cannot all be delivered",
    ),
    "daily_capacity_hours": ThresholdConfig(
        name="daily_capacity_hours",
        value=DAILY_CAPACITY_HOURS,
        description="Committed hours above which a single day is overloaded",
        justification="A working day holds at most 8h of blocks",
    ),
    "near_capacity_fill": ThresholdConfig(
        name="near_capacity_fill",
        value=NEAR_CAPACITY_FILL,
        description="Fill level (percent) at which the jar shows a warning",
        justification="Warn while the jar still has room, ahead of the shield",
    ),
}


# Environment-specific overrides
ENVIRONMENT_OVERRIDES = {
    "standard": {
        # Defaults as documented above
    },
    "strict": {
        # Shield at 70% of nominal hours and shorter days
        "overload_threshold": 0.7,
        "daily_capacity_hours": 6.0,
        "near_capacity_fill": 70,
    },
    "relaxed": {
        # Shield only once the full nominal week is booked
        "overload_threshold": 1.0,
        "near_capacity_fill": 90,
    },
}


@dataclass(frozen=True)
class CapacityThresholds:
    """Resolved threshold values handed to the capacity engine."""

    default_weekly_hours: float = WEEKLY_CAPACITY_DEFAULT
    overhead_factor: float = WHIRLWIND_FACTOR
    overload_threshold: float = OVERLOAD_THRESHOLD
    daily_capacity_hours: float = DAILY_CAPACITY_HOURS
    near_capacity_fill: int = NEAR_CAPACITY_FILL

    def __post_init__(self):
        for name, value in asdict(self).items():
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidCapacityProfile(f"Threshold {name} must be a number, got {value!r}")
            if not math.isfinite(value):
                raise InvalidCapacityProfile(f"Threshold {name} must be finite, got {value!r}")
        if self.default_weekly_hours <= 0:
            raise InvalidCapacityProfile(
                f"default_weekly_hours must be positive, got {self.default_weekly_hours}"
            )
        if not 0 <= self.overhead_factor < 1:
            raise InvalidCapacityProfile(
                f"overhead_factor must be in [0, 1), got {self.overhead_factor}"
            )
        if self.overload_threshold <= 0:
            raise InvalidCapacityProfile(
                f"overload_threshold must be positive, got {self.overload_threshold}"
            )
        if self.daily_capacity_hours <= 0:
            raise InvalidCapacityProfile(
                f"daily_capacity_hours must be positive, got {self.daily_capacity_hours}"
            )
        if not 0 < self.near_capacity_fill <= FILL_LEVEL_MAX:
            raise InvalidCapacityProfile(
                f"near_capacity_fill must be in (0, 100], got {self.near_capacity_fill}"
            )

    def to_dict(self) -> dict:
        return asdict(self)


# =============================================================================
# THRESHOLD ACCESS
# =============================================================================


def get_thresholds_for_environment(environment: str = "standard") -> dict[str, float]:
    """
    Get thresholds for a specific environment.

    Args:
        environment: One of "standard", "strict", "relaxed"

    Returns:
        Dict mapping threshold name to value
    """
    thresholds = {k: v.value for k, v in DEFAULT_THRESHOLDS.items()}

    overrides = ENVIRONMENT_OVERRIDES.get(environment)
    if overrides is None:
        logger.warning("Unknown threshold environment %r, using standard", environment)
        overrides = {}
    thresholds.update(overrides)

    return thresholds


def _load_config(config_path: Path) -> dict:
    """Load YAML config, return empty dict on failure."""
    if not config_path.exists():
        logger.warning("Capacity config not found at %s, using defaults", config_path)
        return {}
    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    except (yaml.YAMLError, OSError) as exc:
        logger.error("Failed to load capacity config %s: %s", config_path, exc)
        return {}
    if not isinstance(data, dict):
        logger.error("Capacity config %s is not a mapping, ignoring", config_path)
        return {}
    return data


def load_thresholds(
    config_path: Path | None = None,
    environment: str | None = None,
) -> CapacityThresholds:
    """
    Resolve thresholds: defaults, then environment overrides, then YAML.

    The YAML file may hold a flat mapping of threshold names or a
    ``thresholds:`` section. Unknown keys are ignored with a warning; values
    that do not validate are logged and the environment values are used.
    """
    if environment is None:
        environment = config.JAR_ENV
    if config_path is None:
        config_path = paths.capacity_config_path()

    env_values = get_thresholds_for_environment(environment)
    values = dict(env_values)

    data = _load_config(Path(config_path))
    section = data.get("thresholds", data)
    if isinstance(section, dict):
        for key, value in section.items():
            if key not in DEFAULT_THRESHOLDS:
                logger.warning("Ignoring unknown capacity threshold %r", key)
                continue
            values[key] = value

    try:
        thresholds = CapacityThresholds(**values)
    except InvalidCapacityProfile as exc:
        logger.error("Invalid capacity config %s: %s", config_path, exc)
        thresholds = CapacityThresholds(**env_values)
    logger.debug(
        "Capacity thresholds resolved",
        extra={"environment": environment, "thresholds": thresholds.to_dict()},
    )
    return thresholds


THRESHOLDS = CapacityThresholds()
