"""
Record Contracts — Pydantic Models for Persistence Rows.

The persistence layer hands over profile and commitment rows as dicts.
These models pin the accepted shape; the converters turn a validated row
into a capacity value object. Any shape problem becomes the matching
capacity error so callers only deal with one error family.
"""

import logging
from collections.abc import Iterable
import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from jar.capacity.errors import InvalidCapacityProfile, InvalidCommitment
from jar.capacity.models import BucketType, CapacityProfile, Commitment
from jar.capacity.thresholds import WEEKLY_CAPACITY_DEFAULT, WHIRLWIND_FACTOR

logger = logging.getLogger(__name__)


def _first_error(exc: ValidationError) -> str:
    err = exc.errors()[0]
    loc = ".".join(str(part) for part in err.get("loc", ()))
    return f"{loc}: {err.get('msg')}" if loc else str(err.get("msg"))


# =============================================================================
# PROFILE
# =============================================================================


class ProfileRecord(BaseModel):
    """Row from the profiles table (only the fields capacity needs)."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    full_name: str | None = None
    capacity_hours: float | None = Field(default=None, description="Nominal weekly hours")

    @field_validator("capacity_hours")
    @classmethod
    def _positive_hours(cls, v: float | None) -> float | None:
        if v is not None and not v > 0:
            raise ValueError("capacity_hours must be positive")
        return v

    def to_profile(
        self,
        overhead_factor: float = WHIRLWIND_FACTOR,
        default_hours: float = WEEKLY_CAPACITY_DEFAULT,
    ) -> CapacityProfile:
        return CapacityProfile.from_hours(
            self.capacity_hours,
            overhead_factor=overhead_factor,
            default_hours=default_hours,
        )


# =============================================================================
# COMMITMENT
# =============================================================================


class CommitmentRecord(BaseModel):
    """Row from the commitments table."""

    model_config = ConfigDict(extra="ignore")

    id: str
    date: dt.date
    type: BucketType
    hours_value: float | None = None
    completed: bool = False
    description: str | None = None
    rock_id: str | None = None
    engagement_id: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_string(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("type", mode="before")
    @classmethod
    def _parse_type(cls, v: Any) -> BucketType:
        try:
            return BucketType.parse(v)
        except InvalidCommitment as e:
            raise ValueError(str(e)) from e

    def to_commitment(self) -> Commitment:
        return Commitment(
            id=self.id,
            date=self.date,
            bucket_type=self.type,
            hours_value=self.hours_value,
            completed=self.completed,
            description=self.description,
            rock_id=self.rock_id,
            engagement_id=self.engagement_id,
        )


# =============================================================================
# CONVERSION
# =============================================================================


def load_profile(row: dict | None, **kwargs) -> CapacityProfile:
    """
    Convert a profile row to a CapacityProfile. None = default profile.

    Raises:
        InvalidCapacityProfile: If the row does not validate
    """
    if row is None:
        return ProfileRecord().to_profile(**kwargs)
    try:
        record = ProfileRecord.model_validate(row)
    except ValidationError as e:
        raise InvalidCapacityProfile(f"Invalid profile: {_first_error(e)}") from e
    return record.to_profile(**kwargs)


def load_commitment(row: dict) -> Commitment:
    """
    Convert one commitment row to a Commitment.

    Raises:
        InvalidCommitment: If the row does not validate
    """
    try:
        record = CommitmentRecord.model_validate(row)
    except ValidationError as e:
        ref = row.get("id", "?") if isinstance(row, dict) else "?"
        raise InvalidCommitment(f"Invalid commitment {ref}: {_first_error(e)}") from e
    return record.to_commitment()


def load_commitments(rows: Iterable[dict]) -> list[Commitment]:
    """Convert commitment rows, failing on the first bad one."""
    commitments = [load_commitment(row) for row in rows]
    logger.debug("Loaded commitments", extra={"commitment_count": len(commitments)})
    return commitments
