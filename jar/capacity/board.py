"""
Team commitment board - one row per team member, one cell per business day.

Each row carries the member's weekly load against real capacity and the
shield state plus its utilization band for the shield analysis; each cell carries the day's committed hours and whether that
day is over the daily cap.
"""

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from .calculator import compute_capacity
from .models import CapacityProfile, CapacityResult, Commitment
from .thresholds import FILL_LEVEL_MAX, NEAR_CAPACITY_FILL, THRESHOLDS, CapacityThresholds
from .weeks import business_days, current_week_start, start_of_week

logger = logging.getLogger(__name__)

OVERLOAD_LABEL = "OVERLOAD"


def _hours(value: float) -> str:
    """4.0 -> "4", 2.5 -> "2.5"."""
    return f"{value:g}"


class UtilizationBand(str, Enum):
    """Shield analysis band of a member's utilization."""

    OK = "ok"
    WARNING = "warning"
    OVERLOADED = "overloaded"


def compute_utilization(weekly_load: float, real_capacity: float) -> int | None:
    """
    Load as a percentage of real capacity, rounded, not clamped.

    Unlike the fill level this keeps going past 100 so the shield analysis
    can show how far over a member is. None when real capacity is unusable.
    """
    if not math.isfinite(real_capacity) or real_capacity <= 0:
        return None
    return math.floor(weekly_load / real_capacity * 100 + 0.5)


def utilization_band(
    utilization: int | None,
    warning_above: int = NEAR_CAPACITY_FILL,
) -> UtilizationBand:
    if utilization is None or utilization > FILL_LEVEL_MAX:
        return UtilizationBand.OVERLOADED
    if utilization > warning_above:
        return UtilizationBand.WARNING
    return UtilizationBand.OK


@dataclass(frozen=True)
class TeamMember:
    member_id: str
    name: str
    profile: CapacityProfile | None = None
    commitments: tuple[Commitment, ...] = ()


@dataclass(frozen=True)
class BoardCell:
    day: date
    hours: float
    is_overloaded: bool
    commitment_ids: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "date": self.day.isoformat(),
            "hours": self.hours,
            "is_overloaded": self.is_overloaded,
            "commitment_ids": list(self.commitment_ids),
        }


@dataclass(frozen=True)
class MemberLoad:
    member_id: str
    name: str
    capacity: CapacityResult
    cells: tuple[BoardCell, ...]

    @property
    def weekly_load(self) -> float:
        return self.capacity.weekly_load

    @property
    def is_overloaded(self) -> bool:
        return self.capacity.is_overloaded

    @property
    def utilization(self) -> int | None:
        return compute_utilization(self.weekly_load, self.capacity.real_capacity)

    @property
    def utilization_band(self) -> UtilizationBand:
        return utilization_band(self.utilization)

    @property
    def capacity_label(self) -> str:
        """Either "10h / 32h" or "OVERLOAD" once the shield is up."""
        if self.is_overloaded:
            return OVERLOAD_LABEL
        return f"{_hours(self.weekly_load)}h / {_hours(self.capacity.real_capacity)}h"

    def to_dict(self) -> dict:
        return {
            "member_id": self.member_id,
            "name": self.name,
            "weekly_load": self.weekly_load,
            "real_capacity": self.capacity.real_capacity,
            "is_overloaded": self.is_overloaded,
            "capacity_label": self.capacity_label,
            "fill_level": self.capacity.fill_level,
            "utilization": self.utilization,
            "utilization_band": self.utilization_band.value,
            "cells": [cell.to_dict() for cell in self.cells],
        }


@dataclass(frozen=True)
class TeamBoard:
    week_start: date
    days: tuple[date, ...]
    members: tuple[MemberLoad, ...] = field(default_factory=tuple)

    @property
    def overloaded_members(self) -> list[str]:
        return [m.member_id for m in self.members if m.is_overloaded]

    @property
    def total_load(self) -> float:
        return sum(m.weekly_load for m in self.members)

    def to_dict(self) -> dict:
        return {
            "week_start": self.week_start.isoformat(),
            "days": [d.isoformat() for d in self.days],
            "members": [m.to_dict() for m in self.members],
            "overloaded_members": self.overloaded_members,
            "total_load": self.total_load,
        }


def build_team_board(
    members: Iterable[TeamMember],
    week_start=None,
    thresholds: CapacityThresholds | None = None,
) -> TeamBoard:
    """
    Compute every member's row for one week.

    Args:
        members: Team members with their profiles and commitments
        week_start: Any day of the week to show (defaults to the current week)
        thresholds: Threshold values (defaults to the standard set)

    Returns:
        TeamBoard with members in input order
    """
    thresholds = thresholds or THRESHOLDS
    week_start = start_of_week(week_start) if week_start is not None else current_week_start()
    days = tuple(business_days(week_start))

    rows = []
    for member in members:
        capacity = compute_capacity(member.profile, member.commitments, week_start, thresholds)
        cells = []
        for day in days:
            ids = tuple(c.id for c in member.commitments if c.date == day)
            hours = capacity.daily_loads[day]
            cells.append(
                BoardCell(
                    day=day,
                    hours=hours,
                    is_overloaded=day in capacity.overloaded_days,
                    commitment_ids=ids,
                )
            )
        rows.append(
            MemberLoad(
                member_id=member.member_id,
                name=member.name,
                capacity=capacity,
                cells=tuple(cells),
            )
        )

    board = TeamBoard(week_start=week_start, days=days, members=tuple(rows))
    if board.overloaded_members:
        logger.info(
            "Overloaded team members on board",
            extra={
                "week_start": week_start.isoformat(),
                "overloaded_members": board.overloaded_members,
            },
        )
    return board
