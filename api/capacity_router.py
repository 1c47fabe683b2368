"""
Capacity API Router — stateless capacity computations.

The UI posts the rows it already holds and re-posts whenever they change;
nothing is stored between calls.

Usage in server.py:
    from api.capacity_router import capacity_router
    app.include_router(capacity_router, prefix="/api/capacity")
"""

import logging
from datetime import datetime

from fastapi import APIRouter, HTTPException

from api.response_models import BoardRequest, CapacityResponse, ComputeRequest, ErrorDetail
from jar.capacity import CapacityEngine, CapacityError, TeamMember, load_thresholds
from jar.capacity.weeks import week_of
from jar.contracts import load_commitments, load_profile
from jar.observability import get_request_id

logger = logging.getLogger(__name__)

capacity_router = APIRouter(tags=["Capacity"])

# Singleton engine
_engine: CapacityEngine | None = None


def get_engine() -> CapacityEngine:
    """Get or create the capacity engine with thresholds from config."""
    global _engine
    if _engine is None:
        _engine = CapacityEngine(load_thresholds())
    return _engine


def _wrap_response(data: dict | list, params: dict | None = None) -> dict:
    """Wrap response in standard envelope."""
    return {
        "status": "ok",
        "data": data,
        "computed_at": datetime.now().isoformat(),
        "params": params or {},
    }


def _capacity_error(e: CapacityError) -> HTTPException:
    logger.warning("Rejected capacity request: %s", e, extra={"error_code": e.code})
    return HTTPException(
        status_code=422,
        detail=ErrorDetail(
            error=str(e), error_code=e.code, request_id=get_request_id()
        ).model_dump(),
    )


def _profile_defaults(engine: CapacityEngine) -> dict:
    return {
        "overhead_factor": engine.thresholds.overhead_factor,
        "default_hours": engine.thresholds.default_weekly_hours,
    }


# =============================================================================
# ENDPOINTS
# =============================================================================


@capacity_router.post("/compute", response_model=CapacityResponse)
def compute_capacity(body: ComputeRequest):
    """
    Compute one user's capacity view-model and bar segments.

    Returns real capacity, bucket totals, weekly load, shield state,
    fill level, daily breakdown and the capacity bar widths.
    """
    engine = get_engine()
    try:
        profile = load_profile(body.profile, **_profile_defaults(engine))
        commitments = load_commitments(body.commitments)
        result = engine.compute(profile, commitments, body.week_start)
        segments = engine.bar_segments(result, body.total_width)
    except CapacityError as e:
        raise _capacity_error(e) from e

    data = result.to_dict()
    data["bar_segments"] = segments.to_dict()
    return _wrap_response(
        data,
        {
            "week_of": week_of(body.week_start) if body.week_start else None,
            "commitment_count": len(body.commitments),
            "total_width": body.total_width,
        },
    )


@capacity_router.post("/board", response_model=CapacityResponse)
def team_board(body: BoardRequest):
    """Compute the team commitment board (one row per member, Mon..Fri cells)."""
    engine = get_engine()
    try:
        members = [
            TeamMember(
                member_id=m.member_id,
                name=m.name,
                profile=load_profile(m.profile, **_profile_defaults(engine)),
                commitments=tuple(load_commitments(m.commitments)),
            )
            for m in body.members
        ]
        board = engine.team_board(members, body.week_start)
    except CapacityError as e:
        raise _capacity_error(e) from e

    return _wrap_response(
        board.to_dict(),
        {
            "week_of": week_of(body.week_start) if body.week_start else None,
            "member_count": len(members),
        },
    )


@capacity_router.get("/thresholds", response_model=CapacityResponse)
def thresholds():
    """Threshold values the engine is currently using."""
    return _wrap_response(get_engine().thresholds.to_dict())
