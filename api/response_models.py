"""
Shared Pydantic request/response models for the capacity API.

These models give FastAPI the type information it needs to generate
accurate OpenAPI schemas instead of empty `schema: {}`.

Usage:
    from api.response_models import CapacityResponse

    @router.post("/compute", response_model=CapacityResponse)
    def compute(body: ComputeRequest): ...
"""

from datetime import date
from typing import Any

from pydantic import BaseModel, Field

# ==== Capacity Envelope ====
# Shape: {status, data, computed_at, params}


class CapacityResponse(BaseModel):
    """Standard capacity endpoint envelope."""

    status: str = Field(description="ok or error")
    data: Any = Field(default=None, description="Response payload")
    computed_at: str = Field(description="ISO timestamp of computation")
    params: dict[str, Any] = Field(default_factory=dict, description="Echo of request params")


# ==== Error Detail ====
# Carried in HTTPException.detail for capacity validation failures.


class ErrorDetail(BaseModel):
    error: str = Field(description="Human-readable message")
    error_code: str = Field(description="Capacity error kind")
    request_id: str | None = Field(default=None, description="Request id to quote when reporting")


# ==== Requests ====
# Rows are passed through as dicts so conversion errors surface as
# capacity errors (422 + error_code) rather than generic schema errors.


class ComputeRequest(BaseModel):
    """One user's capacity for one week."""

    profile: dict[str, Any] | None = Field(default=None, description="Profile row")
    commitments: list[dict[str, Any]] = Field(default_factory=list, description="Commitment rows")
    week_start: date | None = Field(default=None, description="Any day of the week to scope to")
    total_width: float = Field(default=100, gt=0, description="Width of the capacity bar")


class BoardMemberRequest(BaseModel):
    member_id: str
    name: str
    profile: dict[str, Any] | None = None
    commitments: list[dict[str, Any]] = Field(default_factory=list)


class BoardRequest(BaseModel):
    """Team commitment board for one week."""

    members: list[BoardMemberRequest] = Field(default_factory=list)
    week_start: date | None = None
