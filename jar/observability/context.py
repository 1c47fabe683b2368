"""
Request-scoped context for capacity computations.

The API sets a request id per HTTP request; every log line written while
that request computes a jar or a team board carries it, and capacity error
responses echo it back so a client can quote it.
"""

import contextvars
import uuid
from typing import Optional

REQUEST_ID_PREFIX = "req-"

_request_id_var: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "jar_request_id", default=None
)


def get_request_id() -> Optional[str]:
    return _request_id_var.get()


def set_request_id(request_id: str) -> contextvars.Token:
    """Set the request id for the current context. Returns the token for reset."""
    return _request_id_var.set(request_id)


def generate_request_id() -> str:
    return f"{REQUEST_ID_PREFIX}{uuid.uuid4().hex[:16]}"


class RequestContext:
    """
    Scope a block of work under one request id.

    Usage:
        with RequestContext() as ctx:
            engine.compute(profile, commitments)
            # Capacity logs inside this block carry ctx.request_id

        with RequestContext(request_id="req-abc123"):
            engine.team_board(members)
    """

    def __init__(self, request_id: Optional[str] = None):
        self.request_id = request_id or generate_request_id()
        self._token: Optional[contextvars.Token] = None

    def __enter__(self) -> "RequestContext":
        self._token = set_request_id(self.request_id)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._token is not None:
            _request_id_var.reset(self._token)
            self._token = None
