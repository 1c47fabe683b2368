"""
Observability module: structured logging and request IDs.

Usage:
    import logging
    from jar.observability import RequestContext

    logger = logging.getLogger(__name__)
    logger.info("Computing capacity", extra={"commitments": 12})

    with RequestContext() as ctx:
        logger.info("Request started", extra={"request_id": ctx.request_id})
"""

from .context import RequestContext, generate_request_id, get_request_id, set_request_id
from .logging import (
    CorrelationIdMiddleware,
    HumanFormatter,
    JSONFormatter,
    configure_logging,
)

__all__ = [
    # Logging
    "configure_logging",
    "JSONFormatter",
    "HumanFormatter",
    "CorrelationIdMiddleware",
    # Context
    "RequestContext",
    "generate_request_id",
    "get_request_id",
    "set_request_id",
]
