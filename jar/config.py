"""
Centralized configuration for The Jar.

All values that vary by deployment belong here.
Override via environment variables where marked.
"""

import os

# ============================================================
# Capacity thresholds
# ============================================================

JAR_ENV: str = os.environ.get("JAR_ENV", "standard")
"""Threshold environment: standard, strict or relaxed (see jar.capacity.thresholds)."""

# ============================================================
# Logging
# ============================================================

LOG_LEVEL: str = os.environ.get("JAR_LOG_LEVEL", "INFO")
"""Root log level for the API server and CLI."""

_log_json = os.environ.get("JAR_LOG_JSON")
LOG_JSON: bool | None = None if _log_json is None else _log_json.lower() in ("1", "true", "yes")
"""Force JSON (true) or human (false) log output. Unset = auto-detect from the TTY."""

# ============================================================
# API
# ============================================================

API_HOST: str = os.environ.get("JAR_API_HOST", "127.0.0.1")
API_PORT: int = int(os.environ.get("JAR_API_PORT", "8420"))
