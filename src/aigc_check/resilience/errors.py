"""Error classification for the semantic-layer boundary.

Every collaborator failure is caught where the service calls the
semantic layer; the category decides the log level and whether a
retry is worth attempting. Only configuration errors propagate.
"""

from __future__ import annotations

import asyncio
import json
from enum import Enum

from circuitbreaker import CircuitBreakerError


class ConfigurationError(Exception):
    """Caller-level policy error, raised before any analysis starts."""


class ErrorClass(Enum):
    TRANSIENT = "transient"  # 429, network errors
    SERVER = "server"  # 500, 502, 503
    TIMEOUT = "timeout"  # deadline exceeded
    CIRCUIT_OPEN = "circuit_open"  # breaker refused the call
    PARSE = "parse"  # model answered with something unusable
    CLIENT = "client"  # 400, 401, 403
    UNKNOWN = "unknown"


def classify_error(error: Exception) -> ErrorClass:
    """Classify an error raised at the semantic-layer boundary.

    Structured attributes (``status_code``) win over exception types,
    which win over message matching.
    """
    status_code = getattr(error, "status_code", None)
    if isinstance(status_code, int):
        if status_code == 429:
            return ErrorClass.TRANSIENT
        if 400 <= status_code < 500:
            return ErrorClass.CLIENT
        if 500 <= status_code < 600:
            return ErrorClass.SERVER

    if isinstance(error, (TimeoutError, asyncio.TimeoutError)):
        return ErrorClass.TIMEOUT
    if isinstance(error, CircuitBreakerError):
        return ErrorClass.CIRCUIT_OPEN
    if isinstance(error, json.JSONDecodeError):
        return ErrorClass.PARSE

    msg = str(error).lower()

    if "timeout" in msg or "timed out" in msg:
        return ErrorClass.TIMEOUT
    if "429" in msg or "rate limit" in msg or "rate_limit" in msg:
        return ErrorClass.TRANSIENT
    if any(code in msg for code in ("500", "502", "503", "504")):
        return ErrorClass.SERVER
    if "econnrefused" in msg or "connection" in msg:
        return ErrorClass.TRANSIENT
    if any(code in msg for code in ("400", "401", "403", "404")):
        return ErrorClass.CLIENT
    if "api key" in msg or "api_key" in msg:
        return ErrorClass.CLIENT

    return ErrorClass.UNKNOWN


_RETRYABLE = frozenset({
    ErrorClass.TRANSIENT,
    ErrorClass.SERVER,
    ErrorClass.TIMEOUT,
})


def is_retryable(error: Exception) -> bool:
    return classify_error(error) in _RETRYABLE
