"""
Normalized delivery error codes (taxonomy).

Defines the `ErrorCode` enumeration used by the registry, codecs and the
delivery engine. Values are lowercase snake_case and are a stable contract for
logging.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated error codes representing failure categories."""

    MISSING_CREDENTIAL = "missing_credential"
    UNKNOWN_PROVIDER = "unknown_provider"
    TRANSPORT = "transport"
    TIMEOUT = "timeout"
    API = "api"
    EMPTY_RESPONSE = "empty_response"
    # Recovered inside the stream decoder; never raised to callers.
    MALFORMED_STREAM_CHUNK = "malformed_stream_chunk"
    PARSE = "parse"
    CONFIG = "config"
    UNSUPPORTED = "unsupported"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
