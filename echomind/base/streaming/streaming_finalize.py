"""Finalize stream helper.

Located within the streaming package to localize terminal logging of metrics.
"""
from __future__ import annotations

import logging
from typing import Optional

from ..logging import LogContext, normalized_log_event
from .streaming_metrics import StreamMetrics


def finalize_stream(
    *,
    logger: logging.Logger,
    ctx: Optional[LogContext],
    metrics: StreamMetrics,
    error: Optional[str] = None,
) -> StreamMetrics:
    """Close out ``metrics`` and emit the consolidated ``stream.finalize`` event."""
    metrics.finish()
    error_code: Optional[str] = None
    if error and ":" in error:
        error_code = error.split(":", 1)[0].strip() or None

    normalized_log_event(
        logger,
        "stream.finalize",
        ctx,
        phase="finalize",
        attempt=None,
        emitted=metrics.emitted > 0,
        error_code=error_code,
        emitted_count=metrics.emitted,
        malformed_count=metrics.malformed,
        time_to_first_token_ms=metrics.time_to_first_token_ms,
        total_duration_ms=metrics.total_duration_ms,
        error=error,
    )
    return metrics


__all__ = ["finalize_stream"]
