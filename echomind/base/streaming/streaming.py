"""Streaming delivery loop.

``decode_event_stream`` drives an :class:`EventStreamDecoder` over the raw
byte chunks of a reply, hands every text increment to the caller's sink as it
arrives and returns the accumulated text. Each sink call receives exactly one
increment, never the cumulative string.
"""
from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Optional

from ..logging import LogContext
from ..timeouts import Deadline
from .event_decoder import Event, EventStreamDecoder, StreamFraming
from .streaming_finalize import finalize_stream
from .streaming_metrics import StreamMetrics

ChunkSink = Callable[[str], None]
DeltaExtractor = Callable[[Event], Optional[str]]


def decode_event_stream(
    chunks: Iterable[bytes],
    extract_delta: DeltaExtractor,
    on_chunk: Optional[ChunkSink] = None,
    *,
    framing: StreamFraming = "sse",
    logger: Optional[logging.Logger] = None,
    ctx: Optional[LogContext] = None,
    deadline: Optional[Deadline] = None,
) -> str:
    """Decode a chunked event stream into text.

    Parameters
    ----------
    chunks: Iterable[bytes]
        Raw body chunks as delivered by the transport.
    extract_delta: Callable
        Returns the text increment carried by one parsed event, or ``None``.
    on_chunk: Callable | None
        Sink invoked once per non-empty increment, in order.
    framing: str
        ``"sse"`` or ``"ndjson"``.
    deadline: Deadline | None
        Checked as each chunk arrives; a chunk that lands after the deadline
        is dropped and ``ErrorCode.TIMEOUT`` is raised.

    Returns
    -------
    str
        Concatenation of every increment delivered.

    Notes
    -----
    Reading stops at the end-of-stream marker; chunks after it are not
    consumed. Exceptions raised by the transport or the sink propagate.
    """
    decoder = EventStreamDecoder(framing, logger=logger, ctx=ctx)
    metrics = StreamMetrics()
    parts: List[str] = []

    def _emit(events: List[Event]) -> None:
        for event in events:
            delta = extract_delta(event)
            if not delta:
                continue
            metrics.record_emit()
            if on_chunk is not None:
                on_chunk(delta)
            parts.append(delta)

    error: Optional[str] = None
    try:
        for chunk in chunks:
            if deadline is not None:
                deadline.check()
            _emit(decoder.feed(chunk))
            if decoder.done:
                break
        _emit(decoder.flush())
    except Exception as exc:
        error = f"{exc.__class__.__name__}: {exc}"
        raise
    finally:
        metrics.malformed = decoder.malformed
        if logger is not None:
            finalize_stream(logger=logger, ctx=ctx, metrics=metrics, error=error)
    return "".join(parts)


__all__ = ["ChunkSink", "DeltaExtractor", "decode_event_stream"]
