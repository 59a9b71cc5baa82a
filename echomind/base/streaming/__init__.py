"""Streaming helpers: event-stream decoding, metrics and finalize logging."""
from __future__ import annotations

from .event_decoder import Event, EventStreamDecoder, StreamFraming
from .streaming import ChunkSink, DeltaExtractor, decode_event_stream
from .streaming_finalize import finalize_stream
from .streaming_metrics import StreamMetrics

__all__ = [
    "ChunkSink",
    "DeltaExtractor",
    "Event",
    "EventStreamDecoder",
    "StreamFraming",
    "StreamMetrics",
    "decode_event_stream",
    "finalize_stream",
]
