"""Incremental event-stream decoder.

Network chunks need not align with line boundaries, so decoded text is kept
in a carry-over buffer and only complete lines are interpreted. Bytes pass
through an incremental UTF-8 decoder so a multi-byte character split across
chunks is reassembled rather than replaced.

Two framings are understood:

``sse``
    ``data: <json>`` lines (the space after the colon is optional). Other
    lines (``event:``, comments, blanks) are ignored. ``data: [DONE]`` ends
    the stream.
``ndjson``
    One JSON object per non-empty line. An object with ``"done": true`` ends
    the stream after it has been returned.

Lines that fail to parse as a JSON object are counted and skipped; partial
or heartbeat lines never abort a stream.
"""
from __future__ import annotations

import codecs
import json
import logging
from typing import Any, Dict, List, Literal, Optional

from ..constants import SSE_DATA_PREFIX, SSE_DONE_SENTINEL
from ..errors import ErrorCode
from ..logging import LogContext, normalized_log_event

StreamFraming = Literal["sse", "ndjson"]

Event = Dict[str, Any]


class EventStreamDecoder:
    """Stateful byte-to-event decoder for one streamed reply."""

    def __init__(
        self,
        framing: StreamFraming = "sse",
        *,
        logger: Optional[logging.Logger] = None,
        ctx: Optional[LogContext] = None,
    ) -> None:
        if framing not in ("sse", "ndjson"):
            raise ValueError(f"unsupported stream framing: {framing!r}")
        self.framing = framing
        self.malformed = 0
        self.done = False
        self._buffer = ""
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._logger = logger
        self._ctx = ctx

    def feed(self, chunk: bytes) -> List[Event]:
        """Consume one network chunk and return the events it completed."""
        events: List[Event] = []
        if self.done:
            return events
        self._buffer += self._decoder.decode(chunk)
        while not self.done:
            idx = self._buffer.find("\n")
            if idx < 0:
                break
            line = self._buffer[:idx]
            self._buffer = self._buffer[idx + 1 :]
            self._process_line(line, events)
        return events

    def flush(self) -> List[Event]:
        """Interpret whatever partial line remains once the transport ends."""
        events: List[Event] = []
        if self.done:
            return events
        self._buffer += self._decoder.decode(b"", final=True)
        line, self._buffer = self._buffer, ""
        self._process_line(line, events)
        return events

    def _process_line(self, raw: str, events: List[Event]) -> None:
        line = raw.strip()
        if not line:
            return
        if self.framing == "sse":
            if not line.startswith(SSE_DATA_PREFIX):
                return
            payload = line[len(SSE_DATA_PREFIX) :].strip()
            if payload == SSE_DONE_SENTINEL:
                self.done = True
                return
        else:
            payload = line
        try:
            event = json.loads(payload)
        except json.JSONDecodeError as exc:
            self._skip(payload, str(exc))
            return
        if not isinstance(event, dict):
            self._skip(payload, "not a JSON object")
            return
        events.append(event)
        if self.framing == "ndjson" and event.get("done") is True:
            self.done = True

    def _skip(self, payload: str, reason: str) -> None:
        self.malformed += 1
        if self._logger is None:
            return
        normalized_log_event(
            self._logger,
            "stream.malformed_chunk",
            self._ctx,
            phase="mid_stream",
            attempt=None,
            error_code=ErrorCode.MALFORMED_STREAM_CHUNK.value,
            emitted=None,
            level=logging.DEBUG,
            reason=reason,
            line=payload[:200],
        )


__all__ = ["Event", "EventStreamDecoder", "StreamFraming"]
