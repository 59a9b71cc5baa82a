"""
ChatRequest DTO: the canonical, provider-agnostic chat request.

Codecs translate this shape into each provider's wire schema. Optional fields
left as ``None`` are omitted from every serialized form; each codec decides on
its own how to fill provider-required fields the caller left unset.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Sequence, Tuple

from .message import Message


@dataclass(frozen=True)
class ChatRequest:
    """Normalized chat request.

    Attributes:
        messages: Ordered messages (frozen into a tuple).
        model: Target model; ``None`` lets the codec pick its default.
        temperature: Sampling temperature.
        max_tokens: Completion token cap.
        top_p: Nucleus sampling mass.
        top_k: Top-k sampling cutoff.
        stream: Request incremental delivery. ``None`` means not streaming.

    Methods:
        to_dict: JSON-serializable form with absent fields omitted.
        with_changes: Copy with selected fields replaced (used per attempt).
    """

    messages: Tuple[Message, ...] = field(default_factory=tuple)
    model: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    top_p: Optional[float] = None
    top_k: Optional[int] = None
    stream: Optional[bool] = None

    def __post_init__(self) -> None:
        if not isinstance(self.messages, tuple):
            object.__setattr__(self, "messages", tuple(self.messages))

    @classmethod
    def from_prompt(
        cls,
        prompt: str,
        *,
        system: Optional[str] = None,
        history: Sequence[Message] = (),
        **params: Any,
    ) -> "ChatRequest":
        """Build a request from an optional system prompt, prior turns and a user prompt."""
        messages = []
        if system:
            messages.append(Message.text("system", system))
        messages.extend(history)
        messages.append(Message.text("user", prompt))
        return cls(messages=tuple(messages), **params)

    @property
    def is_streaming(self) -> bool:
        return bool(self.stream)

    def with_changes(self, **changes: Any) -> "ChatRequest":
        return replace(self, **changes)

    def sampling_params(self) -> Dict[str, Any]:
        """Return the sampling parameters that are set, by canonical name."""
        values = {
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "top_p": self.top_p,
            "top_k": self.top_k,
        }
        return {k: v for k, v in values.items() if v is not None}

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary omitting absent fields."""
        data: Dict[str, Any] = {"messages": [m.to_dict() for m in self.messages]}
        if self.model is not None:
            data["model"] = self.model
        data.update(self.sampling_params())
        if self.stream is not None:
            data["stream"] = self.stream
        return data


__all__ = [
    "ChatRequest",
]
