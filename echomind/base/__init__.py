"""
echomind base package

Provider-agnostic building blocks for the delivery path:

- Models (DTOs): canonical message and request types
- Registry: provider resolution and the codec lookup table
- Interfaces: the codec contract every wire schema implements
- Resilience: the response cache
- Streaming: event-stream decoding and metrics
- Errors, logging, timeouts and the shared HTTP client pool
"""

from .errors import ErrorCode, ProviderError
from .factory import CodecFactory
from .interfaces import ProviderCodec, WireRequest
from .models import ChatRequest, ContentPart, ContentPartType, Message, Role
from .registry import Provider, ProviderKind
from .resilience.cache import ResponseCache, fingerprint, get_default_cache
from .streaming import StreamMetrics, decode_event_stream
from .timeouts import TimeoutConfig, get_timeout_config

__all__ = [
    "ChatRequest",
    "CodecFactory",
    "ContentPart",
    "ContentPartType",
    "ErrorCode",
    "Message",
    "Provider",
    "ProviderCodec",
    "ProviderError",
    "ProviderKind",
    "ResponseCache",
    "Role",
    "StreamMetrics",
    "TimeoutConfig",
    "WireRequest",
    "decode_event_stream",
    "fingerprint",
    "get_default_cache",
    "get_timeout_config",
]
