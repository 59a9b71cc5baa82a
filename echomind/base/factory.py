"""Codec factory.

Purpose
-------
Select the translator/decoder pair for a wire schema through a lookup table
rather than one large conditional over providers. Codec modules are imported
lazily with ``importlib`` so resolving a provider never pulls in every schema.

Failure modes
-------------
An unknown schema, a failed import or a missing class raises
``ProviderError(UNSUPPORTED)`` with a precise message. Constructed codecs are
stateless and cached per schema.
"""

from __future__ import annotations

import threading
from importlib import import_module
from typing import Dict

from .errors import ErrorCode, ProviderError
from .interfaces import ProviderCodec


class CodecFactory:
    """Create and cache codecs by schema name (e.g. ``"gemini"``)."""

    _CODECS: Dict[str, Dict[str, str]] = {
        "openai_style": {"module": "echomind.openai_style.codec", "class": "OpenAIStyleCodec"},
        "anthropic": {"module": "echomind.anthropic.codec", "class": "AnthropicCodec"},
        "ollama": {"module": "echomind.ollama.codec", "class": "OllamaCodec"},
        "cohere": {"module": "echomind.cohere.codec", "class": "CohereCodec"},
        "gemini": {"module": "echomind.gemini.codec", "class": "GeminiCodec"},
    }

    _instances: Dict[str, ProviderCodec] = {}
    _lock = threading.Lock()

    @classmethod
    def get(cls, schema: str) -> ProviderCodec:
        """Return the shared codec instance for ``schema``.

        Raises
        ------
        ProviderError
            ``UNSUPPORTED`` if the schema is unknown or its module cannot be
            loaded.
        """
        codec = cls._instances.get(schema)
        if codec is not None:
            return codec
        with cls._lock:
            codec = cls._instances.get(schema)
            if codec is None:
                codec = cls._create(schema)
                cls._instances[schema] = codec
            return codec

    @classmethod
    def _create(cls, schema: str) -> ProviderCodec:
        spec = cls._CODECS.get(schema)
        if not spec:
            raise ProviderError(
                code=ErrorCode.UNSUPPORTED,
                message=f"No codec registered for schema '{schema}'",
            )
        module_path, class_name = spec["module"], spec["class"]
        try:
            mod = import_module(module_path)
        except ImportError as exc:  # pragma: no cover - packaging failure path
            raise ProviderError(
                code=ErrorCode.UNSUPPORTED,
                message=f"Failed to import module '{module_path}' for schema '{schema}': {exc}",
                raw=exc,
            ) from exc
        try:
            klass = getattr(mod, class_name)
        except AttributeError as exc:
            raise ProviderError(
                code=ErrorCode.UNSUPPORTED,
                message=f"Codec class '{class_name}' not found in '{module_path}' for schema '{schema}'",
                raw=exc,
            ) from exc
        return klass()


__all__ = ["CodecFactory"]
