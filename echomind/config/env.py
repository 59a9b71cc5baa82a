"""echomind.config.env
===================

Provider → environment variable mapping for credentials.

Credential resolution order is: explicit argument, then the process-wide
``ECHOMIND_API_KEY``, then the provider's own variable(s) listed here
(canonical name first). Helpers never raise; callers decide how to treat an
absent value.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

from ..base.constants import CREDENTIAL_ENV_VAR

# Canonical provider → env var mapping
ENV_MAP: Dict[str, str] = {
    "chatanywhere": "CHATANYWHERE_API_KEY",
    "openai": "OPENAI_API_KEY",
    "claude": "ANTHROPIC_API_KEY",
    "grok": "XAI_API_KEY",
    "mistral": "MISTRAL_API_KEY",
    "cohere": "COHERE_API_KEY",
    "gemini": "GEMINI_API_KEY",
}

# Provider → ordered tuple of acceptable env var names (canonical first)
ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "gemini": ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
    "cohere": ("COHERE_API_KEY", "CO_API_KEY"),
}


def get_env_var_candidates(provider: str) -> Iterable[str]:
    """Yield credential variable names for ``provider`` in priority order.

    The shared ``ECHOMIND_API_KEY`` always comes first.
    """
    yield CREDENTIAL_ENV_VAR
    p = (provider or "").lower()
    canonical = ENV_MAP.get(p)
    if canonical:
        yield canonical
    for alias in ENV_ALIASES.get(p, ()):
        if alias != canonical:
            yield alias


def resolve_provider_key(provider: str) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(value, env_var_used)`` for the first non-empty candidate.

    ``(None, None)`` when nothing is set.
    """
    for name in get_env_var_candidates(provider):
        val = os.environ.get(name, "").strip()
        if val:
            return val, name
    return None, None


__all__ = [
    "ENV_ALIASES",
    "ENV_MAP",
    "get_env_var_candidates",
    "resolve_provider_key",
]
