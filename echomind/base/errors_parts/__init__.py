"""Errors parts package public surface.

Prefer importing from `echomind.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import ProviderError
from .classification import api_error, classify_exception, hint_for_status, is_retryable, wrap_exception

__all__ = [
    "ErrorCode",
    "ProviderError",
    "api_error",
    "classify_exception",
    "hint_for_status",
    "is_retryable",
    "wrap_exception",
]
