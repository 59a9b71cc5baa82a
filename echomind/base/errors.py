"""Unified delivery error taxonomy public surface.

Re-exports the one-class-per-file implementations under
``echomind.base.errors_parts`` to keep a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.classification import (
    api_error,
    classify_exception,
    hint_for_status,
    is_retryable,
    wrap_exception,
)

__all__ = [
    "ErrorCode",
    "ProviderError",
    "api_error",
    "classify_exception",
    "hint_for_status",
    "is_retryable",
    "wrap_exception",
]
