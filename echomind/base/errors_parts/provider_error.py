"""
Structured provider error exception type.

Every failure the delivery path surfaces is a `ProviderError` carrying a
normalized `ErrorCode`. API failures also carry the HTTP status and a
remediation hint.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """Represents a structured provider error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message (for API failures, the
            best-effort response body).
        provider: Provider display name where the error originated.
        model: Optional model name associated with the failure.
        status: HTTP status for ``ErrorCode.API`` failures.
        hint: Remediation hint attached to API failures.
        retryable: Hint that the failure is transient (logging only).
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    provider: str = "unknown"
    model: Optional[str] = None
    status: Optional[int] = None
    hint: Optional[str] = None
    retryable: bool = False
    raw: Optional[Exception] = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.code is ErrorCode.API and self.status is not None:
            text = f"API request failed with status {self.status}: {self.message}."
            return f"{text} {self.hint}" if self.hint else text
        if self.code is ErrorCode.TIMEOUT:
            return f"Request timed out: {self.message}. The API might be slow or unavailable."
        if self.code is ErrorCode.TRANSPORT:
            return f"Network error: {self.message}. Please check your internet connection."
        return self.message


__all__ = ["ProviderError"]
