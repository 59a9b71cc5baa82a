"""Provider value (single-class module).

A :class:`Provider` is resolved once per delivery attempt from a free-form
identifier and is immutable afterwards. Resolution is pure: no network, no
environment access.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Tuple

from ..errors import ErrorCode, ProviderError
from .provider_kind import ProviderKind
from .provider_spec import CATALOGUE, ProviderSpec

if TYPE_CHECKING:  # pragma: no cover
    from ..interfaces import ProviderCodec

_URL_PREFIXES = ("http://", "https://")


@dataclass(frozen=True)
class Provider:
    """A resolved provider.

    Attributes:
        kind: Which well-known service, or ``CUSTOM``.
        url: Endpoint for ``CUSTOM`` providers; ``None`` otherwise.
    """

    kind: ProviderKind
    url: Optional[str] = None

    def __post_init__(self) -> None:
        if self.kind is ProviderKind.CUSTOM and not self.url:
            raise ValueError("custom provider requires a URL")

    @classmethod
    def from_string(cls, identifier: str) -> "Provider":
        """Resolve ``identifier`` into a provider.

        Known names match case-insensitively after trimming; strings starting
        with ``http://`` or ``https://`` become a custom endpoint with the URL
        kept verbatim.

        Raises:
            ProviderError: ``UNKNOWN_PROVIDER`` when nothing matches.
        """
        raw = (identifier or "").strip()
        if raw.lower().startswith(_URL_PREFIXES):
            return cls(ProviderKind.CUSTOM, raw)
        name = raw.lower()
        for kind in ProviderKind:
            if kind is not ProviderKind.CUSTOM and kind.value == name:
                return cls(kind)
        raise ProviderError(
            code=ErrorCode.UNKNOWN_PROVIDER,
            message=(
                f"Unknown provider '{identifier}'. Supported providers: "
                f"{', '.join(cls.supported())}, or an http(s):// URL"
            ),
            provider=raw or "unknown",
        )

    @staticmethod
    def supported() -> Tuple[str, ...]:
        """Return the known provider names in deterministic order."""
        return tuple(k.value for k in ProviderKind if k is not ProviderKind.CUSTOM)

    @property
    def spec(self) -> ProviderSpec:
        return CATALOGUE[self.kind]

    @property
    def schema(self) -> str:
        return self.spec.schema

    @property
    def endpoint_template(self) -> str:
        """Endpoint before model substitution."""
        return self.url if self.kind is ProviderKind.CUSTOM else str(self.spec.endpoint)

    def endpoint(self, model: Optional[str] = None) -> str:
        """Return the request URL.

        Model-scoped endpoints substitute ``model`` (or the codec's default);
        other endpoints ignore the argument.
        """
        template = self.endpoint_template
        if "{model}" not in template:
            return template
        return template.replace("{model}", model or self.codec().default_model)

    def requires_credential(self) -> bool:
        return self.spec.requires_credential

    def display_name(self) -> str:
        return self.kind.value

    def codec(self) -> "ProviderCodec":
        """Return the translator/decoder pair for this provider's schema."""
        from ..factory import CodecFactory

        return CodecFactory.get(self.schema)

    def __str__(self) -> str:
        return self.url if self.kind is ProviderKind.CUSTOM else self.kind.value


__all__ = ["Provider"]
