"""Configuration layer for echomind.

Goals
-----
* Typed settings (pydantic v2) with the defaults from ``config.defaults``.
* Merge sources in a predictable order:
    1. Built-in defaults
    2. Config file (YAML or JSON) at ``ECHOMIND_CONFIG_FILE`` or
       ``$XDG_CONFIG_HOME/echomind/config.yaml``
    3. Environment variables ``ECHOMIND_PROVIDER`` and ``ECHOMIND_MODEL``
    4. In-code overrides (CLI flags) applied by the caller
* Surface every load or validation problem as ``ProviderError(CONFIG)``.

File structure example::

    api:
      provider: openai
      model: gpt-4o-mini
      timeout: 30
      fallback_providers: [chat]
    defaults:
      temperature: 0.7
      stream: false
    presets:
      reviewer:
        system_prompt: "You are a strict code reviewer."

Public API
----------
* load_config(path=None) -> EchomindConfig
* save_config(config, path=None) -> Path
* init_default_config(path=None, overwrite=False) -> Path
* config_path() -> Path
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError

from ..base.errors import ErrorCode, ProviderError
from ..base.models import Message
from .defaults import (
    CONFIG_DIR_NAME,
    CONFIG_FILE_ENV,
    CONFIG_FILE_NAME,
    DEFAULT_MODEL,
    DEFAULT_PROVIDER,
    DEFAULT_TEMPERATURE,
    DEFAULT_TIMEOUT_SECONDS,
)

PathLike = Union[str, Path]

ENV_OVERRIDES = {
    "provider": "ECHOMIND_PROVIDER",
    "model": "ECHOMIND_MODEL",
}


class ApiSettings(BaseModel):
    """Where requests go and how they authenticate."""

    provider: str = DEFAULT_PROVIDER
    api_key: Optional[str] = None
    model: Optional[str] = DEFAULT_MODEL
    timeout: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)
    fallback_providers: List[str] = Field(default_factory=list)


class DefaultSettings(BaseModel):
    """Sampling defaults applied when the CLI does not override them."""

    temperature: Optional[float] = DEFAULT_TEMPERATURE
    max_tokens: Optional[int] = Field(default=None, gt=0)
    top_p: Optional[float] = None
    top_k: Optional[int] = Field(default=None, gt=0)
    stream: bool = False


class PresetMessage(BaseModel):
    role: str
    content: str


class Preset(BaseModel):
    """Named conversation starter: a system prompt and prior turns."""

    system_prompt: Optional[str] = None
    messages: List[PresetMessage] = Field(default_factory=list)

    def to_messages(self) -> List[Message]:
        return [Message.text(m.role, m.content) for m in self.messages]


class EchomindConfig(BaseModel):
    api: ApiSettings = Field(default_factory=ApiSettings)
    defaults: DefaultSettings = Field(default_factory=DefaultSettings)
    presets: Dict[str, Preset] = Field(default_factory=dict)

    def preset(self, name: str) -> Preset:
        try:
            return self.presets[name]
        except KeyError:
            known = ", ".join(sorted(self.presets)) or "none defined"
            raise ProviderError(
                code=ErrorCode.CONFIG,
                message=f"Unknown preset '{name}' (available: {known})",
            ) from None


def config_path() -> Path:
    """Return the configuration file location.

    ``ECHOMIND_CONFIG_FILE`` wins; otherwise ``$XDG_CONFIG_HOME`` (or
    ``~/.config``) + ``echomind/config.yaml``.
    """
    explicit = os.getenv(CONFIG_FILE_ENV)
    if explicit:
        return Path(explicit).expanduser()
    base = os.getenv("XDG_CONFIG_HOME") or os.path.join(os.path.expanduser("~"), ".config")
    return Path(base) / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def _parse_text(text: str, path: Path) -> Dict[str, Any]:
    # JSON first for .json files, YAML otherwise (YAML also accepts JSON).
    try:
        if path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ProviderError(
            code=ErrorCode.CONFIG,
            message=f"Could not parse config file {path}: {exc}",
            raw=exc,
        ) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ProviderError(
            code=ErrorCode.CONFIG,
            message=f"Config file {path} must contain a mapping at the top level",
        )
    return data


def _env_overrides() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for field, env in ENV_OVERRIDES.items():
        val = os.getenv(env)
        if val:
            out[field] = val
    return out


def load_config(path: Optional[PathLike] = None) -> EchomindConfig:
    """Load, merge and validate configuration.

    A missing file yields the defaults.

    Raises
    ------
    ProviderError
        ``CONFIG`` when the file cannot be read, parsed or validated.
    """
    p = Path(path).expanduser() if path is not None else config_path()
    data: Dict[str, Any] = {}
    if p.exists():
        try:
            text = p.read_text(encoding="utf-8")
        except OSError as exc:
            raise ProviderError(
                code=ErrorCode.CONFIG,
                message=f"Could not read config file {p}: {exc}",
                raw=exc,
            ) from exc
        data = _parse_text(text, p)

    env = _env_overrides()
    if env:
        api = dict(data.get("api") or {})
        api |= env
        data = {**data, "api": api}

    try:
        return EchomindConfig.model_validate(data)
    except ValidationError as exc:
        raise ProviderError(
            code=ErrorCode.CONFIG,
            message=f"Invalid config in {p}: {exc}",
            raw=exc,
        ) from exc


def save_config(config: EchomindConfig, path: Optional[PathLike] = None) -> Path:
    """Write ``config`` as YAML and return the path written."""
    p = Path(path).expanduser() if path is not None else config_path()
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(
            yaml.safe_dump(config.model_dump(exclude_none=True), sort_keys=False),
            encoding="utf-8",
        )
    except OSError as exc:
        raise ProviderError(
            code=ErrorCode.CONFIG,
            message=f"Could not write config file {p}: {exc}",
            raw=exc,
        ) from exc
    return p


def init_default_config(path: Optional[PathLike] = None, overwrite: bool = False) -> Path:
    """Create a config file holding the defaults.

    An existing file is left untouched unless ``overwrite`` is set.
    """
    p = Path(path).expanduser() if path is not None else config_path()
    if p.exists() and not overwrite:
        return p
    return save_config(EchomindConfig(), p)


__all__ = [
    "ApiSettings",
    "DefaultSettings",
    "EchomindConfig",
    "Preset",
    "PresetMessage",
    "config_path",
    "init_default_config",
    "load_config",
    "save_config",
]
