"""CLI action handlers.

Purpose
-------
Turn parsed arguments plus the loaded configuration into calls on the
delivery engine, and render results. No top-level side effects; every
handler takes its streams explicitly so tests can drive it with ``StringIO``.

Error semantics
---------------
Handlers raise ``ProviderError``; ``main`` maps it to ``Error: <message>`` on
stderr and the exit code.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional, TextIO

import yaml

from ...base.errors import ErrorCode, ProviderError
from ...base.models import ChatRequest, Message
from ...config import EchomindConfig, config_path, init_default_config
from ..api_client import ApiClient
from ..compare import compare_models, parse_targets
from ..delivery import DeliveryEngine

CODER_SYSTEM_PROMPT = (
    "You are a code generator. Always and only output raw, runnable code with no "
    "explanations, comments, markdown fences, or prose. Do not include code block "
    "syntax like triple backticks."
)

SEPARATOR = "─" * 80


def read_input(args: argparse.Namespace, stdin: TextIO) -> str:
    """Combine piped input with ``--prompt``.

    Piped text comes first, then a blank line, then the prompt.
    """
    piped = ""
    if not stdin.isatty():
        piped = stdin.read().strip()
    prompt = (args.prompt or "").strip()
    if piped and prompt:
        return f"{piped}\n\n{prompt}"
    text = piped or prompt
    if not text:
        raise ProviderError(
            code=ErrorCode.CONFIG,
            message="No input provided. Pipe text to echomind or pass --prompt.",
        )
    return text


def resolve_provider_name(args: argparse.Namespace, config: EchomindConfig) -> str:
    return args.provider or config.api.provider


def _system_prompt(args: argparse.Namespace, config: EchomindConfig) -> Optional[str]:
    if args.system:
        return args.system
    if args.preset:
        preset_prompt = config.preset(args.preset).system_prompt
        if preset_prompt:
            return preset_prompt
    return CODER_SYSTEM_PROMPT if args.coder else None


def build_request(args: argparse.Namespace, config: EchomindConfig, text: str) -> ChatRequest:
    """Build the canonical request from flags, falling back to config values.

    The configured model is only used when the request goes to the configured
    provider; other providers get their own default model.
    """
    provider = resolve_provider_name(args, config)
    model = args.model
    if model is None and provider == config.api.provider:
        model = config.api.model
    history: List[Message] = config.preset(args.preset).to_messages() if args.preset else []
    d = config.defaults
    stream = d.stream if args.stream is None else args.stream
    return ChatRequest.from_prompt(
        text,
        system=_system_prompt(args, config),
        history=history,
        model=model,
        temperature=args.temperature if args.temperature is not None else d.temperature,
        max_tokens=args.max_tokens if args.max_tokens is not None else d.max_tokens,
        top_p=args.top_p if args.top_p is not None else d.top_p,
        top_k=args.top_k if args.top_k is not None else d.top_k,
        stream=True if stream else None,
    )


def clean_code_output(text: str) -> str:
    """Strip a surrounding markdown fence and drop blank lines."""
    lines = text.splitlines()
    if lines and lines[0].strip().startswith("```"):
        lines.pop(0)
    if lines and lines[-1].strip().startswith("```"):
        lines.pop()
    return "\n".join(line for line in lines if line.strip())


def _write_output(path: str, content: str, stderr: TextIO) -> None:
    try:
        Path(path).expanduser().write_text(content, encoding="utf-8")
    except OSError as exc:
        raise ProviderError(code=ErrorCode.CONFIG, message=f"Could not write {path}: {exc}", raw=exc) from exc
    print(f"Response saved to {path}", file=stderr)


def handle_run(
    args: argparse.Namespace,
    config: EchomindConfig,
    stdin: TextIO,
    stdout: TextIO,
    stderr: TextIO,
) -> int:
    """Send one request through the provider and its fallback chain."""
    text = read_input(args, stdin)
    request = build_request(args, config, text)
    engine = DeliveryEngine(
        resolve_provider_name(args, config),
        api_key=args.api_key or config.api.api_key,
        timeout=args.timeout or config.api.timeout,
        fallback_providers=args.fallback if args.fallback is not None else config.api.fallback_providers,
    )

    def _print_chunk(chunk: str) -> None:
        stdout.write(chunk)
        stdout.flush()

    streaming = request.is_streaming
    result = engine.run(request, _print_chunk if streaming else None)
    content = clean_code_output(result.text) if args.coder else result.text
    if streaming:
        stdout.write("\n")
    else:
        print(content, file=stdout)
    if args.verbose:
        print(
            f"[provider={result.provider} attempts={result.attempts} cached={str(result.cached).lower()}]",
            file=stderr,
        )
    if args.output:
        _write_output(args.output, content, stderr)
    return 0


def handle_compare(
    args: argparse.Namespace,
    config: EchomindConfig,
    stdin: TextIO,
    stdout: TextIO,
) -> int:
    """Query several models concurrently and print each reply in input order."""
    text = read_input(args, stdin)
    targets = parse_targets(args.compare)
    results = compare_models(
        text,
        targets,
        default_provider=resolve_provider_name(args, config),
        system=_system_prompt(args, config),
        temperature=args.temperature if args.temperature is not None else config.defaults.temperature,
        max_tokens=args.max_tokens if args.max_tokens is not None else config.defaults.max_tokens,
        api_key=args.api_key or config.api.api_key,
        timeout=args.timeout or config.api.timeout,
    )
    print("=== Multi-Model Comparison ===", file=stdout)
    print(f"Input: {text}\n", file=stdout)
    for r in results:
        print(f"Model: {r.target}", file=stdout)
        print(SEPARATOR, file=stdout)
        print(r.text if r.ok else f"Error: {r.error}", file=stdout)
        print(f"{SEPARATOR}\n", file=stdout)
    return 0 if any(r.ok for r in results) else 1


def handle_list_models(args: argparse.Namespace, config: EchomindConfig, stdout: TextIO) -> int:
    client = ApiClient(
        resolve_provider_name(args, config),
        api_key=args.api_key or config.api.api_key,
        timeout=args.timeout or config.api.timeout,
    )
    for item in client.list_models():
        line = item["name"]
        if item.get("description"):
            line = f"{line}  {item['description']}"
        print(line, file=stdout)
    return 0


def handle_show_config(config: EchomindConfig, stdout: TextIO) -> int:
    """Print the effective configuration as YAML with the API key masked."""
    data = config.model_dump(exclude_none=True)
    if data.get("api", {}).get("api_key"):
        data["api"]["api_key"] = "***"
    print(f"# {config_path()}", file=stdout)
    stdout.write(yaml.safe_dump(data, sort_keys=False))
    return 0


def handle_init_config(stdout: TextIO) -> int:
    path = init_default_config()
    print(f"Config file: {path}", file=stdout)
    return 0


__all__ = [
    "CODER_SYSTEM_PROMPT",
    "build_request",
    "clean_code_output",
    "handle_compare",
    "handle_init_config",
    "handle_list_models",
    "handle_run",
    "handle_show_config",
    "read_input",
    "resolve_provider_name",
]
