"""CLI parser construction for ``echomind``.

This module wires argument shapes only. Handlers live in ``cli_actions``.
"""

from __future__ import annotations

import argparse

from ... import __version__


def _str2bool(v: str | None) -> bool:
    """Best-effort conversion of common truthy/falsey strings to bool.

    ``None`` (flag given without a value) means ``True``.
    """
    if v is None:
        return True
    val = v.strip().lower()
    if val in {"1", "t", "true", "y", "yes", "on"}:
        return True
    return False if val in {"0", "f", "false", "n", "no", "off"} else bool(val)


def add_stream_flags(parser: argparse.ArgumentParser) -> None:
    """Attach ``--stream``/``--no-stream``.

    Both default to ``None`` so the config file's ``defaults.stream`` applies
    when neither is given.
    """
    grp = parser.add_mutually_exclusive_group()
    grp.add_argument("--stream", nargs="?", const=True, type=_str2bool, default=None,
                     help="Print the reply incrementally as it arrives")
    grp.add_argument("--no-stream", dest="stream", action="store_false",
                     help="Wait for the complete reply")


def build_parser() -> argparse.ArgumentParser:
    """Construct the ``echomind`` argument parser."""
    p = argparse.ArgumentParser(
        prog="echomind",
        description="Pipe text to an AI chat provider and print the reply.",
        epilog=(
            "examples:\n"
            "  echo 'explain TCP slow start' | echomind\n"
            "  cat main.py | echomind -c --prompt 'add type hints' -o main_typed.py\n"
            "  echo 'haiku about rust' | echomind --compare gpt-4o,claude-3-haiku-20240307,ollama/llama3"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    req = p.add_argument_group("request")
    req.add_argument("--prompt", default=None,
                     help="Prompt text; appended to piped input when both are given")
    req.add_argument("-p", "--provider", default=None,
                     help="Provider name or http(s):// URL of an OpenAI-compatible endpoint")
    req.add_argument("-m", "--model", default=None)
    req.add_argument("-t", "--temperature", type=float, default=None)
    req.add_argument("--max-tokens", type=int, default=None)
    req.add_argument("--top-p", type=float, default=None)
    req.add_argument("--top-k", type=int, default=None)
    req.add_argument("-s", "--system", default=None, help="System prompt")
    req.add_argument("--preset", default=None, help="Named preset from the config file")
    req.add_argument("-c", "--coder", action="store_true",
                     help="Coder mode: ask for raw code and strip fences and blank lines")
    add_stream_flags(p)

    conn = p.add_argument_group("connection")
    conn.add_argument("--api-key", default=None)
    conn.add_argument("--timeout", type=float, default=None, help="Per-request deadline in seconds")
    conn.add_argument("--fallback", action="append", default=None, metavar="PROVIDER",
                      help="Provider to try when the previous one fails (repeatable)")

    out = p.add_argument_group("output")
    out.add_argument("-o", "--output", default=None, metavar="FILE", help="Also write the reply to FILE")

    modes = p.add_argument_group("modes")
    modes.add_argument("--compare", default=None, metavar="MODELS",
                       help="Comma-separated models to query concurrently")
    modes.add_argument("--list-models", action="store_true", help="List models offered by the provider")
    modes.add_argument("--init-config", action="store_true", help="Write a default config file")
    modes.add_argument("--show-config", action="store_true", help="Print the effective configuration")
    modes.add_argument("-v", "--verbose", action="store_true", help="Debug logging to stderr")
    return p


__all__ = ["add_stream_flags", "build_parser"]
