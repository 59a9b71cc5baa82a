"""echomind command-line interface (package entrypoint).

Wires argument parsing to the handlers in ``cli_actions``. Performs no
provider logic directly.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

from ...base.errors import ErrorCode, ProviderError
from ...base.logging import configure_logger
from ...config import load_config
from .cli_actions import (
    handle_compare,
    handle_init_config,
    handle_list_models,
    handle_run,
    handle_show_config,
)
from .cli_parser import build_parser

# Usage and configuration problems exit with 2; everything else with 1.
_USAGE_CODES = {ErrorCode.CONFIG, ErrorCode.UNKNOWN_PROVIDER}


def main(
    argv: Optional[list[str]] = None,
    *,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> int:
    """CLI entrypoint.

    Parameters
    ----------
    argv: Optional[list[str]]
        Argument vector; when ``None`` uses ``sys.argv[1:]``.

    Returns
    -------
    int
        Process exit code (0 success, 1 delivery failure, 2 usage or config error).
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    args = build_parser().parse_args(argv)
    if args.verbose:
        configure_logger(level=logging.DEBUG)

    try:
        if args.init_config:
            return handle_init_config(stdout)
        config = load_config()
        if args.show_config:
            return handle_show_config(config, stdout)
        if args.list_models:
            return handle_list_models(args, config, stdout)
        if args.compare:
            return handle_compare(args, config, stdin, stdout)
        return handle_run(args, config, stdin, stdout, stderr)
    except ProviderError as err:
        print(f"Error: {err}", file=stderr)
        return 2 if err.code in _USAGE_CODES else 1
    except KeyboardInterrupt:
        print("Interrupted", file=stderr)
        return 130


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
