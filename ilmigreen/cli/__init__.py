"""ilmigreen command line front-end (package entrypoint).

Argument parsing lives in ``cli_parser`` and the subcommand handlers in
``cli_actions``; this module only dispatches.
"""

from __future__ import annotations

import sys
from typing import Optional

from ..base.logging import configure_logger
from .cli_actions import handle_categories, handle_chat, handle_detect
from .cli_parser import build_parser


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entrypoint.

    Parameters
    ----------
    argv: Optional[list[str]]
        Argument vector; when ``None`` uses ``sys.argv[1:]``.

    Returns
    -------
    int
        Process exit code (0 success, non-zero on error).
    """
    p = build_parser()
    args = p.parse_args(list(sys.argv[1:] if argv is None else argv))
    if args.log_level:
        configure_logger(level=args.log_level)

    if args.cmd == "chat":
        return handle_chat(args)
    if args.cmd == "detect":
        return handle_detect(args)
    if args.cmd == "categories":
        return handle_categories(args)
    p.print_help(sys.stderr)
    return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
