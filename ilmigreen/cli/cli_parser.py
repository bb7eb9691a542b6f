"""CLI parser construction for the ilmigreen command.

This module wires subparsers but contains no execution logic. Subcommand
handlers live in ``cli_actions``.
"""

from __future__ import annotations

import argparse

from ..config.defaults import CLI_PROG_NAME


def add_connection_flags(parser: argparse.ArgumentParser) -> None:
    """Attach ``--base-url``/``--api-key`` overrides to a parser.

    When omitted, values come from the environment or the config file.
    """
    parser.add_argument("--base-url", default=None, help="Functions host, e.g. https://<project>.supabase.co")
    parser.add_argument("--api-key", default=None, help="Publishable key sent as bearer token")


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level parser with ``chat``, ``detect`` and
    ``categories`` subcommands. No I/O happens here."""
    p = argparse.ArgumentParser(prog=CLI_PROG_NAME, description="IlmiGreen waste assistant")
    p.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR")
    sub = p.add_subparsers(dest="cmd")

    # chat
    p_chat = sub.add_parser("chat", help="Chat with the assistant (messages from --message or stdin)")
    add_connection_flags(p_chat)
    p_chat.add_argument(
        "-m",
        "--message",
        action="append",
        default=None,
        help="Message to send; repeat for several turns",
    )
    p_chat.add_argument("--no-greeting", action="store_true", help="Do not open with the assistant greeting")
    p_chat.add_argument("--json", action="store_true", help="Print the final transcript as JSON")

    # detect
    p_detect = sub.add_parser("detect", help="Classify a waste item")
    add_connection_flags(p_detect)
    src = p_detect.add_mutually_exclusive_group(required=True)
    src.add_argument("--text", default=None, help="Description of the item")
    src.add_argument("--image-url", default=None, help="http(s) or data: URL of a photo")
    src.add_argument("--image-file", default=None, help="Local PNG/JPEG file (max 5 MB)")
    p_detect.add_argument("--json", action="store_true")

    # categories
    p_cat = sub.add_parser("categories", help="List the waste categories")
    p_cat.add_argument("--json", action="store_true")

    return p


__all__ = ["build_parser", "add_connection_flags"]
