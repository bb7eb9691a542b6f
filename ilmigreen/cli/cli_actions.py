"""CLI action handlers.

Purpose
-------
Subcommand handlers for the ``ilmigreen`` command, kept apart from the parser
so they can be called directly in tests. No top-level side effects.

Output
------
- Results go to stdout (plain text, or JSON with ``--json``).
- Failures are printed to stderr as one JSON object
  ``{"error": ..., "code": ...}``.
- Exit codes: ``0`` success, ``1`` service or stream failure, ``2`` invalid
  input.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict, List, Optional, TextIO

from pydantic import ValidationError

from ..base.errors import ErrorCode, ServiceError
from ..base.models import DetectionResult, Transcript
from ..chat import ChatClient
from ..detection import CATEGORIES, WasteDetectionClient, category_for


def build_chat_client(args: argparse.Namespace) -> ChatClient:
    return ChatClient(base_url=args.base_url, api_key=args.api_key)


def build_detection_client(args: argparse.Namespace) -> WasteDetectionClient:
    return WasteDetectionClient(base_url=args.base_url, api_key=args.api_key)


def _print_error(message: str, code: Optional[str] = None, **extra: Any) -> None:
    payload: Dict[str, Any] = {"error": message}
    if code is not None:
        payload["code"] = code
    payload.update({k: v for k, v in extra.items() if v is not None})
    print(json.dumps(payload, ensure_ascii=False), file=sys.stderr)


def read_messages(stream: TextIO) -> List[str]:
    """Return the non-blank lines of ``stream``, stripped."""
    return [line.strip() for line in stream if line.strip()]


def handle_chat(args: argparse.Namespace, stdin: Optional[TextIO] = None) -> int:
    """Send each message in turn, printing the reply as it streams.

    Parameters
    ----------
    args: argparse.Namespace
        Parsed ``chat`` arguments.
    stdin: Optional[TextIO]
        Source of messages when no ``--message`` was given (defaults to
        ``sys.stdin``).

    Returns
    -------
    int
        ``0`` when every exchange completed, ``1`` when any failed or was
        cancelled, ``2`` when there was nothing to send.

    Notes
    -----
    A failed exchange keeps the user's message in the transcript and the
    conversation continues with the next message.
    """
    messages = list(args.message or []) or read_messages(stdin or sys.stdin)
    messages = [m.strip() for m in messages if m and m.strip()]
    if not messages:
        _print_error("no message to send")
        return 2

    client = build_chat_client(args)
    transcript: Transcript = () if args.no_greeting else client.initial_transcript()
    if not args.json and transcript:
        print(transcript[0].content)

    failed = False
    for text in messages:
        try:
            with_user, controller = client.send_message(transcript, text)
        except ValidationError as exc:
            failed = True
            _print_error("; ".join(e["msg"] for e in exc.errors()), ErrorCode.VALIDATION.value)
            continue
        if not args.json:
            print(f"\n> {text}")
        for evt in controller:
            if evt.delta and not args.json:
                print(evt.delta, end="", flush=True)
        terminal = controller.terminal_event
        transcript = controller.transcript or with_user
        if terminal is None or terminal.is_error():

            failed = True
            if not args.json:
                print()
            _print_error(
                controller.error or "stream ended without a result",
                terminal.error_code if terminal else None,
            )
            continue
        if not args.json:
            print()

    if args.json:
        print(
            json.dumps(
                {"messages": [m.to_dict() for m in transcript], "failed": failed},
                ensure_ascii=False,
            )
        )
    return 1 if failed else 0


def format_result(result: DetectionResult) -> str:
    """Render a detection result the way the app's result card reads."""
    category = category_for(result.waste_type)
    header = f"Jenis Sampah: {result.waste_type.value}"
    if category.hazardous:
        header += " (berbahaya)"
    return "\n".join(
        [
            header,
            f"Penjelasan: {result.explanation}",
            f"Tips Pengelolaan: {result.tips}",
        ]
    )


def handle_detect(args: argparse.Namespace) -> int:
    """Classify one item given by ``--text``, ``--image-url`` or ``--image-file``.

    Returns ``0`` on success, ``1`` on a service failure and ``2`` on invalid
    input (blank text, unreadable or oversized image file).
    """
    client = build_detection_client(args)
    try:
        if args.text is not None:
            result = client.detect_text(args.text)
        elif args.image_url is not None:
            result = client.detect_image(args.image_url)
        else:
            result = client.detect_image_file(args.image_file)
    except ServiceError as exc:
        _print_error(exc.message, exc.code.value, status=exc.status_code)
        return 1
    except (ValueError, OSError) as exc:
        _print_error(str(exc))
        return 2

    if args.json:
        data = result.to_dict()
        data["hazardous"] = result.hazardous
        print(json.dumps(data, ensure_ascii=False))
    else:
        print(format_result(result))
    return 0


def handle_categories(args: argparse.Namespace) -> int:
    if args.json:
        print(json.dumps([c.to_dict() for c in CATEGORIES], ensure_ascii=False))
        return 0
    for c in CATEGORIES:
        print(f"{c.title}: {c.description}")
    return 0


__all__ = [
    "build_chat_client",
    "build_detection_client",
    "read_messages",
    "handle_chat",
    "format_result",
    "handle_detect",
    "handle_categories",
]
