"""Command line front end.

Usage:
    python -m taskparse "buy groceries tomorrow at 3 pm"
    python -m taskparse --reference-time 2026-03-04T09:00 "call mom next friday"
    python -m taskparse --messages "Sam: can you pick up the kids at 5?"
"""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from datetime import datetime

from taskparse.config import settings
from taskparse.logging import configure_logging
from taskparse.messages import extract_tasks
from taskparse.parser import TaskParser


def _reference_time(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an ISO 8601 datetime: {value!r}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="taskparse",
        description="Turn a natural-language utterance into a structured task.",
    )
    parser.add_argument("text", nargs="?", help="Text to parse; read from stdin when omitted")
    parser.add_argument(
        "--reference-time",
        type=_reference_time,
        default=None,
        help='"Now" for relative expressions (ISO 8601, e.g. 2026-03-04T09:00)',
    )
    parser.add_argument(
        "--messages",
        action="store_true",
        help="Treat the text as a chat message and list every task in it",
    )
    parser.add_argument("--log-level", default=settings.log_level, help="Log level")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Parse the command line, print JSON and return the exit code."""
    args = build_parser().parse_args(argv)
    configure_logging(level=args.log_level, format=settings.log_format)

    text = args.text if args.text is not None else sys.stdin.read()
    reference = args.reference_time or datetime.now()
    task_parser = TaskParser(settings)

    if args.messages:
        tasks = extract_tasks(text, reference, parser=task_parser)
        payload: object = [task.model_dump(mode="json") for task in tasks]
    else:
        payload = task_parser.parse(text, reference).model_dump(mode="json")

    print(json.dumps(payload, indent=2))
    return 0
