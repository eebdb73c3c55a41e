"""``waypoint invoke`` — replay an invocation event locally.

Reads a JSON event, runs it through the router's synchronous entry point,
and prints the reply as JSON.
"""

import argparse
import json
import sys
from pathlib import Path

from waypoint.cli._resolve import resolve_router
from waypoint.invocation import make_sync_handler


def run_invoke(args: argparse.Namespace) -> None:
    """Dispatch the event in ``args.event`` through ``args.router``."""
    try:
        router = resolve_router(args.router)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    try:
        raw = sys.stdin.read() if args.event == "-" else Path(args.event).read_text()
        event = json.loads(raw)
    except (OSError, ValueError) as exc:
        print(f"Error: cannot read event {args.event!r}: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if not isinstance(event, dict):
        print("Error: event must be a JSON object", file=sys.stderr)
        raise SystemExit(1)

    reply = make_sync_handler(router)(event, None)
    print(json.dumps(reply, indent=2))
