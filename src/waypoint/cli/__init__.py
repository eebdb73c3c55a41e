"""Waypoint CLI — inspect a router and replay invocation events.

Entry point registered as ``waypoint`` in ``pyproject.toml``::

    [project.scripts]
    waypoint = "waypoint.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``waypoint`` command."""
    parser = argparse.ArgumentParser(
        prog="waypoint",
        description="Waypoint — HTTP router for function-as-a-service handlers.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for waypoint loggers",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- waypoint routes --------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument("router", help="Import string (e.g. myapp.api:router)")

    # -- waypoint invoke --------------------------------------------------
    invoke_parser = subparsers.add_parser(
        "invoke", help="Run one invocation event through the router"
    )
    invoke_parser.add_argument("router", help="Import string (e.g. myapp.api:router)")
    invoke_parser.add_argument(
        "event",
        help="Path to a JSON event file, or '-' to read from stdin",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "routes":
        from waypoint.cli._routes import run_routes

        run_routes(args)
    elif args.command == "invoke":
        from waypoint.cli._invoke import run_invoke

        run_invoke(args)
