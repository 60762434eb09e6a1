"""ajax-dispatch CLI — inspect and validate a dispatcher's handler registry.

Entry point registered as ``ajax-dispatch`` in ``pyproject.toml``::

    [project.scripts]
    ajax-dispatch = "ajax_dispatch.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``ajax-dispatch`` command."""
    parser = argparse.ArgumentParser(
        prog="ajax-dispatch",
        description="ajax-dispatch — route AJAX requests to handlers by method and field.",
    )
    parser.add_argument(
        "--log-level",
        default="warning",
        choices=("debug", "info", "warning", "error"),
        help="Logging level (default: warning)",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- ajax-dispatch routes ---------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered handlers")
    routes_parser.add_argument(
        "dispatcher",
        help="Import string (e.g. myapp.ajax:dispatcher)",
    )

    # -- ajax-dispatch check ----------------------------------------------
    check_parser = subparsers.add_parser(
        "check", help="Validate the registry and resolve every controller reference"
    )
    check_parser.add_argument(
        "dispatcher",
        help="Import string (e.g. myapp.ajax:dispatcher)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "routes":
        from ajax_dispatch.cli._routes import run_routes

        run_routes(args)
    elif args.command == "check":
        from ajax_dispatch.cli._check import run_check

        run_check(args)
