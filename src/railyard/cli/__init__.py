"""Railyard CLI — route table inspection.

Entry point registered as ``railyard`` in ``pyproject.toml``::

    [project.scripts]
    railyard = "railyard.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``railyard`` command."""
    parser = argparse.ArgumentParser(
        prog="railyard",
        description="Railyard — declarative resource routing with path and URL helpers.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- railyard routes --------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List declared routes")
    routes_parser.add_argument(
        "router",
        help="Import string of a Router, factory, or draw function (e.g. myapp.routes:draw)",
    )
    routes_parser.add_argument(
        "--helper-case",
        choices=["snake", "camel"],
        default=None,
        help="Helper naming to display (defaults to the router's own config)",
    )
    routes_parser.add_argument(
        "--controller",
        "-c",
        default=None,
        help="Only show routes whose controller contains this text",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from railyard.cli._routes import run_routes

        run_routes(args)
