"""``railyard routes`` — list declared routes.

Resolves an import string to a Router (drawing it first when it names a
draw function) and prints every route with its helper name, method,
pattern, and controller#action target.
"""

import argparse
import sys

from railyard.cli._resolve import resolve_router
from railyard.config import RouterConfig
from railyard.errors import RailyardError
from railyard.routing.naming import helper_name
from railyard.routing.route import Route


def helper_label(route: Route, config: RouterConfig) -> str:
    """Path helper name for a named route, blank otherwise."""
    if not route.name:
        return ""
    return helper_name(tuple(route.name.split("_")), "path", config.helper_case)


def run_routes(args: argparse.Namespace) -> None:
    """Print the route table for a railyard Router in mount order."""
    override = RouterConfig(helper_case=args.helper_case) if args.helper_case else None
    try:
        router = resolve_router(args.router, config=override)
    except (ModuleNotFoundError, AttributeError, TypeError, RailyardError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    config = override or router.config

    routes = router.routes
    if args.controller:
        routes = tuple(r for r in routes if args.controller in r.controller)
    if not routes:
        print("No routes declared.")
        return

    # Build rows: (helper, method, pattern, target)
    rows = [
        (helper_label(route, config), route.method.upper(), route.pattern, route.key)
        for route in routes
    ]

    # Column widths, at least as wide as the headers
    max_helper = max(max(len(r[0]) for r in rows), 6)
    max_method = max(max(len(r[1]) for r in rows), 6)
    max_pattern = max(max(len(r[2]) for r in rows), 7)

    fmt = f"{{:>{max_helper}}}  {{:<{max_method}}}  {{:<{max_pattern}}}  {{}}"
    print(fmt.format("HELPER", "METHOD", "PATTERN", "TARGET"))
    sep_len = max_helper + max_method + max_pattern + 6 + max(len(r[3]) for r in rows)
    print("-" * min(sep_len, 100))
    for row in rows:
        print(fmt.format(*row))
