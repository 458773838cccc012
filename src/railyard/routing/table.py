"""Route table — declaration-ordered routes with reverse lookup.

Populated while routes are drawn; read-only once the Router freezes.
"""

from collections.abc import Iterator

from railyard.routing.route import Route


class RouteTable:
    """Ordered collection of Routes keyed by ``"Controller#action"``.

    ``ordered`` keeps every route in mount order, one entry per mount
    call made to the dispatch layer. ``by_controller_action`` maps each
    key to the most recently added route for it. Nothing is ever removed.
    """

    __slots__ = ("_by_key", "_ordered")

    def __init__(self) -> None:
        self._ordered: list[Route] = []
        self._by_key: dict[str, Route] = {}

    def add(self, route: Route) -> None:
        self._ordered.append(route)
        self._by_key[route.key] = route

    def find(self, controller: str, action: str) -> Route | None:
        """Return the last route added for *controller*/*action*, or ``None``."""
        return self._by_key.get(f"{controller}#{action}")

    @property
    def ordered(self) -> tuple[Route, ...]:
        return tuple(self._ordered)

    @property
    def by_controller_action(self) -> dict[str, Route]:
        return dict(self._by_key)

    def __iter__(self) -> Iterator[Route]:
        return iter(tuple(self._ordered))

    def __len__(self) -> int:
        return len(self._ordered)

    def __contains__(self, key: object) -> bool:
        return key in self._by_key

    def __repr__(self) -> str:
        return f"RouteTable({len(self._ordered)} routes)"
