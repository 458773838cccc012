"""Reference dispatch layer — first-fit matching over registered patterns.

Implements the ``register(method, pattern, handler)`` contract the
Router mounts onto. Patterns are compiled to regexes at registration;
matching walks them in registration order and the first pattern that
matches with the right verb wins, so declaration order decides between
overlapping patterns (``/bands/new`` before ``/bands/:id``).
"""

import logging
import re
from dataclasses import dataclass
from typing import Any

from railyard._internal.invoke import invoke
from railyard._internal.types import Handler
from railyard.errors import InvalidArgument, MethodNotAllowed, NotFound
from railyard.http.request import RequestContext
from railyard.routing.pattern import compile_pattern
from railyard.routing.route import RouteMatch

logger = logging.getLogger("railyard.dispatch")

METHODS = frozenset({"GET", "POST", "PUT", "DELETE"})


@dataclass(frozen=True, slots=True)
class _Entry:
    """One registered binding."""

    method: str
    pattern: str
    regex: re.Pattern[str]
    handler: Handler


class Dispatcher:
    """Ordered, first-fit HTTP dispatcher.

    Usage::

        d = Dispatcher()
        d.register("GET", "/bands/new", new_band)
        d.register("GET", "/bands/:id.:format?", show_band)
        d.compile()
        match = d.match("GET", "/bands/7.json")
        match.path_params  # {"id": "7", "format": "json"}
    """

    __slots__ = ("_compiled", "_entries")

    def __init__(self) -> None:
        self._entries: list[_Entry] = []
        self._compiled = False

    def register(self, method: str, pattern: str, handler: Handler) -> None:
        """Bind *handler* to *method* and *pattern*. Must precede compile()."""
        if self._compiled:
            msg = "Cannot register routes after compilation."
            raise RuntimeError(msg)
        verb = method.upper()
        if verb == "DEL":
            verb = "DELETE"
        if verb not in METHODS:
            msg = f"Unsupported HTTP method {method!r}."
            raise InvalidArgument(msg)
        self._entries.append(_Entry(verb, pattern, compile_pattern(pattern), handler))

    # Verb shorthands, one per supported method.

    def get(self, pattern: str, handler: Handler) -> None:
        self.register("GET", pattern, handler)

    def post(self, pattern: str, handler: Handler) -> None:
        self.register("POST", pattern, handler)

    def put(self, pattern: str, handler: Handler) -> None:
        self.register("PUT", pattern, handler)

    def delete(self, pattern: str, handler: Handler) -> None:
        self.register("DELETE", pattern, handler)

    def compile(self) -> None:
        """Freeze the dispatcher. No more routes can be registered."""
        self._compiled = True

    @property
    def bindings(self) -> list[tuple[str, str, Handler]]:
        """Registered ``(method, pattern, handler)`` triples in order."""
        return [(e.method, e.pattern, e.handler) for e in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def match(self, method: str, path: str) -> RouteMatch:
        """Match a request method and path against registered patterns.

        Returns the first ``RouteMatch`` in registration order.
        Raises ``NotFound`` if no pattern matches the path.
        Raises ``MethodNotAllowed`` if patterns match but none for this method.
        """
        verb = method.upper()
        allowed: set[str] = set()
        for entry in self._entries:
            m = entry.regex.match(path)
            if m is None:
                continue
            if entry.method == verb:
                params = {k: v for k, v in m.groupdict().items() if v is not None}
                return RouteMatch(
                    method=entry.method,
                    handler=entry.handler,
                    pattern=entry.pattern,
                    path_params=params,
                )
            allowed.add(entry.method)

        if allowed:
            raise MethodNotAllowed(frozenset(allowed))
        raise NotFound(f"No route matches {verb} {path!r}")

    async def dispatch(self, request: RequestContext) -> Any:
        """Match *request*, attach its path params, and invoke the handler."""
        match = self.match(request.method, request.path)
        logger.debug("%s %s matched %s", request.method, request.path, match.pattern)
        return await invoke(match.handler, request.with_params(match.path_params))
