"""Route, Target, and RouteMatch frozen dataclasses."""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from railyard._internal.types import Handler
from railyard.errors import InvalidArgument
from railyard.routing.pattern import placeholders, render_pattern

# Verbs accepted by the DSL, mapped to their canonical lower-case name.
VERBS: dict[str, str] = {
    "get": "get",
    "post": "post",
    "put": "put",
    "delete": "delete",
    "del": "delete",
}

_SHORTHAND = re.compile(
    r"^(?P<controller>[A-Za-z_][A-Za-z0-9_]*(?:/[A-Za-z_][A-Za-z0-9_]*)*)"
    r"#(?P<action>[A-Za-z_][A-Za-z0-9_]*)$"
)


def normalize_verb(verb: str) -> str:
    """Return the canonical lower-case verb or raise ``InvalidArgument``."""
    canonical = VERBS.get(verb.strip().lower()) if isinstance(verb, str) else None
    if canonical is None:
        msg = f"Unsupported HTTP verb {verb!r}. Use one of: get, post, put, delete."
        raise InvalidArgument(msg)
    return canonical


@dataclass(frozen=True, slots=True)
class Target:
    """The ``controller#action`` a route points at, before naming rules apply.

    ``controller`` is the declared controller path (``posts`` or
    ``admin/posts``), not the final controller class name.
    """

    controller: str
    action: str

    @property
    def controller_path(self) -> tuple[str, ...]:
        return tuple(self.controller.split("/"))


def parse_target(shorthand: str) -> Target:
    """Parse a ``"controller#action"`` shorthand.

    Raises ``InvalidArgument`` unless the string has exactly the
    ``name#name`` shape (the controller part may be ``/``-namespaced).
    """
    if not isinstance(shorthand, str):
        msg = f"Route target must be a 'controller#action' string, got {type(shorthand).__name__}."
        raise InvalidArgument(msg)
    m = _SHORTHAND.match(shorthand.strip())
    if m is None:
        msg = f"Malformed route target {shorthand!r}; expected 'controller#action'."
        raise InvalidArgument(msg)
    return Target(controller=m.group("controller"), action=m.group("action"))


@dataclass(frozen=True, slots=True)
class Route:
    """A compiled route declaration.

    Created once while routes are drawn; immutable thereafter.
    """

    method: str
    pattern: str
    controller: str
    action: str
    name: str | None = None

    @property
    def key(self) -> str:
        """Reverse-lookup key, ``"Controller#action"``."""
        return f"{self.controller}#{self.action}"

    @property
    def placeholders(self) -> tuple[str, ...]:
        return placeholders(self.pattern)

    def render(self, params: Mapping[str, Any] | None = None, **kwargs: Any) -> str:
        """Render the pattern with *params* substituted.

        The optional format segment is dropped when no ``format`` is given.
        """
        values = {**(params or {}), **kwargs}
        return render_pattern(self.pattern, values)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful dispatch match."""

    method: str
    handler: Handler
    pattern: str
    path_params: dict[str, str]
