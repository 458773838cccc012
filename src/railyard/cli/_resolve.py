"""Route source resolution for ``railyard routes``.

An import string (``"module:attribute"``) may name any of:

- a ``Router`` instance: ``myapp.routes:router``
- a zero-argument factory returning one: ``myapp.routes:build_router``
- a draw function taking the router, the same block ``Router.draw``
  accepts: ``myapp.routes:draw``

Draw functions are evaluated against a fresh Router mounted on a
``ListingDispatcher``, which records bindings and never calls a handler,
so controllers do not have to be importable to list the routes.
"""

import importlib
import inspect
from collections.abc import Callable
from typing import Any

from railyard.config import RouterConfig
from railyard.routing.router import Router

# Tried in order when the import string has no ``:attribute`` part
DEFAULT_ATTRIBUTES = ("router", "routes", "draw")


class ListingDispatcher:
    """Dispatch layer that only records ``(method, pattern)`` bindings."""

    __slots__ = ("bindings",)

    def __init__(self) -> None:
        self.bindings: list[tuple[str, str]] = []

    def register(self, method: str, pattern: str, handler: Any) -> None:
        self.bindings.append((method, pattern))


def listing_handle(controller: str, action: str) -> str:
    """Handler factory for listing: the handler is just the target key."""
    return f"{controller}#{action}"


def load_attribute(import_string: str) -> Any:
    """Import the module and return the named (or first default) attribute.

    Raises ``ModuleNotFoundError`` or ``AttributeError``.
    """
    module_path, _, attr_name = import_string.partition(":")
    module = importlib.import_module(module_path)
    if attr_name:
        return getattr(module, attr_name)
    for candidate in DEFAULT_ATTRIBUTES:
        if hasattr(module, candidate):
            return getattr(module, candidate)
    msg = f"Module {module_path!r} defines none of {', '.join(DEFAULT_ATTRIBUTES)}"
    raise AttributeError(msg)


def _required_positionals(fn: Callable[..., Any]) -> int | None:
    try:
        params = inspect.signature(fn).parameters.values()
    except (TypeError, ValueError):
        return None
    return sum(
        1
        for p in params
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD) and p.default is p.empty
    )


def resolve_router(import_string: str, config: RouterConfig | None = None) -> Router:
    """Resolve an import string to a drawn railyard Router.

    *config* applies only when a draw function is evaluated; a Router
    instance or factory keeps its own configuration.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the object is not a Router, a factory for one, or a
            draw function, or if a factory fails.

    Errors raised by a draw function's declarations (``InvalidArgument``)
    propagate unchanged.
    """
    obj = load_attribute(import_string)
    if isinstance(obj, Router):
        return obj
    if not callable(obj):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a railyard.Router instance"
        raise TypeError(msg)

    if _required_positionals(obj) == 1:
        router = Router(ListingDispatcher(), listing_handle, config=config)
        return router.draw(obj)

    try:
        built = obj()
    except Exception as exc:
        msg = f"Factory {import_string!r} raised an error: {exc}"
        raise TypeError(msg) from exc
    if not isinstance(built, Router):
        msg = f"Factory {import_string!r} returned {type(built).__name__}, not a railyard.Router instance"
        raise TypeError(msg)
    return built
