"""Shared type aliases used across railyard modules."""

from collections.abc import Callable
from typing import Any, Protocol, TypeAlias

# Opaque value mounted onto the dispatch layer for one route
Handler: TypeAlias = Callable[..., Any]

# handle(controller_name, action_name) -> Handler
HandlerFactory: TypeAlias = Callable[[str, str], Handler]

# Relative path builder: song_path(7) -> "/songs/7"
PathBuilder: TypeAlias = Callable[..., str]

# URL builder factory: song_url(request, response) -> PathBuilder-shaped callable
URLBuilderFactory: TypeAlias = Callable[..., PathBuilder]


class DispatchLayer(Protocol):
    """The route-registration contract consumed by the Router.

    ``method`` is an upper-case verb (``GET``, ``POST``, ``PUT``, ``DELETE``).
    """

    def register(self, method: str, pattern: str, handler: Handler) -> None: ...
