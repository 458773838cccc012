"""Routing helpers — path and URL builders generated from named routes.

Every named route gets two callables:

- a **path helper**, a pure function of its arguments::

      song_path(7)              -> "/songs/7"
      song_path({"id": 101})    -> "/songs/101"
      band_album_path(bandID=3, id=9) -> "/bands/3/albums/9"

- a **URL helper factory**, bound to an in-flight request first and then
  called like the path helper::

      song_url(request)(7)      -> "http://www.example.com/songs/7"

The factory shape lets a helper registered once at startup reflect the
*requesting* host at call time. Nothing is memoized per request.
"""

import logging
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

from railyard._internal.types import PathBuilder, URLBuilderFactory
from railyard.config import RouterConfig
from railyard.errors import MissingParameter, UnknownRoute
from railyard.routing.naming import helper_name
from railyard.routing.pattern import placeholders, render_pattern
from railyard.routing.route import Route
from railyard.routing.table import RouteTable

logger = logging.getLogger("railyard.routing")

_PRIMITIVES = (str, int, float)


def collect_params(pattern: str, args: tuple[Any, ...], kwargs: Mapping[str, Any]) -> dict[str, Any]:
    """Resolve helper arguments to placeholder values for *pattern*.

    Mappings and objects supply values by placeholder name, keyword
    arguments override them, and positional primitives fill the
    remaining placeholders left to right.
    """
    names = placeholders(pattern)
    values: dict[str, Any] = {}
    positional: list[Any] = []
    for arg in args:
        if isinstance(arg, _PRIMITIVES) and not isinstance(arg, bool):
            positional.append(arg)
        elif isinstance(arg, Mapping):
            values.update({n: arg[n] for n in names if n in arg})
        else:
            values.update({n: getattr(arg, n) for n in names if hasattr(arg, n)})
    values.update({k: v for k, v in kwargs.items() if k in names})

    open_slots = [n for n in names if values.get(n) is None]
    if len(positional) > len(open_slots):
        msg = (
            f"Route {pattern!r} takes at most {len(open_slots)} positional "
            f"value(s), got {len(positional)}"
        )
        raise TypeError(msg)
    values.update(zip(open_slots, positional, strict=False))
    return values


def build_path_helper(route: Route, name: str) -> PathBuilder:
    """Return the relative-path builder for *route*."""
    pattern = route.pattern

    def path_helper(*args: Any, **params: Any) -> str:
        return render_pattern(pattern, collect_params(pattern, args, params))

    path_helper.__name__ = path_helper.__qualname__ = name
    return path_helper


def request_origin(request: Any, config: RouterConfig) -> str:
    """``scheme://host`` for the request a URL helper is bound to.

    Reads ``request.scheme`` and the ``Host`` header; with
    ``trust_forwarded_headers`` the ``X-Forwarded-*`` headers win.
    Raises ``MissingParameter("host")`` when no host can be found.
    """
    headers = getattr(request, "headers", None) or {}
    scheme = getattr(request, "scheme", None) or config.default_scheme
    host = _header(headers, "host") or config.default_host

    if config.trust_forwarded_headers:
        forwarded_proto = _header(headers, "x-forwarded-proto")
        forwarded_host = _header(headers, "x-forwarded-host")
        if forwarded_proto:
            scheme = forwarded_proto.split(",")[0].strip()
        if forwarded_host:
            host = forwarded_host.split(",")[0].strip()

    if not host:
        raise MissingParameter("host")
    return f"{scheme}://{host}"


def _header(headers: Mapping[str, str], name: str) -> str | None:
    # railyard Headers are case-insensitive; plain dicts may not be
    for key in (name, name.title(), name.upper()):
        value = headers.get(key)
        if value:
            return value
    return None


def build_url_helper(route: Route, name: str, config: RouterConfig) -> URLBuilderFactory:
    """Return the request-bound absolute-URL builder factory for *route*."""
    path_helper = build_path_helper(route, name)

    def url_helper(request: Any, response: Any = None) -> PathBuilder:
        def bound(*args: Any, **params: Any) -> str:
            path = path_helper(*args, **params)
            return request_origin(request, config) + path

        bound.__name__ = bound.__qualname__ = name
        return bound

    url_helper.__name__ = url_helper.__qualname__ = name
    return url_helper


class HelperRegistry:
    """Named path helpers and URL helper factories.

    ``paths`` is the view-helper mapping (name -> path builder); ``urls``
    is the per-request helper mapping (name -> factory taking the request
    and response). Both are populated once per named route and never
    unregistered. Registering an existing name replaces it and logs a
    warning.
    """

    __slots__ = ("_config", "_frozen", "_paths", "_routes", "_table", "_urls")

    def __init__(self, table: RouteTable, config: RouterConfig | None = None) -> None:
        self._table = table
        self._config = config or RouterConfig()
        self._paths: dict[str, PathBuilder] = {}
        self._urls: dict[str, URLBuilderFactory] = {}
        self._routes: dict[str, Route] = {}
        self._frozen = False

    def register(self, words: tuple[str, ...], route: Route) -> tuple[str, str]:
        """Generate and register both helpers for *route*.

        Returns the ``(path_helper_name, url_helper_name)`` pair.
        """
        if self._frozen:
            msg = "Cannot register helpers after the router is frozen."
            raise RuntimeError(msg)
        case = self._config.helper_case
        path_name = helper_name(words, "path", case)
        url_name = helper_name(words, "url", case)
        if path_name in self._paths:
            logger.warning(
                "Helper %s redefined: %s replaces %s",
                path_name,
                route.pattern,
                self._routes[path_name].pattern,
            )
        self._paths[path_name] = build_path_helper(route, path_name)
        self._urls[url_name] = build_url_helper(route, url_name, self._config)
        self._routes[path_name] = route
        self._routes[url_name] = route
        return path_name, url_name

    def freeze(self) -> None:
        self._frozen = True

    @property
    def paths(self) -> Mapping[str, PathBuilder]:
        return MappingProxyType(self._paths)

    @property
    def urls(self) -> Mapping[str, URLBuilderFactory]:
        return MappingProxyType(self._urls)

    def route_for(self, helper: str) -> Route | None:
        """The route a helper name renders, or ``None``."""
        return self._routes.get(helper)

    def __contains__(self, name: object) -> bool:
        return name in self._paths or name in self._urls

    def __len__(self) -> int:
        return len(self._paths)

    # -- Reverse routing --

    def path_for(self, controller: str, action: str, *args: Any, **params: Any) -> str:
        """Relative path for the route declared for *controller*/*action*.

        Raises ``UnknownRoute`` if no such route was declared.
        """
        route = self._table.find(controller, action)
        if route is None:
            raise UnknownRoute(controller, action)
        return render_pattern(route.pattern, collect_params(route.pattern, args, params))

    def url_for(self, request: Any, response: Any = None) -> Callable[..., str]:
        """Bind reverse routing to *request*: ``url_for(req)("BandsController", "show", 7)``."""
        config = self._config

        def bound(controller: str, action: str, *args: Any, **params: Any) -> str:
            path = self.path_for(controller, action, *args, **params)
            return request_origin(request, config) + path

        return bound

    def bind(self, request: Any, response: Any = None) -> dict[str, Any]:
        """Every helper ready to call for one request.

        Path helpers as-is, URL helpers bound to *request*, plus
        ``url_for`` and ``path_for``. Suitable as template context.
        """
        context: dict[str, Any] = dict(self._paths)
        for name, factory in self._urls.items():
            context[name] = factory(request, response)
        context["url_for"] = self.url_for(request, response)
        context["path_for"] = self.path_for
        return context
