"""Immutable request context.

The slice of an in-flight request the routing engine needs: method and
path for dispatch, scheme and headers for absolute URL construction,
and the path parameters filled in once a route matched.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from railyard.http.headers import Headers


@dataclass(frozen=True, slots=True)
class RequestContext:
    """An immutable view of an HTTP request.

    ``scheme`` is ``None`` when the transport did not say; URL helpers
    then fall back to ``RouterConfig.default_scheme``.
    """

    method: str = "GET"
    path: str = "/"
    headers: Headers = field(default_factory=Headers)
    scheme: str | None = None
    path_params: Mapping[str, str] = field(default_factory=dict)
    server: tuple[str, int] | None = None

    @property
    def host(self) -> str | None:
        """The Host header value, if any."""
        return self.headers.get("host")

    def with_params(self, path_params: Mapping[str, str]) -> RequestContext:
        """Return a copy carrying the matched route's path parameters."""
        return replace(self, path_params=dict(path_params))

    # -- Factories --

    @classmethod
    def build(
        cls,
        method: str = "GET",
        path: str = "/",
        *,
        headers: Mapping[str, str] | None = None,
        scheme: str | None = None,
    ) -> RequestContext:
        """Create a context from plain strings (tests, scripts, CLIs)."""
        return cls(
            method=method.upper(),
            path=path,
            headers=Headers.from_pairs(headers or {}),
            scheme=scheme,
        )

    @classmethod
    def from_asgi(cls, scope: dict[str, Any]) -> RequestContext:
        """Create a context from an ASGI HTTP scope."""
        server = scope.get("server")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            scheme=scope.get("scheme"),
            server=tuple(server) if server else None,
        )
