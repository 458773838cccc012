"""Railyard exception hierarchy.

Shared across the routing DSL, helpers, dispatcher, and controller
registry so every module raises and catches the same types.
"""

from dataclasses import dataclass


class RailyardError(Exception):
    """Base for all railyard-specific errors."""


class ConfigurationError(RailyardError):
    """Raised when routing configuration is invalid.

    Typically raised while route declarations are evaluated at startup.
    """


class InvalidArgument(ConfigurationError, ValueError):  # noqa: N818
    """A route declaration received a malformed argument.

    Malformed ``"controller#action"`` shorthands, unknown HTTP verbs,
    empty resource or namespace names, and malformed patterns all land
    here. Fatal to startup; never caught internally.
    """


class MissingParameter(RailyardError, LookupError):  # noqa: N818
    """A path or URL helper could not resolve a required placeholder."""

    def __init__(self, param: str, pattern: str = "") -> None:
        self.param = param
        self.pattern = pattern
        if pattern:
            msg = f"Missing value for :{param} in {pattern!r}"
        else:
            msg = f"Missing value for {param!r}"
        super().__init__(msg)


class UnknownRoute(RailyardError, LookupError):  # noqa: N818
    """Reverse routing found no route for a controller/action pair."""

    def __init__(self, controller: str, action: str) -> None:
        self.controller = controller
        self.action = action
        super().__init__(f"No route declared for {controller}#{action}")


@dataclass(frozen=True, slots=True)
class HTTPError(RailyardError):
    """An error that maps directly to an HTTP status code.

    Raised by the dispatcher and the controller registry at request time.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405 — a pattern matched but not for this HTTP method.

    Includes an ``Allow`` header listing the valid methods and embeds
    the allowed methods in the detail string for developer visibility.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )
