"""Router configuration.

RouterConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass

from railyard.errors import ConfigurationError

HELPER_CASES = frozenset({"snake", "camel"})


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Routing configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(helper_case="camel", default_scheme="https")
    """

    # Absolute URL construction
    default_scheme: str = "http"
    default_host: str | None = None  # Used when a request carries no Host header
    trust_forwarded_headers: bool = False  # Honour X-Forwarded-Proto / X-Forwarded-Host

    # Helper naming: "snake" (song_path, song_url) or "camel" (songPath, songURL)
    helper_case: str = "snake"

    # Show routes accept an optional format suffix (/bands/:id.:format?)
    format_suffix: bool = True

    # Controllers: run sync actions in a worker thread
    offload_sync_actions: bool = False

    def __post_init__(self) -> None:
        if self.helper_case not in HELPER_CASES:
            msg = (
                f"helper_case must be one of {sorted(HELPER_CASES)}, "
                f"got {self.helper_case!r}"
            )
            raise ConfigurationError(msg)
        if not self.default_scheme or "://" in self.default_scheme:
            msg = f"default_scheme must be a bare scheme like 'http', got {self.default_scheme!r}"
            raise ConfigurationError(msg)
