"""Case-insensitive, read-only request headers.

URL helpers read ``Host`` and, when trusted, ``X-Forwarded-Host`` and
``X-Forwarded-Proto`` from here. Raw ASGI byte pairs are kept for
round-tripping; lookups go through a lower-cased index built once.
"""

from collections.abc import Iterable, Iterator, Mapping


class Headers(Mapping[str, str]):
    """Read-only header mapping keyed by lower-cased name.

    ``headers["Host"]`` returns the first value sent; ``get_list`` returns
    every value in arrival order.
    """

    __slots__ = ("_index", "_raw")

    def __init__(self, raw: tuple[tuple[bytes, bytes], ...] = ()) -> None:
        index: dict[str, list[str]] = {}
        for name, value in raw:
            index.setdefault(name.decode("latin-1").lower(), []).append(value.decode("latin-1"))
        self._raw = raw
        self._index = index

    @classmethod
    def from_pairs(cls, pairs: Mapping[str, str] | Iterable[tuple[str, str]]) -> "Headers":
        """Build headers from a plain dict or ``(name, value)`` string pairs.

        For callers not sitting behind ASGI (tests, scripts)::

            Headers.from_pairs({"Host": "www.example.com"})
        """
        items = pairs.items() if isinstance(pairs, Mapping) else pairs
        return cls(tuple((k.encode("latin-1"), v.encode("latin-1")) for k, v in items))

    def __getitem__(self, key: str) -> str:
        values = self._index.get(key.lower())
        if not values:
            raise KeyError(key)
        return values[0]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._index)

    def __len__(self) -> int:
        return len(self._index)

    def __repr__(self) -> str:
        first = {k: v[0] for k, v in self._index.items()}
        return f"Headers({first!r})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        values = self._index.get(key.lower())
        return values[0] if values else default

    def get_list(self, key: str) -> list[str]:
        """Every value sent for *key*, in arrival order."""
        return list(self._index.get(key.lower(), ()))

    @property
    def raw(self) -> tuple[tuple[bytes, bytes], ...]:
        """The byte pairs as received from the ASGI scope."""
        return self._raw
