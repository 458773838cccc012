"""Route pattern parsing, rendering, and compilation.

Patterns use ``:name`` placeholders. A trailing ``?`` marks a placeholder
optional, together with the ``/`` or ``.`` that precedes it::

    "/songs/:title"          -> literal "/songs", param "title"
    "/bands/:id.:format?"    -> literal "/bands", param "id", optional ".format"

Parsing is pure and cached; the same tuple of segments backs path
rendering (helpers) and regex matching (dispatcher).
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from urllib.parse import quote

from railyard.errors import InvalidArgument, MissingParameter

_PLACEHOLDER = re.compile(r"([./]?):([A-Za-z_][A-Za-z0-9_]*)(\?)?")

# Capture regex per separator. A dotted placeholder never spans a dot so
# that "/bands/7.json" splits into id=7, format=json.
SEGMENT_PATTERNS: dict[str, str] = {
    "/": r"[^/]+?",
    ".": r"[^/.]+?",
    "": r"[^/]+?",
}


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed piece of a route pattern.

    Literal:  ``/songs``   (is_param=False)
    Param:    ``/:id``     (is_param=True, param_name="id", separator="/")
    Optional: ``.:format?`` (is_param=True, optional=True, separator=".")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    separator: str = ""
    optional: bool = False


@lru_cache(maxsize=1024)
def parse_pattern(pattern: str) -> tuple[PathSegment, ...]:
    """Parse a pattern string into segments.

    Raises ``InvalidArgument`` on whitespace, empty path components
    (``//``), dangling ``:`` markers, or repeated placeholder names.
    """
    if any(ch.isspace() for ch in pattern):
        msg = f"Route pattern {pattern!r} must not contain whitespace."
        raise InvalidArgument(msg)
    if "//" in pattern:
        msg = f"Route pattern {pattern!r} contains an empty path component."
        raise InvalidArgument(msg)

    segments: list[PathSegment] = []
    seen: set[str] = set()
    pos = 0
    for m in _PLACEHOLDER.finditer(pattern):
        if m.start() > pos:
            segments.append(PathSegment(value=pattern[pos : m.start()]))
        name = m.group(2)
        if name in seen:
            msg = f"Placeholder :{name} appears twice in route pattern {pattern!r}."
            raise InvalidArgument(msg)
        seen.add(name)
        segments.append(
            PathSegment(
                value=m.group(0),
                is_param=True,
                param_name=name,
                separator=m.group(1),
                optional=m.group(3) is not None,
            )
        )
        pos = m.end()
    if pos < len(pattern):
        segments.append(PathSegment(value=pattern[pos:]))

    for seg in segments:
        if not seg.is_param and (":" in seg.value or "?" in seg.value):
            msg = f"Route pattern {pattern!r} has a malformed placeholder near {seg.value!r}."
            raise InvalidArgument(msg)
    return tuple(segments)


def placeholders(pattern: str) -> tuple[str, ...]:
    """Names of every placeholder in *pattern*, left to right."""
    return tuple(s.param_name for s in parse_pattern(pattern) if s.param_name)


def required_placeholders(pattern: str) -> tuple[str, ...]:
    """Names of the placeholders a caller must supply."""
    return tuple(
        s.param_name for s in parse_pattern(pattern) if s.param_name and not s.optional
    )


def render_pattern(pattern: str, values: dict[str, object]) -> str:
    """Substitute placeholder values into *pattern*.

    Optional placeholders without a value are dropped along with their
    separator. Values are percent-encoded as a single path component.
    Raises ``MissingParameter`` for an unresolved required placeholder.
    """
    parts: list[str] = []
    for seg in parse_pattern(pattern):
        if not seg.is_param:
            parts.append(seg.value)
            continue
        assert seg.param_name is not None
        value = values.get(seg.param_name)
        if value is None or value == "":
            if seg.optional:
                continue
            raise MissingParameter(seg.param_name, pattern)
        parts.append(seg.separator + quote(str(value), safe=""))
    return "".join(parts) or "/"


@lru_cache(maxsize=1024)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile *pattern* into an anchored regex with named groups."""
    parts: list[str] = []
    for seg in parse_pattern(pattern):
        if not seg.is_param:
            parts.append(re.escape(seg.value))
            continue
        capture = f"(?P<{seg.param_name}>{SEGMENT_PATTERNS[seg.separator]})"
        piece = re.escape(seg.separator) + capture
        parts.append(f"(?:{piece})?" if seg.optional else piece)
    return re.compile("^" + "".join(parts) + "/?$")
