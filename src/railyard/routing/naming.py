"""Naming rules — controller names, path segments, ID placeholders, helper names.

Pure string transforms with no state. Inputs are non-empty identifiers;
empty names are rejected at the DSL boundary, not here.

    controller_name_for("bands")          -> "BandsController"
    controller_name_for("admin/posts")    -> "Admin::PostsController"
    id_param_for("bands")                 -> "bandID"
    helper_name(("new", "band"), "path")  -> "new_band_path"
"""

import re

NAMESPACE_SEPARATOR = "::"
CONTROLLER_SUFFIX = "Controller"
ID_SUFFIX = "ID"

HELPER_ROLES = ("plain", "new", "edit")

_WORD_BOUNDARY = re.compile(r"[_\-\s]+|(?<=[a-z0-9])(?=[A-Z])")

# Irregular plurals the suffix rules get wrong.
_IRREGULAR: dict[str, str] = {
    "people": "person",
    "men": "man",
    "women": "woman",
    "children": "child",
    "mice": "mouse",
    "geese": "goose",
    "feet": "foot",
    "teeth": "tooth",
    "oxen": "ox",
    "indices": "index",
    "matrices": "matrix",
    "vertices": "vertex",
    "analyses": "analysis",
    "statuses": "status",
    "aliases": "alias",
    "movies": "movie",
    "quizzes": "quiz",
    "buses": "bus",
    "viruses": "virus",
    "campuses": "campus",
    "bonuses": "bonus",
    "gases": "gas",
}

_UNCOUNTABLE = frozenset(
    {"equipment", "information", "rice", "money", "species", "series", "fish", "sheep", "news", "data"}
)

# (suffix, replacement), first match wins. The -zes/-ses entries come
# first so stems ending in s or z survive (minibuses, biases).
_SINGULAR_RULES: tuple[tuple[str, str], ...] = (
    ("quizzes", "quiz"),
    ("buses", "bus"),
    ("viruses", "virus"),
    ("campuses", "campus"),
    ("bonuses", "bonus"),
    ("gases", "gas"),
    ("iases", "ias"),
    ("ies", "y"),
    ("sses", "ss"),
    ("xes", "x"),
    ("zzes", "zz"),
    ("ches", "ch"),
    ("shes", "sh"),
    ("ss", "ss"),
    ("us", "us"),
    ("is", "is"),
    ("s", ""),
)


def words(name: str) -> tuple[str, ...]:
    """Split an identifier into lower-case words.

    Handles snake_case, kebab-case and camelCase: ``userProfiles`` and
    ``user_profiles`` both give ``("user", "profiles")``.
    """
    return tuple(w.lower() for w in _WORD_BOUNDARY.split(name) if w)


def singularize(word: str) -> str:
    """Return the singular form of an English noun.

    Only the last word of a compound identifier is inflected
    (``user_profiles`` -> ``user_profile``).
    """
    head, sep, last = word.rpartition("_")
    lower = last.lower()
    if lower in _UNCOUNTABLE:
        return word
    if lower in _IRREGULAR:
        return head + sep + _match_case(last, _IRREGULAR[lower])
    for suffix, replacement in _SINGULAR_RULES:
        if lower.endswith(suffix) and len(lower) > len(suffix):
            return head + sep + last[: len(last) - len(suffix)] + replacement
    return word


def _match_case(original: str, replacement: str) -> str:
    if original[:1].isupper():
        return replacement[:1].upper() + replacement[1:]
    return replacement


def pascal_case(name: str) -> str:
    return "".join(w[:1].upper() + w[1:] for w in words(name))


def controller_name_for(name: str) -> str:
    """Controller class name for a declared resource or controller path.

    The name is used as given (``bands`` stays plural, ``profile`` stays
    singular). ``/``-separated parts become ``::`` namespaces.
    """
    parts = [pascal_case(part) for part in name.split("/") if part]
    parts[-1] += CONTROLLER_SUFFIX
    return NAMESPACE_SEPARATOR.join(parts)


def segment_for(name: str) -> str:
    """URL path segment for a resource: the declared name, lower-cased."""
    return name.lower()


def id_param_for(name: str) -> str:
    """Placeholder a plural parent contributes to its children: ``bands`` -> ``bandID``."""
    singular = words(singularize(name))
    return singular[0] + "".join(w.capitalize() for w in singular[1:]) + ID_SUFFIX


def namespace_prefix_for(name: str) -> tuple[str, str]:
    """Controller prefix and path prefix for a namespace: ``("Admin::", "/admin")``."""
    return pascal_case(name) + NAMESPACE_SEPARATOR, "/" + segment_for(name)


def helper_fragment_for(
    name: str, role: str = "plain", prefix: tuple[str, ...] = ()
) -> tuple[str, ...]:
    """Helper-name words for a resource in a given role.

    ``role`` is ``plain``, ``new`` or ``edit``; the latter two lead the
    name, ahead of any enclosing-scope *prefix* words
    (``("new", "band", "album")``).
    """
    if role not in HELPER_ROLES:
        msg = f"Unknown helper role {role!r}"
        raise ValueError(msg)
    base = (*prefix, *words(name))
    return base if role == "plain" else (role, *base)


def helper_name(parts: tuple[str, ...], kind: str, case: str = "snake") -> str:
    """Join helper words with a ``path``/``url`` suffix.

    ``snake``: ``new_band_album_path`` / ``band_url``
    ``camel``: ``newBandAlbumPath`` / ``bandURL``
    """
    flat = [w for part in parts for w in words(part)]
    if case == "camel":
        suffix = "URL" if kind == "url" else kind.capitalize()
        return flat[0] + "".join(w.capitalize() for w in flat[1:]) + suffix
    return "_".join([*flat, kind])
