"""Nesting scopes for route declarations.

A ScopeFrame is the prefix state in effect while a nested block runs.
Frames are immutable: entering a namespace or a resource's block derives
a new frame from the current one; the Router keeps them on a stack.
"""

from dataclasses import dataclass

from railyard.routing.naming import (
    id_param_for,
    namespace_prefix_for,
    segment_for,
    singularize,
    words,
)


@dataclass(frozen=True, slots=True)
class ScopeFrame:
    """Path, controller, and helper-name prefixes for nested declarations.

    ``path_prefix``       ``""``, ``/admin``, ``/bands/:bandID``
    ``controller_prefix`` ``""`` or ``Admin::`` (namespaces only)
    ``helper_prefix``     words prepended to derived helper names
    """

    path_prefix: str = ""
    controller_prefix: str = ""
    helper_prefix: tuple[str, ...] = ()

    def path(self, suffix: str = "") -> str:
        """Join the prefix with a ``/``-led suffix; never returns ``""``."""
        return (self.path_prefix + suffix) or "/"

    def within_namespace(self, name: str) -> "ScopeFrame":
        controller_prefix, path_prefix = namespace_prefix_for(name)
        return ScopeFrame(
            path_prefix=self.path_prefix + path_prefix,
            controller_prefix=self.controller_prefix + controller_prefix,
            helper_prefix=(*self.helper_prefix, *words(name)),
        )

    def within_resource(self, name: str) -> "ScopeFrame":
        """Frame for children of a singular resource — no ID placeholder."""
        return ScopeFrame(
            path_prefix=f"{self.path_prefix}/{segment_for(name)}",
            controller_prefix=self.controller_prefix,
            helper_prefix=(*self.helper_prefix, *words(name)),
        )

    def within_resources(self, name: str) -> "ScopeFrame":
        """Frame for children of a plural resource — ``/bands/:bandID``."""
        return ScopeFrame(
            path_prefix=f"{self.path_prefix}/{segment_for(name)}/:{id_param_for(name)}",
            controller_prefix=self.controller_prefix,
            helper_prefix=(*self.helper_prefix, *words(singularize(name))),
        )
