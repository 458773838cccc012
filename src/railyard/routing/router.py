"""Route declaration DSL.

Routes are declared once at startup and expanded into concrete
``(method, pattern) -> handler`` bindings on a dispatch layer, a
reverse-lookup table, and named path/URL helpers::

    router = Router(dispatcher, controllers.handle)
    router.root("pages#main")
    router.match("songs/:title", "songs#show", name="song")
    router.resources("bands", lambda r: r.resources("albums"))
    router.namespace("admin", lambda r: r.resources("posts"))
    router.freeze()

Mount order is declaration-and-expansion order. The dispatch layer
matches first-fit, so ``/bands/new`` is always mounted ahead of
``/bands/:id``.
"""

import inspect
import logging
import re
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from railyard._internal.types import DispatchLayer, HandlerFactory
from railyard.config import RouterConfig
from railyard.errors import InvalidArgument
from railyard.routing.helpers import HelperRegistry
from railyard.routing.naming import (
    controller_name_for,
    helper_fragment_for,
    segment_for,
    singularize,
    words,
)
from railyard.routing.pattern import parse_pattern
from railyard.routing.route import Route, Target, normalize_verb, parse_target
from railyard.routing.scope import ScopeFrame
from railyard.routing.table import RouteTable

logger = logging.getLogger("railyard.routing")

FORMAT_SUFFIX = ".:format?"

_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_\-]*$")

Block = Callable[..., Any]

# (verb, pattern suffix, action, helper role, helper noun)
# "{fmt}" marks where the optional format segment goes.
# Helper noun: "name" uses the declared name, "singular" its singular form,
# "index" the declared name, suffixed with "index" when it has no separate
# singular (news -> news_index) so it cannot collide with the show helper.
SINGULAR_ACTIONS: tuple[tuple[str, str, str, str | None, str], ...] = (
    ("get", "/new", "new", "new", "name"),
    ("post", "", "create", None, "name"),
    ("get", "{fmt}", "show", "plain", "name"),
    ("get", "/edit", "edit", "edit", "name"),
    ("put", "", "update", None, "name"),
    ("delete", "", "destroy", None, "name"),
)

PLURAL_ACTIONS: tuple[tuple[str, str, str, str | None, str], ...] = (
    ("get", "", "index", "plain", "index"),
    ("get", "/new", "new", "new", "singular"),
    ("post", "", "create", None, "name"),
    ("get", "/:id{fmt}", "show", "plain", "singular"),
    ("get", "/:id/edit", "edit", "edit", "singular"),
    ("put", "/:id", "update", None, "name"),
    ("delete", "/:id", "destroy", None, "name"),
)


class Router:
    """Route declaration DSL over a dispatch layer.

    ``dispatcher`` is anything with ``register(method, pattern, handler)``;
    ``handle(controller, action)`` produces the handler mounted for each
    route. The router owns the RouteTable (``router.table``) and the
    helper registry (``router.helpers``).

    Thread safety:
        Declaration is single-threaded and happens at startup. After
        ``freeze()`` the table and helpers are read-only and can be
        shared across request handlers without locking.
    """

    __slots__ = ("_config", "_dispatcher", "_frozen", "_handle", "_helpers", "_scopes", "_table")

    def __init__(
        self,
        dispatcher: DispatchLayer,
        handle: HandlerFactory,
        *,
        config: RouterConfig | None = None,
    ) -> None:
        self._dispatcher = dispatcher
        self._handle = handle
        self._config: RouterConfig = config or RouterConfig()
        self._table = RouteTable()
        self._helpers = HelperRegistry(self._table, self._config)
        self._scopes: list[ScopeFrame] = [ScopeFrame()]
        self._frozen = False

    # -- Introspection --

    @property
    def config(self) -> RouterConfig:
        return self._config

    @property
    def table(self) -> RouteTable:
        return self._table

    @property
    def helpers(self) -> HelperRegistry:
        return self._helpers

    @property
    def routes(self) -> tuple[Route, ...]:
        """Every declared route, in mount order."""
        return self._table.ordered

    @property
    def scope(self) -> ScopeFrame:
        """The nesting frame currently in effect."""
        return self._scopes[-1]

    @property
    def frozen(self) -> bool:
        return self._frozen

    def find_by_controller_action(self, controller: str, action: str) -> Route | None:
        """Most recently declared route for *controller*/*action*, or ``None``."""
        return self._table.find(controller, action)

    # -- Declarations --

    def root(self, shorthand: str) -> Route:
        """Route ``GET /`` (or the enclosing scope's prefix) to a target."""
        self._check_not_frozen()
        target = parse_target(shorthand)
        scope = self.scope
        return self._mount(
            "get",
            scope.path(),
            self._controller_for(target),
            target.action,
            (*scope.helper_prefix, "root"),
        )

    def match(
        self,
        pattern: str,
        target: str | Mapping[str, Any] | None = None,
        *,
        controller: str | None = None,
        action: str | None = None,
        via: str = "get",
        name: str | None = None,
    ) -> Route:
        """Route a single pattern to a controller action.

        *target* is a ``"controller#action"`` shorthand or a mapping with
        ``controller``/``action`` (and optionally ``via``/``as``); the same
        values may be passed as keywords. ``name`` declares a helper
        family (``name="song"`` -> ``song_path``/``song_url``) and is used
        verbatim, without scope prefixes.
        """
        self._check_not_frozen()
        if isinstance(target, Mapping):
            options = dict(target)
            controller = options.get("controller", controller)
            action = options.get("action", action)
            via = options.get("via", via)
            name = options.get("as", options.get("name", name))
            target = None
        if target is None:
            if not controller or not action:
                msg = f"match({pattern!r}) needs a 'controller#action' target or controller= and action=."
                raise InvalidArgument(msg)
            resolved = parse_target(f"{controller}#{action}")
        else:
            resolved = parse_target(target)

        verb = normalize_verb(via)
        relative = self._normalize_pattern(pattern)
        scope = self.scope
        full = scope.path("/" + relative if relative else "")
        helper_words = words(name) if name else None
        if name is not None and not helper_words:
            msg = f"Helper name {name!r} has no usable characters."
            raise InvalidArgument(msg)
        return self._mount(verb, full, self._controller_for(resolved), resolved.action, helper_words)

    def resource(self, name: str, block: Block | None = None) -> None:
        """Declare a singular resource: six routes, no ``:id``.

        ``new``, ``create``, ``show``, ``edit``, ``update``, ``destroy``, in
        that order. *block* runs afterwards with the router, nested under
        ``/<name>``.
        """
        self._check_not_frozen()
        self._require_name(name, "resource")
        self._require_block(block, "resource", optional=True)
        scope = self.scope
        base = scope.path("/" + segment_for(name))
        controller = scope.controller_prefix + controller_name_for(name)
        nouns = {"name": name}
        for verb, suffix, action, role, noun in SINGULAR_ACTIONS:
            helper_words = (
                helper_fragment_for(nouns[noun], role, scope.helper_prefix) if role else None
            )
            self._mount(verb, base + self._suffix(suffix), controller, action, helper_words)
        if block is not None:
            with self._nested(scope.within_resource(name)):
                self._call_block(block)

    def resources(self, name: str, block: Block | None = None) -> None:
        """Declare a plural resource: seven routes keyed by ``:id``.

        ``index``, ``new``, ``create``, ``show``, ``edit``, ``update``,
        ``destroy``, in that order. *block* runs afterwards with the
        router, nested under ``/<name>/:<singular>ID``.
        """
        self._check_not_frozen()
        self._require_name(name, "resources")
        self._require_block(block, "resources", optional=True)
        scope = self.scope
        base = scope.path("/" + segment_for(name))
        controller = scope.controller_prefix + controller_name_for(name)
        singular = singularize(name)
        nouns = {
            "name": name,
            "singular": singular,
            "index": name if words(singular) != words(name) else f"{name}_index",
        }
        for verb, suffix, action, role, noun in PLURAL_ACTIONS:
            helper_words = (
                helper_fragment_for(nouns[noun], role, scope.helper_prefix) if role else None
            )
            self._mount(verb, base + self._suffix(suffix), controller, action, helper_words)
        if block is not None:
            with self._nested(scope.within_resources(name)):
                self._call_block(block)

    def namespace(self, name: str, block: Block) -> None:
        """Run *block* with ``/<name>`` and ``<Name>::`` prefixes in effect."""
        self._check_not_frozen()
        self._require_name(name, "namespace")
        self._require_block(block, "namespace", optional=False)
        with self._nested(self.scope.within_namespace(name)):
            self._call_block(block)

    # -- Lifecycle --

    def draw(self, block: Block) -> "Router":
        """Evaluate *block* against this router, then freeze it."""
        self._require_block(block, "draw", optional=False)
        self._call_block(block)
        self.freeze()
        return self

    def freeze(self) -> None:
        """Make the route table and helpers read-only."""
        if self._frozen:
            return
        self._frozen = True
        self._helpers.freeze()
        logger.info(
            "Route table frozen: %d routes, %d helpers", len(self._table), len(self._helpers)
        )

    # -- Internal --

    def _mount(
        self,
        verb: str,
        pattern: str,
        controller: str,
        action: str,
        helper_words: tuple[str, ...] | None = None,
    ) -> Route:
        # Scope prefixes can introduce clashes the relative pattern did not have
        parse_pattern(pattern)
        route = Route(
            method=verb,
            pattern=pattern,
            controller=controller,
            action=action,
            name="_".join(helper_words) if helper_words else None,
        )
        handler = self._handle(controller, action)
        self._dispatcher.register(verb.upper(), pattern, handler)
        self._table.add(route)
        if helper_words:
            self._helpers.register(helper_words, route)
        logger.debug("Mounted %s %s -> %s", verb.upper(), pattern, route.key)
        return route

    def _controller_for(self, target: Target) -> str:
        return self.scope.controller_prefix + controller_name_for(target.controller)

    def _suffix(self, template: str) -> str:
        return template.replace("{fmt}", FORMAT_SUFFIX if self._config.format_suffix else "")

    @contextmanager
    def _nested(self, frame: ScopeFrame) -> Iterator[ScopeFrame]:
        self._scopes.append(frame)
        try:
            yield frame
        finally:
            self._scopes.pop()

    def _call_block(self, block: Block) -> None:
        # Blocks may take the router or close over it
        try:
            params = inspect.signature(block).parameters
        except (TypeError, ValueError):
            params = None
        if params is not None and not params:
            block()
        else:
            block(self)

    @staticmethod
    def _normalize_pattern(pattern: str) -> str:
        if not isinstance(pattern, str):
            msg = f"Route pattern must be a string, got {type(pattern).__name__}."
            raise InvalidArgument(msg)
        stripped = pattern.strip()
        if pattern and not stripped:
            msg = f"Route pattern {pattern!r} is blank; use '' or '/' for the scope root."
            raise InvalidArgument(msg)
        relative = stripped.lstrip("/")
        parse_pattern("/" + relative)
        return relative

    @staticmethod
    def _require_name(name: object, kind: str) -> None:
        if not isinstance(name, str) or not name.strip():
            msg = f"{kind}() requires a non-empty name, got {name!r}."
            raise InvalidArgument(msg)
        if not _NAME.match(name):
            msg = f"{kind}() name {name!r} must be an identifier (letters, digits, '_' or '-')."
            raise InvalidArgument(msg)

    @staticmethod
    def _require_block(block: object, kind: str, *, optional: bool) -> None:
        if block is None and optional:
            return
        if not callable(block):
            msg = f"{kind}() block must be callable, got {block!r}."
            raise InvalidArgument(msg)

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot declare routes after the router is frozen. "
                "Declare every route before serving requests."
            )
            raise RuntimeError(msg)

    def __repr__(self) -> str:
        return f"Router({len(self._table)} routes, frozen={self._frozen})"
