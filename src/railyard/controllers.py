"""Controllers and the default handler factory.

``ControllerRegistry.handle`` is the ``handle(controller, action)``
callable the Router expects. Classes are looked up by their fully
qualified controller name when a request arrives, so routes may be drawn
before every controller module is imported::

    controllers = ControllerRegistry()

    @controllers.register("Admin::PostsController")
    class PostsController(Controller):
        async def show(self):
            return {"id": self.params["id"]}

    router = Router(dispatcher, controllers.handle)
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from railyard._internal.invoke import invoke
from railyard._internal.types import Handler
from railyard.config import RouterConfig
from railyard.errors import ConfigurationError, NotFound
from railyard.http.request import RequestContext

logger = logging.getLogger("railyard.controllers")

C = TypeVar("C", bound=type["Controller"])


class Controller:
    """Base class for controllers. One instance per request."""

    def __init__(self, request: RequestContext) -> None:
        self.request = request

    @property
    def params(self) -> Mapping[str, str]:
        """Path parameters captured by the matched route."""
        return self.request.path_params


class ControllerRegistry:
    """Maps controller names to classes and produces route handlers."""

    __slots__ = ("_controllers", "_offload")

    def __init__(self, *, offload_sync_actions: bool = False) -> None:
        self._controllers: dict[str, type[Controller]] = {}
        self._offload = offload_sync_actions

    @classmethod
    def from_config(cls, config: RouterConfig) -> "ControllerRegistry":
        return cls(offload_sync_actions=config.offload_sync_actions)

    def register(self, name: str | None = None) -> Callable[[C], C]:
        """Register a controller class via decorator.

        ``name`` defaults to the class name (``BandsController``).
        Namespaced controllers pass the qualified name
        (``"Admin::PostsController"``).
        """

        def decorator(cls: C) -> C:
            controller_name = name or cls.__name__
            if not controller_name.endswith("Controller"):
                msg = f"Controller name {controller_name!r} must end with 'Controller'."
                raise ConfigurationError(msg)
            self._controllers[controller_name] = cls
            return cls

        return decorator

    def get(self, name: str) -> type[Controller] | None:
        return self._controllers.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._controllers

    def handle(self, controller: str, action: str) -> Handler:
        """Return a handler invoking *action* on *controller* per request."""
        registry = self._controllers
        offload = self._offload

        async def action_handler(request: RequestContext) -> Any:
            cls = registry.get(controller)
            if cls is None:
                raise NotFound(f"No controller registered as {controller!r}")
            method = getattr(cls, action, None)
            if action.startswith("_") or not callable(method):
                raise NotFound(f"{controller} has no action {action!r}")
            instance = cls(request)
            logger.debug("Invoking %s#%s", controller, action)
            return await invoke(getattr(instance, action), offload=offload)

        action_handler.__name__ = action_handler.__qualname__ = f"{controller}#{action}"
        return action_handler
