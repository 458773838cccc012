"""Railyard — declarative resource routing with path and URL helpers.

Declare routes once; get a mounted route table and named helpers that
build paths and absolute URLs from the same declarations.

Basic usage::

    from railyard import ControllerRegistry, Dispatcher, Router

    controllers = ControllerRegistry()
    dispatcher = Dispatcher()
    router = Router(dispatcher, controllers.handle)

    router.root("pages#main")
    router.resources("bands", lambda r: r.resources("albums"))
    router.namespace("admin", lambda r: r.resources("posts"))
    router.freeze()

    router.helpers.paths["band_album_path"](bandID=3, id=9)  # "/bands/3/albums/9"

Templates (``pip install railyard[templates]``)::

    from railyard.templating.integration import create_environment
    env = create_environment(router.helpers)
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "Controller",
    "ControllerRegistry",
    "Dispatcher",
    "HTTPError",
    "Headers",
    "HelperRegistry",
    "InvalidArgument",
    "MethodNotAllowed",
    "MissingParameter",
    "NotFound",
    "RailyardError",
    "RequestContext",
    "Route",
    "RouteTable",
    "Router",
    "RouterConfig",
    "Target",
    "UnknownRoute",
    "parse_target",
]

# name -> module that defines it
_LAZY_IMPORTS: dict[str, str] = {
    "ConfigurationError": "railyard.errors",
    "Controller": "railyard.controllers",
    "ControllerRegistry": "railyard.controllers",
    "Dispatcher": "railyard.routing.dispatch",
    "HTTPError": "railyard.errors",
    "Headers": "railyard.http.headers",
    "HelperRegistry": "railyard.routing.helpers",
    "InvalidArgument": "railyard.errors",
    "MethodNotAllowed": "railyard.errors",
    "MissingParameter": "railyard.errors",
    "NotFound": "railyard.errors",
    "RailyardError": "railyard.errors",
    "RequestContext": "railyard.http.request",
    "Route": "railyard.routing.route",
    "RouteTable": "railyard.routing.table",
    "Router": "railyard.routing.router",
    "RouterConfig": "railyard.config",
    "Target": "railyard.routing.route",
    "UnknownRoute": "railyard.errors",
    "parse_target": "railyard.routing.route",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import railyard`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    import importlib

    return getattr(importlib.import_module(module_name), name)
