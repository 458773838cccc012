"""Tests for railyard.controllers — registry, handler factory, action invocation."""

import threading

import pytest

from railyard.config import RouterConfig
from railyard.controllers import Controller, ControllerRegistry
from railyard.errors import ConfigurationError, NotFound
from railyard.http.request import RequestContext
from railyard.routing.dispatch import Dispatcher
from railyard.routing.router import Router


def _request(**params: str) -> RequestContext:
    return RequestContext.build("GET", "/").with_params(params)


class TestRegister:
    def test_default_name(self) -> None:
        controllers = ControllerRegistry()

        @controllers.register()
        class BandsController(Controller):
            pass

        assert "BandsController" in controllers
        assert controllers.get("BandsController") is BandsController

    def test_explicit_name(self) -> None:
        controllers = ControllerRegistry()

        @controllers.register("Admin::PostsController")
        class PostsController(Controller):
            pass

        assert controllers.get("Admin::PostsController") is PostsController
        assert "PostsController" not in controllers

    def test_name_must_end_with_controller(self) -> None:
        controllers = ControllerRegistry()
        with pytest.raises(ConfigurationError, match="must end with 'Controller'"):

            @controllers.register("Bands")
            class Bands(Controller):
                pass

    def test_from_config(self) -> None:
        controllers = ControllerRegistry.from_config(RouterConfig(offload_sync_actions=True))
        assert isinstance(controllers, ControllerRegistry)


class TestHandle:
    def test_handler_name(self) -> None:
        handler = ControllerRegistry().handle("BandsController", "show")
        assert handler.__name__ == "BandsController#show"

    @pytest.mark.anyio
    async def test_sync_action(self) -> None:
        controllers = ControllerRegistry()

        @controllers.register()
        class BandsController(Controller):
            def show(self):
                return {"id": self.params["id"]}

        handler = controllers.handle("BandsController", "show")
        assert await handler(_request(id="7")) == {"id": "7"}

    @pytest.mark.anyio
    async def test_async_action(self) -> None:
        controllers = ControllerRegistry()

        @controllers.register()
        class SongsController(Controller):
            async def index(self):
                return "all songs"

        assert await controllers.handle("SongsController", "index")(_request()) == "all songs"

    @pytest.mark.anyio
    async def test_late_registration(self) -> None:
        controllers = ControllerRegistry()
        handler = controllers.handle("VenuesController", "index")

        @controllers.register()
        class VenuesController(Controller):
            def index(self):
                return "venues"

        assert await handler(_request()) == "venues"

    @pytest.mark.anyio
    async def test_unknown_controller(self) -> None:
        handler = ControllerRegistry().handle("GhostsController", "index")
        with pytest.raises(NotFound, match="GhostsController"):
            await handler(_request())

    @pytest.mark.anyio
    async def test_missing_action(self) -> None:
        controllers = ControllerRegistry()

        @controllers.register()
        class BandsController(Controller):
            pass

        with pytest.raises(NotFound, match="no action 'archive'"):
            await controllers.handle("BandsController", "archive")(_request())

    @pytest.mark.anyio
    async def test_private_action_not_routable(self) -> None:
        controllers = ControllerRegistry()

        @controllers.register()
        class BandsController(Controller):
            def _secret(self):
                return "hidden"

        with pytest.raises(NotFound):
            await controllers.handle("BandsController", "_secret")(_request())

    @pytest.mark.anyio
    async def test_offloaded_sync_action_runs_in_worker_thread(self) -> None:
        controllers = ControllerRegistry(offload_sync_actions=True)
        main_thread = threading.get_ident()

        @controllers.register()
        class BandsController(Controller):
            def index(self):
                return threading.get_ident()

        thread_id = await controllers.handle("BandsController", "index")(_request())
        assert thread_id != main_thread


class TestEndToEnd:
    @pytest.mark.anyio
    async def test_router_dispatcher_and_controllers(self) -> None:
        controllers = ControllerRegistry()
        dispatcher = Dispatcher()
        router = Router(dispatcher, controllers.handle)

        @controllers.register()
        class AlbumsController(Controller):
            def show(self):
                return f"band {self.params['bandID']} album {self.params['id']}"

        @controllers.register("Admin::PostsController")
        class PostsController(Controller):
            async def index(self):
                return "admin posts"

        router.draw(
            lambda r: (
                r.resources("bands", lambda r2: r2.resources("albums")),
                r.namespace("admin", lambda r2: r2.resources("posts")),
            )
        )
        dispatcher.compile()

        album = await dispatcher.dispatch(RequestContext.build("GET", "/bands/2/albums/5"))
        posts = await dispatcher.dispatch(RequestContext.build("GET", "/admin/posts"))
        assert album == "band 2 album 5"
        assert posts == "admin posts"
