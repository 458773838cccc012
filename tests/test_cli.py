"""Tests for railyard.cli — entrypoint, argument parsing, and ``railyard routes``."""

import sys
import types

import pytest
from conftest import RecordingDispatcher, handle

from railyard.cli import main
from railyard.cli._routes import helper_label
from railyard.config import RouterConfig
from railyard.routing.route import Route
from railyard.routing.router import Router


@pytest.fixture
def _fake_routes_module(monkeypatch: pytest.MonkeyPatch) -> None:
    mod = types.ModuleType("_fake_cli_routes")
    router = Router(RecordingDispatcher(), handle)
    router.root("pages#main")
    router.resources("bands")
    router.namespace("admin", lambda r: r.resources("posts"))
    mod.router = router  # type: ignore[attr-defined]
    mod.empty = Router(RecordingDispatcher(), handle)  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "_fake_cli_routes", mod)


class TestCLIHelp:
    def test_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0

    def test_routes_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "--help"])
        assert exc_info.value.code == 0

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "routes" in capsys.readouterr().out


class TestCLIMissingArgs:
    def test_routes_requires_router(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes"])
        assert exc_info.value.code == 2


@pytest.mark.usefixtures("_fake_routes_module")
class TestRoutesCommand:
    def test_lists_routes(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "_fake_cli_routes"])
        out = capsys.readouterr().out
        lines = out.splitlines()

        assert lines[0].split() == ["HELPER", "METHOD", "PATTERN", "TARGET"]
        assert len(lines) == 2 + 1 + 7 + 7
        assert "root_path" in out
        assert "PagesController#main" in out
        assert "/bands/:id.:format?" in out
        assert "Admin::PostsController#index" in out
        assert "admin_posts_path" in out

    def test_mount_order(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "_fake_cli_routes:router"])
        lines = capsys.readouterr().out.splitlines()[2:]

        assert lines[0].split()[-1] == "PagesController#main"
        assert lines[1].split()[-1] == "BandsController#index"
        assert lines[-1].split()[-1] == "Admin::PostsController#destroy"

    def test_controller_filter(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "_fake_cli_routes", "--controller", "Posts"])
        lines = capsys.readouterr().out.splitlines()[2:]

        assert len(lines) == 7
        assert all("Admin::PostsController" in line for line in lines)

    def test_empty_router(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "_fake_cli_routes:empty"])
        assert "No routes declared." in capsys.readouterr().out

    def test_resolution_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "_fake_cli_routes:missing"])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err


class TestHelperLabel:
    def test_unnamed(self) -> None:
        route = Route("get", "/songs/:id", "SongsController", "show")
        assert helper_label(route, RouterConfig()) == ""

    def test_snake(self) -> None:
        route = Route("get", "/bands/new", "BandsController", "new", name="new_band")
        assert helper_label(route, RouterConfig()) == "new_band_path"

    def test_camel(self) -> None:
        route = Route("get", "/bands/new", "BandsController", "new", name="new_band")
        assert helper_label(route, RouterConfig(helper_case="camel")) == "newBandPath"


@pytest.fixture
def _fake_draw_module(monkeypatch: pytest.MonkeyPatch) -> None:
    mod = types.ModuleType("_fake_cli_draw")

    def draw(router: Router) -> None:
        router.resources("bands", lambda r: r.resource("bio"))

    mod.draw = draw  # type: ignore[attr-defined]
    mod.broken = lambda router: router.match("songs", "songs")  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "_fake_cli_draw", mod)


@pytest.mark.usefixtures("_fake_draw_module")
class TestRoutesFromDrawFunction:
    def test_lists_drawn_routes(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "_fake_cli_draw:draw"])
        out = capsys.readouterr().out

        assert "/bands/:bandID/bio/new" in out
        assert "new_band_bio_path" in out
        assert "BioController#destroy" in out

    def test_camel_helper_case(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "_fake_cli_draw", "--helper-case", "camel"])
        out = capsys.readouterr().out

        assert "newBandBioPath" in out
        assert "new_band_bio_path" not in out

    def test_declaration_error_exits_one(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "_fake_cli_draw:broken"])
        assert exc_info.value.code == 1
        assert "controller#action" in capsys.readouterr().err
