"""Tests for railyard.templating.integration — helpers inside kida templates."""

import pytest

pytest.importorskip("kida")

from conftest import make_router  # noqa: E402

from railyard.http.request import RequestContext  # noqa: E402
from railyard.templating.integration import (  # noqa: E402
    create_environment,
    install_helpers,
    template_context,
)


def _helpers():
    router, _ = make_router()
    router.resources("bands", lambda r: r.resources("albums"))
    router.match("songs/:id", "songs#show", name="song")
    router.freeze()
    return router.helpers


class TestPathHelpersAsGlobals:
    def test_path_helper(self) -> None:
        env = create_environment(_helpers())
        assert env.from_string("{{ song_path(7) }}").render({}) == "/songs/7"

    def test_nested_helper_with_keywords(self) -> None:
        env = create_environment(_helpers())
        tpl = env.from_string("{{ band_album_path(bandID=3, id=9) }}")
        assert tpl.render({}) == "/bands/3/albums/9"

    def test_path_for(self) -> None:
        env = create_environment(_helpers())
        tpl = env.from_string('{{ path_for("BandsController", "edit", 4) }}')
        assert tpl.render({}) == "/bands/4/edit"

    def test_install_returns_environment(self) -> None:
        from kida import Environment

        env = Environment()
        assert install_helpers(env, _helpers()) is env


class TestTemplateContext:
    def test_url_helper_bound_to_request(self) -> None:
        env = create_environment(_helpers())
        request = RequestContext.build(headers={"Host": "www.example.com"})
        ctx = template_context(_helpers(), request)

        html = env.from_string("{{ song_url(7) }}").render(ctx)
        assert html == "http://www.example.com/songs/7"

    def test_caller_context_wins(self) -> None:
        request = RequestContext.build(headers={"Host": "www.example.com"})
        ctx = template_context(_helpers(), request, song_path="overridden")
        assert ctx["song_path"] == "overridden"
        assert callable(ctx["url_for"])
