"""Tests for railyard.http.request — RequestContext."""

import pytest

from railyard.http.request import RequestContext


class TestBuild:
    def test_defaults(self) -> None:
        request = RequestContext.build()
        assert request.method == "GET"
        assert request.path == "/"
        assert request.scheme is None
        assert request.host is None
        assert request.path_params == {}

    def test_method_upper_cased(self) -> None:
        assert RequestContext.build("post", "/bands").method == "POST"

    def test_host(self) -> None:
        request = RequestContext.build(headers={"Host": "www.example.com"}, scheme="https")
        assert request.host == "www.example.com"
        assert request.scheme == "https"


class TestFromASGI:
    def test_scope(self) -> None:
        scope = {
            "type": "http",
            "method": "GET",
            "path": "/bands/7",
            "scheme": "https",
            "headers": [(b"host", b"bands.example")],
            "server": ("127.0.0.1", 8000),
        }
        request = RequestContext.from_asgi(scope)

        assert request.path == "/bands/7"
        assert request.scheme == "https"
        assert request.host == "bands.example"
        assert request.server == ("127.0.0.1", 8000)

    def test_minimal_scope(self) -> None:
        request = RequestContext.from_asgi({"method": "PUT", "path": "/"})
        assert request.headers.raw == ()
        assert request.server is None


class TestWithParams:
    def test_returns_copy(self) -> None:
        request = RequestContext.build(path="/bands/7")
        matched = request.with_params({"id": "7"})

        assert matched.path_params == {"id": "7"}
        assert request.path_params == {}
        assert matched.path == "/bands/7"

    def test_frozen(self) -> None:
        request = RequestContext.build()
        with pytest.raises(AttributeError):
            request.path = "/x"  # type: ignore[misc]
