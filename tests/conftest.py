"""Shared fixtures: a recording dispatch layer and a router mounted on it."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import pytest

from railyard.config import RouterConfig
from railyard.http.request import RequestContext
from railyard.routing.router import Router


@dataclass(frozen=True, slots=True)
class Mounted:
    method: str
    path: str
    fn: Callable[[], dict[str, str]]


class RecordingDispatcher:
    """Dispatch double that records every register() call in order."""

    def __init__(self) -> None:
        self.routes: list[Mounted] = []

    def register(self, method: str, pattern: str, handler: Any) -> None:
        self.routes.append(Mounted(method, pattern, handler))


def handle(controller: str, action: str) -> Callable[[], dict[str, str]]:
    def handler() -> dict[str, str]:
        return {"controller": controller, "action": action}

    return handler


def make_router(**config: Any) -> tuple[Router, RecordingDispatcher]:
    dispatcher = RecordingDispatcher()
    return Router(dispatcher, handle, config=RouterConfig(**config)), dispatcher


@pytest.fixture
def router() -> Router:
    return make_router()[0]


@pytest.fixture
def request_ctx() -> RequestContext:
    return RequestContext.build(headers={"Host": "www.example.com"})


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"
