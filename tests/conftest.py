"""Shared fixtures: settings and a stub upstream API served through httpx.MockTransport."""

import json
import logging

import httpx
import pytest

from openai_mcp.config import Settings
from openai_mcp.upstream import OpenAIClient


class StubUpstream:
    """Records every request and answers from a fixed route table."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], tuple[int, object, str | None]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, status: int = 200, json=None, text=None) -> None:
        self.routes[(method, path)] = (status, json, text)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, text="not found")
        status, body, text = route
        if body is not None:
            return httpx.Response(status, json=body)
        return httpx.Response(status, text=text or "")

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    def body(self, index: int = -1) -> dict:
        return json.loads(self.requests[index].content)


@pytest.fixture
def settings():
    return Settings(openai_api_key="sk-test")


@pytest.fixture
def upstream():
    return StubUpstream()


@pytest.fixture
def client(settings, upstream):
    return OpenAIClient.from_settings(settings, transport=upstream.transport)


@pytest.fixture
def restore_logging():
    """Undo root logger changes made by configure_logging()."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
