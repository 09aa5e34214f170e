"""Test doubles for the completion provider."""

from __future__ import annotations

import json
from typing import Any

from fastapi import FastAPI
from starlette.testclient import TestClient

from intake_api.core.llm.deps import get_completion_client
from intake_api.main import create_app


class FakeCompletionClient:
    """Returns a canned reply (or raises) and records every call."""

    def __init__(self, reply: str | dict[str, Any] | None = None, *, error: Exception | None = None):
        self._reply = json.dumps(reply) if isinstance(reply, dict) else reply
        self._error = error
        self.calls: list[dict[str, str]] = []

    async def complete(self, *, instructions: str, content: str) -> str:
        self.calls.append({"instructions": instructions, "content": content})
        if self._error is not None:
            raise self._error
        assert self._reply is not None
        return self._reply


def app_with_fake(fake: Any) -> FastAPI:
    app = create_app()
    app.dependency_overrides[get_completion_client] = lambda: fake
    return app


def post(fake: Any, path: str, body: Any) -> Any:
    """POST `body` as JSON to an app wired to `fake` and return the response."""
    with TestClient(app_with_fake(fake), raise_server_exceptions=False) as client:
        return client.post(path, json=body)
