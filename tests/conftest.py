from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _provider_settings(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("OPENAI_API_KEY", "test-key")
    monkeypatch.setenv("OPENAI_BASE_URL", "https://llm.test/v1")
    # Settings are cached via @lru_cache; clear so each test sees its own environment.
    from intake_api.core.settings import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from intake_api.main import create_app

    app = create_app()
    with TestClient(app) as c:
        yield c
