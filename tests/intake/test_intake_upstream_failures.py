"""Failure mapping for the HTTP surface: generic bodies, details only in logs."""

from __future__ import annotations

import logging

import httpx
import pytest
from starlette.testclient import TestClient

from intake_api.core.llm.completion_client import CompletionClient, CompletionConfig
from intake_api.core.settings import get_settings
from intake_api.main import create_app
from tests.intake._fakes import FakeCompletionClient, app_with_fake, post

CONCERN_PATH = "/v1/intake/concern-analyze"
CONCERN_BODY = {"freeTextConcern": "I have had a sharp pain in my chest for two days"}


def _provider_client(response: httpx.Response) -> CompletionClient:
    config = CompletionConfig(api_key="sk-test", base_url="https://llm.test/v1")
    return CompletionClient(config=config, transport=httpx.MockTransport(lambda request: response))


def test_rate_limited_provider_maps_to_generic_502(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)
    provider_error = '{"error": {"message": "Rate limit reached for gpt-5-nano org-secret"}}'
    client = _provider_client(httpx.Response(429, text=provider_error))

    res = post(client, CONCERN_PATH, CONCERN_BODY)

    assert res.status_code == 502
    assert res.json() == {"error": "LLM request failed."}
    assert "Rate limit" not in res.text

    upstream = [r for r in caplog.records if r.name == "intake_api.intake"]
    assert upstream[0].__dict__["upstream_status_code"] == 429
    assert upstream[0].__dict__["detail"] == provider_error


def test_provider_without_content_maps_to_502() -> None:
    client = _provider_client(httpx.Response(200, json={"choices": [{"message": {}}]}))

    res = post(client, CONCERN_PATH, CONCERN_BODY)

    assert res.status_code == 502
    assert res.json() == {"error": "LLM returned no content."}


def test_non_json_model_text_maps_to_502() -> None:
    res = post(FakeCompletionClient("not json"), CONCERN_PATH, CONCERN_BODY)

    assert res.status_code == 502
    assert res.json() == {"error": "LLM returned invalid JSON."}


@pytest.mark.parametrize(
    "model_text",
    ['{"primaryCategory": "Chest pain", "score": NaN}', "[" * 100000],
)
def test_non_standard_or_deeply_nested_model_text_maps_to_502(model_text: str) -> None:
    res = post(FakeCompletionClient(model_text), CONCERN_PATH, CONCERN_BODY)

    assert res.status_code == 502
    assert res.headers["content-type"].startswith("application/json")
    assert res.json() == {"error": "LLM returned invalid JSON."}


def test_missing_api_key_maps_to_generic_500(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OPENAI_API_KEY")
    get_settings.cache_clear()

    with TestClient(create_app()) as client:
        res = client.post(CONCERN_PATH, json=CONCERN_BODY)
        invalid = client.post(CONCERN_PATH, json={"freeTextConcern": "short"})

    assert res.status_code == 500
    assert res.json() == {"error": "Server configuration error."}
    assert "OPENAI_API_KEY" not in res.text
    # Validation still runs first on a misconfigured server.
    assert invalid.status_code == 400


def test_unexpected_error_maps_to_500_without_crashing() -> None:
    fake = FakeCompletionClient(error=RuntimeError("boom"))

    with TestClient(app_with_fake(fake)) as client:
        res = client.post(CONCERN_PATH, json=CONCERN_BODY)
        health = client.get("/health")

    assert res.status_code == 500
    assert res.json() == {"error": "Internal server error."}
    assert health.status_code == 200


@pytest.mark.parametrize(
    ("path", "body"),
    [
        (
            "/v1/intake/generate-questions",
            {"concernType": "Cough", "clinicalSummary": "Dry cough."},
        ),
        (
            "/v1/intake/final-report",
            {
                "riskLevel": "Moderate",
                "concernType": "Cough",
                "symptomSummary": "Dry cough for 3 weeks.",
                "redFlags": [],
                "recommendations": ["Book a primary care visit."],
            },
        ),
    ],
)
def test_every_operation_maps_upstream_failure_to_502(path: str, body: dict) -> None:
    client = _provider_client(httpx.Response(503, text="upstream unavailable"))

    res = post(client, path, body)

    assert res.status_code == 502
    assert res.json() == {"error": "LLM request failed."}
