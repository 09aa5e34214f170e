from __future__ import annotations

from intake_api.core.llm.completion_client import CompletionClient, CompletionConfig
from intake_api.core.settings import get_settings


def get_completion_client() -> CompletionClient:
    """
    Dependency provider for CompletionClient.

    A missing API key still yields a client: it raises ConfigurationError on first use, after
    request validation, so invalid input keeps getting a 400 on a misconfigured server.
    """

    settings = get_settings()
    config = CompletionConfig(
        api_key=settings.openai_api_key if settings.has_openai_api_key else None,
        base_url=settings.openai_base_url,
        model=settings.openai_model,
        timeout_seconds=float(settings.openai_timeout_seconds),
    )
    return CompletionClient(config=config)
