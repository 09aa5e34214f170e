from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

DEFAULT_MODEL = "gpt-5-nano"


class CompletionError(Exception):
    """Base error for completion client failures."""


class ConfigurationError(CompletionError):
    """Raised when the provider credential is absent. No request is sent."""


class TransportError(CompletionError):
    """
    Raised when the provider answers with a non-success status or the request never completes.

    `status_code` is None when no HTTP response was received (connect error, timeout).
    `body` keeps the raw provider error text for server-side logs only.
    """

    def __init__(self, message: str, *, status_code: int | None = None, body: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class EmptyResponseError(CompletionError):
    """Raised when the provider answers 2xx but no message text can be extracted."""

    def __init__(self, message: str, *, body: str | None = None):
        super().__init__(message)
        self.body = body


@dataclass(frozen=True)
class CompletionConfig:
    api_key: str | None
    base_url: str = "https://api.openai.com/v1"
    model: str = DEFAULT_MODEL
    timeout_seconds: float = 60.0


def _extract_content(data: Any) -> str | None:
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return None
    if isinstance(content, str) and content:
        return content
    return None


class CompletionClient:
    """
    Single-call chat completion adapter for an OpenAI-compatible provider.

    Design notes:
    - Exactly one POST per `complete` call: no retry, no streaming.
    - Requests JSON mode (`response_format=json_object`); the caller still parses defensively.
    - Returns raw message text. Parsing and repair belong to the intake normalizers.
    - No logging in this module (prompts/outputs may contain health information).
    """

    def __init__(
        self,
        *,
        config: CompletionConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._config = config
        self._transport = transport

    @property
    def model(self) -> str:
        return self._config.model

    def _build_payload(self, *, instructions: str, content: str) -> dict[str, Any]:
        return {
            "model": self._config.model,
            "messages": [
                {"role": "system", "content": instructions},
                {"role": "user", "content": content},
            ],
            "response_format": {"type": "json_object"},
        }

    async def complete(self, *, instructions: str, content: str) -> str:
        if not self._config.api_key:
            raise ConfigurationError("OPENAI_API_KEY is not configured")

        url = f"{self._config.base_url.rstrip('/')}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self._config.api_key}",
            "Content-Type": "application/json",
        }
        payload = self._build_payload(instructions=instructions, content=content)

        try:
            async with httpx.AsyncClient(
                timeout=self._config.timeout_seconds, transport=self._transport
            ) as client:
                resp = await client.post(url, headers=headers, json=payload)
        except httpx.TimeoutException as exc:
            raise TransportError("LLM request timed out") from exc
        except httpx.HTTPError as exc:
            raise TransportError("LLM request failed") from exc

        if not resp.is_success:
            raise TransportError(
                "LLM service returned an error",
                status_code=resp.status_code,
                body=resp.text,
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise EmptyResponseError("LLM response body was not JSON", body=resp.text) from exc

        content_text = _extract_content(data)
        if content_text is None:
            raise EmptyResponseError("LLM returned no content", body=resp.text)
        return content_text
