from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

from intake_api.core.llm.completion_client import (
    ConfigurationError,
    EmptyResponseError,
    TransportError,
)
from intake_api.core.metrics import record_operation_outcome
from intake_api.domain.exceptions import (
    IntakeValidationError,
    ResponseParseError,
    UnhandledOperationError,
)
from intake_api.intake.prompts import PromptPair

logger = logging.getLogger("intake_api.intake")

Payload = dict[str, Any]


class CompletionBackend(Protocol):
    async def complete(self, *, instructions: str, content: str) -> str: ...


@dataclass(frozen=True)
class IntakeOperation:
    """
    Strategy object describing one intake operation.

    Every operation runs the same stages; only these functions differ:
    - validate: raw body -> error message or None (never raises)
    - prepare: validated body -> normalized request view
    - compose: request view -> (instructions, content)
    - normalize: (model text, request view) -> response dict
    """

    name: str
    validate: Callable[[Any], str | None]
    prepare: Callable[[dict[str, Any]], Payload]
    compose: Callable[[Payload], PromptPair]
    normalize: Callable[[str, Payload], dict[str, Any]]


async def run_operation(
    operation: IntakeOperation,
    body: Any,
    *,
    client: CompletionBackend,
    request_id: str | None = None,
) -> dict[str, Any]:
    """
    Run validate -> prepare -> compose -> complete -> normalize for one request.

    Failures are logged here with full diagnostics and re-raised; exception handlers turn
    them into generic caller-facing messages. Unknown exceptions are wrapped in
    UnhandledOperationError so they never escape unmapped.
    """

    log_extra: dict[str, Any] = {"request_id": request_id, "operation": operation.name}

    error = operation.validate(body)
    if error is not None:
        record_operation_outcome(operation=operation.name, outcome="invalid_request")
        raise IntakeValidationError(error)

    try:
        payload = operation.prepare(body)
        prompts = operation.compose(payload)
        raw_text = await client.complete(
            instructions=prompts.instructions, content=prompts.content
        )
        result = operation.normalize(raw_text, payload)
    except ConfigurationError:
        record_operation_outcome(operation=operation.name, outcome="configuration_error")
        logger.error(
            "Completion provider credential is missing (set OPENAI_API_KEY)",
            extra={**log_extra, "error": "configuration"},
        )
        raise
    except TransportError as exc:
        record_operation_outcome(operation=operation.name, outcome="upstream_error")
        logger.error(
            "Completion provider request failed",
            exc_info=exc.status_code is None,
            extra={
                **log_extra,
                "error": "upstream_transport",
                "upstream_status_code": exc.status_code,
                "detail": exc.body,
            },
        )
        raise
    except EmptyResponseError as exc:
        record_operation_outcome(operation=operation.name, outcome="upstream_empty")
        logger.error(
            "Completion provider returned no content",
            extra={**log_extra, "error": "upstream_empty", "detail": exc.body},
        )
        raise
    except ResponseParseError as exc:
        record_operation_outcome(operation=operation.name, outcome="upstream_invalid_json")
        logger.error(
            "Failed to parse model JSON",
            extra={**log_extra, "error": "upstream_invalid_json", "detail": exc.raw_text},
        )
        raise
    except Exception as exc:  # noqa: BLE001 - operation boundary
        record_operation_outcome(operation=operation.name, outcome="internal_error")
        logger.exception(
            "Unhandled error in intake operation", extra={**log_extra, "error": "internal"}
        )
        raise UnhandledOperationError(f"{operation.name} failed") from exc

    record_operation_outcome(operation=operation.name, outcome="ok")
    return result
