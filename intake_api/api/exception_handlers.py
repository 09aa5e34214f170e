from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from intake_api.core.llm.completion_client import (
    ConfigurationError,
    EmptyResponseError,
    TransportError,
)
from intake_api.domain.exceptions import (
    IntakeValidationError,
    ResponseParseError,
    UnhandledOperationError,
)

logger = logging.getLogger("intake_api.errors")

# Caller-facing messages are generic on purpose; diagnostics are logged by the pipeline.
_ERROR_RESPONSES: dict[type[Exception], tuple[int, str]] = {
    ConfigurationError: (500, "Server configuration error."),
    TransportError: (502, "LLM request failed."),
    EmptyResponseError: (502, "LLM returned no content."),
    ResponseParseError: (502, "LLM returned invalid JSON."),
    UnhandledOperationError: (500, "Internal server error."),
}


def _log_context(request: Request, status_code: int, error: str) -> dict[str, object]:
    # Route metadata only: no body, no query string.
    return {
        "request_id": getattr(request.state, "request_id", None),
        "http_method": request.method,
        "request_path": request.url.path,
        "status_code": status_code,
        "error": error,
    }


def register_exception_handlers(app: FastAPI) -> None:
    """Register application exception handlers."""

    @app.exception_handler(IntakeValidationError)
    async def handle_intake_validation_error(
        request: Request,
        exc: IntakeValidationError,
    ) -> JSONResponse:
        logger.info(
            "Intake request validation failed",
            extra=_log_context(request, 400, "validation"),
        )
        return JSONResponse(status_code=400, content={"error": exc.message})

    async def handle_pipeline_error(request: Request, exc: Exception) -> JSONResponse:
        status_code, message = next(
            (resp for cls, resp in _ERROR_RESPONSES.items() if isinstance(exc, cls)),
            (500, "Internal server error."),
        )
        logger.info(
            "Intake operation failed",
            extra=_log_context(request, status_code, type(exc).__name__),
        )
        return JSONResponse(status_code=status_code, content={"error": message})

    for exc_class in _ERROR_RESPONSES:
        app.add_exception_handler(exc_class, handle_pipeline_error)
