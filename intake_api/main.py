from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from intake_api.api.exception_handlers import register_exception_handlers
from intake_api.api.schemas import HealthOut
from intake_api.core.logging import setup_logging
from intake_api.core.metrics import PrometheusMetricsMiddleware, metrics_router
from intake_api.core.middleware.http_logging import HttpLoggingMiddleware
from intake_api.core.settings import get_settings
from intake_api.intake.router import router as intake_router

setup_logging()

logger = logging.getLogger("intake_api.startup")


def create_app() -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        settings = get_settings()
        # Presence only; the key itself is never logged.
        logger.info(
            "Completion provider configured: %s (model %s)",
            settings.has_openai_api_key,
            settings.openai_model,
        )
        yield

    settings = get_settings()

    app = FastAPI(
        title="TrustMed Intake API",
        description=(
            "Language backend for the TrustMed AI health-education app.\n\n"
            "Design principles:\n"
            "- The language model structures and rephrases text only; it never diagnoses, "
            "treats or triages.\n"
            "- Risk level, concern type and the caller's session id are authoritative: they "
            "always come from the request, never from the model.\n"
            "- Upstream failures return generic errors; details go to server logs only."
        ),
        lifespan=lifespan,
        openapi_tags=[
            {
                "name": "health",
                "description": (
                    "Basic uptime and readiness checks for load balancers and monitoring."
                ),
            },
            {
                "name": "intake",
                "description": (
                    "Intake flow operations: concern analysis, clinician questions and the "
                    "patient-facing final report."
                ),
            },
            {
                "name": "metrics",
                "description": "Prometheus-compatible metrics endpoint.",
            },
        ],
    )

    app.add_middleware(PrometheusMetricsMiddleware)
    app.add_middleware(HttpLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    @app.get(
        "/health",
        response_model=HealthOut,
        tags=["health"],
        summary="Health check",
        description=(
            "Lightweight endpoint to verify the API process is running.\n\n"
            "Does not call the completion provider, so it is safe for frequent uptime checks."
        ),
    )
    async def health() -> HealthOut:
        return HealthOut(status="ok")

    app.include_router(metrics_router)
    app.include_router(intake_router)
    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn on the configured host/port."""

    settings = get_settings()
    uvicorn.run(
        "intake_api.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )
