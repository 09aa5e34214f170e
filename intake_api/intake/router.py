from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from intake_api.api.schemas import ErrorOut
from intake_api.core.llm.completion_client import CompletionClient
from intake_api.core.llm.deps import get_completion_client
from intake_api.core.middleware.http_logging import request_id_of
from intake_api.intake.operations import CONCERN_ANALYZE, FINAL_REPORT, GENERATE_QUESTIONS
from intake_api.intake.pipeline import IntakeOperation, run_operation
from intake_api.intake.schemas import (
    ConcernAnalysisIn,
    ConcernAnalysisOut,
    FinalReportIn,
    FinalReportOut,
    QuestionsIn,
    QuestionsOut,
)

router = APIRouter(prefix="/v1/intake", tags=["intake"])

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorOut, "description": "Invalid request body."},
    500: {"model": ErrorOut, "description": "Server configuration or internal error."},
    502: {"model": ErrorOut, "description": "Completion provider failed or replied badly."},
}


def _documented(request_model: type[BaseModel], response_model: type[BaseModel]) -> dict:
    # The body is read raw (see `_read_body`), so the request schema is attached by hand.
    return {
        "responses": {200: {"model": response_model}, **_ERROR_RESPONSES},
        "openapi_extra": {
            "requestBody": {
                "required": True,
                "content": {
                    "application/json": {"schema": request_model.model_json_schema()}
                },
            }
        },
    }


async def _read_body(request: Request) -> Any:
    """Decoded JSON body, or None when it is empty or not JSON (validators reject None)."""

    try:
        return await request.json()
    except ValueError:
        return None


async def _run(request: Request, operation: IntakeOperation, client: CompletionClient):
    body = await _read_body(request)
    result = await run_operation(
        operation, body, client=client, request_id=request_id_of(request)
    )
    return JSONResponse(content=result)


@router.post(
    "/concern-analyze",
    summary="Analyze a free-text concern",
    description=(
        "Classify the patient's concern into symptom categories and rewrite it as a short "
        "clinician-style summary. The caller's `sessionId` is always echoed back."
    ),
    **_documented(ConcernAnalysisIn, ConcernAnalysisOut),
)
async def concern_analyze(
    request: Request,
    client: CompletionClient = Depends(get_completion_client),
) -> JSONResponse:
    return await _run(request, CONCERN_ANALYZE, client)


@router.post(
    "/generate-questions",
    summary="Generate questions for a clinician",
    description=(
        "Produce 5-8 neutral questions the patient can ask a clinician. `concernType` in the "
        "response is always the request's value."
    ),
    **_documented(QuestionsIn, QuestionsOut),
)
async def generate_questions(
    request: Request,
    client: CompletionClient = Depends(get_completion_client),
) -> JSONResponse:
    return await _run(request, GENERATE_QUESTIONS, client)


@router.post(
    "/final-report",
    summary="Rewrite a risk assessment for the patient",
    description=(
        "Rephrase a risk assessment computed by the deterministic risk engine. `riskLevel` and "
        "`concernType` in the response are always the request's values."
    ),
    **_documented(FinalReportIn, FinalReportOut),
)
async def final_report(
    request: Request,
    client: CompletionClient = Depends(get_completion_client),
) -> JSONResponse:
    return await _run(request, FINAL_REPORT, client)
