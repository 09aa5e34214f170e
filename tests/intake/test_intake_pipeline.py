from __future__ import annotations

import asyncio
import logging

import pytest

from intake_api.core.llm.completion_client import ConfigurationError, TransportError
from intake_api.domain.exceptions import (
    IntakeValidationError,
    ResponseParseError,
    UnhandledOperationError,
)
from intake_api.intake.operations import CONCERN_ANALYZE, FINAL_REPORT, GENERATE_QUESTIONS
from intake_api.intake.pipeline import run_operation
from tests.intake._fakes import FakeCompletionClient


def _run(operation, body, fake: FakeCompletionClient) -> dict:
    return asyncio.run(run_operation(operation, body, client=fake, request_id="req-1"))


@pytest.mark.parametrize(
    ("operation", "body"),
    [
        (CONCERN_ANALYZE, {"freeTextConcern": "123456789"}),
        (GENERATE_QUESTIONS, {"concernType": "Headache"}),
        (FINAL_REPORT, {"riskLevel": "Severe"}),
        (FINAL_REPORT, None),
    ],
)
def test_invalid_request_never_reaches_the_provider(operation, body) -> None:
    fake = FakeCompletionClient({"unused": True})

    with pytest.raises(IntakeValidationError):
        _run(operation, body, fake)

    assert fake.calls == []


def test_valid_request_makes_exactly_one_completion_call() -> None:
    fake = FakeCompletionClient({"questions": ["What should I watch for?"]})

    result = _run(
        GENERATE_QUESTIONS,
        {"concernType": "Headache", "clinicalSummary": "Daily headaches for a week."},
        fake,
    )

    assert len(fake.calls) == 1
    assert fake.calls[0]["instructions"].startswith("You are the backend language engine")
    assert '"concernType": "Headache"' in fake.calls[0]["content"]
    assert result == {
        "questions": ["What should I watch for?"],
        "rationaleNotes": [],
        "safetyNotes": [],
        "concernType": "Headache",
    }


def test_upstream_errors_are_logged_with_detail_and_reraised(
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.INFO, logger="intake_api.intake")
    fake = FakeCompletionClient(
        error=TransportError("LLM service returned an error", status_code=429, body="slow down")
    )

    with pytest.raises(TransportError):
        _run(CONCERN_ANALYZE, {"freeTextConcern": "Sore throat since Monday"}, fake)

    records = [r for r in caplog.records if r.name == "intake_api.intake"]
    assert len(records) == 1
    assert records[0].levelno == logging.ERROR
    assert records[0].__dict__["operation"] == "concern-analyze"
    assert records[0].__dict__["upstream_status_code"] == 429
    assert records[0].__dict__["detail"] == "slow down"
    assert records[0].__dict__["request_id"] == "req-1"


def test_parse_failure_logs_raw_model_text(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="intake_api.intake")

    with pytest.raises(ResponseParseError):
        _run(
            FINAL_REPORT,
            {
                "riskLevel": "Low",
                "concernType": "Cough",
                "symptomSummary": "Mild cough.",
                "redFlags": [],
                "recommendations": [],
            },
            FakeCompletionClient("not json"),
        )

    records = [r for r in caplog.records if r.name == "intake_api.intake"]
    assert records[0].__dict__["detail"] == "not json"


def test_configuration_error_is_reraised() -> None:
    fake = FakeCompletionClient(error=ConfigurationError("OPENAI_API_KEY is not configured"))
    with pytest.raises(ConfigurationError):
        _run(CONCERN_ANALYZE, {"freeTextConcern": "Sore throat since Monday"}, fake)


def test_unexpected_errors_are_wrapped_at_the_operation_boundary(
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.INFO, logger="intake_api.intake")
    fake = FakeCompletionClient(error=RuntimeError("socket exploded"))

    with pytest.raises(UnhandledOperationError) as excinfo:
        _run(CONCERN_ANALYZE, {"freeTextConcern": "Sore throat since Monday"}, fake)

    assert isinstance(excinfo.value.__cause__, RuntimeError)
    records = [r for r in caplog.records if r.name == "intake_api.intake"]
    assert records[0].exc_info
