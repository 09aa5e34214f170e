from __future__ import annotations

from intake_api.intake.normalization import (
    normalize_concern_response,
    normalize_final_report_response,
    normalize_questions_response,
)
from intake_api.intake.payloads import (
    prepare_concern_payload,
    prepare_final_report_payload,
    prepare_questions_payload,
)
from intake_api.intake.pipeline import IntakeOperation
from intake_api.intake.prompts import (
    compose_concern_prompts,
    compose_final_report_prompts,
    compose_questions_prompts,
)
from intake_api.intake.validation import (
    validate_concern_request,
    validate_final_report_request,
    validate_questions_request,
)

CONCERN_ANALYZE = IntakeOperation(
    name="concern-analyze",
    validate=validate_concern_request,
    prepare=prepare_concern_payload,
    compose=compose_concern_prompts,
    normalize=normalize_concern_response,
)

GENERATE_QUESTIONS = IntakeOperation(
    name="generate-questions",
    validate=validate_questions_request,
    prepare=prepare_questions_payload,
    compose=compose_questions_prompts,
    normalize=normalize_questions_response,
)

FINAL_REPORT = IntakeOperation(
    name="final-report",
    validate=validate_final_report_request,
    prepare=prepare_final_report_payload,
    compose=compose_final_report_prompts,
    normalize=normalize_final_report_response,
)
