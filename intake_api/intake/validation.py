"""Request validators for the intake operations.

Each validator takes the decoded JSON body (any type) and returns a human-readable error
message, or None when the body is acceptable. Validators never raise and never touch the
network; the first failing check wins.
"""

from __future__ import annotations

from typing import Any

RISK_LEVELS: tuple[str, ...] = ("Low", "Moderate", "High")

MIN_CONCERN_CHARS = 10

BODY_NOT_OBJECT = "Body must be a JSON object."


def _has_text(body: dict[str, Any], field: str, *, min_chars: int = 1) -> bool:
    value = body.get(field)
    return isinstance(value, str) and len(value.strip()) >= min_chars


def validate_concern_request(body: Any) -> str | None:
    if not isinstance(body, dict):
        return BODY_NOT_OBJECT
    if not _has_text(body, "freeTextConcern", min_chars=MIN_CONCERN_CHARS):
        return (
            f"freeTextConcern is required and must be at least {MIN_CONCERN_CHARS} characters."
        )
    return None


def validate_questions_request(body: Any) -> str | None:
    if not isinstance(body, dict):
        return BODY_NOT_OBJECT
    for field in ("concernType", "clinicalSummary"):
        if not _has_text(body, field):
            return f"{field} is required and must be a non-empty string."
    return None


def validate_final_report_request(body: Any) -> str | None:
    if not isinstance(body, dict):
        return BODY_NOT_OBJECT
    # Case-sensitive: "high" is rejected.
    risk_level = body.get("riskLevel")
    if not isinstance(risk_level, str) or risk_level not in RISK_LEVELS:
        return "riskLevel must be Low, Moderate, or High."
    for field in ("concernType", "symptomSummary"):
        if not _has_text(body, field):
            return f"{field} is required and must be a non-empty string."
    if not isinstance(body.get("redFlags"), list) or not isinstance(
        body.get("recommendations"), list
    ):
        return "redFlags and recommendations must be arrays."
    return None
