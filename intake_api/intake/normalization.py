"""Repair model replies into the response contracts.

The model is trusted for prose only. Structured fields get two treatments:

- list fields are always lists (missing/null/other types become `[]`);
- authoritative fields (risk level, concern type, caller session id) are copied from the
  prepared request, whatever the model wrote.

Anything else, including keys outside the contract, passes through untouched.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

from intake_api.domain.exceptions import ResponseParseError

CONCERN_LIST_FIELDS = ("candidateCategories", "bodyLocations", "safetyNotes")
QUESTIONS_LIST_FIELDS = ("questions", "rationaleNotes", "safetyNotes")
FINAL_REPORT_LIST_FIELDS = ("recommendations", "safetyNotes")


def _reject_constant(token: str) -> Any:
    # NaN and Infinity are not JSON and cannot be rendered back to the caller.
    raise ValueError(f"non-standard JSON constant {token}")


def parse_model_object(raw_text: str) -> dict[str, Any]:
    """Parse the model reply; anything but a JSON object is a parse failure."""

    try:
        parsed = json.loads(raw_text, parse_constant=_reject_constant)
    except (TypeError, ValueError, RecursionError) as exc:
        raise ResponseParseError("LLM returned invalid JSON", raw_text=raw_text) from exc
    if not isinstance(parsed, dict):
        raise ResponseParseError("LLM JSON must be an object", raw_text=raw_text)
    return parsed


def _coerce_lists(parsed: dict[str, Any], fields: Iterable[str]) -> None:
    for field in fields:
        if not isinstance(parsed.get(field), list):
            parsed[field] = []


def normalize_concern_response(raw_text: str, payload: dict[str, Any]) -> dict[str, Any]:
    parsed = parse_model_object(raw_text)

    # Fall back to the primary category before generic list coercion empties the field.
    if not isinstance(parsed.get("candidateCategories"), list):
        primary = parsed.get("primaryCategory")
        parsed["candidateCategories"] = [primary] if primary else []
    _coerce_lists(parsed, CONCERN_LIST_FIELDS)

    session_id = payload.get("sessionId")
    if session_id is not None:
        parsed["sessionId"] = session_id
    return parsed


def normalize_questions_response(raw_text: str, payload: dict[str, Any]) -> dict[str, Any]:
    parsed = parse_model_object(raw_text)
    _coerce_lists(parsed, QUESTIONS_LIST_FIELDS)
    parsed["concernType"] = payload["concernType"]
    return parsed


def normalize_final_report_response(raw_text: str, payload: dict[str, Any]) -> dict[str, Any]:
    parsed = parse_model_object(raw_text)
    _coerce_lists(parsed, FINAL_REPORT_LIST_FIELDS)
    parsed["riskLevel"] = payload["riskLevel"]
    parsed["concernType"] = payload["concernType"]
    return parsed
