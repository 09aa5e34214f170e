"""Normalized request views.

Run after validation. The returned dicts have a fixed key order: they are serialized into
prompt content as-is and are the source of every authoritative field in the response.
"""

from __future__ import annotations

from typing import Any

DEFAULT_LOCALE = "en-US"


def prepare_concern_payload(body: dict[str, Any]) -> dict[str, Any]:
    locale = body.get("locale")
    return {
        "sessionId": body.get("sessionId"),
        "locale": DEFAULT_LOCALE if locale is None else locale,
        "freeTextConcern": body["freeTextConcern"],
        "ageYears": body.get("ageYears"),
        "sexAtBirth": body.get("sexAtBirth"),
        "currentPregnancyStatus": body.get("currentPregnancyStatus"),
    }


def prepare_questions_payload(body: dict[str, Any]) -> dict[str, Any]:
    body_locations = body.get("bodyLocations")
    return {
        "concernType": body["concernType"],
        "clinicalSummary": body["clinicalSummary"],
        "durationText": body.get("durationText"),
        "bodyLocations": list(body_locations) if isinstance(body_locations, list) else [],
        "psychosocialFactorsMentioned": bool(body.get("psychosocialFactorsMentioned")),
    }


def prepare_final_report_payload(body: dict[str, Any]) -> dict[str, Any]:
    # Risk level, red flags and recommendations come from the deterministic risk engine
    # upstream of this service and are forwarded untouched.
    return {
        "riskLevel": body["riskLevel"],
        "concernType": body["concernType"],
        "symptomSummary": body["symptomSummary"],
        "redFlags": list(body["redFlags"]),
        "recommendations": list(body["recommendations"]),
    }
