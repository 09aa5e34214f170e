from __future__ import annotations

import pytest

from tests.intake._fakes import FakeCompletionClient, post

PATH = "/v1/intake/final-report"
BODY = {
    "riskLevel": "High",
    "concernType": "Chest pain",
    "symptomSummary": "Crushing chest pain with sweating, 9/10.",
    "redFlags": ["Chest pain with sweating"],
    "recommendations": ["Call emergency services now."],
}


def test_model_cannot_downgrade_risk_level() -> None:
    fake = FakeCompletionClient(
        {
            "riskLevel": "Low",
            "concernType": "Indigestion",
            "summary": "LLM_ACTIVE You described severe chest pain.",
            "analysis": "High risk means this needs attention right away.",
            "recommendations": ["Call emergency services now."],
            "disclaimer": "This is not medical advice or a diagnosis.",
        }
    )

    res = post(fake, PATH, BODY)

    assert res.status_code == 200, res.text
    payload = res.json()
    assert payload["riskLevel"] == "High"
    assert payload["concernType"] == "Chest pain"
    assert payload["summary"].startswith("LLM_ACTIVE")
    assert payload["safetyNotes"] == []


def test_empty_red_flags_and_recommendations_are_accepted() -> None:
    fake = FakeCompletionClient({"summary": "LLM_ACTIVE ok"})
    body = {**BODY, "riskLevel": "Low", "redFlags": [], "recommendations": []}

    payload = post(fake, PATH, body).json()

    assert payload["riskLevel"] == "Low"
    assert payload["recommendations"] == []
    assert '"redFlags": []' in fake.calls[0]["content"]


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"riskLevel": "high"}, "riskLevel must be Low, Moderate, or High."),
        ({"redFlags": "none"}, "redFlags and recommendations must be arrays."),
        ({"symptomSummary": ""}, "symptomSummary is required and must be a non-empty string."),
    ],
)
def test_invalid_requests_are_400(overrides: dict, message: str) -> None:
    fake = FakeCompletionClient({})

    res = post(fake, PATH, {**BODY, **overrides})

    assert res.status_code == 400
    assert res.json() == {"error": message}
    assert fake.calls == []
