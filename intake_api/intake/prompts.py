from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

_PREAMBLE = [
    "You are the backend language engine for TrustMed AI, a mobile health education assistant.",
    "You only restructure and rephrase language. Clinical decisions are made elsewhere, in code.",
]

_SAFETY_RULES = [
    "Safety rules:",
    "- Do NOT diagnose any condition.",
    "- Do NOT suggest treatments, medications, doses, or home remedies.",
    "- Do NOT give probabilities or certainty about causes "
    '(no "likely", "unlikely", or named diseases as explanations).',
    "- Do NOT make triage decisions (e.g. emergency room vs. primary care); code handles triage.",
    "- Do NOT change any value you are told is fixed.",
    "- Your output is reviewed by additional safety checks before any patient sees it.",
]

_OUTPUT_RULES = [
    "Output requirements:",
    "- Output MUST be a single valid JSON object and nothing else.",
    "- Do NOT include keys that are not listed in the shape above.",
    "- Do NOT wrap the JSON in backticks, markdown, or commentary.",
]


def _render(*sections: list[str]) -> str:
    lines: list[str] = []
    for section in sections:
        if lines:
            lines.append("")
        lines.extend(section)
    return "\n".join(lines)


CONCERN_ANALYSIS_INSTRUCTIONS = _render(
    _PREAMBLE,
    _SAFETY_RULES,
    [
        "Your ONLY task for this request:",
        "1) Classify the patient's free-text concern into a primary symptom category.",
        "2) Add 2-4 further candidate categories when relevant.",
        "3) Rewrite the concern as a concise, neutral, clinician-style summary.",
        "4) Say whether psychosocial factors (stress, mood, social context) are mentioned.",
        "5) Extract duration text and body location words only if clearly stated.",
        "6) Add short, general safety notes for developers (never shown to the patient).",
    ],
    [
        "Required JSON shape:",
        "{",
        '  "sessionId": string (optional, echo the one you were given),',
        '  "primaryCategory": string,',
        '  "candidateCategories": string[],',
        '  "clinicalSummary": string,',
        '  "psychosocialFactorsMentioned": boolean,',
        '  "durationText": string (optional),',
        '  "bodyLocations": string[] (optional),',
        '  "safetyNotes": string[]',
        "}",
        "",
        "Constraints:",
        '- primaryCategory: short human-readable label, e.g. "Chest pain".',
        "- candidateCategories: 1-5 short labels, primaryCategory first.",
        "- clinicalSummary: 1-4 neutral, professional sentences.",
        "- safetyNotes: 0-3 brief notes in general terms only.",
    ],
    _OUTPUT_RULES,
)

QUESTIONS_INSTRUCTIONS = _render(
    _PREAMBLE,
    _SAFETY_RULES
    + ["- Do NOT tell the patient what will happen or what the clinician will do."],
    [
        "Your ONLY task for this request: write neutral questions the patient can ask a",
        "licensed clinician, based on a symptom category and a short clinical-style summary.",
        "",
        "You will receive concernType, clinicalSummary, and optionally durationText,",
        "bodyLocations and psychosocialFactorsMentioned.",
        "",
        "1) Write 5-8 clear, respectful questions, each a full sentence.",
        "2) Focus on understanding, next steps, and what to monitor.",
        "3) Prefer open-ended phrasing over yes/no questions.",
        "4) Tailor the questions to concernType and clinicalSummary without adding diagnoses.",
    ],
    [
        "Required JSON shape:",
        "{",
        '  "concernType": string (copy the input value exactly),',
        '  "questions": string[] (5-8 items),',
        '  "rationaleNotes": string[] (developer-facing, what each question is about),',
        '  "safetyNotes": string[] (0-3 items: risks, limitations, developer cautions)',
        "}",
    ],
    _OUTPUT_RULES,
)

FINAL_REPORT_INSTRUCTIONS = _render(
    _PREAMBLE,
    _SAFETY_RULES
    + [
        "- Do NOT change the risk level (Low, Moderate, High) or the concern type.",
        "- Do NOT weaken or drop any red flag implied by the input.",
        "- Do NOT add triage advice beyond the recommendations provided.",
        "- Keep the language educational, gentle and non-alarming, but honest.",
    ],
    [
        "Your ONLY task for this request: rewrite a risk assessment that was computed by",
        "deterministic code into clear, empathetic language for the patient.",
        "",
        "You will receive riskLevel ('Low' | 'Moderate' | 'High'), concernType,",
        "symptomSummary, redFlags (warnings from code) and recommendations (next steps from code).",
        "",
        '1) "summary": 1-3 plain-language sentences restating the situation.',
        '   Include the phrase "LLM_ACTIVE" so developers can confirm the model was used.',
        '2) "analysis": 2-4 sentences on what this risk level means in general and what',
        "   the patient should be mindful of.",
        '3) "recommendations": a cleaned-up list consistent with the given recommendations.',
        '4) "disclaimer": state that this is not medical advice or a diagnosis and does not',
        "   replace a clinician.",
        '5) "safetyNotes": 0-3 optional notes for developers (not shown to patients).',
    ],
    [
        "Required JSON shape:",
        "{",
        '  "riskLevel": "Low" | "Moderate" | "High" (copy the input value exactly),',
        '  "concernType": string (copy the input value exactly),',
        '  "summary": string,',
        '  "analysis": string,',
        '  "recommendations": string[],',
        '  "disclaimer": string,',
        '  "safetyNotes": string[]',
        "}",
    ],
    _OUTPUT_RULES,
)


@dataclass(frozen=True)
class PromptPair:
    instructions: str
    content: str


def _dump(payload: dict[str, Any]) -> str:
    # Key order follows the prepared payload, so identical requests give identical prompts.
    return json.dumps(payload, indent=2, ensure_ascii=False)


def compose_concern_prompts(payload: dict[str, Any]) -> PromptPair:
    context = {
        "ageYears": payload.get("ageYears"),
        "sexAtBirth": payload.get("sexAtBirth"),
        "currentPregnancyStatus": payload.get("currentPregnancyStatus"),
        "locale": payload.get("locale"),
        "sessionId": payload.get("sessionId"),
    }
    content = "\n".join(
        [
            "Free-text concern from patient (verbatim):",
            payload["freeTextConcern"].strip(),
            "",
            "Context (may be partial, do not over-interpret):",
            _dump(context),
        ]
    )
    return PromptPair(instructions=CONCERN_ANALYSIS_INSTRUCTIONS, content=content)


def compose_questions_prompts(payload: dict[str, Any]) -> PromptPair:
    content = "\n".join(["Concern and summary from TrustMed AI:", _dump(payload)])
    return PromptPair(instructions=QUESTIONS_INSTRUCTIONS, content=content)


def compose_final_report_prompts(payload: dict[str, Any]) -> PromptPair:
    content = "\n".join(
        ["Risk assessment from TrustMed AI (computed by deterministic code):", _dump(payload)]
    )
    return PromptPair(instructions=FINAL_REPORT_INSTRUCTIONS, content=content)
