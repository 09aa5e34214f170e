"""OpenAPI documentation models for the intake operations.

Requests are validated by `intake_api.intake.validation` and replies are repaired by
`intake_api.intake.normalization`; these models only describe the contracts. Response models
allow extra keys because unknown model output is passed through.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

RiskLevel = Literal["Low", "Moderate", "High"]


class ConcernAnalysisIn(BaseModel):
    freeTextConcern: str = Field(
        min_length=10,
        description="Patient concern in their own words (at least 10 characters once trimmed).",
        examples=["I have had a sharp pain in my chest for two days"],
    )
    sessionId: str | None = Field(
        default=None, description="Client session id, echoed back in the response."
    )
    ageYears: Any = Field(default=None, description="Optional age context.", examples=[42])
    sexAtBirth: Any = Field(default=None, description="Optional sex at birth context.")
    currentPregnancyStatus: Any = Field(
        default=None, description="Optional pregnancy status context."
    )
    locale: str = Field(default="en-US", description="Client locale.")


class ConcernAnalysisOut(BaseModel):
    model_config = ConfigDict(extra="allow")

    sessionId: str | None = Field(
        default=None, description="The caller's session id when one was supplied."
    )
    primaryCategory: str | None = Field(default=None, examples=["Chest pain"])
    candidateCategories: list[Any] = Field(
        default_factory=list,
        description="Candidate symptom categories, primary first. Always a list.",
    )
    clinicalSummary: str | None = Field(
        default=None, description="1-4 sentence clinician-style summary."
    )
    psychosocialFactorsMentioned: bool | None = None
    durationText: str | None = None
    bodyLocations: list[Any] = Field(default_factory=list)
    safetyNotes: list[Any] = Field(
        default_factory=list, description="Developer-facing notes (0-3)."
    )


class QuestionsIn(BaseModel):
    concernType: str = Field(min_length=1, examples=["Chest pain"])
    clinicalSummary: str = Field(min_length=1)
    durationText: str | None = None
    bodyLocations: list[str] = Field(default_factory=list)
    psychosocialFactorsMentioned: bool = False


class QuestionsOut(BaseModel):
    model_config = ConfigDict(extra="allow")

    concernType: str = Field(description="Always the request's concernType.")
    questions: list[Any] = Field(
        default_factory=list, description="5-8 questions to ask a clinician."
    )
    rationaleNotes: list[Any] = Field(default_factory=list)
    safetyNotes: list[Any] = Field(default_factory=list)


class FinalReportIn(BaseModel):
    riskLevel: RiskLevel = Field(description="Computed upstream; never altered by this service.")
    concernType: str = Field(min_length=1)
    symptomSummary: str = Field(min_length=1)
    redFlags: list[str] = Field(description="Warnings from the risk engine (may be empty).")
    recommendations: list[str] = Field(
        description="Next steps from the risk engine (may be empty)."
    )


class FinalReportOut(BaseModel):
    model_config = ConfigDict(extra="allow")

    riskLevel: RiskLevel = Field(description="Always the request's riskLevel.")
    concernType: str = Field(description="Always the request's concernType.")
    summary: str | None = None
    analysis: str | None = None
    recommendations: list[Any] = Field(default_factory=list)
    disclaimer: str | None = None
    safetyNotes: list[Any] = Field(default_factory=list)
