"""Evaluation API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from voxqa.schemas.judgment import CriterionChange, JudgmentSet, ScoreResult


class ChangeOut(BaseModel):
    """One change-log record."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    actor_id: str
    actor_name: str
    changes: list[CriterionChange]
    score_before: int | None = None
    score_after: int | None = None
    created_at: datetime


class EvaluationOut(BaseModel):
    """Current and original scoring of one recording, with its change log."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    selection_id: int
    recording_id: int
    rubric_id: str
    score: int
    original_score: int
    judgments: dict
    original_judgments: dict
    transcript: str | None = None
    summary: str | None = None
    created_at: datetime
    updated_at: datetime
    changes: list[ChangeOut] = Field(default_factory=list)


class EvaluationRecorded(BaseModel):
    """POST /v1/selections/{id}/evaluation response."""

    evaluation: EvaluationOut
    applied_overrides: list[str] = Field(default_factory=list)
    high_impact_failed: bool = False


class CorrectionRequest(BaseModel):
    """PATCH /v1/selections/{id}/evaluation request."""

    judgments: JudgmentSet
    score: int | None = Field(default=None, ge=0, le=100)


class CorrectionResult(BaseModel):
    score: int
    changed: bool
    change: ChangeOut | None = None


class OverridesRequest(BaseModel):
    """POST /v1/rubrics/{id}/overrides request."""

    judgments: JudgmentSet
    transcript: str | None = None
    unintelligible: bool | None = None


class OverridesResponse(BaseModel):
    judgments: JudgmentSet
    applied: list[str]


class ScoreResponse(ScoreResult):
    rubric_id: str
