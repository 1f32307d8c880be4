"""Judgment, score and change-log schemas."""

from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class CriterionJudgment(BaseModel):
    """One criterion outcome. When not_applicable is set, satisfied is ignored."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    key: str
    satisfied: bool = False
    not_applicable: bool = Field(
        default=False, validation_alias=AliasChoices("not_applicable", "na")
    )
    rationale: str = ""
    quote: str | None = None
    timestamp_seconds: int | None = Field(
        default=None, validation_alias=AliasChoices("timestamp_seconds", "timestampSeconds")
    )

    @field_validator("timestamp_seconds", mode="before")
    @classmethod
    def round_timestamp(cls, v):
        if isinstance(v, float):
            return int(round(v))
        return v


class JudgmentSet(BaseModel):
    """Judgments for every criterion of one rubric, plus recording-level signals."""

    general: list[CriterionJudgment] = Field(default_factory=list)
    high_impact: list[CriterionJudgment] = Field(
        default_factory=list, validation_alias=AliasChoices("high_impact", "highImpact")
    )
    unintelligible: bool = False
    transcript: str = ""
    summary: str = ""

    model_config = ConfigDict(populate_by_name=True)


class RawCriterion(BaseModel):
    """Per-criterion answer exactly as the judgment source returns it."""

    model_config = ConfigDict(extra="ignore")

    satisfied: bool = False
    na: bool = False
    rationale: str = ""
    quote: str | None = None
    timestamp_seconds: float | None = Field(
        default=None, validation_alias=AliasChoices("timestampSeconds", "timestamp_seconds")
    )


class JudgmentPayload(BaseModel):
    """Top-level payload from the judgment source."""

    model_config = ConfigDict(extra="ignore")

    unintelligible: bool = False
    transcript: str = ""
    summary: str = ""
    general: dict[str, RawCriterion] = Field(default_factory=dict)
    high_impact: dict[str, RawCriterion] = Field(
        default_factory=dict, validation_alias=AliasChoices("highImpact", "high_impact")
    )


class ResolvedCriterion(BaseModel):
    """Criterion state after scoring, for display and audit."""

    key: str
    label: str
    weight: int | None = None
    satisfied: bool
    not_applicable: bool = False
    rationale: str = ""
    quote: str | None = None
    timestamp_seconds: int | None = None


class ScoreResult(BaseModel):
    """Final score with per-criterion breakdown."""

    score: int
    high_impact_failed: bool
    unintelligible: bool = False
    applicable_weight: int
    earned_weight: int
    general: list[ResolvedCriterion] = Field(default_factory=list)
    high_impact: list[ResolvedCriterion] = Field(default_factory=list)


class CriterionChange(BaseModel):
    """One criterion outcome changed by a reviewer."""

    key: str
    kind: Literal["general", "high_impact"]
    label: str
    from_: str = Field(serialization_alias="from", validation_alias=AliasChoices("from", "from_"))
    to: str

    model_config = ConfigDict(populate_by_name=True)
