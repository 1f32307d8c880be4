"""Report schemas."""

from datetime import date

from pydantic import BaseModel, field_validator


class WeekSummary(BaseModel):
    week_start: date
    week_end: date
    total: int
    selected: int
    in_review: int
    completed: int
    skipped: int
    avg_score: float | None = None

    @field_validator("avg_score", mode="after")
    @classmethod
    def round_avg(cls, v: float | None) -> float | None:
        return round(v, 1) if v is not None else None


class AgentPerformance(BaseModel):
    agent_id: str
    agent_name: str | None = None
    client_code: str
    total_audits: int
    completed: int
    in_review: int
    skipped: int
    avg_score: float | None = None
    min_score: int | None = None
    max_score: int | None = None
    last_audit_week: date | None = None

    @field_validator("avg_score", mode="after")
    @classmethod
    def round_avg(cls, v: float | None) -> float | None:
        return round(v, 1) if v is not None else None
