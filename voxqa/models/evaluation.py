"""Evaluation and change-log models."""

from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from voxqa.database import Base

JSONType = JSON().with_variant(JSONB(), "postgresql")


class Evaluation(Base):
    """Scored judgments for one recording.

    original_score / original_judgments are written once, on insert, and are
    the baseline every later correction is compared against.
    """

    __tablename__ = "evaluations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    recording_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("recordings.id"), unique=True, nullable=False
    )
    selection_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("audit_selections.id"), nullable=False, index=True
    )
    rubric_id: Mapped[str] = mapped_column(String(50), nullable=False)
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    original_score: Mapped[int] = mapped_column(Integer, nullable=False)
    judgments: Mapped[dict] = mapped_column(JSONType, nullable=False)
    original_judgments: Mapped[dict] = mapped_column(JSONType, nullable=False)
    transcript: Mapped[str | None] = mapped_column(Text, nullable=True)
    summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    evaluator: Mapped[str] = mapped_column(String(50), nullable=False, default="judgment_source")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )


class EvaluationChange(Base):
    """Append-only log of reviewer corrections."""

    __tablename__ = "evaluation_changes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    evaluation_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("evaluations.id"), nullable=False
    )
    selection_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("audit_selections.id"), nullable=False, index=True
    )
    actor_id: Mapped[str] = mapped_column(String(36), nullable=False)
    actor_name: Mapped[str] = mapped_column(String(120), nullable=False)
    changes: Mapped[list] = mapped_column(JSONType, nullable=False)
    score_before: Mapped[int | None] = mapped_column(Integer, nullable=True)
    score_after: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
