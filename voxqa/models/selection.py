"""Audit selection model."""

from datetime import date, datetime, timezone

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from voxqa.database import Base
from voxqa.engine.catalog import EXEMPT_CLIENT

# One selection per agent per week, except for the exhaustively audited client.
_NON_EXEMPT = text(f"client_code <> '{EXEMPT_CLIENT}'")


class Selection(Base):
    """Recording chosen for audit in a given week."""

    __tablename__ = "audit_selections"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    recording_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("recordings.id"), unique=True, nullable=False
    )
    agent_id: Mapped[str] = mapped_column(String(20), nullable=False)
    agent_name: Mapped[str | None] = mapped_column(String(120), nullable=True)
    client_code: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    week_start: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    week_end: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="selected", index=True
    )  # selected|in_review|completed|skipped
    score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )

    __table_args__ = (
        Index(
            "uq_selection_agent_week",
            "agent_id",
            "week_start",
            unique=True,
            postgresql_where=_NON_EXEMPT,
            sqlite_where=_NON_EXEMPT,
        ),
    )
