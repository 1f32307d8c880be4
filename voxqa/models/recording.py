"""Recording model - written by the discovery/enrichment collaborator."""

from datetime import date, datetime, timezone

from sqlalchemy import BigInteger, Date, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from voxqa.database import Base


class Recording(Base):
    """Call recording found on a source server, enriched with agent data."""

    __tablename__ = "recordings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    file_path: Mapped[str] = mapped_column(String(700), unique=True, nullable=False)
    client_code: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    file_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    file_size_bytes: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    agent_id: Mapped[str | None] = mapped_column(String(20), nullable=True, index=True)
    agent_name: Mapped[str | None] = mapped_column(String(120), nullable=True)
    project_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    call_duration_seconds: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
