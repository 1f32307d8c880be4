"""Reporting endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from voxqa.auth.middleware import AuditorDep
from voxqa.database import get_db
from voxqa.schemas.report import AgentPerformance, WeekSummary
from voxqa.storage.repositories import agents_performance, weekly_summary

router = APIRouter()


@router.get("/reports/summary", response_model=list[WeekSummary])
async def get_summary(
    auditor: AuditorDep,
    db: Annotated[AsyncSession, Depends(get_db)],
    client: str | None = None,
):
    """Selection progress and average score per audit week."""
    return await weekly_summary(db, client)


@router.get("/reports/agents", response_model=list[AgentPerformance])
async def get_agents(
    auditor: AuditorDep,
    db: Annotated[AsyncSession, Depends(get_db)],
    client: str | None = None,
):
    """Per-agent audit counts and score statistics, lowest average first."""
    return await agents_performance(db, client)
