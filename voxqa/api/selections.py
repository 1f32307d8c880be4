"""Week, selection run and selection management endpoints."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from voxqa.auth.middleware import AuditorDep
from voxqa.database import get_db
from voxqa.engine.classifier import CampaignClass, campaign_class
from voxqa.engine.week import compute_week
from voxqa.models import Recording, Selection
from voxqa.schemas.selection import (
    CatchUpRequest,
    RunSelectionRequest,
    SelectionOut,
    SelectionSummary,
    SelectionUpdate,
    WeekWindow,
    parse_status,
)
from voxqa.services.selection import select_catch_up, select_for_day
from voxqa.storage.repositories import (
    get_selection_with_recording,
    list_selections,
    update_selection,
)

router = APIRouter()


def _selection_out(selection: Selection, recording: Recording) -> SelectionOut:
    cls = campaign_class(selection.client_code, selection.agent_id, recording.project_id)
    out = SelectionOut.model_validate(selection)
    out.campaign = cls.value if cls else None
    return out


@router.get("/week", response_model=WeekWindow)
async def get_week(auditor: AuditorDep, date: date | None = None):
    """Audit week containing the given date (default: the current target date)."""
    return compute_week(date)


@router.post("/selections/run", response_model=SelectionSummary)
async def run_selection(
    body: RunSelectionRequest,
    auditor: AuditorDep,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """
    Select the recordings to audit for one day.
    Re-running the same day inserts nothing new.
    """
    return await select_for_day(db, body.target_date)


@router.post("/selections/catch-up", response_model=list[SelectionSummary])
async def catch_up(
    body: CatchUpRequest,
    auditor: AuditorDep,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Run the selection for every working day after last_covered."""
    return await select_catch_up(db, body.last_covered)


@router.get("/selections", response_model=list[SelectionOut])
async def get_selections(
    auditor: AuditorDep,
    db: Annotated[AsyncSession, Depends(get_db)],
    week_start: date | None = None,
    client: str | None = None,
    status_filter: Annotated[str | None, Query(alias="status")] = None,
    campaign: CampaignClass | None = None,
):
    """List one week's selections (default: the current audit week)."""
    if status_filter is not None:
        status_filter = parse_status(status_filter).value
    start = week_start or compute_week().start
    rows = await list_selections(db, start, client=client, status=status_filter)
    out = [_selection_out(sel, rec) for sel, rec in rows]
    if campaign is not None:
        out = [s for s in out if s.campaign == campaign.value]
    return out


@router.get("/selections/{selection_id}", response_model=SelectionOut)
async def get_selection(
    selection_id: int,
    auditor: AuditorDep,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    found = await get_selection_with_recording(db, selection_id)
    if not found:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Selection not found",
        )
    return _selection_out(*found)


@router.patch("/selections/{selection_id}", response_model=SelectionOut)
async def patch_selection(
    selection_id: int,
    body: SelectionUpdate,
    auditor: AuditorDep,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Update status, score or notes of a selection."""
    new_status = parse_status(body.status).value if body.status is not None else None
    found = await get_selection_with_recording(db, selection_id)
    if not found:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Selection not found",
        )
    selection, recording = found
    await update_selection(db, selection, status=new_status, score=body.score, notes=body.notes)
    return _selection_out(selection, recording)
