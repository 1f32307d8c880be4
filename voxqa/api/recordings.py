"""Recording ingestion from the discovery/enrichment collaborator."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from voxqa.auth.middleware import AuditorDep
from voxqa.database import get_db
from voxqa.schemas.selection import RecordingIn, RecordingIngestResult
from voxqa.storage.repositories import ingest_recordings

router = APIRouter()


@router.post("/recordings", response_model=RecordingIngestResult)
async def post_recordings(
    body: list[RecordingIn],
    auditor: AuditorDep,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Store enriched recordings. Paths already known are left untouched."""
    created, existing = await ingest_recordings(db, body)
    return RecordingIngestResult(created=created, existing=existing)
