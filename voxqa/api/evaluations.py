"""Evaluation endpoints - score a selection and record reviewer corrections."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from voxqa.auth.middleware import AuditorDep
from voxqa.database import get_db
from voxqa.models import Evaluation, EvaluationChange
from voxqa.schemas.evaluation import (
    ChangeOut,
    CorrectionRequest,
    CorrectionResult,
    EvaluationOut,
    EvaluationRecorded,
)
from voxqa.services.scoring import get_evaluation_detail, record_correction, record_evaluation

router = APIRouter()


def _evaluation_out(evaluation: Evaluation, changes: list[EvaluationChange]) -> EvaluationOut:
    out = EvaluationOut.model_validate(evaluation)
    out.changes = [ChangeOut.model_validate(c) for c in changes]
    return out


@router.post("/selections/{selection_id}/evaluation", response_model=EvaluationRecorded)
async def post_evaluation(
    selection_id: int,
    payload: Annotated[dict[str, Any], Body()],
    auditor: AuditorDep,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """
    Score the judgment source's payload for a selection.
    The first evaluation of a recording is kept as its original.
    """
    evaluation, result, applied = await record_evaluation(db, selection_id, payload)
    await db.flush()
    _, changes = await get_evaluation_detail(db, selection_id)
    return EvaluationRecorded(
        evaluation=_evaluation_out(evaluation, changes),
        applied_overrides=applied,
        high_impact_failed=result.high_impact_failed,
    )


@router.get("/selections/{selection_id}/evaluation", response_model=EvaluationOut)
async def get_evaluation(
    selection_id: int,
    auditor: AuditorDep,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Current and original judgments of a selection, with its change log."""
    evaluation, changes = await get_evaluation_detail(db, selection_id)
    return _evaluation_out(evaluation, changes)


@router.patch("/selections/{selection_id}/evaluation", response_model=CorrectionResult)
async def patch_evaluation(
    selection_id: int,
    body: CorrectionRequest,
    auditor: AuditorDep,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Record a reviewer correction. No change record is written when nothing changed."""
    new_score, change = await record_correction(
        db, selection_id, body.judgments, body.score, auditor
    )
    return CorrectionResult(
        score=new_score,
        changed=change is not None,
        change=ChangeOut.model_validate(change) if change else None,
    )
