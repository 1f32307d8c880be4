"""Evaluation recording and reviewer corrections."""

import asyncio
import logging
import weakref
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from voxqa.engine.audit_trail import diff_judgments
from voxqa.engine.catalog import get_rubric
from voxqa.engine.classifier import resolve_rubric
from voxqa.engine.judgments import parse_judgment_payload
from voxqa.engine.overrides import apply_overrides
from voxqa.engine.scoring import score
from voxqa.errors import EvaluationNotFoundError, SelectionNotFoundError
from voxqa.models import Auditor, Evaluation, EvaluationChange
from voxqa.schemas.judgment import JudgmentSet, ScoreResult
from voxqa.schemas.selection import SelectionStatus
from voxqa.storage.repositories import (
    create_change,
    create_evaluation,
    get_evaluation_by_recording,
    get_selection_with_recording,
    list_changes,
    update_selection,
)

logger = logging.getLogger(__name__)

_recording_locks: "weakref.WeakValueDictionary[int, asyncio.Lock]" = weakref.WeakValueDictionary()


def recording_lock(recording_id: int) -> asyncio.Lock:
    """In-process lock serializing scoring of one recording."""
    lock = _recording_locks.get(recording_id)
    if lock is None:
        lock = asyncio.Lock()
        _recording_locks[recording_id] = lock
    return lock


def stored_judgments(result: ScoreResult, applied: list[str] | None = None) -> dict:
    """JSON document persisted for a scored judgment set."""
    doc = {
        "unintelligible": result.unintelligible,
        "high_impact_failed": result.high_impact_failed,
        "general": [row.model_dump() for row in result.general],
        "high_impact": [row.model_dump() for row in result.high_impact],
    }
    if applied is not None:
        doc["applied_overrides"] = applied
    return doc


def _now() -> datetime:
    return datetime.now(timezone.utc)


async def record_evaluation(
    db: AsyncSession, selection_id: int, payload: str | bytes | dict[str, Any]
) -> tuple[Evaluation, ScoreResult, list[str]]:
    """Score a judgment payload for a selection and persist it.

    The first evaluation of a recording also becomes its immutable original;
    scoring the same recording again only replaces the current fields.
    """
    found = await get_selection_with_recording(db, selection_id)
    if found is None:
        raise SelectionNotFoundError(f"Selection {selection_id} not found")
    selection, recording = found

    rubric = get_rubric(resolve_rubric(selection.client_code, selection.agent_id, recording.project_id))
    judgments = parse_judgment_payload(payload, rubric)
    outcome = apply_overrides(rubric, judgments)
    result = score(rubric, outcome.judgments)
    doc = stored_judgments(result, outcome.applied)
    transcript = outcome.judgments.transcript or None
    summary = outcome.judgments.summary or None

    async with recording_lock(recording.id):
        evaluation = await get_evaluation_by_recording(db, recording.id)
        created = False
        if evaluation is None:
            try:
                evaluation = await create_evaluation(
                    db,
                    recording_id=recording.id,
                    selection_id=selection.id,
                    rubric_id=rubric.id.value,
                    score=result.score,
                    judgments=doc,
                    transcript=transcript,
                    summary=summary,
                )
                created = True
                logger.info(
                    "Recording %s scored %d with %s (overrides: %s)",
                    recording.id,
                    result.score,
                    rubric.id.value,
                    outcome.applied or "none",
                )
            except IntegrityError:
                # Another worker stored the original first.
                evaluation = await get_evaluation_by_recording(db, recording.id)
                if evaluation is None:
                    raise

        if not created:
            evaluation.rubric_id = rubric.id.value
            evaluation.score = result.score
            evaluation.judgments = doc
            evaluation.transcript = transcript
            evaluation.summary = summary
            evaluation.updated_at = _now()
            logger.info("Recording %s re-scored %d", recording.id, result.score)

        await update_selection(
            db, selection, status=SelectionStatus.COMPLETED.value, score=result.score
        )

    return evaluation, result, outcome.applied


async def record_correction(
    db: AsyncSession,
    selection_id: int,
    new_judgments: JudgmentSet,
    new_score: int | None,
    actor: Auditor,
) -> tuple[int, EvaluationChange | None]:
    """Apply a reviewer's edited judgments.

    The score is always recomputed from the judgments. A change record is
    appended only when at least one criterion outcome changed; the original
    score and judgments are never touched.
    """
    found = await get_selection_with_recording(db, selection_id)
    if found is None:
        raise SelectionNotFoundError(f"Selection {selection_id} not found")
    selection, recording = found

    evaluation = await get_evaluation_by_recording(db, recording.id)
    if evaluation is None:
        raise EvaluationNotFoundError(f"Selection {selection_id} has not been evaluated")

    rubric = get_rubric(evaluation.rubric_id)
    result = score(rubric, new_judgments)
    if new_score is not None and new_score != result.score:
        logger.warning(
            "Submitted score %d for selection %s does not match computed %d; keeping computed",
            new_score,
            selection_id,
            result.score,
        )

    current = JudgmentSet.model_validate(evaluation.judgments)
    changes = diff_judgments(rubric, current, new_judgments)

    change = None
    if changes:
        change = await create_change(
            db,
            evaluation_id=evaluation.id,
            selection_id=selection.id,
            actor_id=actor.auditor_id,
            actor_name=actor.name,
            changes=[c.model_dump(by_alias=True) for c in changes],
            score_before=evaluation.score,
            score_after=result.score,
        )
        logger.info(
            "%s changed %d criteria on selection %s (%s -> %s)",
            actor.name,
            len(changes),
            selection_id,
            evaluation.score,
            result.score,
        )

    evaluation.judgments = stored_judgments(result)
    evaluation.score = result.score
    evaluation.updated_at = _now()
    await update_selection(db, selection, score=result.score)
    return result.score, change


async def get_evaluation_detail(
    db: AsyncSession, selection_id: int
) -> tuple[Evaluation, list[EvaluationChange]]:
    found = await get_selection_with_recording(db, selection_id)
    if found is None:
        raise SelectionNotFoundError(f"Selection {selection_id} not found")
    evaluation = await get_evaluation_by_recording(db, found[1].id)
    if evaluation is None:
        raise EvaluationNotFoundError(f"Selection {selection_id} has not been evaluated")
    return evaluation, await list_changes(db, selection_id)
