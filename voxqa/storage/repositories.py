"""Repository functions for recordings, selections, evaluations and change logs."""

import logging
from datetime import date, datetime, timezone

from sqlalchemy import case, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from voxqa.errors import DuplicateSelectionError
from voxqa.models import Auditor, Evaluation, EvaluationChange, Recording, Selection
from voxqa.schemas.selection import PlannedSelection, RecordingCandidate, RecordingIn, WeekWindow

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


async def get_auditor_by_key_hash(db: AsyncSession, api_key_hash: str) -> Auditor | None:
    result = await db.execute(select(Auditor).where(Auditor.api_key_hash == api_key_hash))
    return result.scalar_one_or_none()


async def ingest_recordings(db: AsyncSession, items: list[RecordingIn]) -> tuple[int, int]:
    """Insert recordings not seen before (by file path). Returns (created, existing)."""
    paths = [item.file_path for item in items]
    result = await db.execute(select(Recording.file_path).where(Recording.file_path.in_(paths)))
    known = set(result.scalars().all())

    created = 0
    for item in items:
        if item.file_path in known:
            continue
        db.add(Recording(**item.model_dump()))
        known.add(item.file_path)
        created += 1
    await db.flush()
    logger.debug("Ingested %d recordings, %d already known", created, len(items) - created)
    return created, len(items) - created


async def list_candidates(db: AsyncSession, start: date, end: date) -> list[RecordingCandidate]:
    """Recordings filed between start and end inclusive."""
    result = await db.execute(
        select(Recording)
        .where(Recording.file_date >= start, Recording.file_date <= end)
        .order_by(Recording.id)
    )
    return [RecordingCandidate.model_validate(r) for r in result.scalars().all()]


async def list_week_selections(db: AsyncSession, week_start: date) -> list[Selection]:
    result = await db.execute(select(Selection).where(Selection.week_start == week_start))
    return list(result.scalars().all())


async def insert_selection(
    db: AsyncSession, planned: PlannedSelection, week: WeekWindow
) -> Selection:
    """Insert one selection inside a savepoint.

    Uniqueness on recording_id and (agent_id, week_start) is enforced by the
    database; a violation raises DuplicateSelectionError and leaves the outer
    transaction usable.
    """
    selection = Selection(
        recording_id=planned.recording_id,
        agent_id=planned.agent_id,
        agent_name=planned.agent_name,
        client_code=planned.client_code,
        week_start=week.start,
        week_end=week.end,
        status="selected",
    )
    try:
        async with db.begin_nested():
            db.add(selection)
    except IntegrityError as exc:
        raise DuplicateSelectionError(planned.recording_id, planned.agent_id) from exc
    return selection


async def get_selection(db: AsyncSession, selection_id: int) -> Selection | None:
    return await db.get(Selection, selection_id)


async def get_selection_with_recording(
    db: AsyncSession, selection_id: int
) -> tuple[Selection, Recording] | None:
    result = await db.execute(
        select(Selection, Recording)
        .join(Recording, Selection.recording_id == Recording.id)
        .where(Selection.id == selection_id)
    )
    row = result.first()
    return (row[0], row[1]) if row else None


async def list_selections(
    db: AsyncSession,
    week_start: date,
    client: str | None = None,
    status: str | None = None,
) -> list[tuple[Selection, Recording]]:
    """Selections of a week joined with their recordings, ordered by agent name."""
    query = (
        select(Selection, Recording)
        .join(Recording, Selection.recording_id == Recording.id)
        .where(Selection.week_start == week_start)
        .order_by(Selection.agent_name, Selection.id)
    )
    if client:
        query = query.where(Selection.client_code == client)
    if status:
        query = query.where(Selection.status == status)
    result = await db.execute(query)
    return [(row[0], row[1]) for row in result.all()]


async def update_selection(
    db: AsyncSession,
    selection: Selection,
    status: str | None = None,
    score: int | None = None,
    notes: str | None = None,
) -> Selection:
    if status is not None:
        selection.status = status
    if score is not None:
        selection.score = score
    if notes is not None:
        selection.notes = notes
    selection.updated_at = _now()
    await db.flush()
    return selection


async def get_evaluation_by_recording(db: AsyncSession, recording_id: int) -> Evaluation | None:
    result = await db.execute(select(Evaluation).where(Evaluation.recording_id == recording_id))
    return result.scalar_one_or_none()


async def create_evaluation(
    db: AsyncSession,
    recording_id: int,
    selection_id: int,
    rubric_id: str,
    score: int,
    judgments: dict,
    transcript: str | None,
    summary: str | None,
) -> Evaluation:
    """Create the evaluation; current and original fields start out identical."""
    ev = Evaluation(
        recording_id=recording_id,
        selection_id=selection_id,
        rubric_id=rubric_id,
        score=score,
        original_score=score,
        judgments=judgments,
        original_judgments=judgments,
        transcript=transcript,
        summary=summary,
    )
    async with db.begin_nested():
        db.add(ev)
    return ev


async def create_change(
    db: AsyncSession,
    evaluation_id: int,
    selection_id: int,
    actor_id: str,
    actor_name: str,
    changes: list[dict],
    score_before: int | None,
    score_after: int | None,
) -> EvaluationChange:
    """Append one change-log record."""
    change = EvaluationChange(
        evaluation_id=evaluation_id,
        selection_id=selection_id,
        actor_id=actor_id,
        actor_name=actor_name,
        changes=changes,
        score_before=score_before,
        score_after=score_after,
    )
    db.add(change)
    await db.flush()
    return change


async def list_changes(db: AsyncSession, selection_id: int) -> list[EvaluationChange]:
    result = await db.execute(
        select(EvaluationChange)
        .where(EvaluationChange.selection_id == selection_id)
        .order_by(EvaluationChange.created_at.desc(), EvaluationChange.id.desc())
    )
    return list(result.scalars().all())


def _count_status(status: str):
    return func.sum(case((Selection.status == status, 1), else_=0))


async def weekly_summary(db: AsyncSession, client: str | None = None) -> list[dict]:
    """Selection counts per status and average score, per week, newest first."""
    query = (
        select(
            Selection.week_start,
            Selection.week_end,
            func.count().label("total"),
            _count_status("selected").label("selected"),
            _count_status("in_review").label("in_review"),
            _count_status("completed").label("completed"),
            _count_status("skipped").label("skipped"),
            func.avg(Selection.score).label("avg_score"),
        )
        .group_by(Selection.week_start, Selection.week_end)
        .order_by(Selection.week_start.desc())
    )
    if client:
        query = query.where(Selection.client_code == client)
    result = await db.execute(query)
    return [dict(row._mapping) for row in result.all()]


async def agents_performance(db: AsyncSession, client: str | None = None) -> list[dict]:
    """Per-agent audit counts and completed-score statistics, worst average first."""
    completed_score = case((Selection.status == "completed", Selection.score))
    avg_score = func.avg(completed_score)
    query = (
        select(
            Selection.agent_id,
            func.max(Selection.agent_name).label("agent_name"),
            Selection.client_code,
            func.count().label("total_audits"),
            _count_status("completed").label("completed"),
            _count_status("in_review").label("in_review"),
            _count_status("skipped").label("skipped"),
            avg_score.label("avg_score"),
            func.min(completed_score).label("min_score"),
            func.max(completed_score).label("max_score"),
            func.max(Selection.week_start).label("last_audit_week"),
        )
        .group_by(Selection.agent_id, Selection.client_code)
        .order_by(avg_score.asc())
    )
    if client:
        query = query.where(Selection.client_code == client)
    result = await db.execute(query)
    return [dict(row._mapping) for row in result.all()]
