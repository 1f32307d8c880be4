"""Rubric catalog endpoints plus stateless override and scoring."""

from fastapi import APIRouter

from voxqa.auth.middleware import AuditorDep
from voxqa.engine.catalog import CATALOG, get_rubric
from voxqa.engine.overrides import apply_overrides
from voxqa.engine.scoring import score
from voxqa.schemas.evaluation import OverridesRequest, OverridesResponse, ScoreResponse
from voxqa.schemas.judgment import JudgmentSet
from voxqa.schemas.rubric import Rubric

router = APIRouter()


@router.get("/rubrics", response_model=list[Rubric])
async def list_rubrics(auditor: AuditorDep):
    return list(CATALOG.values())


@router.get("/rubrics/{rubric_id}", response_model=Rubric)
async def get_rubric_by_id(rubric_id: str, auditor: AuditorDep):
    return get_rubric(rubric_id)


@router.post("/rubrics/{rubric_id}/overrides", response_model=OverridesResponse)
async def post_overrides(rubric_id: str, body: OverridesRequest, auditor: AuditorDep):
    """Apply the override rules to a judgment set without storing anything."""
    outcome = apply_overrides(
        get_rubric(rubric_id),
        body.judgments,
        transcript=body.transcript,
        unintelligible=body.unintelligible,
    )
    return OverridesResponse(judgments=outcome.judgments, applied=outcome.applied)


@router.post("/rubrics/{rubric_id}/score", response_model=ScoreResponse)
async def post_score(rubric_id: str, body: JudgmentSet, auditor: AuditorDep):
    """Score a judgment set without storing anything."""
    rubric = get_rubric(rubric_id)
    result = score(rubric, body)
    return ScoreResponse(rubric_id=rubric.id.value, **result.model_dump())
