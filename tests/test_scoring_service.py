"""Scoring service tests: originals, re-analysis and reviewer corrections."""

from datetime import date

import pytest

from voxqa.engine.catalog import get_rubric
from voxqa.engine.week import compute_week
from voxqa.errors import (
    EvaluationNotFoundError,
    MalformedJudgmentPayloadError,
    SelectionNotFoundError,
)
from voxqa.schemas.judgment import JudgmentSet
from voxqa.schemas.selection import PlannedSelection
from voxqa.services.scoring import get_evaluation_detail, record_correction, record_evaluation
from voxqa.storage.repositories import get_evaluation_by_recording, insert_selection

RUBRIC = get_rubric("claro_wcb")
TRANSCRIPT = "Agente: buenos días\nCliente: no me interesa\nAgente: gracias, hasta luego"


def make_payload(failed=(), high_impact_failed=(), transcript=TRANSCRIPT):
    return {
        "unintelligible": False,
        "transcript": transcript,
        "summary": "Oferta rechazada",
        "general": {
            c.key: {"satisfied": c.key not in failed, "rationale": "r", "timestampSeconds": 3}
            for c in RUBRIC.general
        },
        "highImpact": {
            c.key: {"satisfied": c.key not in high_impact_failed, "rationale": "r"}
            for c in RUBRIC.high_impact
        },
    }


@pytest.fixture
async def selection(db, add_recording):
    rec = await add_recording(client_code="claro_wcb", agent_id="77", file_date=date(2026, 2, 11))
    sel = await insert_selection(
        db,
        PlannedSelection(recording_id=rec.id, agent_id="77", client_code="claro_wcb"),
        compute_week(date(2026, 2, 11)),
    )
    return sel


def _flip(judgments: dict, key: str) -> JudgmentSet:
    current = JudgmentSet.model_validate(judgments)
    general = [
        j.model_copy(update={"satisfied": not j.satisfied}) if j.key == key else j
        for j in current.general
    ]
    return current.model_copy(update={"general": general})


async def test_record_evaluation_sets_originals_and_completes_selection(db, selection):
    evaluation, result, applied = await record_evaluation(db, selection.id, make_payload())

    assert result.score == 100
    assert applied == []
    assert evaluation.rubric_id == "claro_wcb"
    assert evaluation.score == evaluation.original_score == 100
    assert evaluation.original_judgments == evaluation.judgments
    assert selection.status == "completed"
    assert selection.score == 100


async def test_reanalysis_keeps_originals(db, selection):
    first, _, _ = await record_evaluation(db, selection.id, make_payload())
    original = dict(first.original_judgments)

    second, result, _ = await record_evaluation(
        db, selection.id, make_payload(failed={"cierre_comercial"})
    )

    assert second.id == first.id
    assert result.score == 88
    assert second.score == 88
    assert second.original_score == 100
    assert second.original_judgments == original
    assert selection.score == 88


async def test_high_impact_failure_scores_zero(db, selection):
    _, result, _ = await record_evaluation(
        db, selection.id, make_payload(high_impact_failed={"fraude_comercial"})
    )
    assert result.score == 0
    assert result.high_impact_failed


async def test_overrides_applied_before_scoring(db, selection):
    # No objection in the transcript: unsatisfied objection handling becomes N/A.
    _, result, applied = await record_evaluation(
        db,
        selection.id,
        make_payload(failed={"manejo_objeciones"}, transcript="Agente: hola\nCliente: sí\nAgente: chao"),
    )
    assert "no_objection" in applied
    assert result.score == 100


async def test_malformed_payload_stores_nothing(db, selection):
    with pytest.raises(MalformedJudgmentPayloadError):
        await record_evaluation(db, selection.id, "```json\n{broken")
    assert await get_evaluation_by_recording(db, selection.recording_id) is None
    assert selection.status == "selected"


async def test_unknown_selection(db):
    with pytest.raises(SelectionNotFoundError):
        await record_evaluation(db, 999, make_payload())


async def test_correction_without_changes_writes_no_record(db, selection, auditor):
    evaluation, _, _ = await record_evaluation(db, selection.id, make_payload())
    unchanged = JudgmentSet.model_validate(evaluation.judgments)

    new_score, change = await record_correction(db, selection.id, unchanged, 100, auditor)

    assert new_score == 100
    assert change is None
    _, changes = await get_evaluation_detail(db, selection.id)
    assert changes == []


async def test_correction_records_change_and_keeps_original(db, selection, auditor):
    evaluation, _, _ = await record_evaluation(db, selection.id, make_payload())
    original = dict(evaluation.original_judgments)

    edited = _flip(evaluation.judgments, "saludo")
    new_score, change = await record_correction(db, selection.id, edited, None, auditor)

    assert new_score == 97
    assert change is not None
    assert change.actor_name == "Test Auditor"
    assert change.score_before == 100
    assert change.score_after == 97
    assert change.changes == [
        {
            "key": "saludo",
            "kind": "general",
            "label": "Saludo",
            "from": "Satisfied",
            "to": "Not satisfied",
        }
    ]
    assert evaluation.score == 97
    assert evaluation.original_score == 100
    assert evaluation.original_judgments == original
    assert selection.score == 97


async def test_correction_keeps_computed_score_over_submitted(db, selection, auditor):
    evaluation, _, _ = await record_evaluation(db, selection.id, make_payload())
    edited = _flip(evaluation.judgments, "cierre_comercial")

    new_score, change = await record_correction(db, selection.id, edited, 50, auditor)

    assert new_score == 88
    assert change.score_after == 88


async def test_correcting_unintelligible_evaluation_to_high_impact_failure(db, selection, auditor):
    payload = make_payload()
    payload["unintelligible"] = True
    evaluation, result, applied = await record_evaluation(db, selection.id, payload)
    assert result.score == 100
    assert "unintelligible" in applied

    current = JudgmentSet.model_validate(evaluation.judgments)
    assert current.unintelligible
    high_impact = [
        j.model_copy(update={"satisfied": False}) if j.key == "fraude_comercial" else j
        for j in current.high_impact
    ]
    edited = current.model_copy(update={"high_impact": high_impact})

    new_score, change = await record_correction(db, selection.id, edited, None, auditor)

    assert new_score == 0
    assert change.score_after == 0
    assert change.changes[0]["kind"] == "high_impact"
    assert change.changes[0]["to"] == "Not satisfied"
    assert evaluation.judgments["high_impact_failed"] is True
    assert evaluation.original_score == 100


async def test_change_log_newest_first(db, selection, auditor):
    evaluation, _, _ = await record_evaluation(db, selection.id, make_payload())
    await record_correction(db, selection.id, _flip(evaluation.judgments, "saludo"), None, auditor)
    await record_correction(db, selection.id, _flip(evaluation.judgments, "saludo"), None, auditor)

    _, changes = await get_evaluation_detail(db, selection.id)
    assert len(changes) == 2
    assert changes[0].id > changes[1].id
    assert changes[0].changes[0]["to"] == "Satisfied"


async def test_correction_before_evaluation(db, selection, auditor):
    with pytest.raises(EvaluationNotFoundError):
        await record_correction(db, selection.id, JudgmentSet(), None, auditor)
