"""API smoke tests."""

import pytest
from httpx import ASGITransport, AsyncClient

from voxqa.database import get_db
from voxqa.engine.catalog import get_rubric
from voxqa.main import app

AUTH = {"Authorization": "Bearer sk_test_voxqa"}


@pytest.fixture
async def client(session_maker, auditor):
    async def _get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


def _recording(n, agent_id, file_date="2026-02-14", client_code="claro_wcb", **kw):
    return {
        "file_name": f"{n}.mp3",
        "file_path": f"/recordings/{client_code}/{n}.mp3",
        "client_code": client_code,
        "file_date": file_date,
        "file_size_bytes": 80_000,
        "agent_id": agent_id,
        "agent_name": f"Agent {agent_id}",
        "call_duration_seconds": 180,
        **kw,
    }


def _payload(failed=()):
    rubric = get_rubric("claro_wcb")
    return {
        "transcript": "Agente: hola\nCliente: no me interesa\nAgente: gracias, hasta luego",
        "general": {c.key: {"satisfied": c.key not in failed} for c in rubric.general},
        "highImpact": {c.key: {"satisfied": True} for c in rubric.high_impact},
    }


async def test_health(client):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


async def test_requires_api_key(client):
    resp = await client.get("/v1/rubrics")
    assert resp.status_code == 401
    resp = await client.get("/v1/rubrics", headers={"Authorization": "Bearer wrong"})
    assert resp.status_code == 403


async def test_week(client):
    resp = await client.get("/v1/week", params={"date": "2026-02-11"}, headers=AUTH)
    assert resp.status_code == 200
    assert resp.json() == {
        "start": "2026-02-09",
        "end": "2026-02-15",
        "working_days_remaining": 4,
    }


async def test_rubrics_and_stateless_score(client):
    resp = await client.get("/v1/rubrics", headers=AUTH)
    assert resp.status_code == 200
    assert len(resp.json()) == 7

    resp = await client.get("/v1/rubrics/unknown", headers=AUTH)
    assert resp.status_code == 422

    body = {
        "general": [{"key": "saludo", "satisfied": True}, {"key": "despedida", "na": True}],
        "highImpact": [{"key": "maltrato_cliente", "satisfied": False}],
    }
    resp = await client.post("/v1/rubrics/claro_tyt/score", json=body, headers=AUTH)
    assert resp.status_code == 200
    data = resp.json()
    assert data["score"] == 0
    assert data["high_impact_failed"] is True


async def test_stateless_score_accepts_fractional_timestamp(client):
    body = {"general": [{"key": "saludo", "satisfied": True, "timestampSeconds": 12.5}]}
    resp = await client.post("/v1/rubrics/claro_tyt/score", json=body, headers=AUTH)
    assert resp.status_code == 200
    assert resp.json()["general"][0]["timestamp_seconds"] == 12


async def test_stateless_overrides(client):
    body = {
        "judgments": {"general": [{"key": "manejo_objeciones", "satisfied": False}]},
        "transcript": "Agente: hola\nCliente: sí claro",
    }
    resp = await client.post("/v1/rubrics/claro_hogar/overrides", json=body, headers=AUTH)
    assert resp.status_code == 200
    data = resp.json()
    assert data["applied"] == ["no_objection"]
    assert data["judgments"]["general"][0]["not_applicable"] is True


async def test_selection_and_evaluation_flow(client):
    recordings = [_recording(i, str(i)) for i in range(3)]
    resp = await client.post("/v1/recordings", json=recordings, headers=AUTH)
    assert resp.json() == {"created": 3, "existing": 0}
    resp = await client.post("/v1/recordings", json=recordings, headers=AUTH)
    assert resp.json() == {"created": 0, "existing": 3}

    resp = await client.post("/v1/selections/run", json={"date": "2026-02-14"}, headers=AUTH)
    assert resp.status_code == 200
    summary = resp.json()
    assert summary["inserted"] == 3
    assert summary["quotas_by_client"] == {"claro_wcb": 3}

    resp = await client.get(
        "/v1/selections", params={"week_start": "2026-02-09"}, headers=AUTH
    )
    selections = resp.json()
    assert len(selections) == 3
    sel_id = selections[0]["id"]

    resp = await client.patch(f"/v1/selections/{sel_id}", json={"status": "bogus"}, headers=AUTH)
    assert resp.status_code == 422
    resp = await client.patch(f"/v1/selections/{sel_id}", json={"status": "in_review"}, headers=AUTH)
    assert resp.json()["status"] == "in_review"

    resp = await client.post(f"/v1/selections/{sel_id}/evaluation", json=_payload(), headers=AUTH)
    assert resp.status_code == 200
    assert resp.json()["evaluation"]["score"] == 100

    resp = await client.get(f"/v1/selections/{sel_id}", headers=AUTH)
    assert resp.json()["status"] == "completed"

    resp = await client.get(f"/v1/selections/{sel_id}/evaluation", headers=AUTH)
    judgments = resp.json()["judgments"]
    for row in judgments["general"]:
        if row["key"] == "cierre_comercial":
            row["satisfied"] = False
    resp = await client.patch(
        f"/v1/selections/{sel_id}/evaluation",
        json={"judgments": judgments, "score": 88},
        headers=AUTH,
    )
    data = resp.json()
    assert data["score"] == 88
    assert data["changed"] is True
    assert data["change"]["changes"][0]["from"] == "Satisfied"

    resp = await client.get(f"/v1/selections/{sel_id}/evaluation", headers=AUTH)
    data = resp.json()
    assert data["score"] == 88
    assert data["original_score"] == 100
    assert len(data["changes"]) == 1

    resp = await client.get("/v1/reports/agents", headers=AUTH)
    assert resp.status_code == 200
    assert len(resp.json()) == 3
    resp = await client.get("/v1/reports/summary", headers=AUTH)
    assert resp.json()[0]["completed"] == 1


async def test_malformed_evaluation_payload(client):
    await client.post("/v1/recordings", json=[_recording(1, "1")], headers=AUTH)
    await client.post("/v1/selections/run", json={"date": "2026-02-14"}, headers=AUTH)
    resp = await client.get("/v1/selections", params={"week_start": "2026-02-09"}, headers=AUTH)
    sel_id = resp.json()[0]["id"]

    resp = await client.post(
        f"/v1/selections/{sel_id}/evaluation",
        json={"general": {"saludo": {"satisfied": "perhaps"}}},
        headers=AUTH,
    )
    assert resp.status_code == 502
    assert resp.json()["retryable"] is True


async def test_missing_selection(client):
    resp = await client.get("/v1/selections/404/evaluation", headers=AUTH)
    assert resp.status_code == 404
