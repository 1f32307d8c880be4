"""Unit tests for the recording selector planner."""

import random
from datetime import date

from voxqa.engine.selector import pick_one, plan_selections
from voxqa.schemas.selection import RecordingCandidate

MIN_DURATION = 60
MIN_SIZE = 10240


def _cand(id, agent_id="1", client_code="claro_wcb", duration=120, size=50_000, project_id=None):
    return RecordingCandidate(
        id=id,
        client_code=client_code,
        agent_id=agent_id,
        agent_name=f"Agent {agent_id}",
        project_id=project_id,
        call_duration_seconds=duration,
        file_size_bytes=size,
        file_date=date(2026, 2, 11),
    )


def _plan(candidates, quotas, selected_agents=(), selected_recordings=(), seed=1):
    return plan_selections(
        candidates,
        quotas,
        set(selected_agents),
        set(selected_recordings),
        random.Random(seed),
        min_duration=MIN_DURATION,
        min_file_size=MIN_SIZE,
        unknown_agent_id="-1",
    )


def test_pick_one_prefers_long_calls():
    recordings = [_cand(1, duration=10), _cand(2, duration=300), _cand(3, duration=None)]
    for seed in range(20):
        assert pick_one(recordings, random.Random(seed), MIN_DURATION, MIN_SIZE).id == 2


def test_pick_one_falls_back_to_size_then_any():
    by_size = [_cand(1, duration=10, size=5_000), _cand(2, duration=10, size=20_000)]
    assert pick_one(by_size, random.Random(0), MIN_DURATION, MIN_SIZE).id == 2

    tiny = [_cand(1, duration=None, size=100)]
    assert pick_one(tiny, random.Random(0), MIN_DURATION, MIN_SIZE).id == 1


def test_pick_one_empty():
    assert pick_one([], random.Random(0), MIN_DURATION, MIN_SIZE) is None


def test_one_recording_per_agent_capped_by_quota():
    candidates = [_cand(i, agent_id=str(i % 5)) for i in range(20)]
    plans = _plan(candidates, {"claro_wcb": 3})
    plan = plans["claro_wcb"]
    assert plan.available == 5
    assert len(plan.picks) == 3
    assert len({p.agent_id for p in plan.picks}) == 3


def test_skips_small_files_unknown_agents_and_selected_agents():
    candidates = [
        _cand(1, agent_id="1", size=100),
        _cand(2, agent_id="-1"),
        _cand(3, agent_id=None),
        _cand(4, agent_id="2"),
        _cand(5, agent_id="3"),
    ]
    plans = _plan(candidates, {"claro_wcb": 10}, selected_agents={"2"})
    assert [p.recording_id for p in plans["claro_wcb"].picks] == [5]


def test_exempt_client_takes_every_long_recording():
    candidates = [
        _cand(1, agent_id="7", client_code="lv", duration=120),
        _cand(2, agent_id="7", client_code="lv", duration=90),
        _cand(3, agent_id="7", client_code="lv", duration=30),
        _cand(4, agent_id="8", client_code="obama", project_id=35, duration=200),
    ]
    plans = _plan(candidates, {"lv": None}, selected_agents={"7"})
    plan = plans["lv"]
    assert plan.quota is None
    assert sorted(p.recording_id for p in plan.picks) == [1, 2, 4]
    assert all(p.client_code == "lv" for p in plan.picks)


def test_rerun_plans_nothing_new_for_exempt_client():
    candidates = [_cand(1, client_code="lv"), _cand(2, client_code="lv")]
    plans = _plan(candidates, {"lv": None}, selected_recordings={1, 2})
    assert "lv" not in plans


def test_same_seed_same_picks():
    candidates = [_cand(i, agent_id=str(i % 7)) for i in range(30)]
    a = _plan(candidates, {"claro_wcb": 4}, seed=42)["claro_wcb"].picks
    b = _plan(candidates, {"claro_wcb": 4}, seed=42)["claro_wcb"].picks
    assert [p.recording_id for p in a] == [p.recording_id for p in b]


def test_zero_quota_picks_nothing():
    plans = _plan([_cand(1), _cand(2, agent_id="2")], {"claro_wcb": 0})
    assert plans["claro_wcb"].picks == []
    assert plans["claro_wcb"].available == 2
