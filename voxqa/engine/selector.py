"""Recording selector - decides which of a day's recordings enter the audit pool.

The planner is pure: it receives the day's candidates and what was already
selected this week, and returns the picks. Persisting them (and treating
uniqueness violations as benign races) is the selection service's job.
"""

import random
from collections.abc import Collection, Iterable, Mapping
from dataclasses import dataclass, field

from voxqa.engine.catalog import EXEMPT_CLIENT
from voxqa.engine.classifier import classify_client
from voxqa.schemas.selection import PlannedSelection, RecordingCandidate


@dataclass
class ClientPlan:
    """Picks for one client on one day."""

    quota: int | None
    available: int = 0
    picks: list[PlannedSelection] = field(default_factory=list)


def pick_one(
    recordings: list[RecordingCandidate],
    rng: random.Random,
    min_duration: int,
    min_file_size: int,
) -> RecordingCandidate | None:
    """Choose one recording for an agent.

    Priority: long enough calls, then reasonably sized files, then anything.
    Each tier is a uniform random choice.
    """
    if not recordings:
        return None

    by_duration = [
        r for r in recordings
        if r.call_duration_seconds is not None and r.call_duration_seconds >= min_duration
    ]
    if by_duration:
        return rng.choice(by_duration)

    by_size = [r for r in recordings if r.file_size_bytes >= min_file_size]
    if by_size:
        return rng.choice(by_size)

    return rng.choice(recordings)


def plan_selections(
    candidates: Iterable[RecordingCandidate],
    quotas: Mapping[str, int | None],
    selected_agents: Collection[str],
    selected_recordings: Collection[int],
    rng: random.Random,
    *,
    min_duration: int,
    min_file_size: int,
    unknown_agent_id: str,
) -> dict[str, ClientPlan]:
    """Plan today's selections per client.

    selected_agents holds agents already selected this week for any
    non-exempt client; selected_recordings holds every recording already
    selected, so re-running the same day plans nothing new.
    """
    exempt: list[RecordingCandidate] = []
    by_client_agent: dict[str, dict[str, list[RecordingCandidate]]] = {}

    for rec in candidates:
        if not rec.agent_id or rec.agent_id == unknown_agent_id:
            continue
        if rec.file_size_bytes < min_file_size:
            continue
        if rec.id in selected_recordings:
            continue
        code = classify_client(rec.client_code, rec.project_id)
        if code != rec.client_code:
            rec = rec.model_copy(update={"client_code": code})

        if code == EXEMPT_CLIENT:
            if rec.call_duration_seconds is not None and rec.call_duration_seconds >= min_duration:
                exempt.append(rec)
            continue

        if rec.agent_id in selected_agents:
            continue
        by_client_agent.setdefault(code, {}).setdefault(rec.agent_id, []).append(rec)

    plans: dict[str, ClientPlan] = {}

    if exempt:
        plans[EXEMPT_CLIENT] = ClientPlan(
            quota=None,
            available=len(exempt),
            picks=[_planned(rec) for rec in exempt],
        )

    for code in sorted(by_client_agent):
        agent_map = by_client_agent[code]
        quota = quotas.get(code, 0)
        plan = ClientPlan(quota=quota, available=len(agent_map))

        agent_ids = sorted(agent_map)
        rng.shuffle(agent_ids)
        for agent_id in agent_ids:
            if quota is not None and len(plan.picks) >= quota:
                break
            chosen = pick_one(agent_map[agent_id], rng, min_duration, min_file_size)
            if chosen is not None:
                plan.picks.append(_planned(chosen))

        plans[code] = plan

    return plans


def _planned(rec: RecordingCandidate) -> PlannedSelection:
    return PlannedSelection(
        recording_id=rec.id,
        agent_id=rec.agent_id or "",
        agent_name=rec.agent_name,
        client_code=rec.client_code,
    )
