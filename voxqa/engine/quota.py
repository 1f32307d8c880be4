"""Daily quota allocation per client.

Quotas are recomputed from scratch on every run rather than kept as a
running counter, so a missed day is absorbed by the following runs.
"""

import math
from collections.abc import Iterable, Mapping

from voxqa.engine.catalog import EXEMPT_CLIENT
from voxqa.engine.classifier import classify_client
from voxqa.schemas.selection import RecordingCandidate


def count_agents_by_client(
    candidates: Iterable[RecordingCandidate], unknown_agent_id: str
) -> dict[str, set[str]]:
    """Distinct agents with at least one recording, keyed by effective client."""
    agents: dict[str, set[str]] = {}
    for rec in candidates:
        if not rec.agent_id or rec.agent_id == unknown_agent_id:
            continue
        code = classify_client(rec.client_code, rec.project_id)
        agents.setdefault(code, set()).add(rec.agent_id)
    return agents


def compute_quotas(
    agents_by_client: Mapping[str, int],
    selected_by_client: Mapping[str, int],
    working_days_remaining: int,
) -> dict[str, int | None]:
    """Agents to sample today per client; None means unbounded (exempt client).

    quota = ceil((total_agents - already_selected) / working_days_remaining)
    """
    days = max(working_days_remaining, 1)
    quotas: dict[str, int | None] = {}
    for client_code, total in agents_by_client.items():
        if client_code == EXEMPT_CLIENT:
            quotas[client_code] = None
            continue
        pending = max(total - selected_by_client.get(client_code, 0), 0)
        quotas[client_code] = math.ceil(pending / days)
    return quotas
