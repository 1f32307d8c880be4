"""Daily audit selection: quotas, planning and persistence."""

import logging
import random
from collections import defaultdict
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from voxqa.config import settings
from voxqa.engine.catalog import EXEMPT_CLIENT
from voxqa.engine.quota import compute_quotas, count_agents_by_client
from voxqa.engine.selector import plan_selections
from voxqa.engine.week import compute_week, default_target_date, pending_work_days
from voxqa.errors import DuplicateSelectionError
from voxqa.schemas.selection import ClientBreakdown, SelectionSummary
from voxqa.storage.repositories import insert_selection, list_candidates, list_week_selections

logger = logging.getLogger(__name__)


def default_rng() -> random.Random:
    """Random source for picks; reproducible when settings.selection_seed is set."""
    if settings.selection_seed is not None:
        return random.Random(settings.selection_seed)
    return random.Random()


async def select_for_day(
    db: AsyncSession,
    target_date: date | None = None,
    rng: random.Random | None = None,
    today: date | None = None,
) -> SelectionSummary:
    """Select the recordings to audit for one day.

    Safe to run more than once for the same day, and concurrently: picks that
    collide with an existing selection are counted as skipped.
    """
    target = target_date or default_target_date(today)
    week = compute_week(target)
    rng = rng or default_rng()

    week_candidates = await list_candidates(db, week.start, week.end)
    day_candidates = [c for c in week_candidates if c.file_date == target]
    prior = await list_week_selections(db, week.start)

    selected_recordings = {s.recording_id for s in prior}
    selected_agents: set[str] = set()
    selected_by_client: dict[str, set[str]] = defaultdict(set)
    for s in prior:
        if s.client_code == EXEMPT_CLIENT:
            continue
        selected_agents.add(s.agent_id)
        selected_by_client[s.client_code].add(s.agent_id)

    agents_by_client = count_agents_by_client(week_candidates, settings.unknown_agent_id)
    quotas = compute_quotas(
        {code: len(agents) for code, agents in agents_by_client.items()},
        {code: len(agents) for code, agents in selected_by_client.items()},
        week.working_days_remaining,
    )
    logger.info(
        "Selecting for %s (week %s..%s, %d working days left): %d candidates, quotas=%s",
        target,
        week.start,
        week.end,
        week.working_days_remaining,
        len(day_candidates),
        quotas,
    )

    plans = plan_selections(
        day_candidates,
        quotas,
        selected_agents,
        selected_recordings,
        rng,
        min_duration=settings.min_call_duration_seconds,
        min_file_size=settings.min_file_size_bytes,
        unknown_agent_id=settings.unknown_agent_id,
    )

    summary = SelectionSummary(
        date=target,
        week=week,
        already_selected=len(prior),
        total_agents=sum(len(agents) for agents in agents_by_client.values()),
        quotas_by_client=quotas,
    )
    for code, plan in plans.items():
        breakdown = ClientBreakdown(quota=plan.quota, available=plan.available)
        for planned in plan.picks:
            try:
                await insert_selection(db, planned, week)
            except DuplicateSelectionError as exc:
                logger.debug("Skipping selection, already taken: %s", exc)
                breakdown.skipped += 1
                continue
            breakdown.inserted += 1
        summary.breakdown[code] = breakdown
        summary.inserted += breakdown.inserted
        summary.skipped += breakdown.skipped

    logger.info(
        "Selection for %s done: %d inserted, %d skipped", target, summary.inserted, summary.skipped
    )
    return summary


async def select_catch_up(
    db: AsyncSession,
    last_covered: date,
    today: date | None = None,
    rng: random.Random | None = None,
) -> list[SelectionSummary]:
    """Run the daily selection for every working day after last_covered."""
    days = pending_work_days(last_covered, today)
    if not days:
        logger.info("Selection is up to date (last covered %s)", last_covered)
        return []

    logger.info("Catching up %d day(s) after %s", len(days), last_covered)
    rng = rng or default_rng()
    return [await select_for_day(db, day, rng=rng) for day in days]
