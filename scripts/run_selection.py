#!/usr/bin/env python3
"""
Run the daily audit selection, for the scheduler or by hand.
Usage:
    python scripts/run_selection.py                  # default target date
    python scripts/run_selection.py --date 2026-02-11
    python scripts/run_selection.py --last-covered 2026-02-07
"""

import argparse
import asyncio
import logging
import os
import sys
from datetime import date

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from voxqa.config import settings
from voxqa.database import async_session_maker
from voxqa.services.selection import select_catch_up, select_for_day


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--date", type=date.fromisoformat, help="Day to select (YYYY-MM-DD)")
    group.add_argument(
        "--last-covered",
        type=date.fromisoformat,
        help="Last day already selected; every working day after it is run",
    )
    return parser.parse_args(argv)


async def run(args) -> None:
    async with async_session_maker() as session:
        if args.last_covered:
            summaries = await select_catch_up(session, args.last_covered)
        else:
            summaries = [await select_for_day(session, args.date)]
        await session.commit()

    for summary in summaries:
        print(
            f"{summary.date}: {summary.inserted} inserted, {summary.skipped} skipped "
            f"(week {summary.week.start}..{summary.week.end})"
        )
        for client_code, b in sorted(summary.breakdown.items()):
            quota = "all" if b.quota is None else b.quota
            print(f"  {client_code:<12} quota={quota} available={b.available} "
                  f"inserted={b.inserted} skipped={b.skipped}")


if __name__ == "__main__":
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(run(parse_args()))
