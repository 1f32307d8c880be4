#!/usr/bin/env python3
"""
Seed script: creates a demo auditor with an API key and one week of sample recordings.
Run after migrations: python scripts/seed.py
"""

import asyncio
import os
import random
import sys
from datetime import date, timedelta
from uuid import uuid4

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from voxqa.auth.middleware import hash_api_key
from voxqa.database import async_session_maker
from voxqa.models import Auditor
from voxqa.schemas.selection import RecordingIn
from voxqa.storage.repositories import get_auditor_by_key_hash, ingest_recordings


API_KEY = "sk_demo_voxqa_12345"  # Demo API key - print this for user
WEEK_START = date(2026, 2, 9)

# (client_code, project_id, agent ids)
AGENTS = [
    ("claro_wcb", None, ["3101", "3102", "3103", "3104"]),
    ("claro_hogar", None, ["3201", "3202", "3203"]),
    ("claro_tyt", None, ["3301", "3302"]),
    ("obama", None, ["1018", "4401", "4402", "4403"]),
    ("obama", 34, ["5501", "5502"]),
    ("obama", 35, ["5601"]),
]


def sample_recordings(rng: random.Random) -> list[RecordingIn]:
    items = []
    for day in range(6):
        file_date = WEEK_START + timedelta(days=day)
        for client_code, project_id, agent_ids in AGENTS:
            for agent_id in agent_ids:
                for n in range(rng.randint(1, 3)):
                    name = f"{file_date:%Y%m%d}-{agent_id}-{n}.mp3"
                    items.append(
                        RecordingIn(
                            file_name=name,
                            file_path=f"/recordings/{client_code}/{file_date:%Y/%m/%d}/{name}",
                            client_code=client_code,
                            file_date=file_date,
                            file_size_bytes=rng.randint(4_000, 2_000_000),
                            agent_id=agent_id,
                            agent_name=f"Agent {agent_id}",
                            project_id=project_id,
                            call_duration_seconds=rng.randint(15, 900),
                        )
                    )
    return items


async def seed():
    async with async_session_maker() as session:
        api_key_hash = hash_api_key(API_KEY)
        if await get_auditor_by_key_hash(session, api_key_hash):
            print("Auditor already exists, using existing.")
        else:
            session.add(
                Auditor(auditor_id=str(uuid4()), name="Demo Auditor", api_key_hash=api_key_hash)
            )
            await session.commit()

        created, existing = await ingest_recordings(session, sample_recordings(random.Random(7)))
        await session.commit()
        print(f"Recordings: {created} created, {existing} already present.")

    print("Seed complete!")
    print(f"API Key: {API_KEY}")
    print(f"Use: Authorization: Bearer {API_KEY}")
    print("Example: curl -X POST http://localhost:8000/v1/selections/run \\")
    print('  -H "Authorization: Bearer ' + API_KEY + '" \\')
    print('  -H "Content-Type: application/json" \\')
    print(f"  -d '{{\"date\":\"{WEEK_START.isoformat()}\"}}'")


if __name__ == "__main__":
    asyncio.run(seed())
