"""Shared fixtures: in-memory sqlite database and record factories."""

from datetime import date
from uuid import uuid4

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from voxqa.auth.middleware import hash_api_key
from voxqa.database import Base
from voxqa.models import Auditor, Recording

TEST_API_KEY = "sk_test_voxqa"


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    # pysqlite's own transaction handling breaks SAVEPOINT; let SQLAlchemy emit BEGIN.
    @event.listens_for(engine.sync_engine, "connect")
    def _connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _begin(conn):
        conn.exec_driver_sql("BEGIN")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
async def auditor(db):
    a = Auditor(auditor_id=str(uuid4()), name="Test Auditor", api_key_hash=hash_api_key(TEST_API_KEY))
    db.add(a)
    await db.commit()
    return a


@pytest.fixture
def add_recording(db):
    """Factory inserting a recording; returns the flushed row."""
    counter = {"n": 0}

    async def _add(
        client_code: str = "claro_wcb",
        agent_id: str | None = "100",
        file_date: date = date(2026, 2, 11),
        call_duration_seconds: int | None = 120,
        file_size_bytes: int = 50_000,
        project_id: int | None = None,
        agent_name: str | None = None,
    ) -> Recording:
        counter["n"] += 1
        name = f"rec-{counter['n']}.mp3"
        rec = Recording(
            file_name=name,
            file_path=f"/recordings/{client_code}/{name}",
            client_code=client_code,
            file_date=file_date,
            file_size_bytes=file_size_bytes,
            agent_id=agent_id,
            agent_name=agent_name or (f"Agent {agent_id}" if agent_id else None),
            project_id=project_id,
            call_duration_seconds=call_duration_seconds,
        )
        db.add(rec)
        await db.flush()
        return rec

    return _add
