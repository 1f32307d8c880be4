"""Database connection and session management."""

import ssl
from collections.abc import AsyncGenerator
from urllib.parse import parse_qs, urlencode, urlparse, urlunparse

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from voxqa.config import settings


def _make_ssl_context():
    """SSL context for managed Postgres providers that require TLS."""
    return ssl.create_default_context()


def get_engine_url_and_connect_args(url: str):
    """Strip sslmode from URL (asyncpg doesn't accept it) and pass SSL via connect_args."""
    connect_args = {}
    if "sslmode=" in url or "ssl=" in url:
        parsed = urlparse(url)
        query = parse_qs(parsed.query)
        mode = (query.pop("sslmode", None) or query.pop("ssl", None) or [""])[0]
        query.pop("ssl", None)
        new_query = urlencode(query, doseq=True)
        url = urlunparse(parsed._replace(query=new_query))
        if mode in ("require", "verify-ca", "verify-full", "true"):
            connect_args["ssl"] = _make_ssl_context()
    return url, connect_args


_db_url, _connect_args = get_engine_url_and_connect_args(settings.database_url)


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


engine = create_async_engine(
    _db_url,
    echo=settings.log_level == "DEBUG",
    connect_args=_connect_args,
)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for database sessions."""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
