"""API key authentication middleware."""

import hashlib
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import APIKeyHeader
from sqlalchemy.ext.asyncio import AsyncSession

from voxqa.config import settings
from voxqa.database import get_db
from voxqa.models import Auditor
from voxqa.storage.repositories import get_auditor_by_key_hash


API_KEY_HEADER = APIKeyHeader(name="Authorization", auto_error=False)


def hash_api_key(api_key: str) -> str:
    """Hash API key with salt for storage/lookup."""
    return hashlib.sha256(
        f"{settings.api_key_hash_salt}:{api_key}".encode()
    ).hexdigest()


async def get_auditor_from_bearer(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
    auth_header: str | None = Depends(API_KEY_HEADER),
) -> Auditor:
    """Resolve the calling auditor from the Bearer token (API key)."""
    if not auth_header or not auth_header.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing or invalid Authorization header",
        )
    api_key = auth_header[7:].strip()
    if not api_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing API key",
        )
    auditor = await get_auditor_by_key_hash(db, hash_api_key(api_key))
    if not auditor:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid API key",
        )
    return auditor


# Type alias for dependency injection
AuditorDep = Annotated[Auditor, Depends(get_auditor_from_bearer)]
