"""Health and metrics endpoints."""

from fastapi import APIRouter

from voxqa.engine.catalog import CATALOG

router = APIRouter()


@router.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


@router.get("/metrics")
async def metrics():
    """Basic metrics endpoint for observability."""
    return {"service": "voxqa", "version": "0.1.0", "rubrics": len(CATALOG)}
