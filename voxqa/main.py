"""VoxQA FastAPI application."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from voxqa.api.evaluations import router as evaluations_router
from voxqa.api.health import router as health_router
from voxqa.api.recordings import router as recordings_router
from voxqa.api.reports import router as reports_router
from voxqa.api.rubrics import router as rubrics_router
from voxqa.api.selections import router as selections_router
from voxqa.config import settings
from voxqa.engine.catalog import validate_catalog
from voxqa.errors import (
    ConfigurationMissingError,
    EvaluationNotFoundError,
    InvalidStatusTransitionError,
    MalformedJudgmentPayloadError,
    SelectionNotFoundError,
)

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

validate_catalog()

app = FastAPI(
    title="VoxQA - Call Audit Service",
    description="Weekly call-recording sampling and rubric scoring for quality audits",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ConfigurationMissingError)
async def configuration_missing_handler(request: Request, exc: ConfigurationMissingError):
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content={"detail": str(exc)})


@app.exception_handler(InvalidStatusTransitionError)
async def invalid_status_handler(request: Request, exc: InvalidStatusTransitionError):
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content={"detail": str(exc)})


@app.exception_handler(MalformedJudgmentPayloadError)
async def malformed_payload_handler(request: Request, exc: MalformedJudgmentPayloadError):
    logger.warning("Rejected judgment payload: %s", exc)
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": str(exc), "retryable": exc.retryable},
    )


@app.exception_handler(SelectionNotFoundError)
@app.exception_handler(EvaluationNotFoundError)
async def not_found_handler(request: Request, exc: Exception):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


app.include_router(health_router, tags=["Health"])
app.include_router(selections_router, prefix="/v1", tags=["Selections"])
app.include_router(evaluations_router, prefix="/v1", tags=["Evaluations"])
app.include_router(recordings_router, prefix="/v1", tags=["Recordings"])
app.include_router(rubrics_router, prefix="/v1", tags=["Rubrics"])
app.include_router(reports_router, prefix="/v1", tags=["Reports"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {"service": "VoxQA", "version": "0.1.0", "docs": "/docs"}
