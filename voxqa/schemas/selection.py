"""Recording, selection and week schemas."""

from datetime import date, datetime
from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from voxqa.errors import InvalidStatusTransitionError


class SelectionStatus(str, Enum):
    SELECTED = "selected"
    IN_REVIEW = "in_review"
    COMPLETED = "completed"
    SKIPPED = "skipped"


def parse_status(value: str | SelectionStatus) -> SelectionStatus:
    """Validate a status value; anything outside the defined set is rejected."""
    try:
        return SelectionStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in SelectionStatus)
        raise InvalidStatusTransitionError(
            f"Invalid status '{value}'. Allowed: {allowed}"
        ) from None


class WeekWindow(BaseModel):
    """Monday-Sunday window containing a reference date."""

    start: date
    end: date
    working_days_remaining: int


class RecordingCandidate(BaseModel):
    """Recording discovered and enriched upstream; read-only to selection."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    client_code: str
    agent_id: str | None = None
    agent_name: str | None = None
    project_id: int | None = None
    call_duration_seconds: int | None = None
    file_size_bytes: int = 0
    file_date: date


class PlannedSelection(BaseModel):
    """A pick produced by the planner, before it is persisted."""

    recording_id: int
    agent_id: str
    agent_name: str | None = None
    client_code: str


class ClientBreakdown(BaseModel):
    """Per-client result of one day's selection."""

    quota: int | None
    inserted: int = 0
    skipped: int = 0
    available: int = 0


class SelectionSummary(BaseModel):
    """Result of selectForDay."""

    date: date
    week: WeekWindow
    inserted: int = 0
    skipped: int = 0
    already_selected: int = 0
    total_agents: int = 0
    quotas_by_client: dict[str, int | None] = Field(default_factory=dict)
    breakdown: dict[str, ClientBreakdown] = Field(default_factory=dict)


class SelectionOut(BaseModel):
    """Selection as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    recording_id: int
    agent_id: str
    agent_name: str | None = None
    client_code: str
    week_start: date
    week_end: date
    status: SelectionStatus
    score: int | None = None
    notes: str | None = None
    campaign: str | None = None
    created_at: datetime | None = None


class SelectionUpdate(BaseModel):
    """PATCH /v1/selections/{id} request."""

    status: str | None = None
    score: int | None = Field(default=None, ge=0, le=100)
    notes: str | None = None


class RunSelectionRequest(BaseModel):
    """POST /v1/selections/run request."""

    target_date: date | None = Field(
        default=None, validation_alias=AliasChoices("date", "target_date")
    )


class CatchUpRequest(BaseModel):
    """POST /v1/selections/catch-up request."""

    last_covered: date


class RecordingIn(BaseModel):
    """Recording pushed by the discovery/enrichment collaborator."""

    file_name: str
    file_path: str
    client_code: str
    file_date: date
    file_size_bytes: int = 0
    agent_id: str | None = None
    agent_name: str | None = None
    project_id: int | None = None
    call_duration_seconds: int | None = None


class RecordingIngestResult(BaseModel):
    created: int
    existing: int
