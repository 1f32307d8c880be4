"""Campaign classifier - resolves which rubric variant applies to a recording."""

from enum import Enum

from voxqa.engine.catalog import (
    CLIENT_RUBRICS,
    EXEMPT_CLIENT,
    EXEMPT_PROJECT_IDS,
    LV_CUSTOMER_PROJECT,
    OBAMA_SERVICE_AGENTS,
)
from voxqa.errors import ConfigurationMissingError
from voxqa.schemas.rubric import RubricId


class CampaignClass(str, Enum):
    SALES = "sales"
    SERVICE = "service"


def classify_client(client_code: str, project_id: int | None) -> str:
    """Return the effective client code.

    Exempt-client projects are recorded on another client's servers, so a
    matching project id wins over the source's client code.
    """
    if project_id is not None and project_id in EXEMPT_PROJECT_IDS:
        return EXEMPT_CLIENT
    return client_code


def campaign_class(
    client_code: str, agent_id: str | None = None, project_id: int | None = None
) -> CampaignClass | None:
    """Sales vs. service for clients with two rubrics; None for single-rubric clients."""
    if client_code == "obama":
        if agent_id is not None and str(agent_id) in OBAMA_SERVICE_AGENTS:
            return CampaignClass.SERVICE
        return CampaignClass.SALES
    if client_code == EXEMPT_CLIENT:
        if project_id == LV_CUSTOMER_PROJECT:
            return CampaignClass.SERVICE
        return CampaignClass.SALES
    return None


def resolve_rubric(
    client_code: str, agent_id: str | None = None, project_id: int | None = None
) -> RubricId:
    """Resolve the rubric for a (client, agent, project) combination."""
    rubric_ids = CLIENT_RUBRICS.get(client_code)
    if not rubric_ids:
        raise ConfigurationMissingError(f"No evaluation rubric for client '{client_code}'")
    if len(rubric_ids) == 1:
        return rubric_ids[0]

    cls = campaign_class(client_code, agent_id, project_id)
    sales, service = rubric_ids
    return service if cls is CampaignClass.SERVICE else sales
