"""Unit tests for the criteria catalog and campaign classifier."""

import pytest

from voxqa.engine.catalog import CATALOG, CLIENT_RUBRICS, get_rubric, validate_catalog
from voxqa.engine.classifier import CampaignClass, campaign_class, classify_client, resolve_rubric
from voxqa.errors import ConfigurationMissingError
from voxqa.schemas.rubric import RubricId


def test_catalog_is_valid():
    validate_catalog()


@pytest.mark.parametrize("rubric_id", list(RubricId))
def test_every_rubric_weights_sum_to_100(rubric_id):
    rubric = CATALOG[rubric_id]
    assert rubric.total_weight == 100
    assert rubric.high_impact


def test_every_client_has_a_rubric():
    for rubric_ids in CLIENT_RUBRICS.values():
        for rubric_id in rubric_ids:
            assert rubric_id in CATALOG


def test_get_rubric_accepts_string_ids():
    assert get_rubric("claro_wcb").id is RubricId.CLARO_WCB


def test_get_rubric_unknown():
    with pytest.raises(ConfigurationMissingError):
        get_rubric("nope")


def test_classify_client_reclassifies_exempt_projects():
    assert classify_client("obama", 34) == "lv"
    assert classify_client("obama", 35) == "lv"
    assert classify_client("obama", 36) == "obama"
    assert classify_client("claro_wcb", None) == "claro_wcb"


def test_campaign_class():
    assert campaign_class("obama", "1000834615") is CampaignClass.SERVICE
    assert campaign_class("obama", "42") is CampaignClass.SALES
    assert campaign_class("lv", "42", 35) is CampaignClass.SERVICE
    assert campaign_class("lv", "42", 34) is CampaignClass.SALES
    assert campaign_class("claro_hogar", "42") is None


def test_resolve_rubric():
    assert resolve_rubric("claro_wcb") is RubricId.CLARO_WCB
    assert resolve_rubric("claro_tyt", "7") is RubricId.CLARO_TYT
    assert resolve_rubric("obama", "1000834615") is RubricId.OBAMA_CUSTOMER
    assert resolve_rubric("obama", "55") is RubricId.OBAMA_VENTAS
    assert resolve_rubric("lv", "55", 35) is RubricId.LV_CUSTOMER
    assert resolve_rubric("lv", "55", 34) is RubricId.LV_VENTAS


def test_resolve_rubric_unknown_client_is_not_defaulted():
    with pytest.raises(ConfigurationMissingError):
        resolve_rubric("acme", "1")
