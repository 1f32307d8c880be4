"""Rubric schemas."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class RubricId(str, Enum):
    """Closed set of rubric variants, one per client campaign."""

    CLARO_WCB = "claro_wcb"
    CLARO_HOGAR = "claro_hogar"
    CLARO_TYT = "claro_tyt"
    OBAMA_VENTAS = "obama_ventas"
    OBAMA_CUSTOMER = "obama_customer"
    LV_CUSTOMER = "lv_customer"
    LV_VENTAS = "lv_ventas"


class Criterion(BaseModel):
    """Weighted general criterion."""

    model_config = ConfigDict(frozen=True)

    key: str
    label: str
    weight: int


class HighImpactCriterion(BaseModel):
    """Unweighted criterion whose failure zeroes the score."""

    model_config = ConfigDict(frozen=True)

    key: str
    label: str


class Rubric(BaseModel):
    """Evaluation form for one client campaign.

    holder_only_keys are general criteria that require discussing the account
    with its holder; closing_keys are closing-phase criteria an agent cannot
    reach when the call is cut short.
    """

    model_config = ConfigDict(frozen=True)

    id: RubricId
    label: str
    general: tuple[Criterion, ...]
    high_impact: tuple[HighImpactCriterion, ...]
    holder_only_keys: frozenset[str] = Field(default_factory=frozenset)
    closing_keys: frozenset[str] = Field(default_factory=frozenset)

    @property
    def total_weight(self) -> int:
        return sum(c.weight for c in self.general)

    def general_keys(self) -> list[str]:
        return [c.key for c in self.general]

    def high_impact_keys(self) -> list[str]:
        return [c.key for c in self.high_impact]
