"""Judgment payload parsing."""

import json
import logging
from typing import Any

from pydantic import ValidationError

from voxqa.errors import MalformedJudgmentPayloadError
from voxqa.schemas.judgment import CriterionJudgment, JudgmentPayload, JudgmentSet, RawCriterion
from voxqa.schemas.rubric import Rubric

logger = logging.getLogger(__name__)


def _strip_fences(text: str) -> str:
    """Remove markdown code fences around a JSON document."""
    cleaned = text.strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[7:]
    elif cleaned.startswith("```"):
        cleaned = cleaned[3:]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    return cleaned.strip()


def _to_judgment(key: str, raw: RawCriterion) -> CriterionJudgment:
    ts = raw.timestamp_seconds
    return CriterionJudgment(
        key=key,
        satisfied=raw.satisfied,
        not_applicable=raw.na,
        rationale=raw.rationale,
        quote=raw.quote or None,
        timestamp_seconds=int(round(ts)) if ts is not None else None,
    )


def parse_judgment_payload(raw: str | bytes | dict[str, Any], rubric: Rubric) -> JudgmentSet:
    """Parse the judgment source's answer for one recording.

    Criteria are returned in rubric order; keys the rubric does not know are
    dropped and missing ones are left for the score calculator to default.
    """
    if isinstance(raw, (str, bytes)):
        try:
            text = raw.decode() if isinstance(raw, bytes) else raw
            raw = json.loads(_strip_fences(text))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            logger.error("Judgment payload is not valid JSON: %r", raw[:500])
            raise MalformedJudgmentPayloadError("Judgment payload is not valid JSON") from exc

    if not isinstance(raw, dict):
        raise MalformedJudgmentPayloadError("Judgment payload must be a JSON object")

    try:
        payload = JudgmentPayload.model_validate(raw)
    except ValidationError as exc:
        raise MalformedJudgmentPayloadError(f"Judgment payload has an invalid shape: {exc}") from exc

    unknown = (set(payload.general) - set(rubric.general_keys())) | (
        set(payload.high_impact) - set(rubric.high_impact_keys())
    )
    if unknown:
        logger.debug("Ignoring criteria not in %s: %s", rubric.id.value, sorted(unknown))

    general = [
        _to_judgment(c.key, payload.general[c.key])
        for c in rubric.general
        if c.key in payload.general
    ]
    high_impact = [
        _to_judgment(c.key, payload.high_impact[c.key])
        for c in rubric.high_impact
        if c.key in payload.high_impact
    ]

    return JudgmentSet(
        general=general,
        high_impact=high_impact,
        unintelligible=payload.unintelligible,
        transcript=payload.transcript,
        summary=payload.summary,
    )
