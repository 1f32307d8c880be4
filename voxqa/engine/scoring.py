"""Score calculator - weighted composition with automatic disqualification."""

from voxqa.schemas.judgment import CriterionJudgment, JudgmentSet, ResolvedCriterion, ScoreResult
from voxqa.schemas.rubric import Rubric

MAX_SCORE = 100


def _round_half_up(numerator: int, denominator: int) -> int:
    """round(numerator / denominator) with halves going up, in exact integer math."""
    return (2 * numerator + denominator) // (2 * denominator)


def score(rubric: Rubric, judgments: JudgmentSet) -> ScoreResult:
    """Score one judgment set against its rubric.

    Not-applicable general criteria leave both numerator and denominator, so
    their weight is redistributed over the rest. Any unsatisfied high-impact
    criterion forces 0. A missing general judgment counts as applicable and
    unsatisfied; a missing high-impact judgment counts as satisfied.
    An unintelligible recording scores the maximum unless a high-impact
    criterion is still unsatisfied.
    """
    general_by_key = {j.key: j for j in judgments.general}
    high_impact_by_key = {j.key: j for j in judgments.high_impact}

    general: list[ResolvedCriterion] = []
    applicable_weight = 0
    earned_weight = 0
    for criterion in rubric.general:
        j = general_by_key.get(criterion.key)
        na = j.not_applicable if j else False
        satisfied = (j.satisfied if j else False) and not na
        if not na:
            applicable_weight += criterion.weight
            if satisfied:
                earned_weight += criterion.weight
        general.append(_resolve(criterion.key, criterion.label, j, satisfied, na, criterion.weight))

    high_impact: list[ResolvedCriterion] = []
    high_impact_failed = False
    for criterion in rubric.high_impact:
        j = high_impact_by_key.get(criterion.key)
        satisfied = True if j is None else (j.satisfied or j.not_applicable)
        if not satisfied:
            high_impact_failed = True
        high_impact.append(_resolve(criterion.key, criterion.label, j, satisfied, False))

    if high_impact_failed:
        final = 0
    elif judgments.unintelligible:
        final = MAX_SCORE
    elif applicable_weight == 0:
        final = 0
    else:
        final = _round_half_up(MAX_SCORE * earned_weight, applicable_weight)

    return ScoreResult(
        score=final,
        high_impact_failed=high_impact_failed,
        unintelligible=judgments.unintelligible,
        applicable_weight=applicable_weight,
        earned_weight=earned_weight,
        general=general,
        high_impact=high_impact,
    )


def _resolve(
    key: str,
    label: str,
    j: CriterionJudgment | None,
    satisfied: bool,
    na: bool,
    weight: int | None = None,
) -> ResolvedCriterion:
    return ResolvedCriterion(
        key=key,
        label=label,
        weight=weight,
        satisfied=satisfied,
        not_applicable=na,
        rationale=j.rationale if j else "",
        quote=j.quote if j else None,
        timestamp_seconds=j.timestamp_seconds if j else None,
    )


def resolved_judgments(result: ScoreResult, transcript: str = "", summary: str = "") -> JudgmentSet:
    """Turn a score breakdown back into a judgment set (scoring it again is a no-op)."""

    def to_judgment(row: ResolvedCriterion) -> CriterionJudgment:
        return CriterionJudgment(
            key=row.key,
            satisfied=row.satisfied,
            not_applicable=row.not_applicable,
            rationale=row.rationale,
            quote=row.quote,
            timestamp_seconds=row.timestamp_seconds,
        )

    return JudgmentSet(
        general=[to_judgment(r) for r in result.general],
        high_impact=[to_judgment(r) for r in result.high_impact],
        unintelligible=result.unintelligible,
        transcript=transcript,
        summary=summary,
    )
