"""Reviewer correction diffs."""

from voxqa.schemas.judgment import CriterionChange, CriterionJudgment, JudgmentSet
from voxqa.schemas.rubric import Rubric

SATISFIED_LABEL = "Satisfied"
NOT_SATISFIED_LABEL = "Not satisfied"


def outcome_label(satisfied: bool) -> str:
    return SATISFIED_LABEL if satisfied else NOT_SATISFIED_LABEL


def diff_judgments(rubric: Rubric, current: JudgmentSet, new: JudgmentSet) -> list[CriterionChange]:
    """List criteria whose satisfied value differs between two judgment sets.

    Criteria are paired by key. General criteria marked not-applicable in the
    new set are skipped; criteria missing from either side are not compared.
    """
    changes: list[CriterionChange] = []
    changes.extend(
        _diff(rubric.high_impact, current.high_impact, new.high_impact, "high_impact", skip_na=False)
    )
    changes.extend(_diff(rubric.general, current.general, new.general, "general", skip_na=True))
    return changes


def _diff(
    criteria,
    old: list[CriterionJudgment],
    new: list[CriterionJudgment],
    kind: str,
    skip_na: bool,
) -> list[CriterionChange]:
    old_by_key = {j.key: j for j in old}
    new_by_key = {j.key: j for j in new}
    changes = []
    for criterion in criteria:
        before = old_by_key.get(criterion.key)
        after = new_by_key.get(criterion.key)
        if before is None or after is None:
            continue
        if skip_na and after.not_applicable:
            continue
        if before.satisfied != after.satisfied:
            changes.append(
                CriterionChange(
                    key=criterion.key,
                    kind=kind,
                    label=criterion.label,
                    from_=outcome_label(before.satisfied),
                    to=outcome_label(after.satisfied),
                )
            )
    return changes
