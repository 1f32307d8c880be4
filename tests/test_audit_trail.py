"""Unit tests for correction diffs."""

from voxqa.engine.audit_trail import diff_judgments
from voxqa.schemas.judgment import CriterionJudgment, JudgmentSet
from voxqa.schemas.rubric import Criterion, HighImpactCriterion, Rubric, RubricId

RUBRIC = Rubric(
    id=RubricId.CLARO_HOGAR,
    label="Test",
    general=(
        Criterion(key="a", label="Criterion A", weight=50),
        Criterion(key="b", label="Criterion B", weight=50),
    ),
    high_impact=(HighImpactCriterion(key="h", label="High H"),),
)


def _set(a=True, b=True, h=True, b_na=False):
    return JudgmentSet(
        general=[
            CriterionJudgment(key="a", satisfied=a),
            CriterionJudgment(key="b", satisfied=b, not_applicable=b_na),
        ],
        high_impact=[CriterionJudgment(key="h", satisfied=h)],
    )


def test_no_change_no_diff():
    assert diff_judgments(RUBRIC, _set(), _set()) == []


def test_rationale_only_edit_is_not_a_change():
    new = _set()
    new = new.model_copy(
        update={"general": [new.general[0].model_copy(update={"rationale": "edited"}), new.general[1]]}
    )
    assert diff_judgments(RUBRIC, _set(), new) == []


def test_high_impact_changes_come_first():
    changes = diff_judgments(RUBRIC, _set(), _set(a=False, h=False))
    assert [(c.key, c.kind) for c in changes] == [("h", "high_impact"), ("a", "general")]
    assert changes[1].label == "Criterion A"
    assert changes[1].from_ == "Satisfied"
    assert changes[1].to == "Not satisfied"


def test_serializes_from_field():
    change = diff_judgments(RUBRIC, _set(a=False), _set())[0]
    assert change.model_dump(by_alias=True)["from"] == "Not satisfied"


def test_not_applicable_in_new_set_is_skipped():
    assert diff_judgments(RUBRIC, _set(b=True), _set(b=False, b_na=True)) == []


def test_criteria_missing_on_one_side_are_not_compared():
    new = JudgmentSet(general=[CriterionJudgment(key="a", satisfied=False)])
    changes = diff_judgments(RUBRIC, _set(), new)
    assert [c.key for c in changes] == ["a"]
