# /tests/test_aggregation.py

import pytest

from app.models.common import LetterGrade
from app.models.gradebook_model import GradebookComponents
from app.services.gradebook_helpers import aggregation


def _components(**lists) -> GradebookComponents:
    return GradebookComponents.model_validate(lists)


@pytest.fixture
def mixed_components():
    """Two assignments, one test, no exams and one rubric line: 20 + 15 + 30 + 10."""
    return _components(
        assignments=[{"assignment_id": "asg_1", "marks": 20}, {"assignment_id": "asg_2", "marks": 15}],
        tests=[{"name": "CAT 1", "marks": 30}],
        exams=[],
        rubrics=[{"criteria": "Participation", "marks": 10}],
    )


def test_sum_across_all_component_lists(mixed_components):
    """
    GIVEN marks spread over assignments, tests and rubrics
    WHEN the entry is aggregated
    THEN the total is the plain sum and the grade comes from its band
    """
    result = aggregation.aggregate(mixed_components)
    assert result.total_marks == 75
    assert result.final_grade == LetterGrade.C
    print("\n✅ SUCCESS: test_sum_across_all_component_lists passed.")


@pytest.mark.parametrize("total, expected", [
    (100, LetterGrade.A),
    (90, LetterGrade.A),
    (89, LetterGrade.B),
    (80, LetterGrade.B),
    (79.5, LetterGrade.C),
    (70, LetterGrade.C),
    (60, LetterGrade.D),
    (59.99, LetterGrade.F),
    (0, LetterGrade.F),
])
def test_grade_band_boundaries(total, expected):
    """Each band is inclusive at its lower threshold."""
    assert aggregation.grade_for_total(total) == expected


def test_aggregate_is_deterministic(mixed_components):
    first = aggregation.aggregate(mixed_components)
    second = aggregation.aggregate(mixed_components)
    assert first == second


def test_weights_are_carried_but_not_applied():
    """
    Component lines carry a `weight`, but the total is an unweighted sum of
    raw marks. This is the documented behavior, not an oversight.
    """
    components = _components(
        tests=[{"name": "CAT 1", "marks": 40, "weight": 25}],
        exams=[{"name": "End of term", "marks": 50, "weight": 75}],
    )
    result = aggregation.aggregate(components)
    assert result.total_marks == 90
    assert result.final_grade == LetterGrade.A


def test_missing_marks_default_to_zero():
    components = _components(rubrics=[{"criteria": "Neatness"}], tests=[{"name": "CAT 1", "marks": 65}])
    result = aggregation.aggregate(components)
    assert result.total_marks == 65
    assert result.final_grade == LetterGrade.D


def test_never_graded_entry_has_no_grade():
    """An entry that has never had a component keeps an unset grade."""
    result = aggregation.aggregate(_components())
    assert result.total_marks == 0
    assert result.final_grade is None


def test_emptied_entry_falls_to_f_once_graded():
    """Removing every component from a graded entry gives a total of 0 and an F."""
    result = aggregation.aggregate(_components(), previous_grade="B")
    assert result.total_marks == 0
    assert result.final_grade == LetterGrade.F


def test_assignment_reference_accepts_embedded_object():
    components = _components(assignments=[{"assignment_id": {"_id": "asg_9", "title": "Essay"}, "marks": 12}])
    assert components.assignments[0].assignment_id == "asg_9"
    assert aggregation.total_marks(components) == 12
