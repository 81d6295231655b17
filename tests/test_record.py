"""Daily record model tests."""

from __future__ import annotations

import pytest

from models.enums import Category, MindsetStatus
from models.record import (
    DEFAULT_GOALS,
    DailyRecord,
    ValidationError,
    completion,
    default_record,
    materialize,
    reset_progress,
)


def test_default_record_baseline() -> None:
    record = default_record()
    assert record.academic.progress == 0 and record.academic.goal == 2
    assert record.physical.progress == 0 and record.physical.goal == 30
    assert record.character.progress == 0 and record.character.goal == 10
    assert record.character.social_check is False
    assert record.mindset.is100 is False
    assert record.mindset.status is MindsetStatus.UNTOGGLED


def test_materialize_absent_equals_defaults() -> None:
    assert materialize(None) == default_record()
    assert materialize({}) == default_record()


def test_materialize_overlays_per_category() -> None:
    record = materialize({"academic": {"progress": 1.5, "goal": 4}})
    assert record.academic.progress == 1.5
    assert record.academic.goal == 4
    # untouched categories keep their defaults
    assert record.physical == default_record().physical
    assert record.mindset.is100 is False


@pytest.mark.parametrize("goal", [0, -3, None, "abc", True])
def test_materialize_falls_back_to_default_goal(goal) -> None:
    record = materialize({"physical": {"progress": 10, "goal": goal}})
    assert record.physical.goal == DEFAULT_GOALS[Category.PHYSICAL]
    assert record.physical.progress == 10


def test_materialize_missing_goal_and_bad_progress() -> None:
    record = materialize({"character": {"progress": -5}})
    assert record.character.goal == 10
    assert record.character.progress == 0
    assert record.character.social_check is False


def test_materialize_flags_require_real_true() -> None:
    record = materialize({
        "character": {"progress": 1, "goal": 10, "socialCheck": "yes"},
        "mindset": {"is100": 1},
    })
    assert record.character.social_check is False
    assert record.mindset.is100 is False

    record = materialize({
        "character": {"progress": 1, "goal": 10, "socialCheck": True},
        "mindset": {"status": "Affirmed", "is100": True},
    })
    assert record.character.social_check is True
    assert record.mindset.is100 is True


def test_completion_is_clamped_for_large_progress() -> None:
    for progress in (0, 1, 2, 3, 1e6, 1e300):
        record = materialize({"academic": {"progress": progress, "goal": 2}})
        value = completion(record, Category.ACADEMIC)
        assert 0 <= value <= 100
    assert completion(materialize({"academic": {"progress": 1e9, "goal": 2}}), Category.ACADEMIC) == 100


def test_completion_with_non_positive_goal_is_zero() -> None:
    record = default_record()
    record.physical.goal = 0
    assert completion(record, Category.PHYSICAL) == 0


def test_mindset_completion() -> None:
    record = default_record()
    assert completion(record, Category.MINDSET) == 0
    record.toggle_mindset()
    assert completion(record, Category.MINDSET) == 100
    assert completion(None, Category.ACADEMIC) == 0


def test_reset_keeps_goal_and_clears_flags() -> None:
    record = materialize({
        "academic": {"progress": 3, "goal": 5},
        "character": {"progress": 4, "goal": 10, "socialCheck": True},
        "mindset": {"is100": True},
    }, "2024-01-10")

    fresh = reset_progress(record)

    assert fresh.academic.to_dict() == {"progress": 0, "goal": 5}
    assert fresh.character.social_check is False
    assert fresh.mindset.is100 is False
    assert fresh.date == "2024-01-10"
    # the original record is untouched
    assert record.academic.progress == 3


def test_mutators_validate_input() -> None:
    record = default_record()
    with pytest.raises(ValidationError):
        record.add_progress(Category.ACADEMIC, 0)
    with pytest.raises(ValidationError):
        record.set_goal(Category.PHYSICAL, -1)
    with pytest.raises(ValidationError):
        record.entry(Category.MINDSET)
    assert record == default_record()

    assert record.add_progress(Category.ACADEMIC, 1.5) == 1.5
    assert record.add_progress(Category.ACADEMIC, 0.5) == 2.0
    assert record.academic.is_reached


def test_to_dict_matches_document_shape() -> None:
    record = default_record("2024-01-01")
    assert record.to_dict() == {
        "academic": {"progress": 0, "goal": 2},
        "physical": {"progress": 0, "goal": 30},
        "character": {"progress": 0, "goal": 10, "socialCheck": False},
        "mindset": {"status": "Untoggled", "is100": False},
        "date": "2024-01-01",
    }
    assert DailyRecord.from_dict(record.to_dict(), "2024-01-01") == record
