import pytest
from fastapi import HTTPException
from sqlalchemy.orm import Session

from app.core.constants import MAX_POSITION_SECONDS, OUT_OF_ORDER_ERROR
from app.crud.lesson_progress import lesson_progress as crud_lesson_progress
from app.services.course_progress import calculate_pct, course_progress_service, normalize_position
from tests.helpers.asserts import lesson_ids


def _save(db, user, course, lesson_id, position=None, completed=False):
    return course_progress_service.save_progress(
        db,
        user_id=user.id,
        course_id=course.id,
        lesson_id=lesson_id,
        position_seconds=position,
        completed=completed,
    )


def test_read_progress_without_row_returns_zero_value(db_session: Session, learner, enrolled_course):
    first = lesson_ids(enrolled_course)[0]
    progress = course_progress_service.read_progress(db_session, user_id=learner.id, course_id=enrolled_course.id, lesson_id=first)
    assert progress.position_seconds == 0
    assert progress.completed is False
    assert progress.updated_at is None


def test_duration_never_decreases(db_session: Session, learner, enrolled_course):
    first = lesson_ids(enrolled_course)[0]
    for position, expected in [(10, 10), (45, 45), (20, 45), (0, 45), (46.9, 46)]:
        result = _save(db_session, learner, enrolled_course, first, position=position)
        assert result.ok
        assert result.progress.duration_seconds == expected


def test_completion_is_never_revoked(db_session: Session, learner, enrolled_course):
    first = lesson_ids(enrolled_course)[0]
    assert _save(db_session, learner, enrolled_course, first, position=5, completed=True).progress.completed

    result = _save(db_session, learner, enrolled_course, first, position=1, completed=False)
    assert result.ok
    assert result.progress.completed is True
    assert result.progress.duration_seconds == 5


def test_first_lesson_is_always_completable(db_session: Session, learner, enrolled_course):
    first = lesson_ids(enrolled_course)[0]
    result = _save(db_session, learner, enrolled_course, first, completed=True)
    assert result.ok
    assert result.progress.completed is True


def test_out_of_order_completion_is_rejected_and_persists_nothing(db_session: Session, learner, enrolled_course):
    _, second, third = lesson_ids(enrolled_course)

    result = _save(db_session, learner, enrolled_course, third, position=30, completed=True)
    assert result.ok is False
    assert result.error == OUT_OF_ORDER_ERROR
    assert result.message
    assert crud_lesson_progress.get_by_key(db_session, user_id=learner.id, course_id=enrolled_course.id, lesson_id=third) is None

    # position-only saves are never gated
    assert _save(db_session, learner, enrolled_course, second, position=12).ok


def test_recompleting_a_completed_lesson_is_idempotent(db_session: Session, learner, enrolled_course):
    first, second, _ = lesson_ids(enrolled_course)
    assert _save(db_session, learner, enrolled_course, first, completed=True).ok
    assert _save(db_session, learner, enrolled_course, second, position=30, completed=True).ok

    row = crud_lesson_progress.get_by_key(db_session, user_id=learner.id, course_id=enrolled_course.id, lesson_id=second)
    completed_at = row.completed_at

    result = _save(db_session, learner, enrolled_course, second, position=60, completed=True)
    assert result.ok
    assert result.progress.duration_seconds == 60
    row = crud_lesson_progress.get_by_key(db_session, user_id=learner.id, course_id=enrolled_course.id, lesson_id=second)
    assert row.completed_at == completed_at


def test_negative_and_non_finite_positions_are_clamped():
    assert normalize_position(None) == 0
    assert normalize_position(-12.5) == 0
    assert normalize_position(float("nan")) == 0
    assert normalize_position(float("inf")) == 0
    assert normalize_position(59.99) == 59
    assert normalize_position(1e20) == MAX_POSITION_SECONDS


def test_upsert_merge_never_regresses_a_stored_row(db_session: Session, learner, enrolled_course):
    first = lesson_ids(enrolled_course)[0]
    key = {"user_id": learner.id, "course_id": enrolled_course.id, "lesson_id": first}

    row = crud_lesson_progress.upsert_merge(db_session, **key, duration_seconds=100, completed=True)
    completed_at = row.completed_at
    assert completed_at is not None

    # a stale writer arriving late with a lower position and no completion
    row = crud_lesson_progress.upsert_merge(db_session, **key, duration_seconds=10, completed=False)
    assert row.duration_seconds == 100
    assert row.completed is True
    assert row.completed_at == completed_at

    row = crud_lesson_progress.upsert_merge(db_session, **key, duration_seconds=140, completed=False)
    assert row.duration_seconds == 140
    assert row.completed is True


def test_lesson_outside_course_is_not_found(db_session: Session, learner, enrolled_course, course_factory):
    other = course_factory(lessons=1)
    foreign_lesson = lesson_ids(other)[0]
    with pytest.raises(HTTPException) as exc:
        _save(db_session, learner, enrolled_course, foreign_lesson, position=10)
    assert exc.value.status_code == 404


@pytest.mark.parametrize("done,total,expected", [
    (0, 0, 0),
    (0, 3, 0),
    (1, 3, 33),
    (2, 3, 67),
    (3, 3, 100),
    (1, 8, 13),
    (5, 3, 100),
])
def test_calculate_pct(done, total, expected):
    assert calculate_pct(done, total) == expected


def test_empty_course_reports_zero(db_session: Session, learner, course_factory, enroll):
    course = course_factory(lessons=0)
    enroll(learner, course)
    progress = course_progress_service.course_progress(db_session, user_id=learner.id, course_id=course.id)
    assert (progress.done, progress.total, progress.pct) == (0, 0, 0)


def test_scenario_a_lesson_two_before_lesson_one(db_session: Session, learner, enrolled_course):
    _, second, _ = lesson_ids(enrolled_course)
    result = _save(db_session, learner, enrolled_course, second, completed=True)

    assert result.ok is False
    assert result.error == OUT_OF_ORDER_ERROR
    progress = course_progress_service.read_progress(db_session, user_id=learner.id, course_id=enrolled_course.id, lesson_id=second)
    assert progress.completed is False


def test_scenario_b_sequential_completion(db_session: Session, learner, enrolled_course):
    first, second, _ = lesson_ids(enrolled_course)
    assert _save(db_session, learner, enrolled_course, first, completed=True).ok
    assert _save(db_session, learner, enrolled_course, second, completed=True).ok

    progress = course_progress_service.course_progress(db_session, user_id=learner.id, course_id=enrolled_course.id)
    assert (progress.done, progress.total, progress.pct) == (2, 3, 67)


def test_scenario_c_seeking_backward_keeps_furthest_position(db_session: Session, learner, enrolled_course):
    first = lesson_ids(enrolled_course)[0]
    _save(db_session, learner, enrolled_course, first, position=45)
    _save(db_session, learner, enrolled_course, first, position=20)

    progress = course_progress_service.read_progress(db_session, user_id=learner.id, course_id=enrolled_course.id, lesson_id=first)
    assert progress.position_seconds == 45
    assert progress.completed is False


def test_lesson_states_unlock_sequentially(db_session: Session, learner, enrolled_course):
    first, second, third = lesson_ids(enrolled_course)
    _save(db_session, learner, enrolled_course, first, position=90, completed=True)

    states = course_progress_service.lesson_states(db_session, user_id=learner.id, course_id=enrolled_course.id)
    assert [state.lesson_id for state in states] == [first, second, third]
    assert [state.unlocked for state in states] == [True, True, False]
    assert [state.completed for state in states] == [True, False, False]
    assert states[0].duration_seconds == 90


def test_learning_progress_lists_every_enrollment(db_session: Session, learner, enrolled_course, course_factory, enroll):
    second_course = course_factory(lessons=2, title="Python Basics")
    enroll(learner, second_course)
    _save(db_session, learner, enrolled_course, lesson_ids(enrolled_course)[0], completed=True)

    rows = course_progress_service.learning_progress(db_session, user_id=learner.id)
    by_course = {row.course_id: row for row in rows}
    assert by_course[enrolled_course.id].pct == 33
    assert by_course[second_course.id].pct == 0
    assert by_course[second_course.id].title == "Python Basics"
