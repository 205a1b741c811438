import pytest
from fastapi import HTTPException
from sqlalchemy.orm import Session

from app.crud.course_enrollment import course_enrollment as crud_enrollment
from app.services.enrollment import enrollment_service


def test_get_or_create_inserts_once(db_session: Session, learner, course_factory):
    course = course_factory(lessons=1)

    first, created = crud_enrollment.get_or_create(db_session, user_id=learner.id, course_id=course.id)
    assert created is True

    again, created = crud_enrollment.get_or_create(db_session, user_id=learner.id, course_id=course.id)
    assert created is False
    assert again.id == first.id


def test_enroll_when_another_writer_already_inserted(db_session: Session, learner, course_factory, enroll):
    course = course_factory(lessons=1)
    existing = enroll(learner, course)

    enrollment = enrollment_service.enroll(db_session, user_id=learner.id, course_id=course.id)
    assert enrollment.id == existing.id
    assert len(crud_enrollment.get_by_user(db_session, user_id=learner.id)) == 1


def test_enroll_in_unpublished_course_is_not_found(db_session: Session, learner, course_factory):
    course = course_factory(lessons=1, published=False)
    with pytest.raises(HTTPException) as exc:
        enrollment_service.enroll(db_session, user_id=learner.id, course_id=course.id)
    assert exc.value.status_code == 404
