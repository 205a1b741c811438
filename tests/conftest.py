import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("LOG_DIR", "logs/test")

import asyncio
import uuid
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from app.core.cache import cache
from app.core.config import settings
from app.core.security import create_access_token, get_password_hash
from app.crud.course import course as crud_course
from app.crud.course_enrollment import course_enrollment as crud_enrollment
from app.crud.lesson import lesson as crud_lesson
from app.crud.user import user as crud_user
from app.models.registry import Base
from app.utils import deps as deps_utils
import main

test_db_url = settings.TEST_DATABASE_URL or "sqlite:///./test.db"

@pytest.fixture(scope="session")
def database_engine():
    if test_db_url.startswith("sqlite"):
        engine = create_engine(test_db_url, connect_args={"check_same_thread": False})
    else:
        engine = create_engine(test_db_url)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()
    if test_db_url.startswith("sqlite") and os.path.exists("./test.db"):
        os.remove("./test.db")

@pytest.fixture(scope="function")
def db_session(database_engine):
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=database_engine)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.rollback()
        db.close()

@pytest.fixture(autouse=True)
def _clear_cache():
    asyncio.run(cache.clear())
    yield

@pytest.fixture(scope="function")
def client(db_session):
    main.app.dependency_overrides[deps_utils.get_db] = lambda: db_session
    main.app.dependency_overrides[deps_utils.get_transactional_db] = lambda: db_session
    with TestClient(main.app) as test_client:
        yield test_client
    main.app.dependency_overrides.clear()

@pytest.fixture
def user_factory(db_session):
    def _user_factory(email=None, password="testpass123", is_active=True, is_admin=False):
        user_data = {
            "full_name": "Test User",
            "email": email or f"user-{uuid.uuid4().hex}@test.com",
            "hashed_password": get_password_hash(password),
            "is_active": is_active,
            "is_admin": is_admin,
        }
        return crud_user.create(db_session, obj_in=user_data)
    return _user_factory

@pytest.fixture
def auth_headers():
    def _auth_headers(user):
        token = create_access_token(data={"user_id": user.id}, email=user.email)
        return {"Authorization": f"Bearer {token}"}
    return _auth_headers

@pytest.fixture
def learner(user_factory):
    return user_factory()

@pytest.fixture
def admin_user(user_factory):
    return user_factory(is_admin=True)

@pytest.fixture
def learner_headers(learner, auth_headers):
    return auth_headers(learner)

@pytest.fixture
def admin_headers(admin_user, auth_headers):
    return auth_headers(admin_user)

@pytest.fixture
def course_factory(db_session):
    """Create a published course with ``lessons`` lessons indexed 1..N."""
    def _course_factory(lessons=3, slug=None, published=True, title="JS Foundations"):
        course = crud_course.create(db_session, obj_in={
            "slug": slug or f"js-foundations-{uuid.uuid4().hex[:8]}",
            "title": title,
            "published": published,
        })
        for index in range(1, lessons + 1):
            crud_lesson.create(db_session, obj_in={
                "course_id": course.id,
                "index": index,
                "title": f"Lesson {index}",
                "video_url": f"https://videos.test/{course.slug}/{index}.m3u8",
            })
        db_session.expire(course, ["lessons"])
        return course
    return _course_factory

@pytest.fixture
def enroll(db_session):
    def _enroll(user, course):
        return crud_enrollment.create(db_session, obj_in={"user_id": user.id, "course_id": course.id})
    return _enroll

@pytest.fixture
def enrolled_course(learner, course_factory, enroll):
    """The three-lesson "js-foundations" course with ``learner`` enrolled."""
    course = course_factory(lessons=3)
    enroll(learner, course)
    return course
