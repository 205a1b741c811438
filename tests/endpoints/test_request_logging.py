import logging
import pytest
from fastapi.testclient import TestClient

from app.core.constants import OUT_OF_ORDER_ERROR
from app.middleware import logging as request_logging
from tests.helpers.asserts import lesson_ids


@pytest.mark.parametrize("status_code,outcome,expected", [
    (200, None, logging.INFO),
    (404, None, logging.WARNING),
    (409, OUT_OF_ORDER_ERROR, logging.INFO),
    (503, None, logging.ERROR),
    (500, OUT_OF_ORDER_ERROR, logging.ERROR),
])
def test_log_level(status_code, outcome, expected):
    assert request_logging._log_level(status_code, outcome) == expected


@pytest.fixture
def logged(monkeypatch):
    records = []
    monkeypatch.setattr(
        request_logging.logger, "log",
        lambda level, msg, *args, **kwargs: records.append((level, msg, kwargs.get("extra", {}))),
    )
    return records


def test_out_of_order_is_logged_at_info_with_user(client: TestClient, learner, learner_headers, enrolled_course, logged):
    third = lesson_ids(enrolled_course)[2]
    response = client.post("/lesson-progress", headers=learner_headers, json={
        "courseId": enrolled_course.id,
        "lessonId": third,
        "completed": True,
    })
    assert response.status_code == 409
    assert response.headers["X-Request-ID"]

    level, message, extra = logged[-1]
    assert level == logging.INFO
    assert extra["user_id"] == learner.id
    assert extra["outcome"] == OUT_OF_ORDER_ERROR
    assert extra["request_id"] == response.headers["X-Request-ID"]
    assert f"user={learner.id}" in message


def test_client_errors_log_at_warning(client: TestClient, logged):
    response = client.get("/account/me")
    assert response.status_code == 401

    level, _, extra = logged[-1]
    assert level == logging.WARNING
    assert extra["user_id"] is None
