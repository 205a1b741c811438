from fastapi.testclient import TestClient

from app.core.constants import NOT_ENROLLED_MESSAGE, OUT_OF_ORDER_ERROR
from tests.helpers.asserts import api_call, lesson_ids


def test_save_and_read_progress_contract(client: TestClient, learner_headers, enrolled_course):
    first = lesson_ids(enrolled_course)[0]

    response = api_call(client, "POST", "/lesson-progress", headers=learner_headers, json={
        "courseId": enrolled_course.id,
        "lessonId": first,
        "positionSeconds": 42.7,
    })
    body = response.json()
    assert body["ok"] is True
    assert body["progress"]["durationSeconds"] == 42
    assert body["progress"]["completed"] is False
    assert body["progress"]["updatedAt"]
    assert "error" not in body

    response = api_call(
        client, "GET", f"/lesson-progress?course_id={enrolled_course.id}&lesson_id={first}", headers=learner_headers
    )
    assert response.json()["positionSeconds"] == 42
    assert response.json()["completed"] is False


def test_read_progress_zero_value(client: TestClient, learner_headers, enrolled_course):
    second = lesson_ids(enrolled_course)[1]
    response = api_call(
        client, "GET", f"/lesson-progress?course_id={enrolled_course.id}&lesson_id={second}", headers=learner_headers
    )
    assert response.json() == {"positionSeconds": 0, "completed": False, "updatedAt": None}


def test_snake_case_body_is_accepted(client: TestClient, learner_headers, enrolled_course):
    first = lesson_ids(enrolled_course)[0]
    response = api_call(client, "POST", "/lesson-progress", headers=learner_headers, json={
        "course_id": enrolled_course.id,
        "lesson_id": first,
        "completed": True,
    })
    assert response.json()["progress"]["completed"] is True


def test_out_of_order_completion_returns_409(client: TestClient, learner_headers, enrolled_course):
    third = lesson_ids(enrolled_course)[2]
    response = client.post("/lesson-progress", headers=learner_headers, json={
        "courseId": enrolled_course.id,
        "lessonId": third,
        "completed": True,
    })
    assert response.status_code == 409
    body = response.json()
    assert body["ok"] is False
    assert body["error"] == OUT_OF_ORDER_ERROR
    assert body["message"]


def test_not_enrolled_returns_403(client: TestClient, user_factory, auth_headers, enrolled_course):
    outsider_headers = auth_headers(user_factory())
    first = lesson_ids(enrolled_course)[0]

    response = client.post("/lesson-progress", headers=outsider_headers, json={
        "courseId": enrolled_course.id,
        "lessonId": first,
        "positionSeconds": 10,
    })
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"
    assert response.json()["error"]["message"] == NOT_ENROLLED_MESSAGE

    response = client.get(f"/lesson-progress?course_id={enrolled_course.id}&lesson_id={first}", headers=outsider_headers)
    assert response.status_code == 403


def test_missing_token_returns_401(client: TestClient, enrolled_course):
    first = lesson_ids(enrolled_course)[0]
    response = client.post("/lesson-progress", json={"courseId": enrolled_course.id, "lessonId": first})
    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


def test_invalid_token_returns_401(client: TestClient, enrolled_course):
    first = lesson_ids(enrolled_course)[0]
    response = client.get(
        f"/lesson-progress?course_id={enrolled_course.id}&lesson_id={first}",
        headers={"Authorization": "Bearer not-a-token"},
    )
    assert response.status_code == 401


def test_unknown_lesson_returns_404(client: TestClient, learner_headers, enrolled_course):
    response = client.post("/lesson-progress", headers=learner_headers, json={
        "courseId": enrolled_course.id,
        "lessonId": 999999,
        "positionSeconds": 10,
    })
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


def test_course_progress_reflects_saves(client: TestClient, learner_headers, enrolled_course):
    first, second, _ = lesson_ids(enrolled_course)

    response = api_call(client, "GET", f"/courses/{enrolled_course.id}/progress", headers=learner_headers)
    assert response.json()["pct"] == 0

    for lesson_id in (first, second):
        api_call(client, "POST", "/lesson-progress", headers=learner_headers, json={
            "courseId": enrolled_course.id,
            "lessonId": lesson_id,
            "completed": True,
        })

    body = api_call(client, "GET", f"/courses/{enrolled_course.id}/progress", headers=learner_headers).json()
    assert (body["done"], body["total"], body["pct"]) == (2, 3, 67)

    states = api_call(client, "GET", f"/courses/{enrolled_course.id}/lessons/state", headers=learner_headers).json()
    assert [state["unlocked"] for state in states] == [True, True, True]
    assert [state["completed"] for state in states] == [True, True, False]

    dashboard = api_call(client, "GET", "/dashboard/progress", headers=learner_headers).json()
    assert [row["pct"] for row in dashboard if row["courseId"] == enrolled_course.id] == [67]


def test_course_progress_requires_enrollment(client: TestClient, user_factory, auth_headers, enrolled_course):
    response = client.get(f"/courses/{enrolled_course.id}/progress", headers=auth_headers(user_factory()))
    assert response.status_code == 403


def test_camel_case_query_is_accepted(client: TestClient, learner_headers, enrolled_course):
    first = lesson_ids(enrolled_course)[0]
    api_call(client, "POST", "/lesson-progress", headers=learner_headers, json={
        "courseId": enrolled_course.id,
        "lessonId": first,
        "positionSeconds": 15,
    })

    response = api_call(
        client, "GET", f"/lesson-progress?courseId={enrolled_course.id}&lessonId={first}", headers=learner_headers
    )
    assert response.json()["positionSeconds"] == 15

    response = client.get(f"/lesson-progress?courseId={enrolled_course.id}", headers=learner_headers)
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_oversized_position_is_rejected(client: TestClient, learner_headers, enrolled_course):
    first = lesson_ids(enrolled_course)[0]
    response = client.post("/lesson-progress", headers=learner_headers, json={
        "courseId": enrolled_course.id,
        "lessonId": first,
        "positionSeconds": 1e20,
    })
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    body = api_call(
        client, "GET", f"/lesson-progress?courseId={enrolled_course.id}&lessonId={first}", headers=learner_headers
    ).json()
    assert body["positionSeconds"] == 0
