from fastapi.testclient import TestClient

from tests.helpers.asserts import api_call, lesson_ids


def test_note_round_trip(client: TestClient, learner_headers, enrolled_course):
    first = lesson_ids(enrolled_course)[0]
    url = f"/lesson-notes?course_id={enrolled_course.id}&lesson_id={first}"

    assert api_call(client, "GET", url, headers=learner_headers).json() == {"content": "", "updatedAt": None}

    saved = api_call(client, "POST", "/lesson-notes", headers=learner_headers, json={
        "courseId": enrolled_course.id,
        "lessonId": first,
        "content": "closures capture variables, not values",
    }).json()
    assert saved["ok"] is True
    assert saved["note"]["id"]

    body = api_call(client, "GET", url, headers=learner_headers).json()
    assert body["content"] == "closures capture variables, not values"


def test_hidden_note_reads_empty_and_save_restores(client: TestClient, learner_headers, admin_headers, enrolled_course):
    first = lesson_ids(enrolled_course)[0]
    url = f"/lesson-notes?course_id={enrolled_course.id}&lesson_id={first}"
    note_id = api_call(client, "POST", "/lesson-notes", headers=learner_headers, json={
        "courseId": enrolled_course.id, "lessonId": first, "content": "spam",
    }).json()["note"]["id"]

    api_call(client, "POST", f"/admin/notes/{note_id}/hide", headers=admin_headers)
    assert api_call(client, "GET", url, headers=learner_headers).json()["content"] == ""

    api_call(client, "POST", "/lesson-notes", headers=learner_headers, json={
        "courseId": enrolled_course.id, "lessonId": first, "content": "rewritten",
    })
    assert api_call(client, "GET", url, headers=learner_headers).json()["content"] == "rewritten"


def test_notes_require_enrollment(client: TestClient, user_factory, auth_headers, enrolled_course):
    first = lesson_ids(enrolled_course)[0]
    response = client.post("/lesson-notes", headers=auth_headers(user_factory()), json={
        "courseId": enrolled_course.id, "lessonId": first, "content": "x",
    })
    assert response.status_code == 403


def test_note_read_accepts_camel_case_query(client: TestClient, learner_headers, enrolled_course):
    first = lesson_ids(enrolled_course)[0]
    api_call(client, "POST", "/lesson-notes", headers=learner_headers, json={
        "courseId": enrolled_course.id,
        "lessonId": first,
        "content": "arrow functions keep the outer this",
    })

    body = api_call(
        client, "GET", f"/lesson-notes?courseId={enrolled_course.id}&lessonId={first}", headers=learner_headers
    ).json()
    assert body["content"] == "arrow functions keep the outer this"
