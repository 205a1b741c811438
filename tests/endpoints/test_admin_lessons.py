from fastapi.testclient import TestClient

from tests.helpers.asserts import api_call, lesson_ids


def _indexes(response):
    return [(lesson["id"], lesson["index"]) for lesson in response.json()["data"]]


def _listing(client, headers, course_id):
    return api_call(client, "GET", f"/admin/courses/{course_id}/lessons", headers=headers).json()["data"]


def test_append_and_insert_keep_contiguous_indexes(client: TestClient, admin_headers, course_factory):
    course = course_factory(lessons=3)
    original = lesson_ids(course)

    appended = api_call(client, "POST", f"/admin/courses/{course.id}/lessons", headers=admin_headers, json={
        "title": "Async iteration",
    }).json()["data"]
    assert appended["index"] == 4

    inserted = api_call(client, "POST", f"/admin/courses/{course.id}/lessons", headers=admin_headers, json={
        "title": "Hoisting",
        "index": 2,
    }).json()["data"]
    assert inserted["index"] == 2

    lessons = _listing(client, admin_headers, course.id)
    assert [lesson["index"] for lesson in lessons] == [1, 2, 3, 4, 5]
    assert [lesson["id"] for lesson in lessons] == [original[0], inserted["id"], original[1], original[2], appended["id"]]


def test_insert_index_is_clamped(client: TestClient, admin_headers, course_factory):
    course = course_factory(lessons=2)
    created = api_call(client, "POST", f"/admin/courses/{course.id}/lessons", headers=admin_headers, json={
        "title": "Way past the end",
        "index": 40,
    }).json()["data"]
    assert created["index"] == 3


def test_move_lesson(client: TestClient, admin_headers, course_factory):
    course = course_factory(lessons=4)
    first, second, third, fourth = lesson_ids(course)

    response = api_call(client, "POST", f"/admin/courses/{course.id}/lessons/{fourth}/move", headers=admin_headers, json={
        "index": 1,
    })
    assert _indexes(response) == [(fourth, 1), (first, 2), (second, 3), (third, 4)]

    response = api_call(client, "POST", f"/admin/courses/{course.id}/lessons/{fourth}/move", headers=admin_headers, json={
        "index": 99,
    })
    assert _indexes(response) == [(first, 1), (second, 2), (third, 3), (fourth, 4)]


def test_reorder_requires_exact_permutation(client: TestClient, admin_headers, course_factory):
    course = course_factory(lessons=3)
    first, second, third = lesson_ids(course)

    response = client.post(f"/admin/courses/{course.id}/lessons/reorder", headers=admin_headers, json={
        "lesson_ids": [first, second],
    })
    assert response.status_code == 400

    response = client.post(f"/admin/courses/{course.id}/lessons/reorder", headers=admin_headers, json={
        "lesson_ids": [first, first, second],
    })
    assert response.status_code == 400

    response = api_call(client, "POST", f"/admin/courses/{course.id}/lessons/reorder", headers=admin_headers, json={
        "lesson_ids": [third, first, second],
    })
    assert _indexes(response) == [(third, 1), (first, 2), (second, 3)]


def test_delete_lesson_compacts_and_drops_progress(client: TestClient, admin_headers, learner, learner_headers, enrolled_course):
    first, second, third = lesson_ids(enrolled_course)
    api_call(client, "POST", "/lesson-progress", headers=learner_headers, json={
        "courseId": enrolled_course.id, "lessonId": first, "completed": True,
    })
    api_call(client, "POST", "/lesson-progress", headers=learner_headers, json={
        "courseId": enrolled_course.id, "lessonId": second, "completed": True,
    })

    response = api_call(client, "DELETE", f"/admin/courses/{enrolled_course.id}/lessons/{first}", headers=admin_headers)
    assert _indexes(response) == [(second, 1), (third, 2)]

    progress = api_call(client, "GET", f"/courses/{enrolled_course.id}/progress", headers=learner_headers).json()
    assert (progress["done"], progress["total"], progress["pct"]) == (1, 2, 50)


def test_update_lesson_requires_fields(client: TestClient, admin_headers, course_factory):
    course = course_factory(lessons=1)
    lesson_id = lesson_ids(course)[0]

    response = client.patch(f"/admin/courses/{course.id}/lessons/{lesson_id}", headers=admin_headers, json={})
    assert response.status_code == 400

    response = api_call(client, "PATCH", f"/admin/courses/{course.id}/lessons/{lesson_id}", headers=admin_headers, json={
        "title": "Renamed",
    })
    assert response.json()["data"]["title"] == "Renamed"


def test_lesson_in_other_course_is_not_found(client: TestClient, admin_headers, course_factory):
    course = course_factory(lessons=1)
    other = course_factory(lessons=1)
    response = client.delete(f"/admin/courses/{course.id}/lessons/{lesson_ids(other)[0]}", headers=admin_headers)
    assert response.status_code == 404
