import uuid
from fastapi.testclient import TestClient

from tests.helpers.asserts import api_call, lesson_ids


def _register(client, headers, **payload):
    payload.setdefault("key", f"uploads/{uuid.uuid4().hex}.mp4")
    return api_call(client, "POST", "/admin/media", headers=headers, json=payload).json()["data"]


def test_register_media(client: TestClient, admin_headers, course_factory):
    course = course_factory(lessons=2)
    first = lesson_ids(course)[0]

    media = _register(
        client, admin_headers,
        kind="VIDEO", mime="video/mp4", size_bytes=5_000_000_000, course_id=course.id, lesson_id=first,
    )
    assert media["kind"] == "video"
    assert media["size_bytes"] == 5_000_000_000
    assert media["lesson_id"] == first
    assert media["deleted_at"] is None

    assert _register(client, admin_headers, kind="audio")["kind"] == "other"

    url_only = api_call(client, "POST", "/admin/media", headers=admin_headers, json={
        "url": "https://cdn.test/cover.png", "kind": "image",
    }).json()["data"]
    assert url_only["key"] == "https://cdn.test/cover.png"


def test_register_media_validation(client: TestClient, admin_headers, learner_headers, course_factory):
    course = course_factory(lessons=1)
    other = course_factory(lessons=1)

    response = client.post("/admin/media", headers=admin_headers, json={"kind": "image", "key": "  "})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "BAD_REQUEST"

    response = client.post("/admin/media", headers=admin_headers, json={"key": "a.png", "course_id": 999999})
    assert response.status_code == 404

    response = client.post("/admin/media", headers=admin_headers, json={
        "key": "a.png", "course_id": course.id, "lesson_id": lesson_ids(other)[0],
    })
    assert response.status_code == 400

    response = client.post("/admin/media", headers=learner_headers, json={"key": "a.png"})
    assert response.status_code == 403


def test_list_and_soft_delete_media(client: TestClient, admin_headers, course_factory):
    course = course_factory(lessons=1)
    video = _register(client, admin_headers, kind="video", course_id=course.id)
    image = _register(client, admin_headers, kind="image", course_id=course.id)

    listing = api_call(client, "GET", f"/admin/media?course_id={course.id}&kind=video", headers=admin_headers).json()["data"]
    assert [item["id"] for item in listing["items"]] == [video["id"]]

    result = api_call(client, "DELETE", "/admin/media", headers=admin_headers, json={"ids": [video["id"], image["id"]]}).json()["data"]
    assert result["count"] == 2

    result = api_call(client, "DELETE", "/admin/media", headers=admin_headers, json={"id": video["id"]}).json()["data"]
    assert result["count"] == 0

    listing = api_call(client, "GET", f"/admin/media?course_id={course.id}", headers=admin_headers).json()["data"]
    assert listing["total"] == 0
    listing = api_call(client, "GET", f"/admin/media?course_id={course.id}&include_deleted=true", headers=admin_headers).json()["data"]
    assert listing["total"] == 2
    assert all(item["deleted_at"] for item in listing["items"])

    response = client.request("DELETE", "/admin/media", headers=admin_headers, json={})
    assert response.status_code == 400


def test_delete_single_media_soft_then_hard(client: TestClient, admin_headers, admin_user, course_factory):
    course = course_factory(lessons=1)
    media = _register(client, admin_headers, course_id=course.id)

    soft = api_call(client, "DELETE", f"/admin/media/{media['id']}", headers=admin_headers).json()["data"]
    assert soft == {"count": 1, "hard_deleted": False}

    hard = api_call(client, "DELETE", f"/admin/media/{media['id']}?hard=true", headers=admin_headers).json()["data"]
    assert hard == {"count": 1, "hard_deleted": True}

    response = client.delete(f"/admin/media/{media['id']}", headers=admin_headers)
    assert response.status_code == 404

    entries = api_call(client, "GET", "/admin/audit?q=media", headers=admin_headers).json()["data"]["items"]
    assert [entry["action"] for entry in entries[:3]] == ["delete", "delete", "create"]
    assert all(entry["entity"] == "media" and entry["actor_id"] == admin_user.id for entry in entries[:3])
