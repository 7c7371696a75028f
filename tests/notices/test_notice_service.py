from __future__ import annotations

import pytest

from campus_portal.core.enums import Role
from campus_portal.core.exceptions import AuthorizationError, NotFoundError, ValidationError


def test_student_board_empty_is_not_found(container):
    with pytest.raises(NotFoundError, match="No notices found"):
        container.notice_service.list_for_student()


def test_create_requires_title_and_description(container):
    with pytest.raises(ValidationError, match="title is required"):
        container.notice_service.create(current_role=Role.TEACHER, data={"description": "x"})
    with pytest.raises(AuthorizationError):
        container.notice_service.create(current_role=Role.STUDENT, data={"title": "t", "description": "d"})


def test_teacher_only_edits_teacher_notices(container, fixed_now):
    svc = container.notice_service
    mine = svc.create(current_role=Role.TEACHER, data={"title": "Lab", "description": "Lab closed"})
    theirs = svc.create(current_role=Role.ADMIN, data={"title": "Holiday", "description": "Friday off"})

    updated = svc.update(current_role=Role.TEACHER, notice_id=mine.notice_id, data={"title": "Lab 2"})
    assert updated.title == "Lab 2"
    assert updated.description == "Lab closed"
    assert updated.updated_at == fixed_now

    with pytest.raises(AuthorizationError):
        svc.update(current_role=Role.TEACHER, notice_id=theirs.notice_id, data={"title": "x"})
    with pytest.raises(AuthorizationError):
        svc.delete(current_role=Role.TEACHER, notice_id=theirs.notice_id)

    svc.delete(current_role=Role.ADMIN, notice_id=mine.notice_id)
    assert [n.notice_id for n in svc.list_for_student()] == [theirs.notice_id]


def test_admin_missing_notice(container):
    with pytest.raises(NotFoundError, match="Notice not found"):
        container.notice_service.delete(current_role=Role.ADMIN, notice_id=5)


def test_notice_routes(login_as):
    client = login_as(Role.STUDENT, 1)
    assert client.get("/api/student/notices").status_code == 404

    client = login_as(Role.ADMIN, 1)
    res = client.post("/api/admin/notice", json={"title": "Exams", "description": "Start Monday", "link": ""})
    assert res.status_code == 201
    notice = res.get_json()["notice"]
    assert notice["role"] == "admin"
    assert notice["link"] is None

    client = login_as(Role.TEACHER, 2)
    res = client.post(f"/api/teacher/notice/update/{notice['id']}", json={"title": "nope"})
    assert res.status_code == 403

    client = login_as(Role.STUDENT, 1)
    res = client.get("/api/student/notices")
    assert res.status_code == 200
    assert [n["title"] for n in res.get_json()["notices"]] == ["Exams"]

    client = login_as(Role.ADMIN, 1)
    assert client.post(f"/api/admin/notice/delete/{notice['id']}").status_code == 200
    assert client.get("/api/admin/notice").get_json() == []


def test_teacher_notice_routes(login_as, repos):
    client = login_as(Role.TEACHER, 2)

    res = client.post("/api/teacher/notices", json={"title": "Lab", "description": "Lab closed"})
    assert res.status_code == 201
    nid = res.get_json()["notice"]["id"]
    assert [n["title"] for n in client.get("/api/teacher/notices").get_json()] == ["Lab"]

    res = client.post(f"/api/teacher/notice/update/{nid}", json={"description": "Lab open at noon"})
    assert res.status_code == 200
    assert res.get_json()["notice"]["description"] == "Lab open at noon"

    assert client.post(f"/api/teacher/notice/delete/{nid}").status_code == 200
    assert repos.notices.rows == {}
    assert client.post(f"/api/teacher/notice/delete/{nid}").status_code == 404
