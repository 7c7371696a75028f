from __future__ import annotations

import io

import pandas as pd
import pytest

from campus_portal.core.enums import Role

from conftest import new_student, new_teacher


@pytest.fixture
def ids(repos):
    return {
        "student": repos.students.add(new_student()),
        "other": repos.students.add(new_student(name="Other Kid", email="other@campus.local", roll_no="BCA0002")),
        "teacher": repos.teachers.create(new_teacher()),
        "admin": 1,
    }


def _submit(client, student_id, **overrides):
    body = {"studentId": student_id, "reason": "Family function", "startDate": "2026-02-10", "endDate": "2026-02-12"}
    body.update(overrides)
    return client.post("/api/student/request-leaves", json=body)


def test_routes_require_login(client):
    res = client.get("/api/admin/leaves")
    assert res.status_code == 401
    assert "message" in res.get_json()


def test_wrong_role_gets_403(login_as, ids):
    client = login_as(Role.STUDENT, ids["student"])
    assert client.get("/api/teacher/leaves").status_code == 403
    assert client.post("/api/admin/leave/1", json={"status": "Approved"}).status_code == 403


def test_submit_and_list_own_leaves(login_as, ids):
    client = login_as(Role.STUDENT, ids["student"])

    res = _submit(client, ids["student"])
    assert res.status_code == 201
    body = res.get_json()
    assert body["message"] == "Leave request submitted"
    assert body["leave"]["teacherStatus"] == "Pending"
    assert body["leave"]["adminStatus"] == "Pending"
    assert body["leave"]["startDate"] == "2026-02-10"

    res = client.get(f"/api/student/{ids['student']}/my-leaves")
    assert res.status_code == 200
    data = res.get_json()
    assert data["success"] is True
    assert [lv["id"] for lv in data["leaves"]] == [body["leave"]["id"]]


def test_submit_missing_fields_returns_400(login_as, ids):
    client = login_as(Role.STUDENT, ids["student"])
    res = _submit(client, ids["student"], reason="")
    assert res.status_code == 400
    assert res.get_json() == {"message": "All fields are required"}


def test_submit_for_other_student_returns_403(login_as, ids, repos):
    client = login_as(Role.STUDENT, ids["student"])
    assert _submit(client, ids["other"]).status_code == 403
    assert repos.leaves.rows == {}


def test_viewing_another_students_leaves_returns_403(login_as, ids):
    client = login_as(Role.STUDENT, ids["student"])
    assert client.get(f"/api/student/{ids['other']}/my-leaves").status_code == 403


def test_two_stage_approval_over_http(login_as, ids):
    client = login_as(Role.STUDENT, ids["student"])
    leave_id = _submit(client, ids["student"]).get_json()["leave"]["id"]

    client = login_as(Role.ADMIN, ids["admin"])
    res = client.post(f"/api/admin/leave/{leave_id}", json={"status": "Approved"})
    assert res.status_code == 409

    client = login_as(Role.TEACHER, ids["teacher"])
    listed = client.get("/api/teacher/leaves").get_json()
    assert [lv["id"] for lv in listed] == [leave_id]
    assert listed[0]["student"]["rollNo"] == "BCA0001"

    res = client.post(f"/api/teacher/leaves/{leave_id}", json={"status": "Recommended"})
    assert res.status_code == 200
    assert res.get_json()["teacherStatus"] == "Recommended"

    res = client.post(f"/api/teacher/leaves/{leave_id}", json={"status": "Rejected"})
    assert res.status_code == 409

    client = login_as(Role.ADMIN, ids["admin"])
    res = client.post(f"/api/admin/leave/{leave_id}", json={"status": "Approved"})
    assert res.status_code == 200
    body = res.get_json()
    assert body["teacherStatus"] == "Recommended"
    assert body["adminStatus"] == "Approved"

    all_leaves = client.get("/api/admin/leaves").get_json()
    assert all_leaves[0]["adminStatus"] == "Approved"


def test_invalid_decision_status_returns_400(login_as, ids):
    client = login_as(Role.STUDENT, ids["student"])
    leave_id = _submit(client, ids["student"]).get_json()["leave"]["id"]

    client = login_as(Role.TEACHER, ids["teacher"])
    res = client.post(f"/api/teacher/leaves/{leave_id}", json={"status": "Approved"})
    assert res.status_code == 400


def test_unknown_leave_returns_404(login_as, ids):
    client = login_as(Role.TEACHER, ids["teacher"])
    res = client.post("/api/teacher/leaves/999", json={"status": "Recommended"})
    assert res.status_code == 404
    assert res.get_json() == {"message": "Leave not found"}


def test_delete_pending_then_forbidden_after_decision(login_as, ids):
    client = login_as(Role.STUDENT, ids["student"])
    first = _submit(client, ids["student"]).get_json()["leave"]["id"]
    second = _submit(client, ids["student"]).get_json()["leave"]["id"]

    res = client.post(f"/api/student/leaves/{first}/delete")
    assert res.status_code == 200
    assert res.get_json() == {"message": "Leave deleted successfully"}

    client = login_as(Role.TEACHER, ids["teacher"])
    client.post(f"/api/teacher/leaves/{second}", json={"status": "Recommended"})

    client = login_as(Role.STUDENT, ids["student"])
    res = client.post(f"/api/student/leaves/{second}/delete")
    assert res.status_code == 403
    assert res.get_json() == {"message": "Cannot delete approved/recommended leave"}

    leaves = client.get(f"/api/student/{ids['student']}/my-leaves").get_json()["leaves"]
    assert [lv["id"] for lv in leaves] == [second]


def test_store_failure_returns_generic_500(login_as, ids, repos, monkeypatch):
    from campus_portal.core.exceptions import PersistenceError

    def boom(*args, **kwargs):
        raise PersistenceError("connection refused to db.internal:3306")

    monkeypatch.setattr(repos.leaves, "list_all", boom)
    client = login_as(Role.ADMIN, ids["admin"])

    res = client.get("/api/admin/leaves")
    assert res.status_code == 500
    assert "db.internal" not in res.get_data(as_text=True)


def test_admin_export_is_an_xlsx_workbook(login_as, ids):
    client = login_as(Role.STUDENT, ids["student"])
    _submit(client, ids["student"], reason="Exam prep")

    client = login_as(Role.ADMIN, ids["admin"])
    res = client.get("/api/admin/leaves/export")

    assert res.status_code == 200
    assert res.mimetype == "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    df = pd.read_excel(io.BytesIO(res.data), sheet_name="Leaves")
    assert list(df["Reason"]) == ["Exam prep"]
    assert list(df["Roll No"]) == ["BCA0001"]
    assert list(df["Admin Status"]) == ["Pending"]
