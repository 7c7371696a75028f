from __future__ import annotations

import pytest

from campus_portal.common.passwords import verify_password
from campus_portal.core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from campus_portal.teachers.model import Subject
from campus_portal.teachers.service import normalize_subjects

from conftest import new_student, new_teacher


def _form(**overrides):
    data = {
        "name": "Priya Shah",
        "email": "Priya@Campus.local",
        "username": "priya",
        "designation": "Assistant Professor",
        "department": "BCA",
        "qualification": "M.Tech",
        "phone": "9988776655",
        "address": "Staff quarters",
        "collegeName": "City College",
        "dateOfJoining": "2021-08-01",
        "subjects": [{"subjectName": "Networks", "course": "BCA", "semester": "5"}],
    }
    data.update(overrides)
    return data


def test_normalize_subjects_accepts_many_shapes():
    assert normalize_subjects([{"subjectName": "OS"}]) == (Subject("OS", "Unknown", "N/A"),)
    assert normalize_subjects('[{"subjectName": "AI", "course": "MCA", "semester": "1"}]') == (
        Subject("AI", "MCA", "1"),
    )
    assert normalize_subjects("Maths") == (Subject("Maths", "Unknown", "N/A"),)
    assert normalize_subjects({"course": "BCA"}) == (Subject("Unnamed", "BCA", "N/A"),)
    assert normalize_subjects(None) == ()


def test_register_teacher(container, repos):
    result = container.teacher_service.register(_form())

    assert result.default_password == "priya776655@"
    stored = repos.teachers.get_by_id(result.teacher_id)
    assert stored.email == "priya@campus.local"
    assert stored.courses == ["BCA"]
    assert verify_password(stored.password_hash, result.default_password)


def test_register_requires_every_field(container):
    with pytest.raises(ValidationError, match="All fields are required"):
        container.teacher_service.register(_form(collegeName=""))


def test_register_conflicts(container):
    container.teacher_service.register(_form())
    with pytest.raises(ConflictError, match="Username already taken"):
        container.teacher_service.register(_form(email="new@campus.local"))
    with pytest.raises(ConflictError, match="Teacher already exists"):
        container.teacher_service.register(_form(username="someone"))


def test_bulk_register_skips_existing(container, repos):
    repos.teachers.create(new_teacher(email="ravi@campus.local", username="ravi"))
    rows = [
        _form(email="ravi@campus.local", username="ravi2"),
        _form(email="n1@campus.local", username="n1"),
        _form(email="n1@campus.local", username="n1b"),
    ]

    result = container.teacher_service.bulk_register(rows)

    assert (result.inserted, result.skipped) == (1, 2)
    assert repos.teachers.get_by_username("n1") is not None


def test_bulk_register_all_duplicates(container, repos):
    repos.teachers.create(new_teacher())
    with pytest.raises(ConflictError, match="All provided teachers already exist"):
        container.teacher_service.bulk_register([_form(email="ravi@campus.local", username="x")])
    with pytest.raises(ValidationError):
        container.teacher_service.bulk_register([])


def test_update_profile_checks_owner_and_username(container, repos):
    me = repos.teachers.create(new_teacher())
    repos.teachers.create(new_teacher(email="b@campus.local", username="taken"))
    svc = container.teacher_service

    with pytest.raises(AuthorizationError):
        svc.update_profile(current_user_id=me + 1, teacher_id=me, data={"name": "X"})
    with pytest.raises(ConflictError):
        svc.update_profile(current_user_id=me, teacher_id=me, data={"username": "taken"})

    updated = svc.update_profile(current_user_id=me, teacher_id=me, data={"qualification": "PhD"})
    assert updated.qualification == "PhD"
    assert updated.username == "ravi"


def test_set_active_and_get(container, repos):
    me = repos.teachers.create(new_teacher())
    assert container.teacher_service.set_active(teacher_id=me, active=False).is_active is False
    with pytest.raises(NotFoundError, match="Teacher not found"):
        container.teacher_service.get(999)


def test_my_students_follow_subject_courses(container, repos):
    me = repos.teachers.create(new_teacher())
    bca = repos.students.add(new_student())
    repos.students.add(new_student(email="m@campus.local", roll_no="MCA1", class_name="MCA"))

    assert [s.student_id for s in container.teacher_service.my_students(me)] == [bca]


def test_change_password(container, repos):
    me = repos.teachers.create(new_teacher())
    container.teacher_service.change_password(
        current_user_id=me,
        teacher_id=me,
        data={"currentPassword": "Teacher@123", "newPassword": "Fresh1aA@x", "confirmPassword": "Fresh1aA@x"},
    )
    assert verify_password(repos.teachers.get_by_id(me).password_hash, "Fresh1aA@x")


def test_admin_update_keeps_omitted_fields(container, repos):
    me = repos.teachers.create(new_teacher())
    svc = container.teacher_service

    updated = svc.admin_update(me, {"department": "MCA", "designation": " "})
    assert (updated.department, updated.designation) == ("MCA", "Lecturer")
    assert updated.subjects == (Subject("DBMS", "BCA", "3"),)

    updated = svc.admin_update(me, {"subjects": "Compilers"})
    assert updated.subjects == (Subject("Compilers", "Unknown", "N/A"),)
    with pytest.raises(NotFoundError):
        svc.admin_update(999, {"department": "MCA"})


def test_department_roster_and_delete(container, repos):
    me = repos.teachers.create(new_teacher())
    repos.students.add(new_student())
    svc = container.teacher_service

    roster = svc.department_roster(" BCA ")
    assert roster.department == "BCA"
    assert [t.teacher_id for t in roster.teachers] == [me]
    assert len(roster.students) == 1
    assert svc.department_roster("MCA").to_dict() == {"department": "MCA", "teachers": [], "students": []}
    with pytest.raises(ValidationError, match="department is required"):
        svc.department_roster(None)

    svc.delete(me)
    with pytest.raises(NotFoundError):
        svc.delete(me)


def test_bulk_register_rejects_non_object_rows(container):
    with pytest.raises(ValidationError, match="Row 2: Expected an object"):
        container.teacher_service.bulk_register([_form(), "priya"])
