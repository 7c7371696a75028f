from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from types import SimpleNamespace

import pytest

from campus_portal.admins.model import Admin
from campus_portal.common.passwords import hash_password
from campus_portal.container import wire
from campus_portal.core.enums import LeaveStage, Role, StudentStatus
from campus_portal.leaves.model import LeaveRequest
from campus_portal.notices.model import Notice
from campus_portal.students.model import NewStudent, Student
from campus_portal.teachers.model import NewTeacher, Subject, Teacher

FIXED_NOW = datetime(2026, 2, 1, 9, 0, 0)


class FakeStudentsRepo:
    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, Student] = {}

    def add(self, new: NewStudent, *, status: StudentStatus = StudentStatus.ACTIVE) -> int:
        sid = self._next_id
        self._next_id += 1
        self.rows[sid] = Student(
            student_id=sid,
            name=new.name,
            email=new.email,
            roll_no=new.roll_no,
            class_name=new.class_name,
            semester=new.semester,
            phone=new.phone,
            password_hash=new.password_hash,
            address=new.address,
            dob=new.dob,
            gender=new.gender,
            parent_name=new.parent_name,
            parent_phone=new.parent_phone,
            status=status,
            created_at=FIXED_NOW,
        )
        return sid

    def get_by_id(self, student_id):
        return self.rows.get(int(student_id))

    def get_many(self, student_ids):
        return {int(i): self.rows[int(i)] for i in student_ids if int(i) in self.rows}

    def get_by_email(self, email):
        return next((s for s in self.rows.values() if s.email == email), None)

    def find_existing(self, *, emails, roll_nos):
        return [s for s in self.rows.values() if s.email in set(emails) or s.roll_no in set(roll_nos)]

    def create(self, student):
        return self.add(student)

    def create_many(self, students):
        return [self.add(s) for s in students]

    def list_all(self):
        return sorted(self.rows.values(), key=lambda s: s.name)

    def list_by_classes(self, class_names):
        names = set(class_names)
        return sorted((s for s in self.rows.values() if s.class_name in names), key=lambda s: s.name)

    def update_profile(self, student_id, *, name, phone, address, parent_name, parent_phone):
        s = self.rows.get(int(student_id))
        if not s:
            return False
        self.rows[s.student_id] = replace(
            s,
            name=name or s.name,
            phone=phone or s.phone,
            address=address or s.address,
            parent_name=parent_name or s.parent_name,
            parent_phone=parent_phone or s.parent_phone,
        )
        return True

    def update_password(self, student_id, password_hash):
        s = self.rows[int(student_id)]
        self.rows[s.student_id] = replace(s, password_hash=password_hash)
        return True

    def set_status(self, student_id, status):
        s = self.rows[int(student_id)]
        self.rows[s.student_id] = replace(s, status=status)
        return True

    def delete(self, student_id):
        return self.rows.pop(int(student_id), None) is not None


class FakeTeachersRepo:
    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, Teacher] = {}

    def create(self, teacher: NewTeacher) -> int:
        tid = self._next_id
        self._next_id += 1
        self.rows[tid] = Teacher(
            teacher_id=tid,
            name=teacher.name,
            email=teacher.email,
            username=teacher.username,
            designation=teacher.designation,
            department=teacher.department,
            qualification=teacher.qualification,
            phone=teacher.phone,
            address=teacher.address,
            college_name=teacher.college_name,
            date_of_joining=teacher.date_of_joining,
            password_hash=teacher.password_hash,
            subjects=teacher.subjects,
            created_at=FIXED_NOW,
        )
        return tid

    def create_many(self, teachers):
        return [self.create(t) for t in teachers]

    def get_by_id(self, teacher_id):
        return self.rows.get(int(teacher_id))

    def get_by_username(self, username):
        return next((t for t in self.rows.values() if t.username == username), None)

    def get_by_email(self, email):
        return next((t for t in self.rows.values() if t.email == email), None)

    def find_existing(self, *, emails, usernames):
        return [t for t in self.rows.values() if t.email in set(emails) or t.username in set(usernames)]

    def list_all(self):
        return sorted(self.rows.values(), key=lambda t: t.name)

    def list_by_department(self, department):
        return [t for t in self.list_all() if t.department == department]

    def update_profile(self, teacher_id, *, name, username, qualification, phone, address):
        t = self.rows[int(teacher_id)]
        self.rows[t.teacher_id] = replace(
            t,
            name=name or t.name,
            username=username or t.username,
            qualification=qualification or t.qualification,
            phone=phone or t.phone,
            address=address or t.address,
        )
        return True

    def update_password(self, teacher_id, password_hash):
        t = self.rows[int(teacher_id)]
        self.rows[t.teacher_id] = replace(t, password_hash=password_hash)
        return True

    def set_active(self, teacher_id, *, is_active):
        t = self.rows[int(teacher_id)]
        self.rows[t.teacher_id] = replace(t, is_active=is_active)
        return True

    def update_assignment(self, teacher_id, *, designation, department, subjects):
        t = self.rows.get(int(teacher_id))
        if not t:
            return False
        self.rows[t.teacher_id] = replace(
            t,
            designation=designation or t.designation,
            department=department or t.department,
            subjects=tuple(subjects) if subjects is not None else t.subjects,
        )
        return True

    def delete(self, teacher_id):
        return self.rows.pop(int(teacher_id), None) is not None


class FakeAdminsRepo:
    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, Admin] = {}

    def get_by_id(self, admin_id):
        return self.rows.get(int(admin_id))

    def get_by_email(self, email):
        return next((a for a in self.rows.values() if a.email == email), None)

    def create(self, *, name, email, password_hash):
        aid = self._next_id
        self._next_id += 1
        self.rows[aid] = Admin(admin_id=aid, name=name, email=email, password_hash=password_hash, created_at=FIXED_NOW)
        return aid


class FakeLeavesRepo:
    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, LeaveRequest] = {}

    @staticmethod
    def _newest_first(items):
        return sorted(items, key=lambda lv: (lv.applied_at, lv.leave_id), reverse=True)

    def create(self, *, student_id, reason, start_date, end_date, applied_at):
        lid = self._next_id
        self._next_id += 1
        self.rows[lid] = LeaveRequest(
            leave_id=lid,
            student_id=int(student_id),
            reason=reason,
            start_date=start_date,
            end_date=end_date,
            stage=LeaveStage.PENDING,
            applied_at=applied_at,
        )
        return lid

    def get_by_id(self, leave_id):
        return self.rows.get(int(leave_id))

    def list_for_student(self, student_id):
        return self._newest_first(lv for lv in self.rows.values() if lv.student_id == int(student_id))

    def list_for_students(self, student_ids):
        ids = {int(i) for i in student_ids}
        return self._newest_first(lv for lv in self.rows.values() if lv.student_id in ids)

    def list_all(self):
        return self._newest_first(self.rows.values())

    def transition(self, *, leave_id, expected, new, decided_at):
        lv = self.rows.get(int(leave_id))
        if not lv or lv.stage != expected:
            return False
        self.rows[lv.leave_id] = replace(lv, stage=new, decided_at=decided_at)
        return True

    def delete_pending(self, leave_id):
        lv = self.rows.get(int(leave_id))
        if not lv or lv.stage != LeaveStage.PENDING:
            return False
        del self.rows[lv.leave_id]
        return True


class FakeNoticesRepo:
    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, Notice] = {}

    def list_all(self):
        return sorted(self.rows.values(), key=lambda n: (n.created_at, n.notice_id), reverse=True)

    def get_by_id(self, notice_id):
        return self.rows.get(int(notice_id))

    def create(self, *, title, description, link, role, created_at):
        nid = self._next_id
        self._next_id += 1
        self.rows[nid] = Notice(
            notice_id=nid,
            title=title,
            description=description,
            link=link,
            role=role,
            created_at=created_at,
        )
        return nid

    def update(self, notice_id, *, title, description, link, updated_at):
        n = self.rows.get(int(notice_id))
        if not n:
            return False
        self.rows[n.notice_id] = replace(n, title=title, description=description, link=link, updated_at=updated_at)
        return True

    def delete(self, notice_id):
        return self.rows.pop(int(notice_id), None) is not None


def new_student(**overrides) -> NewStudent:
    values = dict(
        name="Asha Verma",
        email="asha@campus.local",
        roll_no="BCA0001",
        class_name="BCA",
        semester="3",
        phone="9876543210",
        password_hash=hash_password("Student@123"),
    )
    values.update(overrides)
    return NewStudent(**values)


def new_teacher(**overrides) -> NewTeacher:
    values = dict(
        name="Ravi Kumar",
        email="ravi@campus.local",
        username="ravi",
        designation="Lecturer",
        department="BCA",
        qualification="MCA",
        phone="9123456789",
        address="Block A",
        college_name="City College",
        date_of_joining=date(2020, 7, 1),
        subjects=(Subject(subject_name="DBMS", course="BCA", semester="3"),),
        password_hash=hash_password("Teacher@123"),
    )
    values.update(overrides)
    return NewTeacher(**values)


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def repos():
    return SimpleNamespace(
        students=FakeStudentsRepo(),
        teachers=FakeTeachersRepo(),
        admins=FakeAdminsRepo(),
        leaves=FakeLeavesRepo(),
        notices=FakeNoticesRepo(),
    )


@pytest.fixture
def container(repos, fixed_now):
    return wire(
        students_repo=repos.students,
        teachers_repo=repos.teachers,
        admins_repo=repos.admins,
        leaves_repo=repos.leaves,
        notices_repo=repos.notices,
        clock=lambda: fixed_now,
    )


@pytest.fixture
def app(container, monkeypatch):
    from campus_portal.main import create_app

    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login_as(client):
    """Put a user straight into the test client's session."""

    def _login(role: Role, user_id: int, name: str = "tester"):
        with client.session_transaction() as sess:
            sess["user_id"] = user_id
            sess["name"] = name
            sess["role"] = role.value
        return client

    return _login
