from __future__ import annotations

import io
from datetime import date, datetime

import pandas as pd

from campus_portal.core.enums import LeaveStage
from campus_portal.leaves.export import COLUMNS, leaves_frame, leaves_workbook
from campus_portal.leaves.model import LeaveRequest, LeaveView
from campus_portal.students.model import StudentSummary


def _view(leave_id, stage, student=True):
    leave = LeaveRequest(
        leave_id=leave_id,
        student_id=7,
        reason="Medical",
        start_date=date(2026, 3, 1),
        end_date=date(2026, 3, 2),
        stage=stage,
        applied_at=datetime(2026, 2, 28, 14, 5, 33),
    )
    summary = StudentSummary(student_id=7, name="Asha", roll_no="BCA0007", class_name="BCA") if student else None
    return LeaveView(leave=leave, student=summary)


def test_frame_flattens_statuses_and_student():
    df = leaves_frame([_view(1, LeaveStage.ADMIN_REJECTED), _view(2, LeaveStage.PENDING, student=False)])

    assert list(df.columns) == COLUMNS
    assert df.loc[0, "Teacher Status"] == "Recommended"
    assert df.loc[0, "Admin Status"] == "Rejected"
    assert df.loc[0, "Applied"] == "2026-02-28 14:05"
    assert df.loc[1, "Student"] == ""


def test_empty_workbook_still_has_headers():
    df = pd.read_excel(leaves_workbook([]), sheet_name="Leaves")
    assert list(df.columns) == COLUMNS
    assert df.empty


def test_workbook_round_trips_rows():
    buf = leaves_workbook([_view(3, LeaveStage.TEACHER_RECOMMENDED)])
    df = pd.read_excel(io.BytesIO(buf.getvalue()), sheet_name="Leaves")
    assert list(df["Leave ID"]) == [3]
    assert list(df["Class"]) == ["BCA"]
