from __future__ import annotations

import io
from typing import Sequence

import pandas as pd

from .model import LeaveView

COLUMNS = [
    "Leave ID",
    "Student",
    "Roll No",
    "Class",
    "Reason",
    "Start Date",
    "End Date",
    "Teacher Status",
    "Admin Status",
    "Applied",
]


def leaves_frame(views: Sequence[LeaveView]) -> pd.DataFrame:
    rows = []
    for v in views:
        lv, st = v.leave, v.student
        rows.append(
            [
                lv.leave_id,
                st.name if st else "",
                st.roll_no if st else "",
                st.class_name if st else "",
                lv.reason,
                lv.start_date,
                lv.end_date,
                lv.teacher_status.value,
                lv.admin_status.value,
                lv.applied_at,
            ]
        )
    df = pd.DataFrame(rows, columns=COLUMNS)
    if not df.empty:
        df["Applied"] = pd.to_datetime(df["Applied"]).dt.strftime("%Y-%m-%d %H:%M")
    return df


def leaves_workbook(views: Sequence[LeaveView]) -> io.BytesIO:
    out = io.BytesIO()
    with pd.ExcelWriter(out, engine="openpyxl") as writer:
        leaves_frame(views).to_excel(writer, index=False, sheet_name="Leaves")
    out.seek(0)
    return out
