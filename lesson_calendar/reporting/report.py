# lesson_calendar/reporting/report.py
from __future__ import annotations

from typing import Sequence

import pandas as pd

from lesson_calendar.domain.models import Lesson, format_day_header
from lesson_calendar.preprocessing.preprocess import CalendarSnapshot

BLOCK_COLUMNS = [
    "lesson_id", "student", "day", "day_index", "start_time",
    "start_minutes", "duration_minutes", "overlap_start", "overlap_end",
]
LESSON_COLUMNS = ["lesson_id", "student", "duration", "start_time", "end_time"]


def _minutes_label(minutes: float) -> str:
    m = int(minutes)
    return f"{m // 60:02d}:{m % 60:02d}"


def build_grid_table(snapshot: CalendarSnapshot) -> pd.DataFrame:
    """行=時刻ラベル、列=表示日、値=セル状態"""
    data = {
        format_day_header(d): [row[j].value for row in snapshot.cells]
        for j, d in enumerate(snapshot.days)
    }
    df = pd.DataFrame(data, index=[s.label for s in snapshot.slots])
    df.index.name = "time"
    return df


def build_block_table(snapshot: CalendarSnapshot) -> pd.DataFrame:
    rows = []
    for b in snapshot.blocks:
        rows.append(dict(
            lesson_id=b.lesson.id,
            student=b.lesson.student or "",
            day=b.day.isoformat(),
            day_index=b.day_index,
            start_time=_minutes_label(b.start_minutes),
            start_minutes=b.start_minutes,
            duration_minutes=b.duration_minutes,
            overlap_start=b.overlap_start.isoformat(),
            overlap_end=b.overlap_end.isoformat(),
        ))
    return pd.DataFrame(rows, columns=BLOCK_COLUMNS)


def build_lesson_table(lessons: Sequence[Lesson]) -> pd.DataFrame:
    rows = []
    for lesson in lessons:
        rows.append(dict(
            lesson_id=lesson.id,
            student=lesson.student or "",
            duration=lesson.duration,
            start_time=lesson.interval.start.isoformat(),
            end_time=lesson.interval.end.isoformat(),
        ))
    df = pd.DataFrame(rows, columns=LESSON_COLUMNS)
    if not df.empty:
        df = df.sort_values("start_time", kind="stable").reset_index(drop=True)
    return df
