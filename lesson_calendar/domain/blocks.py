# lesson_calendar/domain/blocks.py
from __future__ import annotations

from datetime import date
from typing import List, Sequence

from lesson_calendar.domain.intervals import clamp_intersection
from lesson_calendar.domain.models import Lesson, LessonBlock, LessonSelection
from lesson_calendar.domain.timegrid import day_interval


def project_lesson_blocks(lessons: Sequence[Lesson], days: Sequence[date]) -> List[LessonBlock]:
    """
    各レッスンを表示中の各日に切り出し、(日インデックス, 0時からの分, 分数) に変換する。
    日をまたぐレッスンは日ごとに別ブロックになる。表示範囲外なら0件。
    並びはレッスンの入力順 → 日の順。
    """
    out: List[LessonBlock] = []
    for lesson in lessons:
        for day_index, d in enumerate(days):
            whole_day = day_interval(d)
            cut = clamp_intersection(lesson.interval, whole_day)
            if cut is None:
                continue
            out.append(LessonBlock(
                lesson=lesson,
                day_index=day_index,
                start_minutes=(cut.start - whole_day.start).total_seconds() / 60,
                duration_minutes=(cut.end - cut.start).total_seconds() / 60,
                overlap_start=cut.start,
                overlap_end=cut.end,
            ))
    return out


def select_block(block: LessonBlock) -> LessonSelection:
    """オーバーレイブロックのクリック。ブロック自身の（切り詰め済み）区間を運ぶ"""
    return LessonSelection(lesson=block.lesson, overlap_start=block.overlap_start, overlap_end=block.overlap_end)
