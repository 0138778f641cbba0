# lesson_calendar/domain/intervals.py
from __future__ import annotations

from typing import Optional

from lesson_calendar.domain.models import TimeInterval


def overlaps(a: TimeInterval, b: TimeInterval) -> bool:
    """半開区間の重なり判定。端点が接するだけの区間は重ならない"""
    if a.is_empty or b.is_empty:
        return False
    return a.start < b.end and b.start < a.end


def clamp_intersection(a: TimeInterval, b: TimeInterval) -> Optional[TimeInterval]:
    """[max(start), min(end)) を返す。空なら None"""
    if a.is_empty or b.is_empty:
        return None
    cut = TimeInterval(start=max(a.start, b.start), end=min(a.end, b.end))
    if cut.is_empty:
        return None
    return cut
