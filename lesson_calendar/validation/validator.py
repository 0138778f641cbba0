# lesson_calendar/validation/validator.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from lesson_calendar.domain.models import AvailabilityWindow, Lesson


@dataclass(frozen=True)
class ValidationError(Exception):
    message: str


@dataclass(frozen=True)
class MalformedInterval(ValidationError):
    """時刻文字列が解釈できない・必須項目が無いレコード（1件単位で報告する）"""
    kind: str = ""
    index: Optional[int] = None


@dataclass(frozen=True)
class ValidationWarning:
    message: str


def validate_records(
    windows: Sequence[AvailabilityWindow],
    lessons: Sequence[Lesson],
) -> List[ValidationWarning]:
    """
    描画は止めずに警告だけ返す。
    - end <= start の区間は空区間として残る（何とも重ならない）
    - duration と区間長の不一致は表示上の問題として報告のみ（補正しない）
    """
    warnings: List[ValidationWarning] = []

    for i, w in enumerate(windows):
        if w.interval.is_empty:
            warnings.append(ValidationWarning(
                f"schedule[{i}]: 終了が開始以前の区間です（空区間として無視します）: "
                f"{w.interval.start.isoformat()} - {w.interval.end.isoformat()}"
            ))

    for i, lesson in enumerate(lessons):
        if lesson.interval.is_empty:
            warnings.append(ValidationWarning(
                f"lessons[{i}] (id={lesson.id}): 終了が開始以前の区間です（空区間として無視します）"
            ))
            continue
        span = lesson.interval.minutes
        if span != lesson.duration:
            warnings.append(ValidationWarning(
                f"lessons[{i}] (id={lesson.id}): duration {lesson.duration}m が区間長 {span:g}m と一致しません（表示のみ）"
            ))

    return warnings
