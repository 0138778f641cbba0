# lesson_calendar/domain/models.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Hashable, List, Optional, Tuple


@dataclass(frozen=True)
class TimeInterval:
    """半開区間 [start, end)。end <= start のものは空区間として扱う"""
    start: datetime
    end: datetime

    @property
    def is_empty(self) -> bool:
        return self.end <= self.start

    @property
    def minutes(self) -> float:
        if self.is_empty:
            return 0.0
        return (self.end - self.start).total_seconds() / 60


@dataclass(frozen=True)
class AvailabilityWindow:
    """講師の受付可能時間帯"""
    interval: TimeInterval


@dataclass(frozen=True)
class Lesson:
    """
    予約済みレッスン。
    duration は表示用のメタデータであり、配置計算には interval のみを使う。
    """
    id: Hashable
    duration: int
    interval: TimeInterval
    student: Optional[str] = None


@dataclass(frozen=True)
class TimeSlot:
    """グリッドの1行（全日共通）"""
    hour: int
    minute: int

    @property
    def label(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"

    @property
    def minutes_from_midnight(self) -> int:
        return self.hour * 60 + self.minute


class CellState(str, Enum):
    EMPTY = "empty"
    AVAILABLE = "available"
    OCCUPIED = "occupied"


class ViewClass(str, Enum):
    NARROW = "narrow"
    MEDIUM = "medium"
    WIDE = "wide"


@dataclass(frozen=True)
class LessonBlock:
    """レッスンを1日分に切り出した表示ブロック（分単位、ピクセル変換は描画側）"""
    lesson: Lesson
    day_index: int
    start_minutes: float
    duration_minutes: float
    overlap_start: datetime
    overlap_end: datetime

    @property
    def day(self) -> date:
        return self.overlap_start.date()


@dataclass(frozen=True)
class ViewWindow:
    """
    現在表示している日の並び。ページ移動・表示幅変更のたびに作り直す。
    all_days は元の日付範囲全体で、ページ移動時の再構築に使う。
    """
    days: Tuple[date, ...]
    page_index: int
    page_size: int
    total_pages: int = 1
    all_days: Tuple[date, ...] = ()

    @property
    def has_prev(self) -> bool:
        return self.page_index > 0

    @property
    def has_next(self) -> bool:
        return self.page_index < self.total_pages - 1

    @property
    def header_title(self) -> str:
        if not self.days:
            return ""
        return f"{format_day(self.days[0])} - {format_day(self.days[-1])}"


@dataclass(frozen=True)
class SlotSelection:
    """空きセル選択時のイベント（セル自身の区間を運ぶ）"""
    start_time: datetime
    end_time: datetime


@dataclass(frozen=True)
class LessonSelection:
    """レッスン選択時のイベント（その日に切り詰めた区間を運ぶ）"""
    lesson: Lesson
    overlap_start: datetime
    overlap_end: datetime


def format_day(d: date) -> str:
    """'d MMM' 形式（例: 5 Sep）"""
    return f"{d.day} {d.strftime('%b')}"


def format_day_header(d: date) -> str:
    """'EEE d MMM' 形式（例: Fri 5 Sep）"""
    return f"{d.strftime('%a')} {format_day(d)}"


def format_moment(dt: datetime) -> str:
    """'d MMM, HH:mm' 形式"""
    return f"{format_day(dt.date())}, {dt.strftime('%H:%M')}"


def describe_lesson(lesson: Lesson) -> str:
    # duration は入力値をそのまま表示する（区間から再計算しない）
    head = f"{lesson.student if lesson.student is not None else 'Lesson'} • {lesson.duration}m"
    return f"{head}\n{format_moment(lesson.interval.start)} - {format_moment(lesson.interval.end)}"


@dataclass
class InputData:
    windows: List[AvailabilityWindow]
    lessons: List[Lesson]
    errors: List[Exception] = field(default_factory=list)   # 読み込めなかったレコード（1件ずつ）
