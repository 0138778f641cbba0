# lesson_calendar/domain/overlap.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence, Tuple, Union

from lesson_calendar.domain.intervals import clamp_intersection, overlaps
from lesson_calendar.domain.models import (
    AvailabilityWindow,
    CellState,
    Lesson,
    LessonSelection,
    SlotSelection,
    TimeSlot,
)
from lesson_calendar.domain.timegrid import TimeGrid, day_interval


@dataclass(frozen=True)
class OverlapEngine:
    """(日, 行) ごとの空き/予約判定とクリック時のイベント生成"""
    grid: TimeGrid
    windows: Tuple[AvailabilityWindow, ...]
    lessons: Tuple[Lesson, ...]

    @classmethod
    def build(
        cls,
        grid: TimeGrid,
        windows: Sequence[AvailabilityWindow],
        lessons: Sequence[Lesson],
    ) -> "OverlapEngine":
        return cls(grid=grid, windows=tuple(windows), lessons=tuple(lessons))

    def is_available(self, d: date, slot: TimeSlot) -> bool:
        cell = self.grid.slot_interval(d, slot)
        return any(overlaps(cell, w.interval) for w in self.windows)

    def occupying_lesson(self, d: date, slot: TimeSlot) -> Optional[Lesson]:
        # 入力順で最初に重なったレッスン
        cell = self.grid.slot_interval(d, slot)
        for lesson in self.lessons:
            if overlaps(cell, lesson.interval):
                return lesson
        return None

    def cell_state(self, d: date, slot: TimeSlot) -> CellState:
        if self.occupying_lesson(d, slot) is not None:
            return CellState.OCCUPIED
        if self.is_available(d, slot):
            return CellState.AVAILABLE
        return CellState.EMPTY

    def cell_states(self, days: Sequence[date], slots: Sequence[TimeSlot]) -> List[List[CellState]]:
        """行（slot）ごとに、各日の状態を並べた行列"""
        return [[self.cell_state(d, slot) for d in days] for slot in slots]

    def select(self, d: date, slot: TimeSlot) -> Optional[Union[SlotSelection, LessonSelection]]:
        """
        セルのクリック処理。
        - occupied: そのレッスン（当日分に切り詰めた区間付き）
        - available: セル自身の区間
        - empty: イベントなし
        """
        lesson = self.occupying_lesson(d, slot)
        if lesson is not None:
            # 刻みが60を割り切れないとセルが翌日へはみ出すため、レッスンとセルが実際に重なる日で切る
            hit = clamp_intersection(lesson.interval, self.grid.slot_interval(d, slot))
            cut = clamp_intersection(lesson.interval, day_interval(hit.start.date()))
            return LessonSelection(lesson=lesson, overlap_start=cut.start, overlap_end=cut.end)
        if self.is_available(d, slot):
            cell = self.grid.slot_interval(d, slot)
            return SlotSelection(start_time=cell.start, end_time=cell.end)
        return None
