# lesson_calendar/preprocessing/preprocess.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Union

from lesson_calendar.config import AppConfig
from lesson_calendar.domain.blocks import project_lesson_blocks
from lesson_calendar.domain.daterange import build_day_range
from lesson_calendar.domain.models import CellState, InputData, LessonBlock, TimeSlot, ViewClass, ViewWindow
from lesson_calendar.domain.overlap import OverlapEngine
from lesson_calendar.domain.paginator import build_view_window, initial_page_index, page_size_for
from lesson_calendar.domain.timegrid import TimeGrid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalendarSnapshot:
    window: ViewWindow
    slots: List[TimeSlot]
    cells: List[List[CellState]]     # cells[行][表示日]
    blocks: List[LessonBlock]
    engine: OverlapEngine

    @property
    def days(self):
        return self.window.days


def build_grid(cfg: AppConfig) -> TimeGrid:
    return TimeGrid(
        start_hour=cfg.grid.visible_start_hour,
        end_hour=cfg.grid.visible_end_hour,
        step_minutes=cfg.grid.granularity_minutes,
    )


def open_window(
    data: InputData,
    cfg: AppConfig,
    view: Union[ViewClass, str, int],
    anchor: Optional[date] = None,
    today: Optional[date] = None,
) -> ViewWindow:
    """入力から日付範囲を作り、表示クラスとアンカー日で最初のページを開く"""
    days = build_day_range(data.windows, cfg.minimum_horizon, today=today)
    size = page_size_for(view, cfg.view)
    return build_view_window(days, initial_page_index(days, anchor, size), size)


def preprocess_all(data: InputData, cfg: AppConfig, window: ViewWindow) -> CalendarSnapshot:
    """
    表示中のページについてセル状態とレッスンブロックを毎回作り直す。
    キャッシュは持たない（入力が変わったら呼び直す）。
    """
    grid = build_grid(cfg)
    slots = grid.slots()
    engine = OverlapEngine.build(grid, data.windows, data.lessons)
    cells = engine.cell_states(window.days, slots)
    blocks = project_lesson_blocks(data.lessons, window.days)
    logger.debug(
        "snapshot page=%d/%d days=%d slots=%d blocks=%d",
        window.page_index + 1, window.total_pages, len(window.days), len(slots), len(blocks),
    )
    return CalendarSnapshot(window=window, slots=slots, cells=cells, blocks=blocks, engine=engine)
