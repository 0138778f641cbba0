# lesson_calendar/domain/paginator.py
from __future__ import annotations

import math
from datetime import date
from typing import List, Optional, Sequence, Union

from lesson_calendar.config import ViewConfig
from lesson_calendar.domain.models import ViewClass, ViewWindow


def classify_width(width: int, cfg: ViewConfig) -> ViewClass:
    """画面幅（px）を narrow / medium / wide に分類する"""
    if width <= cfg.narrow_max_width:
        return ViewClass.NARROW
    if width <= cfg.medium_max_width:
        return ViewClass.MEDIUM
    return ViewClass.WIDE


def page_size_for(view: Union[ViewClass, str, int], cfg: ViewConfig) -> int:
    """表示クラス（または生の画面幅）→ 1ページの日数"""
    if isinstance(view, int) and not isinstance(view, bool):
        view = classify_width(view, cfg)
    key = ViewClass(view).value
    return cfg.page_sizes[key]


def total_pages(day_count: int, page_size: int) -> int:
    # 日付が0件でも1ページは存在する
    return max(1, math.ceil(day_count / page_size))


def current_window(days: Sequence[date], page_index: int, page_size: int) -> List[date]:
    """
    page_index のページに当たる日を切り出す。
    範囲外の page_index は空になるが、clamp はページ移動側の責務。
    """
    start = page_index * page_size
    end = min(start + page_size, len(days))
    if start < 0 or start >= end:
        return []
    return list(days[start:end])


def next_page(page_index: int, pages: int) -> int:
    return min(page_index + 1, pages - 1)


def prev_page(page_index: int) -> int:
    return max(page_index - 1, 0)


def initial_page_index(days: Sequence[date], anchor: Optional[date], page_size: int) -> int:
    """アンカー日を含むページ。範囲より前なら先頭、後なら最終ページ"""
    if anchor is None or not days:
        return 0
    if anchor < days[0]:
        return 0
    if anchor > days[-1]:
        return total_pages(len(days), page_size) - 1
    return (anchor - days[0]).days // page_size


def build_view_window(days: Sequence[date], page_index: int, page_size: int) -> ViewWindow:
    return ViewWindow(
        days=tuple(current_window(days, page_index, page_size)),
        page_index=page_index,
        page_size=page_size,
        total_pages=total_pages(len(days), page_size),
        all_days=tuple(days),
    )


def next_window(window: ViewWindow) -> ViewWindow:
    return build_view_window(window.all_days, next_page(window.page_index, window.total_pages), window.page_size)


def prev_window(window: ViewWindow) -> ViewWindow:
    return build_view_window(window.all_days, prev_page(window.page_index), window.page_size)


def resize_window(window: ViewWindow, page_size: int) -> ViewWindow:
    """
    表示日数だけを差し替える。page_index は数値のまま新しい page_size で解釈し直す
    （表示中の日付は保持しない）。
    """
    return build_view_window(window.all_days, window.page_index, page_size)
