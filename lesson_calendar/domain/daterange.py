# lesson_calendar/domain/daterange.py
from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import List, Optional, Sequence

from lesson_calendar.domain.models import AvailabilityWindow


def build_day_range(
    windows: Sequence[AvailabilityWindow],
    minimum_horizon: datetime,
    today: Optional[date] = None,
) -> List[date]:
    """
    閲覧対象の日付を [first_day, last_day] の両端込みで1日ずつ列挙する。
    - first_day: 最も早い受付開始日（受付が無ければ今日）
    - last_day: max(最も遅い受付終了, minimum_horizon) の日
    first_day > last_day の場合は空リスト。
    """
    if today is None:
        today = date.today()

    if windows:
        first_day = min(w.interval.start for w in windows).date()
        latest_end = max(w.interval.end for w in windows)
    else:
        first_day = today
        latest_end = None

    last_moment = minimum_horizon if latest_end is None else max(latest_end, minimum_horizon)
    last_day = last_moment.date()

    days: List[date] = []
    d = first_day
    while d <= last_day:
        days.append(d)
        d += timedelta(days=1)
    return days
