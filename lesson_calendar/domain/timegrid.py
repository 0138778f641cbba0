# lesson_calendar/domain/timegrid.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import List

from lesson_calendar.domain.models import TimeInterval, TimeSlot


@dataclass(frozen=True)
class TimeGrid:
    """1日の行（時:分）を刻み幅ごとに扱う。全日で同じ行の並びを使う"""
    start_hour: int = 0
    end_hour: int = 24      # この時は含まない
    step_minutes: int = 30

    def __post_init__(self):
        if self.step_minutes <= 0:
            raise ValueError(f"刻み幅（分）は正の値である必要があります: {self.step_minutes}")
        if not (0 <= self.start_hour <= 24 and 0 <= self.end_hour <= 24):
            raise ValueError(f"表示時間帯は0〜24の範囲で指定してください: {self.start_hour}..{self.end_hour}")

    def slots(self) -> List[TimeSlot]:
        """
        [start_hour, end_hour) の各時について、分を0から60未満まで step_minutes 刻みで並べる。
        60が step_minutes で割り切れない場合は、各時の終わりで手前止まりになる（補正しない）。
        """
        out: List[TimeSlot] = []
        for hour in range(self.start_hour, self.end_hour):
            for minute in range(0, 60, self.step_minutes):
                out.append(TimeSlot(hour=hour, minute=minute))
        return out

    def slot_interval(self, d: date, slot: TimeSlot) -> TimeInterval:
        start = datetime.combine(d, time.min) + timedelta(hours=slot.hour, minutes=slot.minute)
        return TimeInterval(start=start, end=start + timedelta(minutes=self.step_minutes))

    def find_slot(self, moment: datetime) -> TimeSlot:
        """moment を含む行を返す（グリッド外なら ValueError）"""
        for slot in self.slots():
            iv = self.slot_interval(moment.date(), slot)
            if iv.start <= moment < iv.end:
                return slot
        raise ValueError(f"表示グリッド外の時刻です: {moment.isoformat()}")


def day_interval(d: date) -> TimeInterval:
    """その日の [0:00, 翌0:00)"""
    midnight = datetime.combine(d, time.min)
    return TimeInterval(start=midnight, end=midnight + timedelta(days=1))
