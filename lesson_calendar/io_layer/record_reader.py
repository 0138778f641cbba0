# lesson_calendar/io_layer/record_reader.py
from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Generic, List, Mapping, Sequence, TypeVar

import pandas as pd
from dateutil import tz
from dateutil.parser import isoparse

from lesson_calendar.config import AppConfig
from lesson_calendar.domain.models import AvailabilityWindow, InputData, Lesson, TimeInterval
from lesson_calendar.io_layer.paths import InputPaths
from lesson_calendar.validation.validator import MalformedInterval

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class IngestResult(Generic[T]):
    items: List[T] = field(default_factory=list)
    errors: List[MalformedInterval] = field(default_factory=list)


def _is_missing(v: Any) -> bool:
    return v is None or (isinstance(v, float) and math.isnan(v))


@dataclass(frozen=True)
class RecordReader:
    cfg: AppConfig

    def _local_zone(self):
        zone = tz.gettz(self.cfg.timezone_name)
        if zone is None:
            raise ValueError(f"タイムゾーン名が不正です: {self.cfg.timezone_name}")
        return zone

    def parse_timestamp(self, value: Any, kind: str, index: int, key: str) -> datetime:
        """
        ISO-8601 文字列（またはxlsxの日時セル）をローカルのnaive datetimeにする。
        オフセット付きは timezone_name へ変換、オフセット無しはそのままローカル扱い。
        """
        if _is_missing(value):
            raise MalformedInterval(f"{kind}[{index}]: {key} がありません", kind=kind, index=index)

        if isinstance(value, datetime):
            dt = value.to_pydatetime() if isinstance(value, pd.Timestamp) else value
        elif isinstance(value, str):
            try:
                dt = isoparse(value.strip())
            except (ValueError, OverflowError) as e:
                raise MalformedInterval(
                    f"{kind}[{index}]: {key} を解釈できません: {value!r} ({e})", kind=kind, index=index
                ) from e
        else:
            raise MalformedInterval(
                f"{kind}[{index}]: {key} の型が不正です: {type(value).__name__}", kind=kind, index=index
            )

        return self.to_local(dt)

    def to_local(self, dt: datetime) -> datetime:
        """オフセット付きは timezone_name のnaiveな時刻へ、naiveはそのまま"""
        if dt.tzinfo is not None:
            dt = dt.astimezone(self._local_zone()).replace(tzinfo=None)
        return dt

    def parse_interval(self, record: Mapping[str, Any], kind: str, index: int) -> TimeInterval:
        if not isinstance(record, Mapping):
            raise MalformedInterval(f"{kind}[{index}]: レコードがオブジェクトではありません", kind=kind, index=index)
        start = self.parse_timestamp(record.get("startTime"), kind, index, "startTime")
        end = self.parse_timestamp(record.get("endTime"), kind, index, "endTime")
        # end <= start はここでは弾かない（空区間として扱う）
        return TimeInterval(start=start, end=end)

    def parse_availability(self, record: Mapping[str, Any], index: int) -> AvailabilityWindow:
        return AvailabilityWindow(interval=self.parse_interval(record, "schedule", index))

    def parse_lesson(self, record: Mapping[str, Any], index: int) -> Lesson:
        interval = self.parse_interval(record, "lessons", index)

        lesson_id = record.get("id")
        if _is_missing(lesson_id):
            raise MalformedInterval(f"lessons[{index}]: id がありません", kind="lessons", index=index)
        if isinstance(lesson_id, float) and lesson_id.is_integer():
            lesson_id = int(lesson_id)

        duration = record.get("duration")
        if isinstance(duration, bool) or _is_missing(duration):
            raise MalformedInterval(f"lessons[{index}]: duration がありません", kind="lessons", index=index)
        try:
            duration_f = float(duration)
        except (TypeError, ValueError) as e:
            raise MalformedInterval(
                f"lessons[{index}]: duration が数値ではありません: {duration!r}", kind="lessons", index=index
            ) from e
        if not duration_f.is_integer():
            raise MalformedInterval(
                f"lessons[{index}]: duration は整数（分）で指定してください: {duration!r}", kind="lessons", index=index
            )

        student = record.get("student")
        student = None if _is_missing(student) else str(student).strip()

        return Lesson(id=lesson_id, duration=int(duration_f), interval=interval, student=student)

    def read_availability(self, records: Sequence[Mapping[str, Any]]) -> IngestResult[AvailabilityWindow]:
        out: IngestResult[AvailabilityWindow] = IngestResult()
        for i, r in enumerate(records):
            try:
                out.items.append(self.parse_availability(r, i))
            except MalformedInterval as e:
                logger.warning("skipping availability record: %s", e.message)
                out.errors.append(e)
        return out

    def read_lessons(self, records: Sequence[Mapping[str, Any]]) -> IngestResult[Lesson]:
        out: IngestResult[Lesson] = IngestResult()
        for i, r in enumerate(records):
            try:
                out.items.append(self.parse_lesson(r, i))
            except MalformedInterval as e:
                logger.warning("skipping lesson record: %s", e.message)
                out.errors.append(e)
        return out

    def load_json(self, path: str, paths: InputPaths) -> Dict[str, List[Dict[str, Any]]]:
        with open(path, encoding="utf-8") as f:
            doc = json.load(f)
        if not isinstance(doc, dict):
            raise ValueError(f"{path}: トップレベルはオブジェクトである必要があります。")
        return {
            paths.schedule_key: list(doc.get(paths.schedule_key) or []),
            paths.lessons_key: list(doc.get(paths.lessons_key) or []),
        }

    def load_xlsx(self, path: str, paths: InputPaths) -> Dict[str, List[Dict[str, Any]]]:
        """
        schedule シート想定列: startTime, endTime
        lessons シート想定列: id, duration, startTime, endTime, (optional) student
        シートが無い場合は空として扱う。
        """
        sheets = pd.read_excel(path, sheet_name=None)
        out: Dict[str, List[Dict[str, Any]]] = {}
        for key in (paths.schedule_key, paths.lessons_key):
            df = sheets.get(key)
            if df is None:
                logger.info("%s: sheet %r not found, treated as empty", path, key)
                out[key] = []
                continue
            df = df.astype(object).where(pd.notna(df), None)
            out[key] = df.to_dict(orient="records")
        return out

    def build_input_data(self, paths: InputPaths) -> InputData:
        raw = self.load_xlsx(paths.data_file, paths) if paths.is_xlsx else self.load_json(paths.data_file, paths)
        return self.build_from_records(raw[paths.schedule_key], raw[paths.lessons_key])

    def build_from_records(
        self,
        schedule: Sequence[Mapping[str, Any]],
        lessons: Sequence[Mapping[str, Any]],
    ) -> InputData:
        windows = self.read_availability(schedule)
        booked = self.read_lessons(lessons)
        return InputData(
            windows=windows.items,
            lessons=booked.items,
            errors=[*windows.errors, *booked.errors],
        )
