# lesson_calendar/main_cli.py
from __future__ import annotations

import argparse
import dataclasses
import logging
from datetime import date, datetime
from typing import Optional, Union

from dateutil.parser import isoparse

from lesson_calendar.config import DEFAULT_CONFIG
from lesson_calendar.domain.blocks import select_block
from lesson_calendar.domain.models import LessonSelection, SlotSelection, ViewClass, describe_lesson, format_moment
from lesson_calendar.domain.paginator import next_window, prev_window
from lesson_calendar.io_layer.paths import InputPaths
from lesson_calendar.io_layer.record_reader import RecordReader
from lesson_calendar.preprocessing.preprocess import build_grid, open_window, preprocess_all
from lesson_calendar.reporting.export_xlsx import export_result_xlsx
from lesson_calendar.reporting.report import build_block_table, build_grid_table, build_lesson_table
from lesson_calendar.validation.validator import validate_records

CELL_MARKS = {"empty": ".", "available": "o", "occupied": "#"}


def parse_view(value: str) -> Union[ViewClass, int]:
    """narrow / medium / wide、または画面幅（px）"""
    if value.isdigit():
        return int(value)
    try:
        return ViewClass(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"表示クラスが不正です: {value}")


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="講師の空き状況カレンダーを表示する")
    p.add_argument("--data", required=True, help="入力ファイル（.json または .xlsx）")
    p.add_argument("--view", type=parse_view, default=DEFAULT_CONFIG.view.default_width,
                   help="narrow / medium / wide または画面幅px（既定: 1200）")
    p.add_argument("--anchor", default=None, help="最初に表示する日（例: 2025-08-25）")
    p.add_argument("--horizon", default=None, help="最低限表示する最終日時（例: 2025-09-05T23:59:59）")
    p.add_argument("--next", type=int, default=0, help="次ページへ進む回数")
    p.add_argument("--prev", type=int, default=0, help="前ページへ戻る回数")
    p.add_argument("--select", default=None, help="クリックするセルの日時（例: 2025-08-25T09:00）")
    p.add_argument("--out", default=None, help="出力xlsx（省略時は出力しない）")
    p.add_argument("--verbose", action="store_true")
    return p.parse_args(argv)


def _parse_date(value: Optional[str]) -> Optional[date]:
    return isoparse(value).date() if value else None


def _parse_moment(value: Optional[str], reader: RecordReader) -> Optional[datetime]:
    # 入力レコードと同じくオフセット付きは timezone_name へ変換する
    if not value:
        return None
    return reader.to_local(isoparse(value))


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        cfg = DEFAULT_CONFIG
        reader = RecordReader(cfg=cfg)
        horizon = _parse_moment(args.horizon, reader)
        if horizon is not None:
            cfg = dataclasses.replace(cfg, minimum_horizon=horizon)
        anchor = _parse_date(args.anchor)
        select_at = _parse_moment(args.select, reader)
    except ValueError as e:
        print(f"[ERROR] 日時の指定が不正です: {e}")
        return 1

    reader = RecordReader(cfg=cfg)
    try:
        data = reader.build_input_data(InputPaths(data_file=args.data))
    except (OSError, ValueError) as e:
        print(f"[ERROR] 入力読み込みでエラーが発生しました: {e}")
        return 1

    for err in data.errors:
        print(f"[ERROR] {err.message}")
    for w in validate_records(data.windows, data.lessons):
        print(f"[WARN] {w.message}")

    try:
        window = open_window(data, cfg, args.view, anchor=anchor)
    except ValueError as e:
        print(f"[ERROR] 設定が不正です: {e}")
        return 1
    for _ in range(args.next):
        window = next_window(window)
    for _ in range(args.prev):
        window = prev_window(window)

    snap = preprocess_all(data, cfg, window)

    print(f"[RESULT] {window.header_title or '(表示する日がありません)'} "
          f"page {window.page_index + 1}/{window.total_pages}")
    grid_df = build_grid_table(snap)
    print(grid_df.replace(CELL_MARKS).to_string())

    for b in snap.blocks:
        sel = select_block(b)
        print(f"[BLOCK] day={b.day_index} +{b.start_minutes:g}m {b.duration_minutes:g}m "
              f"{sel.lesson.student or 'Lesson'} ({format_moment(sel.overlap_start)} - {format_moment(sel.overlap_end)})")

    if select_at is not None:
        grid = build_grid(cfg)
        try:
            slot = grid.find_slot(select_at)
        except ValueError as e:
            print(f"[ERROR] {e}")
            return 1
        event = snap.engine.select(select_at.date(), slot)
        if isinstance(event, SlotSelection):
            print(f"[SELECT] slot {format_moment(event.start_time)} - {format_moment(event.end_time)}")
        elif isinstance(event, LessonSelection):
            print(f"[SELECT] lesson\n{describe_lesson(event.lesson)}")
        else:
            print("[SELECT] 選択できないセルです")

    if args.out:
        out_path = export_result_xlsx(args.out, grid_df, build_block_table(snap), build_lesson_table(data.lessons))
        print(f"[RESULT] OK: {out_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
