# lesson_calendar/gui/app.py
from __future__ import annotations

from io import BytesIO
from pathlib import Path
import sys

import pandas as pd
import streamlit as st

# Streamlitは実行ディレクトリが変わるため、リポジトリルートをパスに追加する。
ROOT_DIR = Path(__file__).resolve().parents[2]
if str(ROOT_DIR) not in sys.path:
    sys.path.append(str(ROOT_DIR))

from lesson_calendar.config import DEFAULT_CONFIG
from lesson_calendar.domain.daterange import build_day_range
from lesson_calendar.domain.blocks import select_block
from lesson_calendar.domain.models import (
    CellState,
    LessonSelection,
    SlotSelection,
    ViewClass,
    describe_lesson,
    format_day_header,
    format_moment,
)
from lesson_calendar.domain.paginator import (
    build_view_window,
    initial_page_index,
    next_page,
    page_size_for,
    prev_page,
)
from lesson_calendar.io_layer.paths import InputPaths
from lesson_calendar.io_layer.record_reader import RecordReader
from lesson_calendar.preprocessing.preprocess import preprocess_all
from lesson_calendar.reporting.report import build_block_table, build_grid_table, build_lesson_table
from lesson_calendar.validation.validator import validate_records

CELL_COLORS = {
    CellState.EMPTY.value: "background-color: #f3f4f6",
    CellState.AVAILABLE.value: "background-color: #bbf7d0",
    CellState.OCCUPIED.value: "background-color: #fca5a5",
}


def _export_result_bytes(grid_df: pd.DataFrame, block_df: pd.DataFrame, lesson_df: pd.DataFrame) -> bytes:
    """Streamlitダウンロード用にxlsxをメモリに書き出す。"""
    buf = BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as w:
        grid_df.to_excel(w, sheet_name="grid", index=True)
        block_df.to_excel(w, sheet_name="blocks", index=False)
        lesson_df.to_excel(w, sheet_name="lessons", index=False)
    return buf.getvalue()


def _show_event(event) -> None:
    if isinstance(event, SlotSelection):
        st.success(f"Selected slot: {format_moment(event.start_time)} - {format_moment(event.end_time)}")
    elif isinstance(event, LessonSelection):
        st.info(describe_lesson(event.lesson))
        st.caption(f"この日の範囲: {format_moment(event.overlap_start)} - {format_moment(event.overlap_end)}")


def main():
    cfg = DEFAULT_CONFIG
    reader = RecordReader(cfg=cfg)

    st.title("Teacher Schedule")

    data_file = st.text_input("入力ファイル（.json / .xlsx）").strip()
    view = st.selectbox("表示", [v.value for v in ViewClass], index=2)
    anchor = st.date_input("開始日（任意）", value=None)

    if not data_file:
        st.stop()

    # 入力読み込み
    try:
        data = reader.build_input_data(InputPaths(data_file=data_file))
    except (OSError, ValueError) as e:
        st.error(f"入力読み込みでエラーが発生しました: {e}")
        st.stop()

    for err in data.errors:
        st.error(err.message)
    for w in validate_records(data.windows, data.lessons):
        st.warning(w.message)

    days = build_day_range(data.windows, cfg.minimum_horizon)
    size = page_size_for(view, cfg.view)

    # ページ位置は入力かアンカーが変わったときだけ初期化する。
    # 表示クラスの変更では page_index を数値のまま新しい日数で解釈し直す。
    key = (data_file, str(anchor))
    if st.session_state.get("page_key") != key:
        st.session_state["page_key"] = key
        st.session_state["page_index"] = initial_page_index(days, anchor, size)

    window = build_view_window(days, st.session_state["page_index"], size)

    col_prev, col_title, col_next = st.columns([1, 4, 1])
    if col_prev.button("◀", disabled=not window.has_prev):
        st.session_state["page_index"] = prev_page(window.page_index)
        st.rerun()
    col_title.subheader(window.header_title)
    if col_next.button("▶", disabled=not window.has_next):
        st.session_state["page_index"] = next_page(window.page_index, window.total_pages)
        st.rerun()

    snap = preprocess_all(data, cfg, window)
    grid_df = build_grid_table(snap)
    block_df = build_block_table(snap)

    st.dataframe(grid_df.style.map(lambda v: CELL_COLORS.get(v, "")), use_container_width=True, height=600)

    # セルのクリック相当
    if window.days:
        st.header("セルを選択")
        c1, c2, c3 = st.columns([2, 2, 1])
        day = c1.selectbox("日", list(window.days), format_func=format_day_header)
        slot = c2.selectbox("時刻", snap.slots, format_func=lambda s: s.label)
        if c3.button("選択"):
            event = snap.engine.select(day, slot)
            if event is None:
                st.warning("空き枠ではありません。")
            else:
                _show_event(event)

    if snap.blocks:
        st.header("レッスン")
        st.dataframe(block_df, use_container_width=True)
        for i, b in enumerate(snap.blocks):
            label = f"{b.lesson.student or 'Lesson'} {format_moment(b.overlap_start)} ({b.duration_minutes:g}m)"
            if st.button(label, key=f"block-{i}"):
                _show_event(select_block(b))

    xlsx_bytes = _export_result_bytes(grid_df, block_df, build_lesson_table(data.lessons))
    st.download_button(
        label="表示中のカレンダーをxlsxでダウンロード",
        data=xlsx_bytes,
        file_name="calendar.xlsx",
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )


if __name__ == "__main__":
    main()
