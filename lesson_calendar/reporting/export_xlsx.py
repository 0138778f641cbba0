# lesson_calendar/reporting/export_xlsx.py
from __future__ import annotations

from pathlib import Path

import pandas as pd


def export_result_xlsx(
    out_path: str,
    grid_df: pd.DataFrame,
    block_df: pd.DataFrame,
    lesson_df: pd.DataFrame,
) -> str:
    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(out_path, engine="openpyxl") as w:
        grid_df.to_excel(w, sheet_name="grid", index=True)
        block_df.to_excel(w, sheet_name="blocks", index=False)
        lesson_df.to_excel(w, sheet_name="lessons", index=False)
    return out_path
