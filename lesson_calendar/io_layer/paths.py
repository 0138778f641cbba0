# lesson_calendar/io_layer/paths.py
from dataclasses import dataclass


@dataclass(frozen=True)
class InputPaths:
    """
    入力ファイル。拡張子で形式を判定する。
    .json: {"schedule": [...], "lessons": [...]}
    .xlsx: schedule / lessons シート（ヘッダ行あり）
    """
    data_file: str

    # シート名・キー名（運用で変えるならここだけ）
    schedule_key: str = "schedule"
    lessons_key: str = "lessons"

    @property
    def is_xlsx(self) -> bool:
        return self.data_file.lower().endswith((".xlsx", ".xlsm"))
