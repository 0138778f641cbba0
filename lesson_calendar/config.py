# lesson_calendar/config.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict


@dataclass(frozen=True)
class GridConfig:
    """1日の表示グリッド（表示時間帯と刻み）"""
    visible_start_hour: int = 0
    visible_end_hour: int = 24     # 終了時は含まない
    granularity_minutes: int = 30


@dataclass(frozen=True)
class ViewConfig:
    """画面幅 → 表示日数の分類（しきい値は設定値でありロジックではない）"""
    narrow_max_width: int = 640    # 以下は1日表示
    medium_max_width: int = 1024   # 以下は3日表示
    default_width: int = 1200      # 幅不明時の想定
    page_sizes: Dict[str, int] = field(
        default_factory=lambda: {"narrow": 1, "medium": 3, "wide": 7}
    )


@dataclass(frozen=True)
class AppConfig:
    grid: GridConfig = GridConfig()
    view: ViewConfig = ViewConfig()

    # スケジュールが短くても最低限ここまでは閲覧可能にする
    minimum_horizon: datetime = datetime(2025, 9, 5, 23, 59, 59)

    # オフセット付きISO文字列をローカル時刻へ変換する際のタイムゾーン
    timezone_name: str = "UTC"


DEFAULT_CONFIG = AppConfig()
