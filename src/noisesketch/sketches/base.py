# どこで: `src/noisesketch/sketches/base.py`。
# 何を: 3 つの sketch が満たす共通インターフェース（Sketch）を定義する。
# なぜ: ランナー/GUI を sketch の種類に依存させず、update と描画データ生成を分離するため。

from __future__ import annotations

from typing import Mapping, Protocol

from noisesketch.core.realized_geometry import RealizedGeometry
from noisesketch.core.settings import SettingMeta, Settings


class Sketch(Protocol):
    """1 フレーム = `update()` → `geometry()` の順に呼ばれる生成器。"""

    name: str
    # GUI に出すライブ設定。空なら GUI は「編集可能な設定なし」を表示する。
    settings_meta: Mapping[str, SettingMeta]

    def update(self, t: float, settings: Settings) -> None:
        """経過秒 t と現在の Settings からフレーム状態を更新する。"""
        ...

    def geometry(self, settings: Settings) -> RealizedGeometry:
        """直近の `update()` 結果を描画用ジオメトリとして返す。"""
        ...

    def request_regenerate(self) -> None:
        """再生成トリガー（SPACE）。対応しない sketch では何もしない。"""
        ...
