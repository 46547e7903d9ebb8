# どこで: `src/noisesketch/interactive/runtime/frame_driver.py`。
# 何を: キー操作（再生成 / PNG 保存 / 終了）と 1 フレームの update → geometry を sketch へ流すドライバ。
# なぜ: pyglet/GL に触れない部分を切り出し、キー割り当てと保存ポリシーをヘッドレスに検証できるようにするため。

from __future__ import annotations

import enum
import logging
from pathlib import Path
from typing import Callable

from noisesketch.core.realized_geometry import RealizedGeometry, empty_geometry
from noisesketch.core.settings import Settings
from noisesketch.sketches import Sketch

_logger = logging.getLogger(__name__)


class KeyAction(enum.Enum):
    """描画ウィンドウのキーに割り当てる操作。"""

    REGENERATE = "regenerate"
    SAVE_PNG = "save_png"
    EXIT = "exit"


# キー名は `pyglet.window.key.symbol_string()` の表記。
KEY_BINDINGS: dict[str, KeyAction] = {
    "SPACE": KeyAction.REGENERATE,
    "P": KeyAction.SAVE_PNG,
    "ESCAPE": KeyAction.EXIT,
}


def action_for_key(key_name: str) -> KeyAction | None:
    """キー名に割り当てた操作を返す。未割り当てなら None。"""
    return KEY_BINDINGS.get(str(key_name))


class SketchFrameDriver:
    """sketch を 1 フレームずつ進め、キー操作を sketch / 保存 / 終了へ振り分ける。

    Parameters
    ----------
    sketch : Sketch
        駆動する sketch。
    settings : Settings
        GUI と共有するライブ設定。毎フレーム最新値を渡す。
    save_png : Callable[[RealizedGeometry], Path]
        フレームを書き出して保存先を返す関数。
    request_exit : Callable[[], None]
        ループ停止を要求する関数。
    """

    def __init__(
        self,
        sketch: Sketch,
        *,
        settings: Settings,
        save_png: Callable[[RealizedGeometry], Path],
        request_exit: Callable[[], None],
    ) -> None:
        self._sketch = sketch
        self._settings = settings
        self._save_png = save_png
        self._request_exit = request_exit
        self._geometry: RealizedGeometry = empty_geometry()
        self._png_pending = False

    @property
    def geometry(self) -> RealizedGeometry:
        """直近の `step()` で得たフレームのジオメトリ。"""
        return self._geometry

    @property
    def png_pending(self) -> bool:
        return self._png_pending

    def handle(self, action: KeyAction) -> None:
        if action is KeyAction.REGENERATE:
            self._sketch.request_regenerate()
        elif action is KeyAction.SAVE_PNG:
            # 描画し終えたフレームを保存するため、次の `flush_png()` まで遅延する。
            self._png_pending = True
        elif action is KeyAction.EXIT:
            self._request_exit()
        else:
            raise ValueError(f"未知のキー操作です: {action!r}")

    def step(self, t: float) -> RealizedGeometry:
        """経過秒 t で sketch を更新し、描画するジオメトリを返す。"""
        self._sketch.update(t, self._settings)
        self._geometry = self._sketch.geometry(self._settings)
        return self._geometry

    def flush_png(self) -> Path | None:
        """保存要求があれば現在のフレームを書き出す。

        Raises
        ------
        Exception
            書き出しの失敗は致命的として扱い、ログを残してそのまま送出する。
        """
        if not self._png_pending:
            return None
        self._png_pending = False
        try:
            path = self._save_png(self._geometry)
        except Exception:
            _logger.exception("Failed to save PNG")
            raise
        print(f"Saved PNG: {path}")
        return path


__all__ = ["KEY_BINDINGS", "KeyAction", "SketchFrameDriver", "action_for_key"]
