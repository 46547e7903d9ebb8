# どこで: `src/noisesketch/interactive/runtime/parameter_gui_system.py`。
# 何を: Parameter GUI を「1フレーム描画できるサブシステム」として提供する。
# なぜ: `src/noisesketch/api/runner.py` の `run()` から GUI 初期化/描画/後始末を分離するため。

from __future__ import annotations

import logging
from typing import Any, Mapping

from noisesketch.core.runtime_config import runtime_config
from noisesketch.core.settings import SettingMeta, Settings
from noisesketch.interactive.parameter_gui import ParameterGUI

_logger = logging.getLogger(__name__)


def _create_panel_window(size: tuple[int, int], *, caption: str) -> Any:
    """設定パネル用の固定サイズ pyglet ウィンドウを生成する。"""

    import pyglet

    w, h = size
    config = pyglet.gl.Config(double_buffer=True, sample_buffers=1, samples=4)  # type: ignore[abstract]
    return pyglet.window.Window(  # type: ignore[abstract]
        width=int(w),
        height=int(h),
        caption=caption,
        resizable=False,
        vsync=False,
        config=config,
    )


class ParameterGUIWindowSystem:
    """Parameter GUI（別ウィンドウ）のサブシステム。"""

    def __init__(
        self,
        *,
        settings: Settings,
        settings_meta: Mapping[str, SettingMeta],
    ) -> None:
        """GUI 用の window と ParameterGUI を初期化する。"""

        window = None
        try:
            window = _create_panel_window(runtime_config().parameter_gui_window_size, caption="Settings")
            self._gui = ParameterGUI(window, settings=settings, settings_meta=settings_meta)
        except Exception:
            _logger.exception("Failed to create parameter GUI")
            if window is not None:
                window.close()
            raise
        self.window = window

    def draw_frame(self) -> None:
        """1 フレーム分の GUI を描画する（`flip()` は呼ばない）。"""

        self._gui.draw_frame()

    def close(self) -> None:
        """GUI を終了し、ウィンドウを破棄する。"""

        self._gui.close()
