# どこで: `src/noisesketch/interactive/runtime/draw_window_system.py`。
# 何を: 描画ウィンドウ（pyglet + ModernGL）とキー入力を SketchFrameDriver に繋ぐサブシステムを提供する。
# なぜ: `src/noisesketch/api/runner.py` の `run()` を「配線」に寄せ、描画責務を独立させるため。

from __future__ import annotations

import logging
from pathlib import Path

import pyglet
from pyglet.window import key

from noisesketch.core.realized_geometry import RealizedGeometry
from noisesketch.core.settings import Settings
from noisesketch.export.image import default_image_output_path, export_frame_png
from noisesketch.interactive.draw_window import create_draw_window
from noisesketch.interactive.gl.draw_renderer import DrawRenderer
from noisesketch.interactive.render_settings import RenderSettings
from noisesketch.interactive.runtime.frame_driver import SketchFrameDriver, action_for_key
from noisesketch.sketches import Sketch

_logger = logging.getLogger(__name__)


class DrawWindowSystem:
    """描画（メインウィンドウ）のサブシステム。"""

    def __init__(
        self,
        sketch: Sketch,
        *,
        settings: Settings,
        render_settings: RenderSettings,
    ) -> None:
        """描画用の window/renderer を初期化する。

        Notes
        -----
        window / GL コンテキストの生成失敗は致命的なため、ログを残して再送出する。
        """

        self._render_settings = render_settings
        self._png_output_path = default_image_output_path(sketch.name)

        window = None
        try:
            window = create_draw_window(render_settings, caption=f"noisesketch - {sketch.name}")
            self._renderer = DrawRenderer(window, render_settings)
        except Exception:
            _logger.exception("Failed to create draw window")
            if window is not None:
                window.close()
            raise
        self.window = window

        # Settings は GUI と共有する参照。
        self.driver = SketchFrameDriver(
            sketch,
            settings=settings,
            save_png=self._export_png,
            request_exit=pyglet.app.exit,
        )
        self.window.push_handlers(on_key_press=self._on_key_press)

    def _on_key_press(self, symbol: int, _modifiers: int) -> bool | None:
        action = action_for_key(key.symbol_string(symbol))
        if action is None:
            return None
        self.driver.handle(action)
        # ESC の既定動作（window.close）は driver の終了要求に任せる。
        return pyglet.event.EVENT_HANDLED

    def _export_png(self, geometry: RealizedGeometry) -> Path:
        rs = self._render_settings
        return export_frame_png(
            geometry,
            self._png_output_path,
            canvas_size=rs.canvas_size,
            line_color=rs.line_color,
            background_color=rs.background_color,
            stroke_width=rs.line_thickness,
        )

    def _framebuffer_size(self) -> tuple[int, int]:
        getter = getattr(self.window, "get_framebuffer_size", None)
        if callable(getter):
            w, h = getter()
            return int(w), int(h)
        return int(self.window.width), int(self.window.height)

    def step(self, t: float) -> None:
        """フレーム冒頭に sketch を経過秒 t で進める。"""
        self.driver.step(t)

    def draw_frame(self) -> None:
        """直近の step 結果を描く（`flip()` は呼ばない）。保存要求があれば描画後に書き出す。"""

        # 注: 呼び出し側（pyglet.window.Window.draw）が事前に self.window.switch_to() 済みである前提。
        self._renderer.ctx.screen.use()
        fb_w, fb_h = self._framebuffer_size()
        self._renderer.viewport(fb_w, fb_h)
        self._renderer.clear(self._render_settings.background_color)
        self._renderer.render(self.driver.geometry)
        self.driver.flush_png()

    def close(self) -> None:
        """GPU / window 資源を解放する。"""

        self._renderer.release()
        self.window.close()
