# どこで: `src/noisesketch/interactive/parameter_gui/gui.py`。
# 何を: Settings を pyimgui で編集するための最小 GUI（初期化/1フレーム描画/破棄）を提供する。
# なぜ: 依存の重いライフサイクル管理を 1 箇所に閉じ込め、他モジュールを純粋に保つため。

from __future__ import annotations

import time
from typing import Any, Mapping

from noisesketch.core.settings import SettingMeta, Settings

from .widgets import render_settings_panel


class ParameterGUI:
    """pyimgui で Settings を編集するための最小 GUI。

    `draw_frame()` を呼ぶことで 1 フレーム分の UI を描画する。
    """

    def __init__(
        self,
        gui_window: Any,
        *,
        settings: Settings,
        settings_meta: Mapping[str, SettingMeta],
        title: str = "Settings",
    ) -> None:
        """GUI の初期化（ImGui コンテキスト / renderer 作成）。"""

        import imgui  # type: ignore[import-untyped]

        try:
            from imgui.integrations.pyglet import create_renderer  # type: ignore[import-untyped]
        except ImportError as exc:
            raise RuntimeError(f"imgui.integrations.pyglet を import できない: {exc}") from exc

        self._window = gui_window
        self._settings = settings
        self._settings_meta = settings_meta
        self._title = str(title)

        # ImGui は「グローバルな current context」を前提にするため、自前コンテキストを作って切り替えながら使う。
        self._imgui = imgui
        self._context = imgui.create_context()
        imgui.set_current_context(self._context)
        imgui.style_colors_dark()

        self._renderer = create_renderer(gui_window)

        self._prev_time = time.monotonic()
        self._closed = False

    def _sync_io(self, dt: float) -> None:
        # Retina では framebuffer がウィンドウより大きいので、その比を ImGui に伝える。
        io = self._imgui.get_io()
        io.delta_time = max(float(dt), 1e-4)
        fb_w, fb_h = self._window.get_framebuffer_size()
        win_w, win_h = self._window.width, self._window.height
        io.display_size = (float(win_w), float(win_h))
        io.display_fb_scale = (fb_w / max(1, win_w), fb_h / max(1, win_h))

    def draw_frame(self) -> bool:
        """1 フレーム分の GUI を描画し、変更があれば Settings に反映する。

        `flip()` は呼ばない。呼び出し側が `window.flip()` を担当する。
        """

        if self._closed:
            return False

        now = time.monotonic()
        dt = now - self._prev_time
        self._prev_time = now

        imgui = self._imgui
        imgui.set_current_context(self._context)

        # 注: imgui.integrations.pyglet の process_inputs() は内部で pyglet.clock.tick() を呼ぶ。
        # `pyglet.app.run()` 駆動時にこれを呼ぶと clock が二重に進みやすいので、ここでは呼ばない。
        imgui.new_frame()
        self._sync_io(dt)

        imgui.set_next_window_position(0, 0)
        imgui.set_next_window_size(self._window.width, self._window.height)
        imgui.begin(
            self._title,
            flags=imgui.WINDOW_NO_RESIZE | imgui.WINDOW_NO_COLLAPSE | imgui.WINDOW_NO_MOVE,
        )
        try:
            changed = render_settings_panel(self._settings, self._settings_meta)
        finally:
            imgui.end()

        imgui.render()

        import pyglet

        pyglet.gl.glClearColor(0.12, 0.12, 0.12, 1.0)
        self._window.clear()
        self._renderer.render(imgui.get_draw_data())
        return changed

    def close(self) -> None:
        """GUI を終了し、コンテキストとウィンドウを破棄する。"""

        # 二重 close を許容する（呼び出し側の finally から安全に呼べるようにする）。
        if self._closed:
            return
        self._closed = True

        shutdown = getattr(self._renderer, "shutdown", None)
        if callable(shutdown):
            shutdown()
        self._imgui.destroy_context(self._context)
        self._window.close()
