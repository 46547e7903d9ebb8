# どこで: `src/noisesketch/interactive/runtime/window_loop.py`。
# 何を: 1 tick ごとに sketch を経過秒で進め、描画ウィンドウと設定パネルを同じ pyglet app loop で再描画する。
# なぜ: update はウィンドウ数に関係なく 1 フレーム 1 回とし、各ウィンドウの on_draw は描くだけにするため。

from __future__ import annotations

import time
from typing import Any, Callable

import pyglet

from noisesketch.interactive.runtime.frame_clock import RealTimeClock


class FrameLoop:
    """`on_tick(t)` → 開いている全ウィンドウの `draw()` を 1 フレームとして回す。

    Parameters
    ----------
    on_tick : Callable[[float], None]
        フレーム冒頭に経過秒 t で呼ぶ。sketch の update はここで行う。
    fps : float
        目標フレームレート。`<=0` の場合はスロットリングしない。
    clock : RealTimeClock | None
        t の供給源。None ならループ生成時刻を 0 秒とする。
    """

    def __init__(
        self,
        on_tick: Callable[[float], None],
        *,
        fps: float,
        clock: RealTimeClock | None = None,
    ) -> None:
        self._on_tick = on_tick
        self._fps = float(fps)
        self._clock = clock if clock is not None else RealTimeClock(start_time=time.perf_counter())
        # 注: pyglet の Window 型は環境/バージョン差があるため Any に寄せる。
        self._windows: list[Any] = []

    def attach(self, window: Any, draw: Callable[[], None]) -> None:
        """window の on_draw に draw を繋ぎ、毎 tick の再描画対象に加える。

        `draw` は back buffer へ描くだけにする（`switch_to()` / `flip()` は `Window.draw()` が行う）。
        """
        window.push_handlers(on_draw=draw, on_close=self._on_close)
        self._windows.append(window)

    @staticmethod
    def _on_close(*_: object) -> None:
        # どれか 1 つを閉じたらループ全体を止める。
        pyglet.app.exit()

    def tick(self, dt: float) -> None:
        self._on_tick(self._clock.t())
        open_windows = pyglet.app.windows
        for window in self._windows:
            # 閉じたウィンドウへの draw は例外になり得る。
            if window in open_windows:
                window.draw(dt)

    def run(self) -> None:
        """ウィンドウが閉じられるか ESC までループを実行する。"""

        if self._fps <= 0:
            pyglet.clock.schedule(self.tick)
        else:
            pyglet.clock.schedule_interval(self.tick, 1.0 / self._fps)

        try:
            pyglet.app.run(interval=None)
        finally:
            pyglet.clock.unschedule(self.tick)
