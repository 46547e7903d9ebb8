# どこで: `src/noisesketch/interactive/runtime/frame_clock.py`。
# 何を: `Sketch.update(t, ...)` に渡すフレーム時刻 `t` を提供する。
# なぜ: 時刻の取り方をテスト可能な小さなクラスへ閉じ込めるため。

from __future__ import annotations

import time


class RealTimeClock:
    """実時間ベースのフレーム時計。

    Notes
    -----
    `t` は `perf_counter()` の差分（秒）。
    """

    def __init__(self, *, start_time: float) -> None:
        self._start_time = float(start_time)

    def t(self) -> float:
        """現在のフレーム時刻 `t`（秒）を返す。"""

        return float(time.perf_counter() - self._start_time)
