"""
どこで: `src/noisesketch/api/runner.py`。公開 API のランナー実装。
何を: pyglet + ModernGL を使い、Sketch が毎フレーム生成する図形をウィンドウに描画する。
なぜ: 描画ウィンドウ・設定パネル・ループの配線を 1 箇所にまとめるため。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

import pyglet

from noisesketch.core.runtime_config import runtime_config, set_config_path
from noisesketch.core.settings import Settings
from noisesketch.interactive.render_settings import RenderSettings
from noisesketch.interactive.runtime.draw_window_system import DrawWindowSystem
from noisesketch.interactive.runtime.window_loop import FrameLoop
from noisesketch.sketches import Sketch, create_sketch

_logger = logging.getLogger(__name__)


def run(
    sketch: Sketch | str,
    *,
    seed: int | None = None,
    settings: Settings | None = None,
    config_path: str | Path | None = None,
    background_color: tuple[float, float, float] = (0.0, 0.0, 0.0),
    line_thickness: float = 1.0,
    line_color: tuple[float, float, float] = (1.0, 1.0, 1.0),
    render_scale: float = 1.0,
    canvas_size: tuple[int, int] = (1000, 1000),
    parameter_gui: bool = True,
    fps: float = 60.0,
) -> None:
    """pyglet ウィンドウを生成し、sketch をリアルタイム描画する。

    Parameters
    ----------
    sketch : Sketch | str
        描画する sketch、または `"wander"` / `"runup"` / `"noise_grid"`。
    seed : int | None
        sketch 名で指定した場合の乱数 seed。None なら現在時刻。
    settings : Settings | None
        描画と GUI で共有するライブ設定。None なら既定値で作る。
    config_path : str | Path | None
        設定ファイル（config.yaml）のパス。指定した場合は探索より優先する。
    background_color : tuple[float, float, float]
        背景色 RGB。既定は黒。
    line_thickness : float
        キャンバス単位の線幅。
    line_color : tuple[float, float, float]
        ジオメトリが色を持たないときの線色。既定は白。
    render_scale : float
        キャンバス寸法に掛けるピクセル倍率。
    canvas_size : tuple[int, int]
        キャンバス寸法。ウィンドウサイズと投影行列に使う。
    parameter_gui : bool
        True の場合、別ウィンドウで設定パネルを開く。
    fps : float
        目標フレームレート。`<=0` の場合は可能な限り速く回す。

    Returns
    -------
    None
        どちらかのウィンドウを閉じるか ESC で制御を返す。
    """

    set_config_path(config_path)
    cfg = runtime_config()

    # True にすると Parameter GUI のクリックやドラッグが抜ける事がある。
    pyglet.options["vsync"] = False

    if isinstance(sketch, str):
        sketch = create_sketch(sketch, seed=seed, canvas_size=canvas_size)

    # 描画と GUI で同じインスタンスを参照する。
    shared_settings = settings if settings is not None else Settings()

    render_settings = RenderSettings(
        background_color=background_color,
        line_thickness=line_thickness,
        line_color=line_color,
        render_scale=render_scale,
        canvas_size=canvas_size,
    )

    draw_window = DrawWindowSystem(
        sketch,
        settings=shared_settings,
        render_settings=render_settings,
    )
    draw_window.window.set_location(*cfg.window_pos_draw)

    # `closers` は teardown 用（close 順もここで管理する）。
    closers: list[Callable[[], None]] = [draw_window.close]
    loop = FrameLoop(draw_window.step, fps=fps)
    loop.attach(draw_window.window, draw_window.draw_frame)

    try:
        if parameter_gui:
            # pyimgui は使うときだけ遅延 import する。
            from noisesketch.interactive.runtime.parameter_gui_system import (
                ParameterGUIWindowSystem,
            )

            gui = ParameterGUIWindowSystem(
                settings=shared_settings,
                settings_meta=sketch.settings_meta,
            )
            gui.window.set_location(*cfg.window_pos_parameter_gui)
            closers.append(gui.close)
            loop.attach(gui.window, gui.draw_frame)

        _logger.info("Running sketch %r (SPACE: regenerate, P: save PNG, ESC: quit)", sketch.name)
        loop.run()
    finally:
        # 作成順の逆で閉じることで、後に作ったサブシステム（GUI など）から先に破棄できる。
        for close in reversed(closers):
            close()
