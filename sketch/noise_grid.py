"""
どこで: `sketch/noise_grid.py`。
何を: `noise_grid` sketch を既定設定で起動する。
なぜ: IDE から直接実行できる最小エントリポイントとして利用するため。
"""

from noisesketch import run

CANVAS_WIDTH = 1000
CANVAS_HEIGHT = 1000


if __name__ == "__main__":
    run(
        "noise_grid",
        background_color=(0.0, 0.0, 0.0),
        line_color=(1.0, 1.0, 1.0),
        canvas_size=(CANVAS_WIDTH, CANVAS_HEIGHT),
        parameter_gui=True,
    )
