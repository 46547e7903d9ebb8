# どこで: `src/noisesketch/sketches/wander.py`。
# 何を: 毎フレーム新しい乱数で 32 本のスパイラル曲線を作り直す sketch。
# なぜ: 共通角オフセットもフレームごとに振り直し、常に動き続ける画面にするため。

from __future__ import annotations

import numpy as np

from noisesketch.core.curve import DEFAULT_CONSTANTS, CurveConstants, curves_to_geometry
from noisesketch.core.realized_geometry import RealizedGeometry, empty_geometry
from noisesketch.core.regeneration import PerFrameCurveSource
from noisesketch.core.settings import NOISE_SETTINGS_META, Settings


class WanderSketch:
    """毎フレーム再生成のスパイラル曲線。"""

    name = "wander"
    # ノイズ系スライダーは表示するが、曲線生成そのものは参照しない。
    settings_meta = NOISE_SETTINGS_META

    def __init__(
        self,
        rng: np.random.Generator,
        constants: CurveConstants = DEFAULT_CONSTANTS,
    ) -> None:
        self._source = PerFrameCurveSource(rng, constants)

    def update(self, t: float, settings: Settings) -> None:
        self._source.update()

    def geometry(self, settings: Settings) -> RealizedGeometry:
        curves = self._source.curves
        if curves is None:
            return empty_geometry()
        return curves_to_geometry(curves)

    def request_regenerate(self) -> None:
        self._source.request_regenerate()
