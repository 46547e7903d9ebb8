# どこで: `src/noisesketch/sketches/runup.py`。
# 何を: 起動時と SPACE キー押下時だけ曲線集合を作り直し、それ以外は同じ集合を描き続ける sketch。
# なぜ: 気に入った形を止めて眺め、書き出せるようにするため。

from __future__ import annotations

from types import MappingProxyType

import numpy as np

from noisesketch.core.curve import (
    DEFAULT_CONSTANTS,
    CurveConstants,
    CurveSet,
    curves_to_geometry,
)
from noisesketch.core.realized_geometry import RealizedGeometry, empty_geometry
from noisesketch.core.regeneration import RunupCurveSource
from noisesketch.core.settings import Settings


class RunupSketch:
    """トリガー駆動で再生成するスパイラル曲線。"""

    name = "runup"
    settings_meta = MappingProxyType({})

    def __init__(
        self,
        rng: np.random.Generator,
        constants: CurveConstants = DEFAULT_CONSTANTS,
    ) -> None:
        self._source = RunupCurveSource(rng, constants)
        self._geometry: RealizedGeometry | None = None
        self._geometry_for: CurveSet | None = None

    @property
    def curves(self) -> CurveSet | None:
        return self._source.curves

    @property
    def regenerate_count(self) -> int:
        return self._source.regenerate_count

    def update(self, t: float, settings: Settings) -> None:
        self._source.update()

    def geometry(self, settings: Settings) -> RealizedGeometry:
        curves = self._source.curves
        if curves is None:
            return empty_geometry()
        # 曲線集合が変わらない限り同じ RealizedGeometry を返す。
        if self._geometry is None or self._geometry_for is not curves:
            self._geometry = curves_to_geometry(curves)
            self._geometry_for = curves
        return self._geometry

    def request_regenerate(self) -> None:
        self._source.request_regenerate()
