# どこで: `src/noisesketch/sketches/noise_grid.py`。
# 何を: N×N 格子に円を置き、4 本の Perlin ノイズで位置ずれ/半径/明度を毎フレーム揺らす sketch。
# なぜ: Settings のノイズ係数を GUI からライブに調整して見た目を探るため。

from __future__ import annotations

from noisesketch.core.noise import PerlinNoise, noise_bank
from noisesketch.core.noise_field import (
    NoiseFieldSample,
    noise_field_to_geometry,
    sample_noise_field,
)
from noisesketch.core.realized_geometry import RealizedGeometry, empty_geometry
from noisesketch.core.settings import NOISE_SETTINGS_META, Settings


class NoiseGridSketch:
    """ノイズ場で揺れる円の格子。"""

    name = "noise_grid"
    settings_meta = NOISE_SETTINGS_META

    def __init__(self, seed: int, *, canvas_size: tuple[int, int] = (1000, 1000)) -> None:
        noises = noise_bank(seed, 4)
        self._noises: tuple[PerlinNoise, PerlinNoise, PerlinNoise, PerlinNoise] = (
            noises[0],
            noises[1],
            noises[2],
            noises[3],
        )
        self._canvas_size = canvas_size
        self._sample: NoiseFieldSample | None = None

    def update(self, t: float, settings: Settings) -> None:
        self._sample = sample_noise_field(self._noises, settings, t, self._canvas_size)

    def geometry(self, settings: Settings) -> RealizedGeometry:
        if self._sample is None:
            return empty_geometry()
        return noise_field_to_geometry(self._sample)

    def request_regenerate(self) -> None:
        return
