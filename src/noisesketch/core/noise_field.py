# どこで: `src/noisesketch/core/noise_field.py`。
# 何を: N×N 格子の各セルを 4 本の独立ノイズで評価し、円の位置ずれ/半径/明度へ変換する。
# なぜ: サンプリング（数値）と円ポリライン化（形状）を分け、前者をヘッドレスにテストできるようにするため。

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from noisesketch.core.noise import PerlinNoise, sample_grid
from noisesketch.core.realized_geometry import RealizedGeometry
from noisesketch.core.settings import Settings

CIRCLE_SEGMENTS = 24


@dataclass(frozen=True, slots=True)
class NoiseFieldSample:
    """格子全セル分のノイズ由来の値。

    Parameters
    ----------
    centers : np.ndarray
        shape (N*N, 2)。ずらす前のセル中心（キャンバス中心原点、y 上向き）。
    x_offset, y_offset : np.ndarray
        shape (N*N,)。セル中心からのずれ。
    radius : np.ndarray
        shape (N*N,)。円の半径（0 以上）。
    brightness : np.ndarray
        shape (N*N,)。灰色の明度（0..1）。
    """

    grid_size: int
    centers: np.ndarray
    x_offset: np.ndarray
    y_offset: np.ndarray
    radius: np.ndarray
    brightness: np.ndarray

    @property
    def positions(self) -> np.ndarray:
        """ずらした後の円中心（shape (N*N, 2)）を返す。"""
        return self.centers + np.stack([self.x_offset, self.y_offset], axis=1)


def cell_centers(n: int, canvas_size: tuple[int, int]) -> np.ndarray:
    """n×n 格子のセル中心を行優先（row, col）で返す。row=0 が上端。"""
    w, h = canvas_size
    cell_w = float(w) / float(n)
    cell_h = float(h) / float(n)
    idx = np.arange(n, dtype=np.float64)
    xs = (idx + 0.5) * cell_w - float(w) * 0.5
    ys = float(h) * 0.5 - (idx + 0.5) * cell_h
    grid_x, grid_y = np.meshgrid(xs, ys)
    return np.stack([grid_x.ravel(), grid_y.ravel()], axis=1)


def sample_noise_field(
    noises: tuple[PerlinNoise, PerlinNoise, PerlinNoise, PerlinNoise],
    settings: Settings,
    t: float,
    canvas_size: tuple[int, int],
) -> NoiseFieldSample:
    """ノイズ場を 1 フレーム分サンプリングする。

    Parameters
    ----------
    noises : tuple[PerlinNoise, PerlinNoise, PerlinNoise, PerlinNoise]
        x ずれ / y ずれ / 半径 / 明度 に使う独立ノイズ。
    settings : Settings
        grid_density と noise_* を参照する。
    t : float
        経過秒。ノイズの第 3 座標としてそのまま使う。
    canvas_size : tuple[int, int]
        キャンバス寸法。

    Returns
    -------
    NoiseFieldSample
        全セル分の値。
    """
    if len(noises) != 4:
        raise ValueError(f"noises は 4 本である必要がある: got={len(noises)}")
    n = int(settings.grid_density)
    if n <= 0:
        raise ValueError(f"grid_density は正の整数である必要がある: got={n}")

    raw = sample_grid(
        tuple(noises),
        n,
        factor_x=settings.noise_x_factor,
        factor_y=settings.noise_y_factor,
        t=t,
    )
    nx, ny, ns, nc = raw[0], raw[1], raw[2], raw[3]

    w, h = canvas_size
    half_cell = 0.5 * min(float(w), float(h)) / float(n)

    radius = np.clip((ns + 1.0) * 0.5, 0.0, None) * half_cell * float(settings.noise_scale_scale)
    brightness = np.clip((nc + 1.0) * 0.5, 0.0, 1.0)

    return NoiseFieldSample(
        grid_size=n,
        centers=cell_centers(n, canvas_size),
        x_offset=nx * float(settings.noise_x_scale),
        y_offset=ny * float(settings.noise_y_scale),
        radius=radius,
        brightness=brightness,
    )


def noise_field_to_geometry(
    sample: NoiseFieldSample,
    *,
    segments: int = CIRCLE_SEGMENTS,
) -> RealizedGeometry:
    """各セルの円を閉じたポリライン（segments+1 点）にし、明度を灰色として付与する。"""
    k = int(segments)
    if k < 3:
        raise ValueError(f"segments は 3 以上である必要がある: got={segments!r}")

    count = int(sample.radius.shape[0])
    # 始点を末尾に重ねて閉じる。
    angles = np.linspace(0.0, 2.0 * np.pi, k + 1)
    unit = np.stack([np.cos(angles), np.sin(angles)], axis=1)

    pos = sample.positions
    coords = pos[:, None, :] + sample.radius[:, None, None] * unit[None, :, :]
    coords = coords.reshape(count * (k + 1), 2)

    offsets = np.arange(count + 1, dtype=np.int32) * np.int32(k + 1)
    gray = sample.brightness.astype(np.float32)
    colors = np.stack([gray, gray, gray], axis=1)
    return RealizedGeometry(coords=coords, offsets=offsets, colors=colors)
