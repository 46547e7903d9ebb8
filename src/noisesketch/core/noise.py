# どこで: `src/noisesketch/core/noise.py`。
# 何を: seed 付きの 3 次元 Perlin ノイズ（Ken Perlin improved noise）を Numba で提供する。
# なぜ: noise_grid が「seed の異なる独立ノイズ 4 本」を毎フレーム大量に評価するため。

from __future__ import annotations

import numpy as np
from numba import njit  # type: ignore[import-untyped]

_GRAD3_12 = [
    [1, 1, 0],
    [-1, 1, 0],
    [1, -1, 0],
    [-1, -1, 0],
    [1, 0, 1],
    [-1, 0, 1],
    [1, 0, -1],
    [-1, 0, -1],
    [0, 1, 1],
    [0, -1, 1],
    [0, 1, -1],
    [0, -1, -1],
]

NOISE_GRADIENTS_3D = np.asarray(_GRAD3_12, dtype=np.float64)


def permutation_table(seed: int) -> np.ndarray:
    """seed から 512 要素（256 要素の 2 連結）の順列テーブルを作る。"""
    rng = np.random.default_rng(int(seed) & 0xFFFFFFFF)
    perm = rng.permutation(256).astype(np.int32)
    return np.concatenate([perm, perm])


@njit(fastmath=True, cache=True)
def fade(t):
    """Perlin ノイズ用のフェード関数。"""
    return t * t * t * (t * (t * 6 - 15) + 10)


@njit(fastmath=True, cache=True)
def lerp(a, b, t):
    """線形補間。"""
    return a + t * (b - a)


@njit(fastmath=True, cache=True)
def grad(hash_val, x, y, z, grad3_array):
    """勾配ベクトルとの内積。"""
    g = grad3_array[int(hash_val) % 12]
    return g[0] * x + g[1] * y + g[2] * z


@njit(fastmath=True, cache=True)
def perlin_noise_3d(x, y, z, perm_table, grad3_array):
    """3 次元 Perlin ノイズを 1 点評価する（おおよそ -1..1）。"""
    fx = np.floor(x)
    fy = np.floor(y)
    fz = np.floor(z)
    X = int(fx) & 255
    Y = int(fy) & 255
    Z = int(fz) & 255

    x -= fx
    y -= fy
    z -= fz

    u = fade(x)
    v = fade(y)
    w = fade(z)

    A = perm_table[X] + Y
    AA = perm_table[A & 511] + Z
    AB = perm_table[(A + 1) & 511] + Z
    B = perm_table[(X + 1) & 255] + Y
    BA = perm_table[B & 511] + Z
    BB = perm_table[(B + 1) & 511] + Z

    gAA = grad(perm_table[AA & 511], x, y, z, grad3_array)
    gBA = grad(perm_table[BA & 511], x - 1, y, z, grad3_array)
    gAB = grad(perm_table[AB & 511], x, y - 1, z, grad3_array)
    gBB = grad(perm_table[BB & 511], x - 1, y - 1, z, grad3_array)
    gAA1 = grad(perm_table[(AA + 1) & 511], x, y, z - 1, grad3_array)
    gBA1 = grad(perm_table[(BA + 1) & 511], x - 1, y, z - 1, grad3_array)
    gAB1 = grad(perm_table[(AB + 1) & 511], x, y - 1, z - 1, grad3_array)
    gBB1 = grad(perm_table[(BB + 1) & 511], x - 1, y - 1, z - 1, grad3_array)

    return lerp(
        lerp(lerp(gAA, gBA, u), lerp(gAB, gBB, u), v),
        lerp(lerp(gAA1, gBA1, u), lerp(gAB1, gBB1, u), v),
        w,
    )


@njit(fastmath=True, cache=True)
def _sample_grid(n, factor_x, factor_y, t, perm_tables, grad3_array):
    """n×n 格子の正規化座標を複数テーブルで評価し shape (k, n*n) を返す。"""
    k = perm_tables.shape[0]
    out = np.empty((k, n * n), dtype=np.float64)
    inv_n = 1.0 / n
    for row in range(n):
        y = row * inv_n * factor_y
        for col in range(n):
            x = col * inv_n * factor_x
            idx = row * n + col
            for j in range(k):
                out[j, idx] = perlin_noise_3d(x, y, t, perm_tables[j], grad3_array)
    return out


class PerlinNoise:
    """seed 固定の 3 次元 Perlin ノイズ。"""

    def __init__(self, seed: int) -> None:
        self.seed = int(seed)
        self._perm = permutation_table(self.seed)

    @property
    def perm_table(self) -> np.ndarray:
        return self._perm


def noise_bank(seed: int, count: int = 4) -> tuple[PerlinNoise, ...]:
    """seed, seed+1, ... の独立ノイズを count 本返す。"""
    return tuple(PerlinNoise(int(seed) + i) for i in range(int(count)))


def sample_grid(
    noises: tuple[PerlinNoise, ...],
    n: int,
    *,
    factor_x: float,
    factor_y: float,
    t: float,
) -> np.ndarray:
    """各ノイズを n×n 格子で評価し shape (len(noises), n*n) を返す。"""
    if int(n) <= 0:
        raise ValueError(f"n は正の整数である必要がある: got={n!r}")
    tables = np.stack([nz.perm_table for nz in noises]).astype(np.int32)
    return _sample_grid(
        int(n), float(factor_x), float(factor_y), float(t), tables, NOISE_GRADIENTS_3D
    )
