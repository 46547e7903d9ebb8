# どこで: `src/noisesketch/core/realized_geometry.py`。
# 何を: 1 フレーム分のポリライン集合（coords/offsets/colors）のモデルと検証ロジックを提供する。
# なぜ: sketch の出力と GL/SVG 側の入力を 1 つの不変データに揃えるため。

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, slots=True)
class RealizedGeometry:
    """描画可能なポリライン集合を表現する。

    Parameters
    ----------
    coords : np.ndarray
        float32 型 shape (N, 2) の頂点配列（キャンバス中心原点、y 上向き）。
    offsets : np.ndarray
        int32 型 shape (M+1,) のポリライン開始インデックス配列。
    colors : np.ndarray or None
        float32 型 shape (M, 3) のポリラインごとの RGB（0..1）。
        None の場合は描画側の既定線色を使う。

    Notes
    -----
    不変性を契約とし、配列は writeable=False で保持する。
    """

    coords: np.ndarray
    offsets: np.ndarray
    colors: np.ndarray | None = None

    def __post_init__(self) -> None:
        """配列形状と整合性を検証し、不変条件を満たす形に固定する。"""
        coords = np.asarray(self.coords)
        offsets = np.asarray(self.offsets)

        if coords.ndim == 2 and coords.shape[0] == 0 and coords.shape[1] != 2:
            coords = np.zeros((0, 2), dtype=np.float32)

        if coords.ndim != 2 or coords.shape[1] != 2:
            raise ValueError("coords は shape (N,2) の 2 次元配列である必要がある")

        if coords.dtype != np.float32:
            coords = coords.astype(np.float32)

        if offsets.ndim != 1:
            raise ValueError("offsets は 1 次元配列である必要がある")

        if offsets.dtype != np.int32:
            offsets = offsets.astype(np.int32)

        if offsets.size == 0:
            raise ValueError("offsets は少なくとも 1 要素を含む必要がある")

        if offsets[0] != 0:
            raise ValueError("offsets[0] は 0 である必要がある")

        if offsets[-1] != coords.shape[0]:
            raise ValueError("offsets[-1] は coords 行数と一致する必要がある")

        if np.any(np.diff(offsets) < 0):
            raise ValueError("offsets は単調非減少である必要がある")

        colors = self.colors
        if colors is not None:
            colors = np.asarray(colors, dtype=np.float32)
            if colors.shape != (offsets.size - 1, 3):
                raise ValueError("colors は shape (M,3) でポリライン数と一致する必要がある")
            colors.setflags(write=False)

        coords.setflags(write=False)
        offsets.setflags(write=False)

        object.__setattr__(self, "coords", coords)
        object.__setattr__(self, "offsets", offsets)
        object.__setattr__(self, "colors", colors)

    @property
    def n_polylines(self) -> int:
        """ポリライン本数を返す。"""
        return int(self.offsets.size - 1)

    def polyline(self, index: int) -> np.ndarray:
        """index 番目のポリライン（shape (K,2)）を返す。"""
        start = int(self.offsets[index])
        end = int(self.offsets[index + 1])
        return self.coords[start:end]

    def vertex_colors(self, default: tuple[float, float, float]) -> np.ndarray:
        """頂点ごとの RGB（shape (N,3)）を返す。colors 未指定なら default で埋める。"""
        n = int(self.coords.shape[0])
        if self.colors is None:
            return np.tile(np.asarray(default, dtype=np.float32), (n, 1))
        counts = np.diff(self.offsets)
        return np.repeat(self.colors, counts, axis=0)


def empty_geometry() -> RealizedGeometry:
    """頂点 0 の RealizedGeometry を返す。"""
    return RealizedGeometry(
        coords=np.zeros((0, 2), dtype=np.float32),
        offsets=np.zeros((1,), dtype=np.int32),
    )


def polylines_to_geometry(
    polylines: list[np.ndarray],
    *,
    colors: np.ndarray | None = None,
) -> RealizedGeometry:
    """ポリライン配列のリストを 1 つの RealizedGeometry にまとめる。"""
    if not polylines:
        return empty_geometry()

    counts = [int(p.shape[0]) for p in polylines]
    offsets = np.zeros((len(polylines) + 1,), dtype=np.int32)
    offsets[1:] = np.cumsum(counts)
    coords = np.concatenate([np.asarray(p, dtype=np.float32) for p in polylines], axis=0)
    return RealizedGeometry(coords=coords, offsets=offsets, colors=colors)


def concat_realized_geometries(*geometries: RealizedGeometry) -> RealizedGeometry:
    """複数の RealizedGeometry を連結して 1 つにまとめる。

    colors は全入力が持つ場合だけ引き継ぐ。
    """
    if not geometries:
        return empty_geometry()

    total_coords = np.concatenate([g.coords for g in geometries], axis=0)

    new_offsets: list[int] = [0]
    offset_base = 0
    for g in geometries:
        # 先頭 0 を除いた差分部分だけをシフトして足し込む。
        new_offsets.extend((g.offsets[1:] + offset_base).tolist())
        offset_base += int(g.offsets[-1])

    colors: np.ndarray | None = None
    if all(g.colors is not None for g in geometries):
        colors = np.concatenate([g.colors for g in geometries], axis=0)  # type: ignore[misc]

    return RealizedGeometry(
        coords=total_coords,
        offsets=np.asarray(new_offsets, dtype=np.int32),
        colors=colors,
    )
