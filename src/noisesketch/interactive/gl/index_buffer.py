# どこで: `src/noisesketch/interactive/gl/index_buffer.py`。
# 何を: RealizedGeometry.offsets から GL_LINE_STRIP 用インデックス配列を生成する。
# なぜ: インデックス生成を GL 非依存の純粋関数として切り出し、テストしやすくするため。

from __future__ import annotations

from functools import lru_cache

import numpy as np
from numba import njit  # type: ignore[import-untyped]

PRIMITIVE_RESTART_INDEX = 0xFFFFFFFF


def build_line_indices(offsets: np.ndarray) -> np.ndarray:
    """offsets から GL_LINE_STRIP + primitive restart 用の indices を返す。

    Notes
    -----
    - 2 頂点未満のポリラインは描けないため飛ばす。
    - runup のように毎フレーム同じ offsets が来るため、内容ベースで LRU キャッシュする。
    """
    offsets_i32 = np.asarray(offsets, dtype=np.int32)
    if offsets_i32.size < 2:
        return np.zeros((0,), dtype=np.uint32)
    return _build_cached(offsets_i32.tobytes())


@lru_cache(maxsize=16)
def _build_cached(offsets_bytes: bytes) -> np.ndarray:
    offsets = np.frombuffer(offsets_bytes, dtype=np.int32)
    out = _build_line_strip_indices(offsets, np.uint32(PRIMITIVE_RESTART_INDEX))
    out.setflags(write=False)
    return out


@njit(cache=True)  # type: ignore[misc]
def _build_line_strip_indices(offsets: np.ndarray, restart_index: np.uint32) -> np.ndarray:
    n = offsets.shape[0]

    total = 0
    drawn = 0
    for i in range(n - 1):
        count = offsets[i + 1] - offsets[i]
        if count >= 2:
            total += count
            drawn += 1
    if drawn == 0:
        return np.empty((0,), dtype=np.uint32)

    # ポリライン間にだけ restart を挟む。
    out = np.empty((total + drawn - 1,), dtype=np.uint32)
    k = 0
    first = True
    for i in range(n - 1):
        start = offsets[i]
        end = offsets[i + 1]
        if end - start < 2:
            continue
        if not first:
            out[k] = restart_index
            k += 1
        first = False
        for v in range(start, end):
            out[k] = np.uint32(v)
            k += 1
    return out
