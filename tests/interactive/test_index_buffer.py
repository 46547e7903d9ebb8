"""interactive.gl.index_buffer の `build_line_indices` をテスト。"""

from __future__ import annotations

import numpy as np

from noisesketch.interactive.gl.index_buffer import PRIMITIVE_RESTART_INDEX, build_line_indices


def test_build_line_indices_empty() -> None:
    indices = build_line_indices(np.array([0], dtype=np.int32))
    assert indices.dtype == np.uint32
    assert indices.size == 0


def test_build_line_indices_single_polyline() -> None:
    assert build_line_indices(np.array([0, 3], dtype=np.int32)).tolist() == [0, 1, 2]


def test_build_line_indices_multiple_polylines_with_restart() -> None:
    indices = build_line_indices(np.array([0, 3, 5], dtype=np.int32))
    assert indices.tolist() == [0, 1, 2, PRIMITIVE_RESTART_INDEX, 3, 4]


def test_build_line_indices_skips_short_polylines() -> None:
    # [0, 1) は 1 頂点なのでスキップし、[1, 4) のみ出力される
    assert build_line_indices(np.array([0, 1, 4], dtype=np.int32)).tolist() == [1, 2, 3]


def test_build_line_indices_is_cached_and_read_only() -> None:
    a = build_line_indices(np.array([0, 256, 512], dtype=np.int32))
    b = build_line_indices(np.array([0, 256, 512], dtype=np.int32))
    assert a is b
    assert not a.flags.writeable
