"""再生成ポリシー（runup / 毎フレーム）のテスト。"""

from __future__ import annotations

import numpy as np

from noisesketch.core.regeneration import PerFrameCurveSource, RunupCurveSource


def test_runup_regenerates_once_on_startup_then_keeps_curves() -> None:
    source = RunupCurveSource(np.random.default_rng(0))
    assert source.curves is None
    assert source.regenerate_count == 0

    first = source.update()
    assert source.regenerate_count == 1
    assert len(first) == 32
    assert all(pts.shape == (256, 2) for pts in first.points)

    snapshot = [pts.copy() for pts in first.points]
    for _ in range(10):
        assert source.update() is first
    assert source.regenerate_count == 1
    for before, after in zip(snapshot, source.curves.points):
        np.testing.assert_array_equal(before, after)


def test_runup_regenerates_only_after_request() -> None:
    source = RunupCurveSource(np.random.default_rng(1))
    first = source.update()
    source.request_regenerate()
    second = source.update()
    assert second is not first
    assert source.regenerate_count == 2
    assert source.update() is second


def test_per_frame_source_regenerates_every_update() -> None:
    source = PerFrameCurveSource(np.random.default_rng(2))
    a = source.update()
    b = source.update()
    assert a is not b
    assert a.global_offset != b.global_offset
