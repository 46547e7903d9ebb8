"""3 つの sketch の update → geometry の振る舞いテスト。"""

from __future__ import annotations

import numpy as np
import pytest

from noisesketch.core.settings import NOISE_SETTINGS_META, Settings
from noisesketch.sketches import (
    NoiseGridSketch,
    RunupSketch,
    WanderSketch,
    create_sketch,
)


def test_runup_generates_once_and_keeps_curves_without_trigger() -> None:
    sketch = RunupSketch(np.random.default_rng(0))
    settings = Settings()
    assert sketch.regenerate_count == 0

    sketch.update(0.0, settings)
    assert sketch.regenerate_count == 1
    curves = sketch.curves
    assert curves is not None
    assert len(curves) == 32
    assert all(pts.shape == (256, 2) for pts in curves.points)
    geometry = sketch.geometry(settings)
    coords_before = geometry.coords.copy()

    for i in range(1, 30):
        sketch.update(i / 60.0, settings)
        assert sketch.curves is curves
        assert sketch.geometry(settings) is geometry
    assert sketch.regenerate_count == 1
    np.testing.assert_array_equal(sketch.geometry(settings).coords, coords_before)


def test_runup_regenerates_on_request() -> None:
    sketch = RunupSketch(np.random.default_rng(1))
    settings = Settings()
    sketch.update(0.0, settings)
    before = sketch.geometry(settings)

    sketch.request_regenerate()
    sketch.update(0.1, settings)
    after = sketch.geometry(settings)

    assert sketch.regenerate_count == 2
    assert after is not before
    assert not np.array_equal(after.coords, before.coords)


def test_runup_exposes_no_live_settings() -> None:
    assert len(RunupSketch(np.random.default_rng(0)).settings_meta) == 0


def test_wander_regenerates_every_frame() -> None:
    sketch = WanderSketch(np.random.default_rng(2))
    settings = Settings()
    assert sketch.geometry(settings).n_polylines == 0

    sketch.update(0.0, settings)
    a = sketch.geometry(settings)
    sketch.update(0.0, settings)
    b = sketch.geometry(settings)
    assert a.n_polylines == b.n_polylines == 32
    assert not np.array_equal(a.coords, b.coords)
    assert sketch.settings_meta is NOISE_SETTINGS_META


def test_noise_grid_uses_shared_settings() -> None:
    sketch = NoiseGridSketch(5, canvas_size=(400, 400))
    settings = Settings(grid_density=4)
    sketch.update(0.2, settings)
    assert sketch.geometry(settings).n_polylines == 16

    settings.grid_density = 6
    sketch.update(0.3, settings)
    geometry = sketch.geometry(settings)
    assert geometry.n_polylines == 36
    assert geometry.colors is not None


def test_create_sketch_by_name() -> None:
    assert isinstance(create_sketch("runup", seed=1), RunupSketch)
    assert isinstance(create_sketch("wander", seed=1), WanderSketch)
    assert isinstance(create_sketch("noise_grid", seed=1), NoiseGridSketch)
    with pytest.raises(ValueError, match="未知の sketch"):
        create_sketch("spiral")


def test_same_seed_gives_same_runup_frame() -> None:
    settings = Settings()
    a = create_sketch("runup", seed=9)
    b = create_sketch("runup", seed=9)
    a.update(0.0, settings)
    b.update(0.0, settings)
    np.testing.assert_array_equal(a.geometry(settings).coords, b.geometry(settings).coords)
