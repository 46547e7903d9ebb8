"""ライブ設定（Settings / SettingMeta）のテスト。"""

from __future__ import annotations

import pytest

from noisesketch.core.settings import NOISE_SETTINGS_META, SettingMeta, Settings, clamp_setting


def test_defaults() -> None:
    s = Settings()
    assert s.grid_density == 64
    assert (s.noise_x_scale, s.noise_x_factor) == (10.0, 8.0)
    assert (s.noise_y_scale, s.noise_y_factor) == (10.0, 8.0)
    assert s.noise_scale_scale == 1.0


def test_noise_meta_ranges() -> None:
    ranges = {k: (m.ui_min, m.ui_max) for k, m in NOISE_SETTINGS_META.items()}
    assert ranges == {
        "noise_x_scale": (0.0, 64.0),
        "noise_x_factor": (1.0, 16.0),
        "noise_y_scale": (0.0, 64.0),
        "noise_y_factor": (1.0, 16.0),
        "noise_scale_scale": (0.1, 4.0),
    }
    # GUI の表示順は定義順。
    assert list(NOISE_SETTINGS_META)[0] == "noise_x_scale"


def test_clamp_setting() -> None:
    meta = SettingMeta(kind="float", label="x", ui_min=1.0, ui_max=16.0)
    assert clamp_setting(meta, 0.0) == 1.0
    assert clamp_setting(meta, 20.0) == 16.0
    assert clamp_setting(meta, 3.5) == 3.5
    int_meta = SettingMeta(kind="int", label="n", ui_min=1, ui_max=128)
    assert clamp_setting(int_meta, 7.6) == 8


def test_apply_clamps_with_meta_and_keeps_type() -> None:
    s = Settings()
    s.apply("noise_x_factor", 100.0, NOISE_SETTINGS_META["noise_x_factor"])
    assert s.noise_x_factor == 16.0
    s.apply("grid_density", 32.0)
    assert s.grid_density == 32
    assert isinstance(s.grid_density, int)


def test_apply_unknown_name_raises() -> None:
    with pytest.raises(KeyError):
        Settings().apply("nope", 1.0)
