# どこで: `src/noisesketch/core/settings.py`。
# 何を: GUI から編集されるライブ設定（Settings）と、その UI メタ情報（SettingMeta）を定義する。
# なぜ: GUI と sketch が同じ Settings インスタンスを参照で共有し、グローバル状態を持たないため。

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any


@dataclass(frozen=True, slots=True)
class SettingMeta:
    """設定値 1 つ分の UI/検証用メタ情報。"""

    kind: str  # "float" | "int"
    label: str
    ui_min: float
    ui_max: float


@dataclass(slots=True)
class Settings:
    """毎フレーム参照されるライブ設定。"""

    # noise_grid の 1 辺あたりのセル数。
    grid_density: int = 64

    noise_x_scale: float = 10.0
    noise_x_factor: float = 8.0
    noise_y_scale: float = 10.0
    noise_y_factor: float = 8.0
    noise_scale_scale: float = 1.0

    def apply(self, name: str, value: Any, meta: SettingMeta | None = None) -> None:
        """name の値を更新する。meta があればレンジへクランプする。"""
        if name not in _SETTING_NAMES:
            raise KeyError(f"未知の設定名: {name!r}")
        if meta is not None:
            value = clamp_setting(meta, value)
        current = getattr(self, name)
        if isinstance(current, int):
            value = int(value)
        else:
            value = float(value)
        setattr(self, name, value)


_SETTING_NAMES = frozenset(f.name for f in fields(Settings))


def clamp_setting(meta: SettingMeta, value: Any) -> float | int:
    """value を meta の ui_min..ui_max に収めて返す。"""
    lo = float(meta.ui_min)
    hi = float(meta.ui_max)
    v = float(value)
    v = lo if v < lo else hi if v > hi else v
    if meta.kind == "int":
        return int(round(v))
    return v


NOISE_SETTINGS_META: dict[str, SettingMeta] = {
    "noise_x_scale": SettingMeta(kind="float", label="Noise X Scale:", ui_min=0.0, ui_max=64.0),
    "noise_x_factor": SettingMeta(kind="float", label="Noise X Factor:", ui_min=1.0, ui_max=16.0),
    "noise_y_scale": SettingMeta(kind="float", label="Noise Y Scale:", ui_min=0.0, ui_max=64.0),
    "noise_y_factor": SettingMeta(kind="float", label="Noise Y Factor:", ui_min=1.0, ui_max=16.0),
    "noise_scale_scale": SettingMeta(
        kind="float", label="Noise Scale Scale:", ui_min=0.1, ui_max=4.0
    ),
}
