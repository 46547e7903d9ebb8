# どこで: `src/noisesketch/core/runtime_config.py`。
# 何を: config.yaml による実行時設定（探索・ロード・キャッシュ）を提供する。
# なぜ: 画像出力先やウィンドウ配置を、コードを触らずにユーザーが指定できるようにするため。

from __future__ import annotations

import os
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

import yaml


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """noisesketch の実行時設定。"""

    config_path: Path | None
    image_dir: Path
    window_pos_draw: tuple[int, int]
    window_pos_parameter_gui: tuple[int, int]
    parameter_gui_window_size: tuple[int, int]
    png_scale: float


_EXPLICIT_CONFIG_PATH: Path | None = None
_CONFIG_CACHE: RuntimeConfig | None = None


def set_config_path(path: str | Path | None) -> None:
    """以降の設定探索で使う明示 config パスを設定する。

    Notes
    -----
    `path` を None にすると明示指定を解除し、既定の探索に戻る。
    """

    global _EXPLICIT_CONFIG_PATH, _CONFIG_CACHE
    _CONFIG_CACHE = None
    if path is None:
        _EXPLICIT_CONFIG_PATH = None
        return
    _EXPLICIT_CONFIG_PATH = Path(str(path)).expanduser()


def _default_config_candidates() -> tuple[Path, ...]:
    return (
        Path.cwd() / ".noisesketch" / "config.yaml",
        Path.home() / ".config" / "noisesketch" / "config.yaml",
    )


def _as_optional_path(value: Any) -> Path | None:
    if value is None:
        return None
    s = str(value).strip()
    if not s:
        return None
    return Path(os.path.expandvars(os.path.expanduser(s)))


def _as_mapping(value: Any, *, key: str) -> dict[str, Any]:
    if value is None:
        return {}
    if isinstance(value, dict):
        return dict(value)
    raise RuntimeError(f"{key} は mapping である必要があります: got={value!r}")


def _as_int_pair(value: Any, *, key: str) -> tuple[int, int]:
    if value is None:
        raise RuntimeError(f"{key} が未設定です（同梱 default_config.yaml を確認してください）")
    try:
        seq = list(value)
        if len(seq) != 2:
            raise ValueError(len(seq))
        return int(seq[0]), int(seq[1])
    except (TypeError, ValueError) as exc:
        raise RuntimeError(f"{key} は [x, y] の整数配列である必要があります: got={value!r}") from exc


def _load_yaml_text(text: str, *, source: str) -> dict[str, Any]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise RuntimeError(f"config.yaml の読み込みに失敗しました: source={source}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RuntimeError(f"config.yaml は mapping である必要があります: source={source}")
    return dict(data)


def _load_packaged_default_config() -> dict[str, Any]:
    blob = (
        resources.files("noisesketch")
        .joinpath("resource")
        .joinpath("default_config.yaml")
        .read_text(encoding="utf-8")
    )
    return _load_yaml_text(blob, source="noisesketch/resource/default_config.yaml")


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """mapping を再帰的にマージして返す（override 優先）。"""
    out = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _merge(out[k], v)
        else:
            out[k] = v
    return out


def runtime_config() -> RuntimeConfig:
    """実行時設定をロードして返す（キャッシュ）。

    上書き順（後勝ち）:
    1) 同梱 default_config.yaml
    2) `./.noisesketch/config.yaml` / `~/.config/noisesketch/config.yaml`
    3) `set_config_path()` で指定したパス
    """

    global _CONFIG_CACHE
    if _CONFIG_CACHE is not None:
        return _CONFIG_CACHE

    explicit_path = _EXPLICIT_CONFIG_PATH
    if explicit_path is not None and not explicit_path.is_file():
        raise FileNotFoundError(f"config.yaml が見つかりません: {explicit_path}")

    discovered_path: Path | None = None
    for p in _default_config_candidates():
        if p.is_file():
            discovered_path = p
            break

    payload = _load_packaged_default_config()
    for p in (discovered_path, explicit_path):
        if p is not None:
            payload = _merge(payload, _load_yaml_text(p.read_text(encoding="utf-8"), source=str(p)))

    version = payload.get("version")
    if version != 1:
        raise RuntimeError(f"未対応の config.yaml version です: got={version!r}")

    paths = _as_mapping(payload.get("paths"), key="paths")
    image_dir = _as_optional_path(paths.get("image_dir"))
    if image_dir is None:
        raise RuntimeError("paths.image_dir が未設定です（同梱 default_config.yaml を確認してください）")

    ui = _as_mapping(payload.get("ui"), key="ui")
    window_positions = _as_mapping(ui.get("window_positions"), key="ui.window_positions")
    parameter_gui = _as_mapping(ui.get("parameter_gui"), key="ui.parameter_gui")

    export = _as_mapping(payload.get("export"), key="export")
    png = _as_mapping(export.get("png"), key="export.png")
    try:
        png_scale = float(png.get("scale"))  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise RuntimeError(f"export.png.scale は数値である必要があります: got={png.get('scale')!r}") from exc
    if png_scale <= 0:
        raise ValueError(f"export.png.scale は正の値である必要があります: got={png_scale}")

    cfg = RuntimeConfig(
        config_path=explicit_path or discovered_path,
        image_dir=image_dir,
        window_pos_draw=_as_int_pair(window_positions.get("draw"), key="ui.window_positions.draw"),
        window_pos_parameter_gui=_as_int_pair(
            window_positions.get("parameter_gui"), key="ui.window_positions.parameter_gui"
        ),
        parameter_gui_window_size=_as_int_pair(
            parameter_gui.get("window_size"), key="ui.parameter_gui.window_size"
        ),
        png_scale=png_scale,
    )
    _CONFIG_CACHE = cfg
    return cfg


def image_output_dir() -> Path:
    """フレーム画像を保存するディレクトリを返す。"""

    return Path(runtime_config().image_dir)


__all__ = ["RuntimeConfig", "image_output_dir", "runtime_config", "set_config_path"]
