"""
どこで: `src/noisesketch/export/svg.py`。
何を: 1 フレーム分の RealizedGeometry を SVG として保存する関数を提供する。
なぜ: GL に依存しない headless な書き出しを用意し、PNG 化の元データにするため。
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import numpy as np

from noisesketch.core.realized_geometry import RealizedGeometry

_SVG_NS = "http://www.w3.org/2000/svg"
_FLOAT_DECIMALS = 3


def _fmt(value: float, *, decimals: int = _FLOAT_DECIMALS) -> str:
    """SVG 出力向けに float を決定的な文字列へ変換して返す。"""
    text = f"{float(value):.{int(decimals)}f}"
    if text.startswith("-0") and float(text) == 0.0:
        return text[1:]
    return text


def rgb01_to_hex(rgb01: tuple[float, float, float] | np.ndarray) -> str:
    """0..1 float RGB を #RRGGBB に変換して返す。"""
    parts = []
    for v in rgb01:
        iv = int(round(float(v) * 255.0))
        parts.append(0 if iv < 0 else 255 if iv > 255 else iv)
    return "#{:02X}{:02X}{:02X}".format(*parts)


def _iter_polylines(geometry: RealizedGeometry) -> Iterator[tuple[int, np.ndarray]]:
    """(ポリライン番号, shape (K,2) の点列) を列挙する。2 点未満は飛ばす。"""
    offsets = geometry.offsets
    for i, (start, end) in enumerate(zip(offsets[:-1], offsets[1:])):
        if int(end) - int(start) < 2:
            continue
        yield i, geometry.coords[int(start) : int(end)]


def _polyline_to_d(polyline_xy: np.ndarray, *, canvas_size: tuple[int, int]) -> str:
    """中心原点・y 上向きの点列を SVG 座標（左上原点・y 下向き）の d 属性に変換する。"""
    w, h = canvas_size
    xs = polyline_xy[:, 0] + float(w) * 0.5
    ys = float(h) * 0.5 - polyline_xy[:, 1]
    parts = [f"M {_fmt(xs[0])} {_fmt(ys[0])}"]
    for x, y in zip(xs[1:], ys[1:]):
        parts.append(f"L {_fmt(x)} {_fmt(y)}")
    return " ".join(parts)


def export_svg(
    geometry: RealizedGeometry,
    path: str | Path,
    *,
    canvas_size: tuple[int, int],
    line_color: tuple[float, float, float] = (1.0, 1.0, 1.0),
    background_color: tuple[float, float, float] | None = None,
    stroke_width: float = 1.0,
) -> Path:
    """RealizedGeometry を SVG として保存する。

    Parameters
    ----------
    geometry : RealizedGeometry
        書き出すフレーム。
    path : str or Path
        出力先パス。
    canvas_size : tuple[int, int]
        キャンバス寸法（viewBox）。
    line_color : tuple[float, float, float]
        geometry.colors が None のときの線色。
    background_color : tuple[float, float, float] or None
        指定時は全面 rect を先頭に置く。
    stroke_width : float
        線幅（viewBox 単位）。

    Returns
    -------
    Path
        保存先パス。
    """
    _path = Path(path)
    canvas_w, canvas_h = canvas_size
    if canvas_w <= 0 or canvas_h <= 0:
        raise ValueError("canvas_size は正の値である必要がある")

    default_stroke = rgb01_to_hex(line_color)
    width = _fmt(stroke_width)

    lines: list[str] = []
    lines.append('<?xml version="1.0" encoding="UTF-8"?>')
    lines.append(
        (
            f'<svg xmlns="{_SVG_NS}" viewBox="0 0 {int(canvas_w)} {int(canvas_h)}" '
            f'width="{int(canvas_w)}" height="{int(canvas_h)}">'
        )
    )
    if background_color is not None:
        lines.append(
            f'  <rect width="100%" height="100%" fill="{rgb01_to_hex(background_color)}" />'
        )

    colors = geometry.colors
    for i, polyline_xy in _iter_polylines(geometry):
        stroke = default_stroke if colors is None else rgb01_to_hex(colors[i])
        d = _polyline_to_d(polyline_xy, canvas_size=(int(canvas_w), int(canvas_h)))
        lines.append(
            (
                f'  <path d="{d}" fill="none" stroke="{stroke}" '
                f'stroke-width="{width}" stroke-linecap="round" '
                f'stroke-linejoin="round" />'
            )
        )

    lines.append("</svg>")

    _path.parent.mkdir(parents=True, exist_ok=True)
    with _path.open("w", encoding="utf-8", newline="\n") as f:
        f.write("\n".join(lines) + "\n")

    return _path
