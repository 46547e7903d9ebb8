"""SVG 書き出しのテスト。"""

from __future__ import annotations

from pathlib import Path

import numpy as np

from noisesketch.core.realized_geometry import RealizedGeometry, polylines_to_geometry
from noisesketch.export.svg import export_svg, rgb01_to_hex


def test_rgb01_to_hex() -> None:
    assert rgb01_to_hex((1.0, 1.0, 1.0)) == "#FFFFFF"
    assert rgb01_to_hex((0.0, 0.5, 2.0)) == "#0080FF"


def test_export_svg_converts_to_top_left_origin(tmp_path: Path) -> None:
    geometry = polylines_to_geometry([np.array([[0.0, 0.0], [100.0, 50.0]])])
    out = export_svg(geometry, tmp_path / "a" / "frame.svg", canvas_size=(1000, 800))

    text = out.read_text(encoding="utf-8")
    assert out == tmp_path / "a" / "frame.svg"
    assert 'viewBox="0 0 1000 800"' in text
    assert 'd="M 500.000 400.000 L 600.000 350.000"' in text
    assert 'stroke="#FFFFFF"' in text


def test_export_svg_uses_per_polyline_colors_and_skips_short(tmp_path: Path) -> None:
    geometry = RealizedGeometry(
        coords=np.zeros((5, 2)),
        offsets=[0, 1, 3, 5],
        colors=[[1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]],
    )
    text = export_svg(
        geometry,
        tmp_path / "c.svg",
        canvas_size=(10, 10),
        background_color=(0.0, 0.0, 0.0),
    ).read_text(encoding="utf-8")

    assert text.count("<path") == 2
    assert "#FF0000" not in text
    assert 'stroke="#00FF00"' in text
    assert 'stroke="#0000FF"' in text
    assert '<rect width="100%" height="100%" fill="#000000" />' in text
