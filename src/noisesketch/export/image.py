"""
どこで: `src/noisesketch/export/image.py`。
何を: フレームを SVG 経由で PNG として保存する関数（resvg でラスタライズ）を提供する。
なぜ: SVG を正として残しつつ、`resources/image` に 1 枚絵のスナップショットを書き出すため。
"""

from __future__ import annotations

import subprocess
from pathlib import Path

from noisesketch.core.realized_geometry import RealizedGeometry
from noisesketch.core.runtime_config import image_output_dir, runtime_config
from noisesketch.export.svg import export_svg, rgb01_to_hex


def default_image_output_path(sketch_name: str) -> Path:
    """sketch 名に基づく PNG の既定保存パス `{image_dir}/{sketch_name}.png` を返す。"""

    name = str(sketch_name).strip()
    if not name:
        raise ValueError("sketch_name は空でない必要がある")
    return image_output_dir() / f"{name}.png"


def png_output_size(canvas_size: tuple[int, int]) -> tuple[int, int]:
    """canvas_size に export.png.scale を掛けた PNG ピクセルサイズを返す。"""

    canvas_w, canvas_h = canvas_size
    if int(canvas_w) <= 0 or int(canvas_h) <= 0:
        raise ValueError("canvas_size は正の (width, height) である必要がある")
    scale = float(runtime_config().png_scale)
    return int(int(canvas_w) * scale), int(int(canvas_h) * scale)


def _resvg_command(
    *,
    input_svg: Path,
    output_png: Path,
    output_size: tuple[int, int],
    background_color_rgb01: tuple[float, float, float],
) -> list[str]:
    out_w, out_h = output_size
    if int(out_w) <= 0 or int(out_h) <= 0:
        raise ValueError("output_size は正の (width, height) である必要がある")
    return [
        "resvg",
        "--width",
        str(int(out_w)),
        "--height",
        str(int(out_h)),
        "--background",
        rgb01_to_hex(background_color_rgb01),
        str(input_svg),
        str(output_png),
    ]


def rasterize_svg_to_png(
    svg_path: str | Path,
    png_path: str | Path,
    *,
    output_size: tuple[int, int],
    background_color_rgb01: tuple[float, float, float] = (0.0, 0.0, 0.0),
) -> Path:
    """SVG を PNG として保存する。

    Raises
    ------
    RuntimeError
        resvg が見つからない、またはラスタライズに失敗した場合。
    """

    _svg_path = Path(svg_path)
    _png_path = Path(png_path)
    _png_path.parent.mkdir(parents=True, exist_ok=True)

    cmd = _resvg_command(
        input_svg=_svg_path,
        output_png=_png_path,
        output_size=output_size,
        background_color_rgb01=background_color_rgb01,
    )
    try:
        proc = subprocess.run(cmd, capture_output=True, text=True, check=False)
    except FileNotFoundError as e:
        raise RuntimeError(
            "resvg が見つかりません（`resvg` をインストールして PATH を通してください）"
        ) from e

    if proc.returncode != 0:
        details = (proc.stderr or proc.stdout or "").strip()
        raise RuntimeError(f"resvg が失敗しました (code={proc.returncode}). {details}".strip())

    return _png_path


def export_frame_png(
    geometry: RealizedGeometry,
    png_path: str | Path,
    *,
    canvas_size: tuple[int, int],
    line_color: tuple[float, float, float],
    background_color: tuple[float, float, float],
    stroke_width: float = 1.0,
) -> Path:
    """フレームを `<png_path>.svg` に書き出し、それを PNG へラスタライズする。

    `stroke_width` は画面の線幅（キャンバス単位）と揃える。
    """

    _png_path = Path(png_path)
    svg_path = export_svg(
        geometry,
        _png_path.with_suffix(".svg"),
        canvas_size=canvas_size,
        line_color=line_color,
        stroke_width=stroke_width,
    )
    return rasterize_svg_to_png(
        svg_path,
        _png_path,
        output_size=png_output_size(canvas_size),
        background_color_rgb01=background_color,
    )
