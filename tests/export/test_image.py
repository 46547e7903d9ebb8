from __future__ import annotations

import subprocess
from pathlib import Path

import numpy as np
import pytest

from noisesketch.core.realized_geometry import polylines_to_geometry
from noisesketch.core.runtime_config import set_config_path
from noisesketch.export import image as image_mod
from noisesketch.export.image import (
    default_image_output_path,
    export_frame_png,
    png_output_size,
    rasterize_svg_to_png,
)


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    set_config_path(None)
    yield
    set_config_path(None)


def test_default_image_output_path_is_under_resources_image() -> None:
    assert default_image_output_path("runup") == Path("resources") / "image" / "runup.png"
    with pytest.raises(ValueError):
        default_image_output_path("  ")


def test_png_output_size_uses_config_scale() -> None:
    assert png_output_size((1000, 1000)) == (1000, 1000)
    with pytest.raises(ValueError):
        png_output_size((0, 10))


def test_resvg_command() -> None:
    cmd = image_mod._resvg_command(
        input_svg=Path("in.svg"),
        output_png=Path("out.png"),
        output_size=(20, 10),
        background_color_rgb01=(0.0, 0.0, 0.0),
    )
    assert cmd == ["resvg", "--width", "20", "--height", "10", "--background", "#000000", "in.svg", "out.png"]


def test_rasterize_reports_missing_resvg(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def _missing(*_args, **_kwargs):
        raise FileNotFoundError("resvg")

    monkeypatch.setattr(subprocess, "run", _missing)
    with pytest.raises(RuntimeError, match="resvg"):
        rasterize_svg_to_png(tmp_path / "a.svg", tmp_path / "a.png", output_size=(10, 10))


def test_rasterize_reports_failure(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        subprocess,
        "run",
        lambda *_a, **_k: subprocess.CompletedProcess(args=[], returncode=2, stdout="", stderr="boom"),
    )
    with pytest.raises(RuntimeError, match="boom"):
        rasterize_svg_to_png(tmp_path / "a.svg", tmp_path / "a.png", output_size=(10, 10))


def test_export_frame_png_writes_svg_then_rasterizes(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[list[str]] = []

    def _fake_run(cmd, **_kwargs):
        calls.append(list(cmd))
        Path(cmd[-1]).write_bytes(b"png")
        return subprocess.CompletedProcess(args=cmd, returncode=0, stdout="", stderr="")

    monkeypatch.setattr(subprocess, "run", _fake_run)
    geometry = polylines_to_geometry([np.array([[0.0, 0.0], [1.0, 1.0]])])

    out = export_frame_png(
        geometry,
        tmp_path / "img" / "wander.png",
        canvas_size=(100, 100),
        line_color=(1.0, 1.0, 1.0),
        background_color=(0.0, 0.0, 0.0),
    )

    assert out == tmp_path / "img" / "wander.png"
    assert out.read_bytes() == b"png"
    assert (tmp_path / "img" / "wander.svg").is_file()
    assert calls and calls[0][0] == "resvg"


def test_export_frame_png_uses_given_stroke_width(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        subprocess,
        "run",
        lambda cmd, **_k: subprocess.CompletedProcess(args=cmd, returncode=0, stdout="", stderr=""),
    )
    geometry = polylines_to_geometry([np.array([[0.0, 0.0], [1.0, 1.0]])])

    export_frame_png(
        geometry,
        tmp_path / "noise_grid.png",
        canvas_size=(100, 100),
        line_color=(1.0, 1.0, 1.0),
        background_color=(0.0, 0.0, 0.0),
        stroke_width=3.0,
    )

    svg = (tmp_path / "noise_grid.svg").read_text(encoding="utf-8")
    assert 'stroke-width="3.000"' in svg
    assert 'stroke-width="1.000"' not in svg
