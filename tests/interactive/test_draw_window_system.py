"""DrawWindowSystem の初期化失敗時の後始末テスト（実ウィンドウは作らない）。"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from noisesketch.core.runtime_config import set_config_path
from noisesketch.core.settings import Settings
from noisesketch.interactive.render_settings import RenderSettings
from noisesketch.sketches import RunupSketch


def _import_draw_window_system():
    pyglet = pytest.importorskip("pyglet")
    pytest.importorskip("moderngl")
    pyglet.options["shadow_window"] = False
    try:
        from noisesketch.interactive.runtime import draw_window_system
    except Exception as exc:  # ディスプレイの無い環境では window backend を読めない
        pytest.skip(f"pyglet window backend unavailable: {exc}")
    return draw_window_system


class _FakeWindow:
    def __init__(self) -> None:
        self.closed = 0

    def close(self) -> None:
        self.closed += 1


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    set_config_path(None)
    yield
    set_config_path(None)


def test_window_is_closed_when_renderer_creation_fails(monkeypatch: pytest.MonkeyPatch) -> None:
    mod = _import_draw_window_system()
    window = _FakeWindow()

    def _broken_renderer(*_args, **_kwargs):
        raise RuntimeError("GL 4.1 context is unavailable")

    monkeypatch.setattr(mod, "create_draw_window", lambda *_a, **_k: window)
    monkeypatch.setattr(mod, "DrawRenderer", _broken_renderer)

    with pytest.raises(RuntimeError, match="GL 4.1"):
        mod.DrawWindowSystem(
            RunupSketch(np.random.default_rng(0)),
            settings=Settings(),
            render_settings=RenderSettings(),
        )
    assert window.closed == 1
