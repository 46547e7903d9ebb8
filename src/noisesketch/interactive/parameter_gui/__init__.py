# どこで: `src/noisesketch/interactive/parameter_gui/__init__.py`。
# 何を: Parameter GUI の公開 API を集約する。
# なぜ: 実装を責務ごとに分割しつつ、利用側の import パスを安定させるため。

from __future__ import annotations

from .gui import ParameterGUI
from .widgets import render_settings_panel

__all__ = [
    "ParameterGUI",
    "render_settings_panel",
]
