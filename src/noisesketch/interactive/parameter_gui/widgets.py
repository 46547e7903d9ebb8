# どこで: `src/noisesketch/interactive/parameter_gui/widgets.py`。
# 何を: SettingMeta.kind を pyimgui のスライダーへ対応付けて描画する。
# なぜ: kind ごとの UI 実装を閉じ込め、パネル描画から分離するため。

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Mapping

from noisesketch.core.settings import SettingMeta, Settings, clamp_setting

WidgetFn = Callable[[str, Any, SettingMeta], tuple[bool, Any]]


def widget_float_slider(name: str, value: Any, meta: SettingMeta) -> tuple[bool, float]:
    """kind=float のスライダーを描画し、(changed, value) を返す。"""

    import imgui  # type: ignore[import-untyped]

    return imgui.slider_float(
        f"##{name}",
        float(value),
        float(meta.ui_min),
        float(meta.ui_max),
        flags=imgui.SLIDER_FLAGS_ALWAYS_CLAMP,
    )


def widget_int_slider(name: str, value: Any, meta: SettingMeta) -> tuple[bool, int]:
    """kind=int のスライダーを描画し、(changed, value) を返す。"""

    import imgui  # type: ignore[import-untyped]

    return imgui.slider_int(
        f"##{name}",
        int(value),
        int(meta.ui_min),
        int(meta.ui_max),
        flags=imgui.SLIDER_FLAGS_ALWAYS_CLAMP,
    )


_WIDGETS: dict[str, WidgetFn] = {
    "float": widget_float_slider,
    "int": widget_int_slider,
}


def widget_for(meta: SettingMeta) -> WidgetFn:
    """meta.kind に対応するウィジェット関数を返す。"""
    try:
        return _WIDGETS[meta.kind]
    except KeyError:
        raise ValueError(f"未対応の kind です: {meta.kind!r}") from None


def render_settings_panel(settings: Settings, meta: Mapping[str, SettingMeta]) -> bool:
    """ラベル + スライダーを meta の順に並べ、変更を settings へ書き戻す。

    Returns
    -------
    bool
        いずれかの値が変わった場合 True。
    """

    import imgui  # type: ignore[import-untyped]

    if not meta:
        imgui.text_disabled("No live-editable settings.")
        return False

    changed_any = False
    imgui.push_item_width(-1)
    try:
        for name, m in meta.items():
            imgui.text(m.label)
            changed, value = widget_for(m)(name, getattr(settings, name), m)
            if changed:
                settings.apply(name, clamp_setting(m, value), m)
                changed_any = True
    finally:
        imgui.pop_item_width()
    return changed_any
