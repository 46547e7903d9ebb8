# どこで: `src/noisesketch/interactive/gl/draw_renderer.py`。
# 何を: ライブ描画用の ModernGL レンダラーをカプセル化する。
# なぜ: コンテキスト生成・シェーダ設定・メッシュ転送を描画サブシステムから分離するため。

from __future__ import annotations

import moderngl
from pyglet.window import Window

from noisesketch.core.realized_geometry import RealizedGeometry
from noisesketch.interactive.gl import utils as render_utils
from noisesketch.interactive.gl.index_buffer import build_line_indices
from noisesketch.interactive.gl.line_mesh import LineMesh
from noisesketch.interactive.gl.shader import Shader
from noisesketch.interactive.render_settings import RenderSettings


class DrawRenderer:
    """RealizedGeometry を 1 draw call で描くシンプルなレンダラー。"""

    def __init__(self, window: Window, settings: RenderSettings) -> None:
        window.switch_to()
        self.ctx = moderngl.create_context(require=410)
        self.program = Shader.create_shader(self.ctx)
        self._mesh = LineMesh(self.ctx, self.program)
        self._line_color = settings.line_color
        canvas_w, canvas_h = settings.canvas_size
        # 射影行列はキャンバス寸法にのみ依存するため初期化時に一度設定する。
        projection = render_utils.build_projection(float(canvas_w), float(canvas_h))
        self.program["projection"].write(projection.tobytes())
        self.program["line_thickness"].value = float(settings.line_thickness)

    def viewport(self, width: int, height: int) -> None:
        """ビューポートをウィンドウサイズに合わせて更新する。"""
        self.ctx.viewport = (0, 0, int(width), int(height))

    def clear(self, color: tuple[float, float, float]) -> None:
        """背景色でクリアする。"""
        self.ctx.clear(*color, 1.0)

    def render(self, geometry: RealizedGeometry) -> int:
        """geometry を描画し、描いたインデックス数を返す。"""
        indices = build_line_indices(geometry.offsets)
        if indices.size == 0:
            return 0
        colors = geometry.vertex_colors(self._line_color)
        self._mesh.upload(vertices=geometry.coords, colors=colors, indices=indices)
        self._mesh.vao.render(mode=self.ctx.LINE_STRIP, vertices=self._mesh.index_count)
        return int(self._mesh.index_count)

    def release(self) -> None:
        """GPU リソースを解放する。"""
        self._mesh.release()
        self.program.release()
        self.ctx.release()
