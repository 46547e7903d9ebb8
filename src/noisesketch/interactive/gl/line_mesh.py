"""
どこで: `src/noisesketch/interactive/gl/line_mesh.py`。
何を: VBO/IBO/VAO の確保・更新・解放を担当し、描画可能な LineMesh を管理。
なぜ: GPU 転送の詳細を Renderer から切り離し、再確保や VAO の張り直しを一元化するため。
"""

from __future__ import annotations

from typing import Any

import numpy as np

# in_vert(vec2) + in_color(vec3) のインターリーブ。
VERTEX_FORMAT = "2f 3f"
FLOATS_PER_VERTEX = 5


class LineMesh:
    """
    頂点（位置 + 色）とインデックスを GPU へ送り込む作業を管理
    """

    PRIMITIVE_RESTART_INDEX = 0xFFFFFFFF

    def __init__(
        self,
        ctx: Any,
        program: Any,
        # 初期GPUメモリ確保量（既定: 1MB）。必要に応じて自動拡張。
        initial_reserve: int = 1024 * 1024,
    ):
        self.ctx = ctx
        self.program = program
        self.initial_reserve = initial_reserve

        self.vbo = ctx.buffer(reserve=initial_reserve, dynamic=True)
        self.ibo = ctx.buffer(reserve=initial_reserve, dynamic=True)
        self.vao = self._build_vao()

        self.index_count: int = 0
        self.ctx.primitive_restart = True  # type: ignore
        self.ctx.primitive_restart_index = self.PRIMITIVE_RESTART_INDEX  # type: ignore

    def _build_vao(self) -> Any:
        return self.ctx.vertex_array(
            self.program,
            [(self.vbo, VERTEX_FORMAT, "in_vert", "in_color")],
            index_buffer=self.ibo,
            index_element_size=4,
        )

    def _ensure_capacity(self, vbo_size: int, ibo_size: int) -> None:
        """データが大きくなったらGPUのバッファを再確保"""
        vao_needs_rebuild = False
        if vbo_size > self.vbo.size:
            self.vbo.release()
            self.vbo = self.ctx.buffer(reserve=max(vbo_size, self.initial_reserve), dynamic=True)
            vao_needs_rebuild = True

        if ibo_size > self.ibo.size:
            self.ibo.release()
            self.ibo = self.ctx.buffer(reserve=max(ibo_size, self.initial_reserve), dynamic=True)
            vao_needs_rebuild = True

        # VAO は VBO/IBO が差し替わるときだけ張り直す。
        if vao_needs_rebuild:
            self.vao.release()
            self.vao = self._build_vao()

    def upload(self, vertices: np.ndarray, colors: np.ndarray, indices: np.ndarray) -> None:
        """位置 (N,2) と色 (N,3) をインターリーブして GPU へ送る"""
        interleaved = np.empty((vertices.shape[0], FLOATS_PER_VERTEX), dtype=np.float32)
        interleaved[:, :2] = vertices
        interleaved[:, 2:] = colors
        indices_u32 = np.ascontiguousarray(indices, dtype=np.uint32)
        self._ensure_capacity(interleaved.nbytes, indices_u32.nbytes)

        self.vbo.orphan()
        self.vbo.write(interleaved)

        self.ibo.orphan()
        self.ibo.write(indices_u32)

        self.index_count = len(indices_u32)

    def release(self) -> None:
        """GPUのメモリを解放する（終了時に使う）"""
        self.vbo.release()
        self.ibo.release()
        self.vao.release()
