# どこで: `src/noisesketch/interactive/gl/shader.py`。
# 何を: ライン描画用の GLSL（頂点色 + 幾何シェーダでの太線化）を保持し、Program を生成する。
# なぜ: GL_LINE の線幅はドライバ依存のため、線分を四角形へ展開して太さを揃えるため。

from __future__ import annotations

from typing import Any

VERTEX_SHADER = """
#version 410
in vec2 in_vert;
in vec3 in_color;
out vec3 v_color;
void main() {
    v_color = in_color;
    gl_Position = vec4(in_vert, 0.0, 1.0);
}
"""

GEOMETRY_SHADER = """
#version 410
layout(lines) in;
layout(triangle_strip, max_vertices = 4) out;
in vec3 v_color[];
out vec3 g_color;
uniform mat4 projection;
uniform float line_thickness;
void main() {
    vec2 p0 = gl_in[0].gl_Position.xy;
    vec2 p1 = gl_in[1].gl_Position.xy;
    vec2 dir = p1 - p0;
    float len = length(dir);
    vec2 n = len > 0.0 ? vec2(-dir.y, dir.x) / len : vec2(0.0, 1.0);
    vec2 off = n * (line_thickness * 0.5);

    g_color = v_color[0];
    gl_Position = projection * vec4(p0 + off, 0.0, 1.0);
    EmitVertex();
    gl_Position = projection * vec4(p0 - off, 0.0, 1.0);
    EmitVertex();
    g_color = v_color[1];
    gl_Position = projection * vec4(p1 + off, 0.0, 1.0);
    EmitVertex();
    gl_Position = projection * vec4(p1 - off, 0.0, 1.0);
    EmitVertex();
    EndPrimitive();
}
"""

FRAGMENT_SHADER = """
#version 410
in vec3 g_color;
out vec4 frag_color;
void main() {
    frag_color = vec4(g_color, 1.0);
}
"""


class Shader:
    """ライン描画用 Program のファクトリ。"""

    @staticmethod
    def create_shader(ctx: Any) -> Any:
        return ctx.program(
            vertex_shader=VERTEX_SHADER,
            geometry_shader=GEOMETRY_SHADER,
            fragment_shader=FRAGMENT_SHADER,
        )
