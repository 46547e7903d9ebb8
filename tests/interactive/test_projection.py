from __future__ import annotations

import numpy as np

from noisesketch.interactive.gl.utils import build_projection


def test_projection_maps_centered_canvas_to_clip_space() -> None:
    proj = build_projection(1000.0, 800.0)
    # ModernGL へは転置して渡すため、ここでは元に戻して掛ける。
    m = proj.T
    corner = m @ np.array([500.0, 400.0, 0.0, 1.0], dtype=np.float32)
    origin = m @ np.array([0.0, 0.0, 0.0, 1.0], dtype=np.float32)
    np.testing.assert_allclose(corner[:2], [1.0, 1.0], atol=1e-6)
    np.testing.assert_allclose(origin[:2], [0.0, 0.0], atol=1e-6)
