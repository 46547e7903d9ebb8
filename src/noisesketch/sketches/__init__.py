# どこで: `src/noisesketch/sketches/__init__.py`。
# 何を: sketch 名 → 生成関数のレジストリと `create_sketch()` を提供する。
# なぜ: CLI/ランナーから名前だけで variant を選べるようにするため。

from __future__ import annotations

import time
from typing import Callable

import numpy as np

from .base import Sketch
from .noise_grid import NoiseGridSketch
from .runup import RunupSketch
from .wander import WanderSketch

SKETCHES: dict[str, Callable[[int, tuple[int, int]], Sketch]] = {
    "wander": lambda seed, _size: WanderSketch(np.random.default_rng(seed)),
    "runup": lambda seed, _size: RunupSketch(np.random.default_rng(seed)),
    "noise_grid": lambda seed, size: NoiseGridSketch(seed, canvas_size=size),
}


def default_seed() -> int:
    """現在の UNIX 秒を seed として返す。"""
    return int(time.time()) & 0xFFFFFFFF


def create_sketch(
    name: str,
    *,
    seed: int | None = None,
    canvas_size: tuple[int, int] = (1000, 1000),
) -> Sketch:
    """名前から sketch を生成する。seed 未指定なら現在時刻を使う。"""
    try:
        factory = SKETCHES[str(name)]
    except KeyError:
        known = ", ".join(sorted(SKETCHES))
        raise ValueError(f"未知の sketch です: {name!r}（利用可能: {known}）") from None
    return factory(default_seed() if seed is None else int(seed), canvas_size)


__all__ = [
    "NoiseGridSketch",
    "RunupSketch",
    "SKETCHES",
    "Sketch",
    "WanderSketch",
    "create_sketch",
    "default_seed",
]
