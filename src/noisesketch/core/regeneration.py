# どこで: `src/noisesketch/core/regeneration.py`。
# 何を: 曲線集合をいつ作り直すか（起動時+トリガーのみ / 毎フレーム）のポリシーを提供する。
# なぜ: 「再生成」と「描画」を分離し、再生成頻度を差し替え可能な方針として扱うため。

from __future__ import annotations

import logging

import numpy as np

from noisesketch.core.curve import (
    DEFAULT_CONSTANTS,
    CurveConstants,
    CurveSet,
    generate_curves,
)

_logger = logging.getLogger(__name__)


class RunupCurveSource:
    """起動時に 1 回だけ曲線を作り、以後はトリガーがあったときだけ作り直す。

    Notes
    -----
    `update()` を何度呼んでも、`request_regenerate()` が無ければ同じ CurveSet を返し続ける。
    """

    def __init__(
        self,
        rng: np.random.Generator,
        constants: CurveConstants = DEFAULT_CONSTANTS,
    ) -> None:
        self._rng = rng
        self._constants = constants
        self._curves: CurveSet | None = None
        self._pending = True
        self._regenerate_count = 0

    @property
    def curves(self) -> CurveSet | None:
        """現在保持している CurveSet を返す。未生成なら None。"""
        return self._curves

    @property
    def regenerate_count(self) -> int:
        """これまでに再生成した回数を返す。"""
        return int(self._regenerate_count)

    def request_regenerate(self) -> None:
        """次の `update()` で作り直すよう予約する。"""
        self._pending = True

    def update(self) -> CurveSet:
        """必要なら再生成し、現在の CurveSet を返す。"""
        if self._pending or self._curves is None:
            self._pending = False
            self._curves = generate_curves(self._rng, self._constants)
            self._regenerate_count += 1
            _logger.debug(
                "Regenerated %d curves (count=%d)", len(self._curves), self._regenerate_count
            )
        return self._curves


class PerFrameCurveSource:
    """毎フレーム、新しい乱数パラメータと共通角オフセットで曲線を作り直す。"""

    def __init__(
        self,
        rng: np.random.Generator,
        constants: CurveConstants = DEFAULT_CONSTANTS,
    ) -> None:
        self._rng = rng
        self._constants = constants
        self._curves: CurveSet | None = None

    @property
    def curves(self) -> CurveSet | None:
        return self._curves

    def request_regenerate(self) -> None:
        """毎フレーム作り直すため何もしない。"""
        return

    def update(self) -> CurveSet:
        self._curves = generate_curves(self._rng, self._constants)
        return self._curves
