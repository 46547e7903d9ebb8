# どこで: `src/noisesketch/core/curve.py`。
# 何を: 中心へ巻き込むスパイラル曲線（シグモイド包絡 + 減衰する正弦波）の生成を提供する。
# なぜ: 乱数パラメータの抽選と点列生成を純粋関数に分け、再生成ポリシーから独立させるため。

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from noisesketch.core.realized_geometry import RealizedGeometry, polylines_to_geometry

TAU = 2.0 * math.pi

# シグモイド座標の写像 0..1 -> SIGMOID_LOW..SIGMOID_HIGH。
SIGMOID_LOW = -4.0
SIGMOID_HIGH = 10.0

WAVE_AMPLITUDE_RANGE = (0.05, 0.1)
WAVE_SPEED_RANGE = (48.0, 80.0)
PROGRESS_START_RANGE = (0.0, 0.5)
PROGRESS_END_RANGE = (0.5, 1.0)


@dataclass(frozen=True, slots=True)
class CurveConstants:
    """曲線生成に使う固定値の集合。"""

    num_curves: int = 32
    num_points: int = 256
    # 外周（開始）半径。
    start_radius: float = 400.0
    # 開始角をいくつの区間に分けるか。
    num_segments: int = 4
    # 各区間のうち開始点を置いてよい割合。
    segment_start_fraction: float = 0.75
    # 終端（event horizon）半径の start_radius に対する割合。
    stop_radius_fraction: float = 0.125
    # progress 0..1 で巻く角度 [rad]。
    wind_angle: float = 4.0 * math.pi

    @property
    def segment_arc(self) -> float:
        """1 区間の角度幅 [rad] を返す。"""
        return TAU / float(self.num_segments)

    @property
    def segment_start_arc(self) -> float:
        """区間内で開始点を置ける角度幅 [rad] を返す。"""
        return self.segment_arc * float(self.segment_start_fraction)


DEFAULT_CONSTANTS = CurveConstants()


@dataclass(frozen=True, slots=True)
class CurveParams:
    """1 本の曲線を決める乱数パラメータ。

    Notes
    -----
    start_angle は区間オフセット・区間内オフセット・フレーム共通オフセットを合算済みの値。
    """

    start_segment: int
    start_angle: float
    wave_offset: float
    wave_amplitude: float
    wave_speed: float
    progress_start: float
    progress_end: float


@dataclass(frozen=True, slots=True)
class CurveSet:
    """1 回の再生成イベントで作られた曲線の集合。"""

    params: tuple[CurveParams, ...]
    points: tuple[np.ndarray, ...]
    global_offset: float

    def __len__(self) -> int:
        return len(self.points)


def envelope(p: np.ndarray | float) -> np.ndarray:
    """反転したロジスティック包絡（0..1）を返す。

    p を SIGMOID_LOW..SIGMOID_HIGH へ線形写像した s に対して `1 - 1/(1+exp(-s))`。
    p が増えるほど単調に減少する。
    """
    p_arr = np.asarray(p, dtype=np.float64)
    s = p_arr * (SIGMOID_HIGH - SIGMOID_LOW) + SIGMOID_LOW
    sig = 1.0 / (1.0 + np.exp(-s))
    return 1.0 - sig


def scaled_envelope(p: np.ndarray | float, stop_radius_fraction: float) -> np.ndarray:
    """包絡を stop_radius_fraction..1 へ押し込めた値を返す。"""
    f = float(stop_radius_fraction)
    return envelope(p) * (1.0 - f) + f


def generate_curve(
    params: CurveParams,
    point_count: int,
    start_radius: float,
    stop_radius_fraction: float,
    wind_angle: float,
) -> np.ndarray:
    """CurveParams から点列を生成する。

    Parameters
    ----------
    params : CurveParams
        曲線 1 本分の乱数パラメータ。
    point_count : int
        生成する点数。2 以上。
    start_radius : float
        外周半径。
    stop_radius_fraction : float
        終端半径の外周半径に対する割合。
    wind_angle : float
        progress 0..1 で巻く角度 [rad]。

    Returns
    -------
    np.ndarray
        float64 型 shape (point_count, 2) の点列。先頭は p=progress_start、末尾は p=progress_end。

    Notes
    -----
    波の項はクランプしないため、半径は
    `[stop*R - amp*R, R + amp*R]` 程度まではみ出し得る。
    """
    n = int(point_count)
    if n < 2:
        raise ValueError(f"point_count は 2 以上である必要がある: got={point_count!r}")

    u = np.arange(n, dtype=np.float64) / float(n - 1)
    p = u * (params.progress_end - params.progress_start) + params.progress_start

    theta = params.start_angle + float(wind_angle) * p

    sig = envelope(p)
    # 包絡で波も縮める（中心に近づくほど小さく揺れる）。
    wave = np.sin(p * params.wave_speed + params.wave_offset) * params.wave_amplitude * sig
    sig = sig * (1.0 - float(stop_radius_fraction)) + float(stop_radius_fraction)

    r = (sig + wave) * float(start_radius)

    out = np.empty((n, 2), dtype=np.float64)
    out[:, 0] = r * np.cos(theta)
    out[:, 1] = r * np.sin(theta)
    return out


def sample_curve_params(
    rng: np.random.Generator,
    constants: CurveConstants = DEFAULT_CONSTANTS,
    *,
    global_offset: float = 0.0,
) -> CurveParams:
    """乱数源から CurveParams を 1 つ抽選する。

    抽選順は固定（区間 → 区間内オフセット → 波の位相/振幅/速度 → progress 始点/終点）。
    同じ状態の rng からは同じ CurveParams が得られる。
    """
    segment = int(rng.integers(0, int(constants.num_segments)))
    intra = float(rng.uniform(0.0, constants.segment_start_arc))
    start_angle = intra + float(segment) * constants.segment_arc + float(global_offset)

    wave_offset = float(rng.uniform(0.0, TAU))
    wave_amplitude = float(rng.uniform(*WAVE_AMPLITUDE_RANGE))
    wave_speed = float(rng.uniform(*WAVE_SPEED_RANGE))
    progress_start = float(rng.uniform(*PROGRESS_START_RANGE))
    progress_end = float(rng.uniform(*PROGRESS_END_RANGE))

    return CurveParams(
        start_segment=segment,
        start_angle=start_angle,
        wave_offset=wave_offset,
        wave_amplitude=wave_amplitude,
        wave_speed=wave_speed,
        progress_start=progress_start,
        progress_end=progress_end,
    )


def generate_curves(
    rng: np.random.Generator,
    constants: CurveConstants = DEFAULT_CONSTANTS,
    *,
    global_offset: float | None = None,
) -> CurveSet:
    """再生成イベント 1 回分の曲線集合を作る。

    global_offset が None の場合は 0..2π から 1 つ抽選し、全曲線で共有する。
    """
    if global_offset is None:
        global_offset = float(rng.uniform(0.0, TAU))

    params: list[CurveParams] = []
    points: list[np.ndarray] = []
    for _ in range(int(constants.num_curves)):
        cp = sample_curve_params(rng, constants, global_offset=global_offset)
        pts = generate_curve(
            cp,
            constants.num_points,
            constants.start_radius,
            constants.stop_radius_fraction,
            constants.wind_angle,
        )
        pts.setflags(write=False)
        params.append(cp)
        points.append(pts)

    return CurveSet(params=tuple(params), points=tuple(points), global_offset=float(global_offset))


def min_radius_bound(
    constants: CurveConstants = DEFAULT_CONSTANTS,
    *,
    max_amplitude: float = WAVE_AMPLITUDE_RANGE[1],
) -> float:
    """波のはみ出しを考慮した半径の下限見積もりを返す。"""
    r = float(constants.start_radius)
    return float(constants.stop_radius_fraction) * r - float(max_amplitude) * r


def curves_to_geometry(curve_set: CurveSet) -> RealizedGeometry:
    """CurveSet を 1 曲線 = 1 ポリラインの RealizedGeometry にまとめる。"""
    return polylines_to_geometry(list(curve_set.points))
