# src/laserbounce/mc/kernels_cpu.py
from __future__ import annotations
from dataclasses import dataclass
import math
from typing import Optional, Tuple

import numpy as np
from numba import njit, prange

from .trial_types import NO_INTERSECTION, HIT, ESCAPE, Outcome


@njit
def _solve_bounce(xc, yc, r, tn):
    """
    单次试验的几何求解。

    光束：过原点的直线 y = x * tn。
    返回 (code, tmin, xcir, ycir, outx, outy, t_plate)，未求出的量为 nan。

    步骤:
    1. 代入圆方程得 a t^2 + b t + c = 0，判别式 d < 0 → 未相交
    2. 取较小根 tmin；tmin < 0 说明交点在光源后方 → 未相交
    3. 交点处的单位法向、单位入射方向
    4. 镜面反射 out = in - 2 (in·n) n
    5. 反射光延伸到 y = 0：t_plate = (0 - ycir) / outy，t_plate < 0 → 逃逸
    """
    # 参数是单精度，运算统一用双精度
    xc = np.float64(xc)
    yc = np.float64(yc)
    r = np.float64(r)
    nan = math.nan

    a = 1.0 + tn * tn
    b = -2.0 * (xc + yc * tn)
    c = xc * xc + yc * yc - r * r
    d = b * b - 4.0 * a * c

    if d < 0.0:
        return NO_INTERSECTION, nan, nan, nan, nan, nan, nan

    # d == 0 为切线，按相交处理
    d = math.sqrt(d)
    t1 = (-b + d) / (2.0 * a)
    t2 = (-b - d) / (2.0 * a)
    tmin = t1 if t1 < t2 else t2

    if tmin < 0.0:
        return NO_INTERSECTION, tmin, nan, nan, nan, nan, nan

    xcir = tmin
    ycir = tmin * tn

    # 法向（圆心 → 交点）
    nx = xcir - xc
    ny = ycir - yc
    ni = math.sqrt(nx * nx + ny * ny)

    # 入射方向（原点 → 交点）
    inx = xcir - 0.0
    iny = ycir - 0.0
    inn = math.sqrt(inx * inx + iny * iny)

    # 零长度向量无法单位化：半径为 0 或交点正好在原点
    if ni == 0.0 or inn == 0.0:
        return NO_INTERSECTION, tmin, xcir, ycir, nan, nan, nan

    nx /= ni
    ny /= ni
    inx /= inn
    iny /= inn

    dot = inx * nx + iny * ny
    outx = inx - 2.0 * nx * dot   # 反射角 = 入射角
    outy = iny - 2.0 * ny * dot

    # 反射光与平板平行，永远到不了 y = 0
    if outy == 0.0:
        return ESCAPE, tmin, xcir, ycir, outx, outy, math.inf

    t = (0.0 - ycir) / outy
    if t < 0.0:
        return ESCAPE, tmin, xcir, ycir, outx, outy, t

    return HIT, tmin, xcir, ycir, outx, outy, t


@njit
def classify_trial(xc, yc, r, tn):
    """单次试验的分类码：NO_INTERSECTION / HIT / ESCAPE"""
    return _solve_bounce(xc, yc, r, tn)[0]


@njit(parallel=True)
def count_outcomes(xcs, ycs, rs, tn):
    """
    并行规约：返回 (hits, escapes)。
    各线程的局部计数由 prange 的 += 规约在 join 处合并一次。
    """
    hits = 0
    escapes = 0
    for n in prange(xcs.shape[0]):
        code = classify_trial(xcs[n], ycs[n], rs[n], tn)
        if code == HIT:
            hits += 1
        elif code == ESCAPE:
            escapes += 1
    return hits, escapes


@njit
def count_outcomes_serial(xcs, ycs, rs, tn):
    """与 count_outcomes 同样的运算，单线程顺序执行，用作对照"""
    hits = 0
    escapes = 0
    for n in range(xcs.shape[0]):
        code = classify_trial(xcs[n], ycs[n], rs[n], tn)
        if code == HIT:
            hits += 1
        elif code == ESCAPE:
            escapes += 1
    return hits, escapes


@njit(parallel=True)
def classify_trials(xcs, ycs, rs, tn):
    """逐个试验的分类码数组 (int8)"""
    out = np.empty(xcs.shape[0], dtype=np.int8)
    for n in prange(xcs.shape[0]):
        out[n] = classify_trial(xcs[n], ycs[n], rs[n], tn)
    return out


@dataclass(frozen=True)
class BounceTrace:
    """没算到的量为 None（例如未相交时没有交点和反射方向）"""
    outcome: Outcome
    tmin: Optional[float]
    intersection: Optional[Tuple[float, float]]
    outgoing: Optional[Tuple[float, float]]
    t_plate: Optional[float]


def _known(v) -> Optional[float]:
    v = float(v)
    return None if math.isnan(v) else v


def trace_trial(xc: float, yc: float, r: float, tn: float) -> BounceTrace:
    """把单次试验的完整几何展开成 BounceTrace，便于检查"""
    code, tmin, xcir, ycir, outx, outy, t = _solve_bounce(
        np.float32(xc), np.float32(yc), np.float32(r), float(tn))
    return BounceTrace(
        outcome=Outcome(int(code)),
        tmin=_known(tmin),
        intersection=None if math.isnan(xcir) else (float(xcir), float(ycir)),
        outgoing=None if math.isnan(outx) else (float(outx), float(outy)),
        t_plate=_known(t),
    )
