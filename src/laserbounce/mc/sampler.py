# src/laserbounce/mc/sampler.py
from __future__ import annotations
from datetime import datetime
import math
from typing import Optional, Tuple, Union

import numpy as np

# 种子的参考纪元：2000-01-01T00:00:00（本地时间）
SEED_EPOCH = datetime(2000, 1, 1)


def scale_unit(u, low: float, high: float):
    """
    把 [0, 1) 的 float32 样本线性映射到 [low, high)。
    标量和数组共用同一套 float32 运算，逐个采样与整块采样结果逐位一致。
    """
    low32, high32 = np.float32(low), np.float32(high)
    v = (low32 + u * (high32 - low32)).astype(np.float32)
    # float32 舍入可能恰好落到上界
    if high32 > low32:
        v = np.minimum(v, np.nextafter(high32, low32))
    return v


def wall_clock_seed(now: Optional[datetime] = None) -> int:
    """从纪元至今的毫秒数，截断成无符号 32 位整数。"""
    now = datetime.now() if now is None else now
    millis = int(1000.0 * (now - SEED_EPOCH).total_seconds())
    return millis % (1 << 32)


class Sampler:
    """
    显式的随机数状态对象。

    构造时播种一次，此后不再重新播种；需要采样的代码通过参数拿到 Sampler，
    而不是依赖进程级的全局生成器。
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = wall_clock_seed() if seed is None else int(seed)
        self._rng = np.random.default_rng(self.seed)

    @classmethod
    def from_wall_clock(cls) -> "Sampler":
        return cls(seed=None)

    def uniform_float(self, low: float, high: float) -> np.float32:
        """[low, high) 上的单精度均匀采样"""
        t = np.float32(self._rng.random(dtype=np.float32))
        return np.float32(scale_unit(t, low, high))

    def uniform_int(self, low: int, high: Union[int, float]) -> int:
        """floor(uniform_float(low, ceil(high)))，上界实际为开区间"""
        return int(math.floor(self.uniform_float(float(low), float(math.ceil(high)))))

    def uniform_block(self, shape: Union[int, Tuple[int, ...]]) -> np.ndarray:
        """一次性抽取 [0, 1) 的 float32 块，按行优先顺序消耗随机流"""
        return self._rng.random(shape, dtype=np.float32)


def seed_from_wall_clock() -> Sampler:
    """程序启动时调用一次：按墙钟时间播种，返回唯一的 Sampler"""
    return Sampler.from_wall_clock()
