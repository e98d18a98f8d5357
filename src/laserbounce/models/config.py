# src/laserbounce/models/config.py
from __future__ import annotations
from dataclasses import dataclass, field
import math
from typing import Optional

from ..errors import ConfigError


@dataclass(frozen=True)
class SamplingRange:
    """均匀采样区间 [low, high)"""
    low: float
    high: float

    def __post_init__(self):
        if not (math.isfinite(self.low) and math.isfinite(self.high)):
            raise ConfigError(f"sampling range must be finite, got [{self.low}, {self.high}]")
        if self.low > self.high:
            raise ConfigError(f"sampling range low > high: [{self.low}, {self.high}]")

    @property
    def span(self) -> float:
        return self.high - self.low


@dataclass(frozen=True)
class SimConfig:
    threads: int = 8                 # 线程数 (NUMT)
    trials: int = 1_000_000          # 每次 try 的试验数 (NUMTRIALS)
    tries: int = 10                  # 计时重复次数 (NUMTRIES)
    xc_range: SamplingRange = field(default_factory=lambda: SamplingRange(-1.0, 1.0))
    yc_range: SamplingRange = field(default_factory=lambda: SamplingRange(0.0, 2.0))
    r_range: SamplingRange = field(default_factory=lambda: SamplingRange(0.5, 2.0))
    beam_angle_deg: float = 30.0
    seed: Optional[int] = None       # None → 由墙钟时间生成
    skip_after_abort: bool = True

    def __post_init__(self):
        if self.threads < 1:
            raise ConfigError("threads must be >= 1")
        if self.trials < 0:
            raise ConfigError("trials must be >= 0")
        if self.tries < 1:
            raise ConfigError("tries must be >= 1")
        # 竖直光束 tan 无定义
        if not -90.0 < self.beam_angle_deg < 90.0:
            raise ConfigError(f"beam angle must be in (-90, 90) degrees, got {self.beam_angle_deg}")
        if self.seed is not None and self.seed < 0:
            raise ConfigError("seed must be non-negative")

    @property
    def tn(self) -> float:
        """光束斜率 tan(beam angle)"""
        return math.tan(math.radians(self.beam_angle_deg))
