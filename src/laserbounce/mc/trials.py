# src/laserbounce/mc/trials.py
from __future__ import annotations
from dataclasses import dataclass

import numpy as np

from ..errors import ConfigError
from ..models.config import SamplingRange
from .sampler import Sampler, scale_unit
from .trial_types import TrialRecord


@dataclass(frozen=True)
class TrialSet:
    """N 条只读的试验参数记录，所有 try 共用同一份"""
    records: np.ndarray

    def __len__(self) -> int:
        return int(self.records.shape[0])

    @property
    def xcs(self) -> np.ndarray:
        return self.records["xc"]

    @property
    def ycs(self) -> np.ndarray:
        return self.records["yc"]

    @property
    def rs(self) -> np.ndarray:
        return self.records["r"]

    @classmethod
    def from_arrays(cls, xcs, ycs, rs) -> "TrialSet":
        xcs, ycs, rs = (np.asarray(a, dtype=np.float32) for a in (xcs, ycs, rs))
        if not (xcs.shape == ycs.shape == rs.shape) or xcs.ndim != 1:
            raise ValueError("xcs, ycs, rs must be 1-D arrays of equal length")
        records = np.zeros(xcs.shape[0], dtype=TrialRecord)
        records["xc"], records["yc"], records["r"] = xcs, ycs, rs
        records.setflags(write=False)
        return cls(records)


def generate_trials(n: int,
                    xc_range: SamplingRange,
                    yc_range: SamplingRange,
                    r_range: SamplingRange,
                    sampler: Sampler) -> TrialSet:
    """
    预先生成 n 组 (xc, yc, r)，必须在计时区外调用。

    随机流按 trial 顺序消耗，每个 trial 内部依次为 x、y、r，
    与逐个调用 Sampler.uniform_float 的顺序一致。
    """
    if n < 0:
        raise ConfigError("trial count must be >= 0")

    u = sampler.uniform_block((int(n), 3))

    records = np.zeros(int(n), dtype=TrialRecord)
    for col, (name, rg) in enumerate((("xc", xc_range), ("yc", yc_range), ("r", r_range))):
        records[name] = scale_unit(u[:, col], rg.low, rg.high)
    records.setflags(write=False)
    return TrialSet(records)
