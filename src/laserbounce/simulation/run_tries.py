# src/laserbounce/simulation/run_tries.py
from __future__ import annotations
from dataclasses import dataclass, field
import logging
import threading
import time
from typing import List, Optional

import numba
import numpy as np
from tqdm import trange

from ..errors import ParallelUnavailableError
from ..models.config import SimConfig
from ..mc.sampler import Sampler
from ..mc.tallies import ThroughputTally, megatrials_per_second
from ..mc.trials import TrialSet, generate_trials
from ..mc.kernels_cpu import count_outcomes

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    peak_rate: float            # 最大 megatrials/sec
    average_rate: float         # sum / tries
    probability: float          # 最后一次完成的 try 的命中概率
    hits: int                   # 最后一次完成的 try 的命中数
    escapes: int
    num_trials: int
    num_tries: int
    tries_completed: int
    aborted: bool
    seed: Optional[int] = None   # 直接调用 run_tries 时未知
    rates: List[float] = field(default_factory=list)

    @property
    def implied_hits(self) -> int:
        # probability × N 截断为整数
        return int(self.probability * self.num_trials)


def check_parallel_support() -> str:
    """
    确认具备真正的 parallel-for 能力，返回 numba 的 threading layer 名称。
    - JIT 被禁用时 prange 会退化成普通 range
    - 用 1 个元素的数组跑一次并行规约，迫使 numba 加载 threading layer
    """
    if numba.config.DISABLE_JIT:
        raise ParallelUnavailableError(
            "numba JIT is disabled (NUMBA_DISABLE_JIT=1); no parallel-for support")
    one = np.zeros(1, dtype=np.float32)
    count_outcomes(one, one, one, 0.0)
    try:
        return numba.threading_layer()
    except ValueError as exc:
        raise ParallelUnavailableError("no numba threading layer could be loaded") from exc


def resolve_thread_count(requested: int) -> int:
    available = int(numba.config.NUMBA_NUM_THREADS)
    if requested > available:
        logger.warning(
            "requested %d threads but numba was started with %d; using %d "
            "(set NUMBA_NUM_THREADS to raise the limit)",
            requested, available, available)
        return available
    return requested


def _warm_up(trials: TrialSet, tn: float):
    # 第一次调用触发 JIT 编译，必须发生在计时区外
    count_outcomes(trials.xcs[:1], trials.ycs[:1], trials.rs[:1], tn)


def run_tries(trials: TrialSet, config: SimConfig, progress: bool = False) -> RunResult:
    """
    对同一组试验参数重复 config.tries 次计时运行。

    - abort 标志一旦置位，且 skip_after_abort 为真，后续 try 整个跳过（不计时、不更新统计）
    - 概率每次完成的 try 都会被覆盖，最终保留最后一次完成的值
    """
    layer = check_parallel_support()
    threads = resolve_thread_count(config.threads)
    numba.set_num_threads(threads)

    tn = config.tn
    xcs, ycs, rs = trials.xcs, trials.ycs, trials.rs
    n = len(trials)

    _warm_up(trials, tn)
    logger.debug("threading layer %s, %d threads, %d trials", layer, threads, n)

    abort = threading.Event()
    tally = ThroughputTally()
    probability, hits, escapes = 0.0, 0, 0

    for t in trange(config.tries, disable=not progress, desc="tries"):
        if abort.is_set() and config.skip_after_abort:
            logger.info("try %d skipped: abort flag is set", t)
            continue

        time0 = time.perf_counter()
        hits, escapes = count_outcomes(xcs, ycs, rs, tn)
        time1 = time.perf_counter()
        hits, escapes = int(hits), int(escapes)

        if escapes > 0 and not abort.is_set():
            abort.set()
            logger.warning("try %d: %d reflected beams escaped upward; abort flag raised", t, escapes)

        rate = megatrials_per_second(n, time1 - time0)
        tally.record(rate)
        probability = hits / n if n > 0 else 0.0
        logger.debug("try %d: %.6f megatrials/sec, %d hits", t, rate, hits)

    return RunResult(
        peak_rate=tally.max_rate,
        average_rate=tally.average(config.tries),
        probability=probability,
        hits=hits,
        escapes=escapes,
        num_trials=n,
        num_tries=config.tries,
        tries_completed=tally.completed,
        aborted=abort.is_set(),
        rates=list(tally.rates),
    )


def run_simulation(config: SimConfig, progress: bool = False) -> RunResult:
    """检查并行能力 → 播种 → 生成试验 → 计时运行"""
    check_parallel_support()
    sampler = Sampler(config.seed)
    logger.debug("seed %d", sampler.seed)
    trials = generate_trials(config.trials, config.xc_range, config.yc_range,
                             config.r_range, sampler)
    result = run_tries(trials, config, progress=progress)
    result.seed = sampler.seed
    return result
