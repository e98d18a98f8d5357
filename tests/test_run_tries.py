# tests/test_run_tries.py
import numba
import pytest

from laserbounce.errors import ParallelUnavailableError
from laserbounce.models.config import SimConfig
from laserbounce.mc.trials import TrialSet
import laserbounce.simulation.run_tries as run_tries_mod
from laserbounce.simulation.run_tries import (
    check_parallel_support, resolve_thread_count, run_simulation, run_tries,
)

THREADS = min(4, int(numba.config.NUMBA_NUM_THREADS))


def _cfg(**kw):
    base = dict(threads=THREADS, trials=1000, tries=1, seed=2025)
    base.update(kw)
    return SimConfig(**base)


def test_same_seed_same_hits():
    r1 = run_simulation(_cfg())
    r2 = run_simulation(_cfg())
    assert r1.hits == r2.hits
    assert r1.probability == r2.probability
    assert r1.seed == r2.seed == 2025
    assert r1.num_trials == 1000


def test_peak_not_below_average():
    res = run_simulation(_cfg(trials=5000, tries=4, skip_after_abort=False))
    assert res.tries_completed == 4
    assert len(res.rates) == 4
    assert res.peak_rate >= res.average_rate
    assert res.peak_rate == max(res.rates)
    assert res.average_rate == pytest.approx(sum(res.rates) / 4)


def test_zero_trials_reports_zero_not_nan():
    res = run_simulation(_cfg(trials=0, tries=3))
    assert res.probability == 0.0
    assert res.implied_hits == 0
    assert res.peak_rate == 0.0
    assert res.average_rate == 0.0
    assert not res.aborted


def _escaping_trials():
    # 第一个圆盘把光束反射向上（逃逸），第二个正向命中平板（tn=1 即 45°）
    return TrialSet.from_arrays([2.0, 0.0], [0.0, 2.0], [1.5, 1.9])


def test_abort_skips_following_tries():
    res = run_tries(_escaping_trials(), _cfg(trials=2, tries=3, beam_angle_deg=45.0))
    assert res.aborted
    assert res.tries_completed == 1
    # 最后一次完成的 try 的概率
    assert res.hits == 1 and res.escapes == 1
    assert res.probability == pytest.approx(0.5)
    # 平均值按配置的 try 总数计算
    assert res.average_rate == pytest.approx(res.peak_rate / 3)


def test_abort_advisory_when_skip_disabled():
    res = run_tries(_escaping_trials(),
                    _cfg(trials=2, tries=3, beam_angle_deg=45.0, skip_after_abort=False))
    assert res.aborted
    assert res.tries_completed == 3
    assert res.probability == pytest.approx(0.5)


def test_no_abort_without_escapes():
    trials = TrialSet.from_arrays([0.0, 2.0], [2.0, 0.0], [1.9, 1.0])   # 命中 + 未相交
    res = run_tries(trials, _cfg(trials=2, tries=2, beam_angle_deg=45.0))
    assert not res.aborted
    assert res.tries_completed == 2
    assert res.hits == 1


def test_disabled_jit_is_fatal(monkeypatch):
    monkeypatch.setattr(numba.config, "DISABLE_JIT", True)
    with pytest.raises(ParallelUnavailableError):
        check_parallel_support()
    with pytest.raises(ParallelUnavailableError):
        run_simulation(_cfg())


def test_thread_count_clamped_to_numba_pool():
    available = int(numba.config.NUMBA_NUM_THREADS)
    assert resolve_thread_count(1) == 1
    assert resolve_thread_count(available + 5) == available


def test_threading_layer_reported():
    assert isinstance(check_parallel_support(), str)


def test_missing_threading_layer_fails_before_sampling(monkeypatch):
    def _no_layer():
        raise ValueError("Threading layer is not initialized.")

    def _must_not_sample(*args, **kwargs):
        pytest.fail("trials generated before the parallel capability check")

    monkeypatch.setattr(numba, "threading_layer", _no_layer)
    monkeypatch.setattr(run_tries_mod, "generate_trials", _must_not_sample)
    with pytest.raises(ParallelUnavailableError):
        run_simulation(_cfg())


def test_seed_unknown_when_trials_supplied_directly():
    res = run_tries(_escaping_trials(), _cfg(trials=2, tries=1, beam_angle_deg=45.0))
    assert res.seed is None
    assert run_simulation(_cfg()).seed == 2025
