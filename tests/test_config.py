import math

import pytest

from laserbounce.errors import ConfigError
from laserbounce.models.config import SamplingRange, SimConfig


def test_defaults_match_reference_build():
    cfg = SimConfig()
    assert (cfg.threads, cfg.trials, cfg.tries) == (8, 1_000_000, 10)
    assert (cfg.xc_range.low, cfg.xc_range.high) == (-1.0, 1.0)
    assert (cfg.yc_range.low, cfg.yc_range.high) == (0.0, 2.0)
    assert (cfg.r_range.low, cfg.r_range.high) == (0.5, 2.0)
    assert cfg.tn == pytest.approx(math.tan(math.radians(30.0)), rel=1e-12)


def test_range_low_above_high_rejected():
    with pytest.raises(ConfigError):
        SamplingRange(2.0, 1.0)


@pytest.mark.parametrize("angle", [90.0, -90.0, 135.0])
def test_vertical_beam_rejected(angle):
    with pytest.raises(ConfigError):
        SimConfig(beam_angle_deg=angle)


@pytest.mark.parametrize("kwargs", [
    {"threads": 0},
    {"trials": -1},
    {"tries": 0},
    {"seed": -5},
])
def test_invalid_counts_rejected(kwargs):
    with pytest.raises(ConfigError):
        SimConfig(**kwargs)


def test_config_error_is_value_error():
    with pytest.raises(ValueError):
        SimConfig(tries=0)


def test_zero_trials_allowed():
    assert SimConfig(trials=0).trials == 0
