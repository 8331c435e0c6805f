"""Tests for process capability indices."""

import pytest

from spcengine.core.engine.capability import CapabilityResult, calculate_capability
from spcengine.core.engine.charts import Baseline


class TestCapability:
    """Test Cp, Cpk, Cpu and Cpl calculation."""

    def test_centered_process(self):
        result = calculate_capability(Baseline(mean=10.0, sigma=1.0), usl=13.0, lsl=7.0)
        assert result.cp == pytest.approx(1.0, abs=1e-9)
        assert result.cpu == pytest.approx(1.0, abs=1e-9)
        assert result.cpl == pytest.approx(1.0, abs=1e-9)
        assert result.cpk == pytest.approx(1.0, abs=1e-9)

    def test_off_center_process_cpk_is_worse_side(self):
        result = calculate_capability(Baseline(mean=11.0, sigma=1.0), usl=13.0, lsl=7.0)
        assert result.cp == pytest.approx(1.0)
        assert result.cpu == pytest.approx(2 / 3)
        assert result.cpl == pytest.approx(4 / 3)
        assert result.cpk == pytest.approx(2 / 3)

    def test_upper_limit_only(self):
        result = calculate_capability(Baseline(mean=10.0, sigma=0.5), usl=12.0)
        assert result.cp is None
        assert result.cpl is None
        assert result.cpu == pytest.approx(4 / 3)
        assert result.cpk == result.cpu

    def test_lower_limit_only(self):
        result = calculate_capability(Baseline(mean=10.0, sigma=0.5), lsl=9.0)
        assert result.cp is None
        assert result.cpu is None
        assert result.cpl == pytest.approx(2 / 3)
        assert result.cpk == result.cpl

    def test_no_limits(self):
        assert calculate_capability(Baseline(mean=10.0, sigma=1.0)) == CapabilityResult()

    @pytest.mark.parametrize("sigma", [0.0, -1.0])
    def test_degenerate_sigma_gives_all_none(self, sigma: float):
        result = calculate_capability(Baseline(mean=10.0, sigma=sigma), usl=13.0, lsl=7.0)
        assert result == CapabilityResult(cp=None, cpk=None, cpu=None, cpl=None)

    def test_mean_outside_limits_gives_negative_cpk(self):
        result = calculate_capability(Baseline(mean=14.0, sigma=1.0), usl=13.0, lsl=7.0)
        assert result.cpu == pytest.approx(-1 / 3)
        assert result.cpk < 0

    def test_cp_at_least_cpk(self):
        for mean in (7.5, 9.0, 10.0, 11.2, 12.9):
            result = calculate_capability(Baseline(mean=mean, sigma=0.8), usl=13.0, lsl=7.0)
            assert result.cp >= result.cpk
