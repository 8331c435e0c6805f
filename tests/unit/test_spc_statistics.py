"""Reference-value tests for SPC chart statistics.

Cross-validates chart limits against raw numpy computations so the chart
strategies are checked against an independent implementation.
"""

import math

import numpy as np
import pytest

from spcengine.core.engine.charts import compute_chart
from spcengine.schemas import ChartConfig, ChartType, CUSUMParams, EWMAParams
from spcengine.utils.constants import lookup


class TestConstantIdentities:
    """Verify internal consistency of the constants table."""

    def test_A2_equals_3_over_d2_sqrt_n(self):
        """A2 = 3 / (d2 * sqrt(n)) -- verify the identity for n=2..10."""
        for n in range(2, 11):
            constants = lookup(n)
            expected_A2 = 3.0 / (constants.d2 * math.sqrt(n))
            assert constants.A2 == pytest.approx(expected_A2, abs=0.002)

    def test_D4_decreases_and_D3_increases_with_n(self):
        D3 = [lookup(n).D3 for n in range(2, 11)]
        D4 = [lookup(n).D4 for n in range(2, 11)]
        assert D4 == sorted(D4, reverse=True)
        assert D3 == sorted(D3)


class TestImrCrossValidation:
    """Cross-validate I-MR limits against numpy."""

    def test_imr_matches_numpy(self, reference_series, reference_readings):
        arr = np.asarray(reference_readings)
        mr_bar = np.mean(np.abs(np.diff(arr)))
        sigma = mr_bar / 1.128

        output = compute_chart(reference_series, ChartConfig())

        assert output.baseline.mean == pytest.approx(np.mean(arr))
        assert output.baseline.sigma == pytest.approx(sigma)
        assert output.main.limits.ucl == pytest.approx(np.mean(arr) + 3 * sigma)
        assert output.main.limits.lcl == pytest.approx(np.mean(arr) - 3 * sigma)
        assert output.secondary.limits.ucl == pytest.approx(3.267 * mr_bar)


class TestXbarRCrossValidation:
    """Cross-validate X-bar R limits against numpy reshaping."""

    @pytest.mark.parametrize("n", [2, 3, 5, 6, 10])
    def test_xbar_r_matches_numpy(self, reference_series, reference_readings, n: int):
        arr = np.asarray(reference_readings)
        complete = len(arr) - len(arr) % n
        groups = arr[:complete].reshape(-1, n)
        means = groups.mean(axis=1)
        ranges = np.ptp(groups, axis=1)
        constants = lookup(n)

        output = compute_chart(
            reference_series, ChartConfig(chart_type=ChartType.XBAR_R, subgroup_size=n)
        )

        grand = np.mean(means)
        r_bar = np.mean(ranges)
        assert [p.value for p in output.main.points] == pytest.approx(list(means))
        assert output.main.limits.center_line == pytest.approx(grand)
        assert output.main.limits.ucl == pytest.approx(grand + constants.A2 * r_bar)
        assert output.main.limits.lcl == pytest.approx(grand - constants.A2 * r_bar)
        assert output.secondary.limits.ucl == pytest.approx(constants.D4 * r_bar)
        assert output.secondary.limits.lcl == pytest.approx(constants.D3 * r_bar)
        assert output.baseline.sigma == pytest.approx(r_bar / constants.d2)


class TestEwmaCrossValidation:
    """Cross-validate EWMA against a closed-form weighted sum."""

    def test_ewma_matches_closed_form(self, reference_series, reference_readings):
        lam = 0.2
        arr = np.asarray(reference_readings)
        mean = np.mean(arr)

        output = compute_chart(
            reference_series,
            ChartConfig(chart_type=ChartType.EWMA, ewma=EWMAParams(lambda_=lam, L=3.0)),
        )

        # z_i = lam * sum_{j<i} (1-lam)^j x_(i-j) + (1-lam)^i z_0
        for i, point in enumerate(output.main.points, start=1):
            weights = lam * (1 - lam) ** np.arange(i)
            expected = np.sum(weights * arr[:i][::-1]) + (1 - lam) ** i * mean
            assert point.value == pytest.approx(expected)

    def test_phase1_sigma_matches_numpy_ddof1(self, reference_series, reference_readings):
        output = compute_chart(reference_series, ChartConfig(chart_type=ChartType.EWMA))
        assert output.baseline.sigma == pytest.approx(np.std(reference_readings, ddof=1))


class TestCusumCrossValidation:
    """Cross-validate CUSUM against a direct loop with numpy scalars."""

    def test_cusum_matches_reference_loop(self, reference_series, reference_readings):
        arr = np.asarray(reference_readings)
        mean = np.mean(arr)
        sigma = np.std(arr, ddof=1)
        k_value = 0.25 * sigma

        c_plus = [0.0]
        c_minus = [0.0]
        for x in arr:
            c_plus.append(max(0.0, x - (mean + k_value) + c_plus[-1]))
            c_minus.append(max(0.0, (mean - k_value) - x + c_minus[-1]))

        output = compute_chart(
            reference_series,
            ChartConfig(chart_type=ChartType.CUSUM, cusum=CUSUMParams(h=4.0, k=0.25)),
        )

        assert [p.value for p in output.main.points] == pytest.approx(c_plus[1:])
        assert [p.value for p in output.secondary.points] == pytest.approx(c_minus[1:])
        assert output.main.limits.ucl == pytest.approx(4.0 * sigma)
