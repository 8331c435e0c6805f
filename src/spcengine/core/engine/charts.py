"""Control chart strategies.

One strategy per chart family, all sharing ``compute(series, config)``:

- IMR: individuals with moving range, sigma from MR-bar / d2
- X-bar R: subgroup means with ranges, limits from A2 / D3 / D4
- EWMA: exponentially weighted moving average with time-varying limits
- CUSUM: two-sided tabular cumulative sums

Strategies hold no state. Recursive accumulators (EWMA z, CUSUM C+ and C-)
live only for the duration of a single compute call.
"""

from dataclasses import dataclass
from typing import Protocol

import structlog

from spcengine.schemas.chart import ChartConfig, ChartType, Phase
from spcengine.utils.constants import individuals_constants, lookup
from spcengine.utils.parsing import MeasurementSeries
from spcengine.utils.statistics import (
    ControlLimits,
    calculate_control_limits_from_sigma,
    calculate_mean,
    calculate_moving_ranges,
    calculate_std_dev,
    estimate_sigma_moving_range,
    estimate_sigma_rbar,
    ewma_limit_term,
)
from spcengine.utils.subgroups import group

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Baseline:
    """Process location and dispersion used for limits and capability.

    Attributes:
        mean: Process mean (center line)
        sigma: Process standard deviation, >= 0. Zero is legal and
            means capability is undefined.
        estimated: True when derived from the data (phase 1), False when
            supplied externally (phase 2)
    """
    mean: float
    sigma: float
    estimated: bool = True


@dataclass(frozen=True)
class ChartPoint:
    index: int
    value: float


@dataclass(frozen=True)
class Overlay:
    """Auxiliary series drawn over a chart, not used in any computation.

    Attributes:
        points: Observations to overlay
        reference: Reference level, e.g. the baseline mean
    """
    points: tuple[ChartPoint, ...]
    reference: float


@dataclass(frozen=True)
class ChartResult:
    """One plotted chart: its series, limits and title."""
    points: tuple[ChartPoint, ...]
    limits: ControlLimits
    label: str
    overlay: Overlay | None = None


@dataclass(frozen=True)
class ChartOutput:
    """Everything a strategy produces for one run.

    Attributes:
        main: Primary chart (I, X-bar, EWMA or upper CUSUM)
        secondary: Companion chart (MR, R or lower CUSUM), None for EWMA
        baseline: Mean and sigma the limits were built from
    """
    main: ChartResult
    secondary: ChartResult | None
    baseline: Baseline


def _points(pairs) -> tuple[ChartPoint, ...]:
    return tuple(ChartPoint(index=i, value=v) for i, v in pairs)


def _select_baseline(config: ChartConfig, mean: float, sigma: float) -> Baseline:
    """Return the supplied baseline in phase 2, else the estimates."""
    if config.phase == Phase.PHASE2:
        return Baseline(
            mean=config.baseline.mean,
            sigma=config.baseline.sigma,
            estimated=False,
        )
    return Baseline(mean=mean, sigma=sigma, estimated=True)


def _chart_values(series: MeasurementSeries, config: ChartConfig) -> list[tuple[int, float]]:
    """Indexed values a chart runs on: readings, or subgroup means when grouped."""
    if config.is_grouped:
        return [(g.index, g.mean) for g in group(series, config.effective_subgroup_size)]
    return [(r.position, r.value) for r in series]


class ChartStrategy(Protocol):
    """Protocol for chart family implementations.

    Each chart declares its chart type and implements compute.
    """

    @property
    def chart_type(self) -> ChartType:
        """Chart family this strategy computes."""
        ...

    def compute(self, series: MeasurementSeries, config: ChartConfig) -> ChartOutput:
        """Compute chart series, limits and baseline for one run.

        Args:
            series: Parsed readings in time order
            config: Phase, baseline and tunables

        Returns:
            ChartOutput with main and optional secondary chart
        """
        ...


class IMRChart:
    """Individuals and Moving Range chart."""

    chart_type = ChartType.IMR

    def compute(self, series: MeasurementSeries, config: ChartConfig) -> ChartOutput:
        values = series.values
        moving_ranges = calculate_moving_ranges(values)
        mr_bar = calculate_mean(moving_ranges)
        constants = individuals_constants()

        baseline = _select_baseline(
            config,
            mean=calculate_mean(values),
            sigma=estimate_sigma_moving_range(values),
        )

        individuals = ChartResult(
            points=_points((r.position, r.value) for r in series),
            limits=calculate_control_limits_from_sigma(baseline.mean, baseline.sigma),
            label="Individuals (I)",
        )

        # MR_i pairs readings i-1 and i, so the first range sits at index 2
        mr_chart = ChartResult(
            points=_points(
                (r.position, mr) for r, mr in zip(series.readings[1:], moving_ranges)
            ),
            limits=ControlLimits(
                center_line=mr_bar,
                ucl=constants.D4 * mr_bar,
                lcl=constants.D3 * mr_bar,
            ),
            label="Moving Range (MR)",
        )

        return ChartOutput(main=individuals, secondary=mr_chart, baseline=baseline)


class XbarRChart:
    """X-bar and Range chart.

    Sigma always comes from R-bar / d2. In phase 2 only the center line is
    taken from the supplied baseline.
    """

    chart_type = ChartType.XBAR_R

    def compute(self, series: MeasurementSeries, config: ChartConfig) -> ChartOutput:
        subgroup_size = config.effective_subgroup_size
        constants = lookup(subgroup_size)
        subgroups = group(series, subgroup_size)

        means = [g.mean for g in subgroups]
        ranges = [g.range for g in subgroups]
        r_bar = calculate_mean(ranges)
        sigma = estimate_sigma_rbar(ranges, subgroup_size)

        if config.phase == Phase.PHASE2:
            baseline = Baseline(mean=config.baseline.mean, sigma=sigma, estimated=False)
        else:
            baseline = Baseline(mean=calculate_mean(means), sigma=sigma, estimated=True)

        xbar_chart = ChartResult(
            points=_points((g.index, g.mean) for g in subgroups),
            limits=ControlLimits(
                center_line=baseline.mean,
                ucl=baseline.mean + constants.A2 * r_bar,
                lcl=baseline.mean - constants.A2 * r_bar,
            ),
            label="X-bar",
        )

        r_chart = ChartResult(
            points=_points((g.index, g.range) for g in subgroups),
            limits=ControlLimits(
                center_line=r_bar,
                ucl=constants.D4 * r_bar,
                lcl=constants.D3 * r_bar,
            ),
            label="Range (R)",
        )

        return ChartOutput(main=xbar_chart, secondary=r_chart, baseline=baseline)


class EWMAChart:
    """Exponentially Weighted Moving Average chart.

    z_0 is the baseline mean and z_i = lambda * x_i + (1 - lambda) * z_(i-1).
    Limits widen with i towards mean +/- L * sigma * sqrt(lambda / (2 - lambda)).
    """

    chart_type = ChartType.EWMA

    def compute(self, series: MeasurementSeries, config: ChartConfig) -> ChartOutput:
        indexed = _chart_values(series, config)
        values = [v for _, v in indexed]
        lam = config.ewma.lambda_
        width = config.ewma.L

        baseline = _select_baseline(
            config,
            mean=calculate_mean(values),
            sigma=calculate_std_dev(values),
        )

        z = baseline.mean
        ewma_points = []
        ucl = []
        lcl = []
        for i, (index, x) in enumerate(indexed, start=1):
            z = lam * x + (1 - lam) * z
            ewma_points.append((index, z))
            half_width = width * baseline.sigma * ewma_limit_term(lam, i)
            ucl.append(baseline.mean + half_width)
            lcl.append(baseline.mean - half_width)

        ewma_chart = ChartResult(
            points=_points(ewma_points),
            limits=ControlLimits(
                center_line=baseline.mean,
                ucl=tuple(ucl),
                lcl=tuple(lcl),
            ),
            label=f"EWMA (λ={lam}, L={width})",
        )

        return ChartOutput(main=ewma_chart, secondary=None, baseline=baseline)


class CUSUMChart:
    """Two-sided tabular CUSUM.

    C+_i = max(0, x_i - (mean + K) + C+_(i-1))
    C-_i = max(0, (mean - K) - x_i + C-_(i-1))

    with K = k * sigma and both sums starting at 0. The decision interval
    H = h * sigma is the upper limit of both status charts; flagging sums
    above H is left to the caller.
    """

    chart_type = ChartType.CUSUM

    def compute(self, series: MeasurementSeries, config: ChartConfig) -> ChartOutput:
        indexed = _chart_values(series, config)
        values = [v for _, v in indexed]

        baseline = _select_baseline(
            config,
            mean=calculate_mean(values),
            sigma=calculate_std_dev(values),
        )
        slack = config.cusum.k * baseline.sigma
        decision = config.cusum.h * baseline.sigma

        c_plus = 0.0
        c_minus = 0.0
        upper_points = []
        lower_points = []
        for index, x in indexed:
            c_plus = max(0.0, x - (baseline.mean + slack) + c_plus)
            c_minus = max(0.0, (baseline.mean - slack) - x + c_minus)
            upper_points.append((index, c_plus))
            lower_points.append((index, c_minus))

        overlay = Overlay(points=_points(indexed), reference=baseline.mean)
        limits = ControlLimits(center_line=0.0, ucl=decision, lcl=0.0)

        upper = ChartResult(
            points=_points(upper_points),
            limits=limits,
            label="Upper CUSUM (C+)",
            overlay=overlay,
        )
        lower = ChartResult(
            points=_points(lower_points),
            limits=limits,
            label="Lower CUSUM (C-)",
            overlay=overlay,
        )

        return ChartOutput(main=upper, secondary=lower, baseline=baseline)


_STRATEGIES: dict[ChartType, ChartStrategy] = {
    strategy.chart_type: strategy
    for strategy in (IMRChart(), XbarRChart(), EWMAChart(), CUSUMChart())
}


def get_strategy(chart_type: ChartType) -> ChartStrategy:
    """Return the strategy registered for a chart type."""
    return _STRATEGIES[ChartType(chart_type)]


def compute_chart(series: MeasurementSeries, config: ChartConfig) -> ChartOutput:
    """Run the strategy selected by config.chart_type over a series."""
    strategy = get_strategy(config.chart_type)
    logger.debug(
        "chart_strategy_selected",
        chart_type=config.chart_type.value,
        strategy=type(strategy).__name__,
        readings=len(series),
    )
    return strategy.compute(series, config)
