"""SPC Engine orchestrator running raw text through the complete SPC pipeline.

This module provides the SPCEngine class that coordinates parsing, chart
computation and capability analysis into one result bundle.
"""

import time
from dataclasses import asdict, dataclass
from typing import Any

import structlog

from spcengine.core.engine.capability import CapabilityResult, calculate_capability
from spcengine.core.engine.charts import Baseline, ChartResult, compute_chart
from spcengine.schemas.chart import ChartConfig, ChartType, Phase, SpecLimits
from spcengine.utils.parsing import MeasurementSeries, parse_series

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    """Result of one analysis run, handed to the presentation layer.

    Attributes:
        chart_type: Chart family that was computed
        phase: Baseline estimation mode used
        series: Parsed readings
        main: Primary chart
        secondary: Companion chart, None for EWMA
        baseline: Mean and sigma behind the limits and capability
        capability: Cp, Cpk, Cpu, Cpl
        spec_limits: Specification limits the capability was computed against
    """

    chart_type: ChartType
    phase: Phase
    series: MeasurementSeries
    main: ChartResult
    secondary: ChartResult | None
    baseline: Baseline
    capability: CapabilityResult
    spec_limits: SpecLimits

    def to_dict(self) -> dict[str, Any]:
        """Plain, JSON-serialisable representation."""
        data = asdict(self)
        data["chart_type"] = self.chart_type.value
        data["phase"] = self.phase.value
        data["spec_limits"] = {
            **self.spec_limits.model_dump(),
            "effective_target": self.spec_limits.effective_target,
        }
        return data


class SPCEngine:
    """Main SPC analysis engine.

    Orchestrates the complete pipeline:
    1. Parses raw text into a measurement series
    2. Runs the chart strategy selected by the configuration
    3. Calculates capability indices from the resulting baseline
    4. Returns everything as one AnalysisResult

    The engine keeps no state between calls. Every call takes the full
    input and the same input always produces an equal result, so callers
    simply re-invoke it whenever the input changes.
    """

    def analyze(
        self,
        raw_text: str,
        config: ChartConfig,
        spec_limits: SpecLimits | None = None,
    ) -> AnalysisResult:
        """Analyze raw measurement text.

        Args:
            raw_text: Measurements, one record per line, separated by
                commas, tabs or spaces
            config: Chart selection, phase and tunables
            spec_limits: Optional USL/LSL/target for capability

        Returns:
            AnalysisResult with chart data, baseline and capability
        """
        return self.analyze_series(parse_series(raw_text), config, spec_limits)

    def analyze_series(
        self,
        series: MeasurementSeries,
        config: ChartConfig,
        spec_limits: SpecLimits | None = None,
    ) -> AnalysisResult:
        """Analyze an already-parsed series."""
        start_time = time.perf_counter()
        spec_limits = spec_limits or SpecLimits()

        output = compute_chart(series, config)
        capability = calculate_capability(
            output.baseline,
            usl=spec_limits.usl,
            lsl=spec_limits.lsl,
        )

        result = AnalysisResult(
            chart_type=config.chart_type,
            phase=config.phase,
            series=series,
            main=output.main,
            secondary=output.secondary,
            baseline=output.baseline,
            capability=capability,
            spec_limits=spec_limits,
        )

        if output.baseline.sigma == 0:
            logger.info(
                "degenerate_sigma",
                chart_type=config.chart_type.value,
                readings=len(series),
            )

        logger.debug(
            "chart_computed",
            chart_type=config.chart_type.value,
            phase=config.phase.value,
            readings=len(series),
            points=len(output.main.points),
            mean=output.baseline.mean,
            sigma=output.baseline.sigma,
            processing_time_ms=(time.perf_counter() - start_time) * 1000,
        )

        return result


def analyze(
    raw_text: str,
    config: ChartConfig | None = None,
    spec_limits: SpecLimits | None = None,
) -> AnalysisResult:
    """Convenience wrapper: ``SPCEngine().analyze`` with a default IMR config."""
    return SPCEngine().analyze(raw_text, config or ChartConfig(), spec_limits)
