"""Statistical Process Control engine.

Parses raw measurement text and computes IMR, X-bar R, EWMA and CUSUM
control charts together with Cp/Cpk capability indices.
"""

from spcengine.core.engine import (
    AnalysisResult,
    Baseline,
    CapabilityResult,
    ChartPoint,
    ChartResult,
    SPCEngine,
    analyze,
    calculate_capability,
    compute_chart,
)
from spcengine.exceptions import SPCEngineError, SubgroupSizeOutOfRangeError
from spcengine.schemas import (
    BaselineInput,
    ChartConfig,
    ChartType,
    CUSUMParams,
    EWMAParams,
    Phase,
    SpecLimits,
)
from spcengine.utils.parsing import MeasurementSeries, parse_series

__version__ = "0.1.0"

__all__ = [
    "AnalysisResult",
    "Baseline",
    "BaselineInput",
    "CapabilityResult",
    "ChartConfig",
    "ChartPoint",
    "ChartResult",
    "ChartType",
    "CUSUMParams",
    "EWMAParams",
    "MeasurementSeries",
    "Phase",
    "SPCEngine",
    "SPCEngineError",
    "SpecLimits",
    "SubgroupSizeOutOfRangeError",
    "analyze",
    "calculate_capability",
    "compute_chart",
    "parse_series",
]
