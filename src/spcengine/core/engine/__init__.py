"""SPC Engine - control chart and capability calculations."""

from .capability import CapabilityResult, calculate_capability
from .charts import (
    Baseline,
    ChartOutput,
    ChartPoint,
    ChartResult,
    ChartStrategy,
    CUSUMChart,
    EWMAChart,
    IMRChart,
    Overlay,
    XbarRChart,
    compute_chart,
    get_strategy,
)
from .spc_engine import AnalysisResult, SPCEngine, analyze

__all__ = [
    # SPC Engine
    "SPCEngine",
    "AnalysisResult",
    "analyze",
    # Charts
    "Baseline",
    "ChartOutput",
    "ChartPoint",
    "ChartResult",
    "ChartStrategy",
    "Overlay",
    "IMRChart",
    "XbarRChart",
    "EWMAChart",
    "CUSUMChart",
    "compute_chart",
    "get_strategy",
    # Capability
    "CapabilityResult",
    "calculate_capability",
]
