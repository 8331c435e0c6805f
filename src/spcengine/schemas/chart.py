"""Pydantic schemas for chart computation input.

Schemas for chart selection, baseline phase, chart tunables and
specification limits.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing_extensions import Self

from spcengine.utils.constants import MAX_SUBGROUP_SIZE, MIN_SUBGROUP_SIZE

DEFAULT_XBAR_SUBGROUP_SIZE = 5


class ChartType(str, Enum):
    """Supported control chart families."""

    IMR = "imr"
    XBAR_R = "xbar-r"
    EWMA = "ewma"
    CUSUM = "cusum"


class Phase(str, Enum):
    """Baseline estimation mode.

    PHASE1 estimates mean and sigma from the data; PHASE2 uses a
    supplied baseline.
    """

    PHASE1 = "phase1"
    PHASE2 = "phase2"


class BaselineInput(BaseModel):
    """Externally supplied process baseline for phase 2."""

    model_config = ConfigDict(frozen=True)

    mean: float
    sigma: float = Field(..., ge=0)


class EWMAParams(BaseModel):
    """EWMA tunables.

    Attributes:
        lambda_: Weight given to the newest observation, in (0, 1]
        L: Control limit width in sigma units
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    lambda_: float = Field(default=0.1, gt=0, le=1, alias="lambda")
    L: float = Field(default=2.7, gt=0)


class CUSUMParams(BaseModel):
    """Tabular CUSUM tunables, both in sigma units.

    Attributes:
        h: Decision interval factor (H = h * sigma)
        k: Slack factor (K = k * sigma)
    """

    model_config = ConfigDict(frozen=True)

    h: float = Field(default=5.0, gt=0)
    k: float = Field(default=0.5, ge=0)


class ChartConfig(BaseModel):
    """Everything a chart strategy needs besides the data.

    Attributes:
        chart_type: Which chart family to compute
        phase: Baseline estimation mode
        baseline: Supplied mean and sigma, required for phase 2
        subgroup_size: X-bar R subgroup size (default 5), or optional
            grouping size for EWMA/CUSUM (default 1, ungrouped)
        ewma: EWMA tunables
        cusum: CUSUM tunables
    """

    model_config = ConfigDict(frozen=True)

    chart_type: ChartType = ChartType.IMR
    phase: Phase = Phase.PHASE1
    baseline: BaselineInput | None = None
    subgroup_size: int | None = None
    ewma: EWMAParams = Field(default_factory=EWMAParams)
    cusum: CUSUMParams = Field(default_factory=CUSUMParams)

    @model_validator(mode="after")
    def validate_phase_baseline(self) -> Self:
        """Phase 2 cannot run without a supplied baseline."""
        if self.phase == Phase.PHASE2 and self.baseline is None:
            raise ValueError("baseline is required when phase is phase2")
        return self

    @model_validator(mode="after")
    def validate_subgroup_size(self) -> Self:
        """Reject X-bar R subgroup sizes with no tabulated constants."""
        if (
            self.chart_type == ChartType.XBAR_R
            and self.subgroup_size is not None
            and self.subgroup_size > MAX_SUBGROUP_SIZE
        ):
            raise ValueError(
                f"X-bar R subgroup size must be between {MIN_SUBGROUP_SIZE} "
                f"and {MAX_SUBGROUP_SIZE}, got {self.subgroup_size}"
            )
        return self

    @property
    def effective_subgroup_size(self) -> int:
        """Subgroup size actually used for the selected chart.

        X-bar R falls back to 5 when no size, or a size below 2, is given.
        IMR is always ungrouped; EWMA and CUSUM group only for sizes above 1.
        """
        size = self.subgroup_size
        if self.chart_type == ChartType.XBAR_R:
            if size is None or size < MIN_SUBGROUP_SIZE:
                return DEFAULT_XBAR_SUBGROUP_SIZE
            return size
        if self.chart_type == ChartType.IMR or size is None or size < 1:
            return 1
        return size

    @property
    def is_grouped(self) -> bool:
        return self.effective_subgroup_size > 1


class SpecLimits(BaseModel):
    """Optional specification limits for capability analysis.

    Any of the three may be absent; indices that need a missing limit
    come out as None. Limits are not reordered: a USL below the LSL
    yields negative indices.
    """

    model_config = ConfigDict(frozen=True)

    usl: float | None = None
    lsl: float | None = None
    target: float | None = None

    @property
    def effective_target(self) -> float | None:
        """Explicit target, else the midpoint of USL and LSL when both exist."""
        if self.target is not None:
            return self.target
        if self.usl is not None and self.lsl is not None:
            return (self.usl + self.lsl) / 2
        return None
