"""Pydantic schemas for SPC engine input."""

from .chart import (
    BaselineInput,
    ChartConfig,
    ChartType,
    CUSUMParams,
    EWMAParams,
    Phase,
    SpecLimits,
)

__all__ = [
    "BaselineInput",
    "ChartConfig",
    "ChartType",
    "CUSUMParams",
    "EWMAParams",
    "Phase",
    "SpecLimits",
]
