"""Utilities for SPC engine parsing, grouping and statistics."""

from .constants import (
    SpcConstants,
    individuals_constants,
    is_supported,
    lookup,
)

from .parsing import (
    MeasurementSeries,
    Reading,
    parse_line,
    parse_series,
    parse_token,
)

from .statistics import (
    ControlLimits,
    calculate_control_limits_from_sigma,
    calculate_mean,
    calculate_moving_ranges,
    calculate_std_dev,
    estimate_sigma_moving_range,
    estimate_sigma_rbar,
    ewma_asymptotic_term,
    ewma_limit_term,
)

from .subgroups import Subgroup, group

__all__ = [
    # Constants
    "SpcConstants",
    "individuals_constants",
    "is_supported",
    "lookup",
    # Parsing
    "MeasurementSeries",
    "Reading",
    "parse_line",
    "parse_series",
    "parse_token",
    # Grouping
    "Subgroup",
    "group",
    # Data classes
    "ControlLimits",
    # Statistics
    "calculate_mean",
    "calculate_std_dev",
    "calculate_moving_ranges",
    "estimate_sigma_moving_range",
    "estimate_sigma_rbar",
    "calculate_control_limits_from_sigma",
    "ewma_limit_term",
    "ewma_asymptotic_term",
]
