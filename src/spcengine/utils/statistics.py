"""Statistical functions for SPC control chart calculations.

This module provides functions for:
- Location and dispersion of a series (mean, sample standard deviation)
- Sigma estimation (R-bar/d2 and moving range methods)
- Control limit calculations from a center line and sigma
- EWMA limit scaling terms

Degenerate input never raises here: the mean of an empty sequence is 0.0
and the standard deviation of fewer than two values is 0.0.
"""

import math
from dataclasses import dataclass
from typing import List, Sequence, Union

import numpy as np

from .constants import individuals_constants, lookup

Limit = Union[float, tuple[float, ...]]


@dataclass(frozen=True)
class ControlLimits:
    """Control limits for a control chart.

    Attributes:
        center_line: Center line of the chart
        ucl: Upper Control Limit, or one value per point for time-varying limits
        lcl: Lower Control Limit, or one value per point for time-varying limits
    """
    center_line: float
    ucl: Limit
    lcl: Limit

    @property
    def is_time_varying(self) -> bool:
        return isinstance(self.ucl, tuple)


def calculate_mean(values: Sequence[float]) -> float:
    """Arithmetic mean, 0.0 for an empty sequence."""
    if len(values) == 0:
        return 0.0
    return float(np.mean(values))


def calculate_std_dev(values: Sequence[float]) -> float:
    """Sample standard deviation (n-1 denominator).

    A single value has no spread, so fewer than two values give 0.0
    rather than NaN.

    Examples:
        >>> round(calculate_std_dev([2, 4, 4, 4, 5, 5, 7, 9]), 4)
        2.1381
        >>> calculate_std_dev([3.0])
        0.0
    """
    if len(values) < 2:
        return 0.0
    return float(np.std(values, ddof=1))


def calculate_mean_range(values: List[float]) -> tuple[float, float | None]:
    """Calculate mean and range from a list of measurement values.

    Args:
        values: Non-empty list of measurement values.

    Returns:
        Tuple of (mean, range). Range is None for single values.
    """
    if not values:
        return 0.0, None
    mean = sum(values) / len(values)
    range_val = (max(values) - min(values)) if len(values) > 1 else None
    return mean, range_val


def calculate_moving_ranges(values: Sequence[float]) -> list[float]:
    """Absolute differences between consecutive values (span 2).

    Returns N-1 values for N inputs, empty for fewer than two.
    """
    if len(values) < 2:
        return []
    arr = np.asarray(values, dtype=np.float64)
    return [float(mr) for mr in np.abs(np.diff(arr))]


def estimate_sigma_moving_range(values: Sequence[float]) -> float:
    """Estimate process sigma for individuals (n=1) using MR-bar / d2.

    Examples:
        >>> round(estimate_sigma_moving_range([10, 12, 11, 13]), 3)
        1.478
    """
    mr_bar = calculate_mean(calculate_moving_ranges(values))
    return mr_bar / individuals_constants().d2


def estimate_sigma_rbar(ranges: Sequence[float], subgroup_size: int) -> float:
    """Estimate process sigma using the R-bar/d2 method.

    Args:
        ranges: List of subgroup ranges
        subgroup_size: The subgroup size (n), must be between 2 and 10

    Returns:
        Estimated process standard deviation (sigma), 0.0 for no ranges

    Raises:
        SubgroupSizeOutOfRangeError: If subgroup_size is not 2-10
        ValueError: If any range is negative
    """
    d2 = lookup(subgroup_size).d2

    if any(r < 0 for r in ranges):
        raise ValueError("Ranges cannot be negative")

    return calculate_mean(ranges) / d2


def calculate_control_limits_from_sigma(
    center_line: float,
    sigma: float,
    n_sigma: float = 3.0
) -> ControlLimits:
    """Calculate symmetric control limits given center line and sigma.

    A zero sigma is accepted and collapses both limits onto the center line.

    Raises:
        ValueError: If sigma or n_sigma is negative

    Examples:
        >>> limits = calculate_control_limits_from_sigma(100.0, 2.0)
        >>> limits.ucl, limits.lcl
        (106.0, 94.0)
    """
    if sigma < 0:
        raise ValueError(f"Sigma cannot be negative, got {sigma}")

    if n_sigma < 0:
        raise ValueError(f"n_sigma cannot be negative, got {n_sigma}")

    return ControlLimits(
        center_line=center_line,
        ucl=center_line + n_sigma * sigma,
        lcl=center_line - n_sigma * sigma,
    )


def ewma_limit_term(lam: float, i: int) -> float:
    """Width factor of the EWMA limits at point i (1-based).

    sqrt(lambda / (2 - lambda) * (1 - (1 - lambda)^(2i)))
    """
    return math.sqrt((lam / (2 - lam)) * (1 - (1 - lam) ** (2 * i)))


def ewma_asymptotic_term(lam: float) -> float:
    """Limit of ewma_limit_term as i grows: sqrt(lambda / (2 - lambda))."""
    return math.sqrt(lam / (2 - lam))
