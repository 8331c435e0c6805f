"""Statistical constants for SPC control chart calculations.

Constants from ASTM E2587 and NIST Engineering Statistics Handbook.
Only subgroup sizes 2-10 are tabulated; the R-bar method these constants
serve is not recommended outside that range.
"""

from dataclasses import dataclass
from typing import Dict

from spcengine.exceptions import SubgroupSizeOutOfRangeError

MIN_SUBGROUP_SIZE = 2
MAX_SUBGROUP_SIZE = 10


@dataclass(frozen=True)
class SpcConstants:
    """Statistical constants for a given subgroup size.

    Attributes:
        n: Subgroup size
        A2: Factor for X-bar chart control limits from R-bar
        D3: Lower control limit factor for R chart
        D4: Upper control limit factor for R chart
        d2: Average range factor (used for sigma estimation from R-bar)
    """
    n: int
    A2: float
    D3: float
    D4: float
    d2: float


_CONSTANTS_TABLE: Dict[int, SpcConstants] = {
    2: SpcConstants(n=2, A2=1.880, D3=0.0, D4=3.267, d2=1.128),
    3: SpcConstants(n=3, A2=1.023, D3=0.0, D4=2.574, d2=1.693),
    4: SpcConstants(n=4, A2=0.729, D3=0.0, D4=2.282, d2=2.059),
    5: SpcConstants(n=5, A2=0.577, D3=0.0, D4=2.114, d2=2.326),
    6: SpcConstants(n=6, A2=0.483, D3=0.0, D4=2.004, d2=2.534),
    7: SpcConstants(n=7, A2=0.419, D3=0.076, D4=1.924, d2=2.704),
    8: SpcConstants(n=8, A2=0.373, D3=0.136, D4=1.864, d2=2.847),
    9: SpcConstants(n=9, A2=0.337, D3=0.184, D4=1.816, d2=2.970),
    10: SpcConstants(n=10, A2=0.308, D3=0.223, D4=1.777, d2=3.078),
}


def is_supported(subgroup_size: int) -> bool:
    """Return True if constants are tabulated for this subgroup size."""
    return subgroup_size in _CONSTANTS_TABLE


def lookup(subgroup_size: int) -> SpcConstants:
    """Get SPC constants for a given subgroup size.

    Args:
        subgroup_size: The subgroup size (n), must be between 2 and 10

    Returns:
        SpcConstants object containing A2, D3, D4, d2 for the given n

    Raises:
        SubgroupSizeOutOfRangeError: If subgroup_size is not between 2 and 10.
            There is no fallback row.

    Examples:
        >>> lookup(5).A2
        0.577
        >>> lookup(10).d2
        3.078
    """
    try:
        return _CONSTANTS_TABLE[subgroup_size]
    except KeyError:
        raise SubgroupSizeOutOfRangeError(
            subgroup_size, MIN_SUBGROUP_SIZE, MAX_SUBGROUP_SIZE
        ) from None


def individuals_constants() -> SpcConstants:
    """Constants for individual measurements (n=1).

    Individuals charts estimate dispersion from moving ranges of span 2,
    so they use the n=2 row: d2=1.128, D3=0, D4=3.267.
    """
    return _CONSTANTS_TABLE[2]
