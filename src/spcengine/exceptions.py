"""Exceptions raised by the SPC engine.

Data-shape problems (bad tokens, short series, zero variance) never raise;
they degrade to empty or null results. Only configuration the engine cannot
honour is reported through these types.
"""


class SPCEngineError(Exception):
    """Base class for SPC engine errors."""


class SubgroupSizeOutOfRangeError(SPCEngineError, ValueError):
    """Raised when no control chart constants exist for a subgroup size."""

    def __init__(self, subgroup_size: int, minimum: int, maximum: int):
        self.subgroup_size = subgroup_size
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(
            f"Subgroup size must be between {minimum} and {maximum}, got {subgroup_size}"
        )
