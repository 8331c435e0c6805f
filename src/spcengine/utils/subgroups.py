"""Partitioning of a measurement series into fixed-size subgroups."""

from dataclasses import dataclass

import structlog

from spcengine.utils.parsing import MeasurementSeries, Reading
from spcengine.utils.statistics import calculate_mean_range

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Subgroup:
    """A complete window of consecutive readings.

    Attributes:
        index: 1-based position of the subgroup in the run
        readings: Exactly n readings, in time order
        mean: Average of the readings
        range: max - min of the readings (0 for n=1)
    """
    index: int
    readings: tuple[Reading, ...]
    mean: float
    range: float

    @property
    def values(self) -> list[float]:
        return [r.value for r in self.readings]

    @property
    def size(self) -> int:
        return len(self.readings)


def group(series: MeasurementSeries, subgroup_size: int) -> list[Subgroup]:
    """Split a series into non-overlapping subgroups of subgroup_size.

    Only complete windows are emitted; a trailing remainder shorter than
    subgroup_size is dropped.

    Args:
        series: Parsed measurement series
        subgroup_size: Readings per subgroup, at least 1

    Raises:
        ValueError: If subgroup_size is less than 1

    Examples:
        >>> s = MeasurementSeries.from_values([1, 2, 3, 4, 5])
        >>> [g.values for g in group(s, 2)]
        [[1.0, 2.0], [3.0, 4.0]]
    """
    if subgroup_size < 1:
        raise ValueError(f"Subgroup size must be at least 1, got {subgroup_size}")

    readings = series.readings
    complete = len(readings) - len(readings) % subgroup_size

    subgroups = []
    for start in range(0, complete, subgroup_size):
        window = readings[start:start + subgroup_size]
        mean, range_val = calculate_mean_range([r.value for r in window])
        subgroups.append(Subgroup(
            index=len(subgroups) + 1,
            readings=window,
            mean=mean,
            range=range_val if range_val is not None else 0.0,
        ))

    if complete < len(readings):
        logger.debug(
            "partial_subgroup_dropped",
            subgroup_size=subgroup_size,
            leftover=len(readings) - complete,
        )

    return subgroups
