"""Parsing of raw measurement text into an ordered series of readings.

Input is free text: one record per line, values separated by runs of
commas, tabs or spaces. Anything that is not a number is skipped.
"""

import math
import re
from dataclasses import dataclass
from typing import Optional

import structlog

logger = structlog.get_logger(__name__)

_SEPARATORS = re.compile(r"[,\s]+")


@dataclass(frozen=True)
class Reading:
    """A single measurement and its 1-based position in the series."""
    position: int
    value: float


@dataclass(frozen=True)
class MeasurementSeries:
    """Time-ordered sequence of readings."""
    readings: tuple[Reading, ...] = ()

    @property
    def values(self) -> list[float]:
        return [r.value for r in self.readings]

    def __len__(self) -> int:
        return len(self.readings)

    def __iter__(self):
        return iter(self.readings)

    @classmethod
    def from_values(cls, values) -> "MeasurementSeries":
        """Build a series from already-parsed numbers."""
        return cls(tuple(
            Reading(position=i + 1, value=float(v)) for i, v in enumerate(values)
        ))


def parse_token(text: str) -> Optional[float]:
    """Parse one token as a number.

    Returns None for anything that is not a finite number, including
    empty strings, "nan", "inf" and underscore-grouped digits like "1_000".

    Examples:
        >>> parse_token("3.5")
        3.5
        >>> parse_token("abc") is None
        True
    """
    if "_" in text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def _split_line(line: str) -> list[str]:
    return _SEPARATORS.split(line.strip())


def parse_line(line: str) -> list[float]:
    """Parse every numeric token of a line, preserving order.

    Examples:
        >>> parse_line("1,2  3\\t4")
        [1.0, 2.0, 3.0, 4.0]
        >>> parse_line("a,1,b,2")
        [1.0, 2.0]
    """
    values = []
    for token in _split_line(line):
        value = parse_token(token)
        if value is not None:
            values.append(value)
    return values


def parse_series(raw_text: str) -> MeasurementSeries:
    """Parse a raw text blob into a MeasurementSeries.

    Blank lines are discarded, lines are parsed in order and their values
    concatenated. Never raises: empty or fully invalid input yields an
    empty series.
    """
    values: list[float] = []
    rejected = 0
    for line in raw_text.splitlines():
        if not line.strip():
            continue
        tokens = [t for t in _split_line(line) if t]
        parsed = parse_line(line)
        rejected += len(tokens) - len(parsed)
        values.extend(parsed)

    if rejected:
        logger.debug("tokens_rejected", rejected=rejected, accepted=len(values))

    return MeasurementSeries.from_values(values)
