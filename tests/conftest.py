"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from spcengine.utils.parsing import MeasurementSeries

# Thirty individual readings centred near 10
REFERENCE_READINGS = [
    9.45, 7.99, 9.29, 11.66, 12.16, 10.18, 8.04, 11.46, 9.20, 10.34,
    9.03, 11.47, 10.51, 9.40, 10.08, 9.37, 10.62, 10.31, 8.52, 10.84,
    10.90, 9.33, 12.29, 11.50, 10.60, 11.08, 10.38, 11.62, 11.31, 10.52,
]


@pytest.fixture
def reference_readings() -> list[float]:
    """Reference readings as plain floats."""
    return list(REFERENCE_READINGS)


@pytest.fixture
def reference_text() -> str:
    """Reference readings as raw text, one per line."""
    return "\n".join(f"{v:.2f}" for v in REFERENCE_READINGS)


@pytest.fixture
def reference_series() -> MeasurementSeries:
    """Reference readings as a parsed series."""
    return MeasurementSeries.from_values(REFERENCE_READINGS)
