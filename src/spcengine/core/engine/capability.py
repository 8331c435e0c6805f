"""Process capability indices from a baseline and specification limits.

Cp  = (USL - LSL) / 6 sigma
Cpu = (USL - mean) / 3 sigma
Cpl = (mean - LSL) / 3 sigma
Cpk = min(Cpu, Cpl), or whichever one side exists

Every index is None when a limit it needs is missing or sigma <= 0.
"""

from dataclasses import dataclass

from spcengine.core.engine.charts import Baseline


@dataclass(frozen=True)
class CapabilityResult:
    """Capability indices, each independently nullable."""
    cp: float | None = None
    cpk: float | None = None
    cpu: float | None = None
    cpl: float | None = None


def calculate_capability(
    baseline: Baseline,
    usl: float | None = None,
    lsl: float | None = None,
) -> CapabilityResult:
    """Calculate Cp, Cpk, Cpu and Cpl.

    Args:
        baseline: Process mean and sigma
        usl: Upper Specification Limit, if any
        lsl: Lower Specification Limit, if any

    Returns:
        CapabilityResult. A degenerate process (sigma <= 0) gives all None.

    Examples:
        >>> result = calculate_capability(Baseline(mean=10.0, sigma=1.0), usl=13.0, lsl=7.0)
        >>> result.cp, result.cpk
        (1.0, 1.0)
    """
    sigma = baseline.sigma
    if sigma <= 0:
        return CapabilityResult()

    cpu = (usl - baseline.mean) / (3 * sigma) if usl is not None else None
    cpl = (baseline.mean - lsl) / (3 * sigma) if lsl is not None else None

    if cpu is not None and cpl is not None:
        cpk = min(cpu, cpl)
    else:
        cpk = cpu if cpu is not None else cpl

    cp = None
    if usl is not None and lsl is not None:
        cp = (usl - lsl) / (6 * sigma)

    return CapabilityResult(cp=cp, cpk=cpk, cpu=cpu, cpl=cpl)
