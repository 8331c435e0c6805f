"""Example usage of the SPC Engine.

This script demonstrates how to run raw measurement text through each
chart family and read back limits and capability indices.
"""

from spcengine import (
    BaselineInput,
    ChartConfig,
    ChartType,
    CUSUMParams,
    EWMAParams,
    Phase,
    SPCEngine,
    SpecLimits,
)
from spcengine.core.logging import configure_logging

RAW_DATA = """\
9.45 7.99 9.29 11.66 12.16
10.18 8.04 11.46 9.20 10.34
9.03 11.47 10.51 9.40 10.08
9.37 10.62 10.31 8.52 10.84
10.90 9.33 12.29 11.50 10.60
11.08 10.38 11.62 11.31 10.52
"""


def _fmt(value) -> str:
    if value is None:
        return "-"
    if isinstance(value, tuple):
        return f"{value[0]:.3f} .. {value[-1]:.3f}"
    return f"{value:.3f}"


def print_result(title: str, result) -> None:
    print(f"\n=== {title} ===")
    for chart in (result.main, result.secondary):
        if chart is None:
            continue
        limits = chart.limits
        print(f"{chart.label}: {len(chart.points)} points")
        print(f"  CL={_fmt(limits.center_line)}  UCL={_fmt(limits.ucl)}  LCL={_fmt(limits.lcl)}")
    baseline = result.baseline
    source = "estimated" if baseline.estimated else "supplied"
    print(f"Baseline ({source}): mean={baseline.mean:.3f} sigma={baseline.sigma:.3f}")
    cap = result.capability
    print(f"Cp={_fmt(cap.cp)} Cpk={_fmt(cap.cpk)} Cpu={_fmt(cap.cpu)} Cpl={_fmt(cap.cpl)}")


def main():
    configure_logging(log_level="DEBUG")
    engine = SPCEngine()
    spec_limits = SpecLimits(usl=14.0, lsl=6.0)

    print_result(
        "Individuals / Moving Range",
        engine.analyze(RAW_DATA, ChartConfig(chart_type=ChartType.IMR), spec_limits),
    )
    print_result(
        "X-bar / R (n=5)",
        engine.analyze(
            RAW_DATA,
            ChartConfig(chart_type=ChartType.XBAR_R, subgroup_size=5),
            spec_limits,
        ),
    )
    print_result(
        "EWMA",
        engine.analyze(
            RAW_DATA,
            ChartConfig(chart_type=ChartType.EWMA, ewma=EWMAParams(lambda_=0.2, L=3.0)),
            spec_limits,
        ),
    )

    # Phase 2: monitor against a known target instead of the data's own mean
    cusum_config = ChartConfig(
        chart_type=ChartType.CUSUM,
        phase=Phase.PHASE2,
        baseline=BaselineInput(mean=10.0, sigma=1.0),
        cusum=CUSUMParams(h=5.0, k=0.5),
    )
    result = engine.analyze(RAW_DATA, cusum_config, spec_limits)
    print_result("CUSUM (phase 2)", result)

    decision = result.main.limits.ucl
    above = [p.index for p in result.main.points if p.value > decision]
    below = [p.index for p in result.secondary.points if p.value > decision]
    print(f"Points beyond H={decision:.2f}: C+ {above or 'none'}, C- {below or 'none'}")


if __name__ == "__main__":
    main()
