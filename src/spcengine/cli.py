"""Command-line interface for the SPC engine.

Reads measurements from a file or stdin, runs one chart analysis and
prints the result as JSON.

Usage:
    spcengine data.txt                          # IMR, phase 1
    spcengine data.txt --chart xbar-r -n 5      # X-bar R with subgroups of 5
    spcengine data.txt --chart ewma --lambda 0.2 --L 3
    spcengine data.txt --chart cusum --phase phase2 --mean 10 --sigma 1
    cat data.txt | spcengine - --usl 13 --lsl 7
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

import structlog
from pydantic import ValidationError

from spcengine.core.config import get_settings
from spcengine.core.engine import SPCEngine
from spcengine.core.logging import configure_logging
from spcengine.exceptions import SPCEngineError
from spcengine.schemas import (
    BaselineInput,
    ChartConfig,
    ChartType,
    CUSUMParams,
    EWMAParams,
    Phase,
    SpecLimits,
)

logger = structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser, taking tunable defaults from settings."""
    settings = get_settings()

    parser = argparse.ArgumentParser(
        prog="spcengine",
        description="Compute SPC control charts and capability indices",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
        allow_abbrev=False,
    )
    parser.add_argument(
        "input",
        help="Path to a text file of measurements, or - for stdin",
    )
    parser.add_argument(
        "--chart",
        choices=[c.value for c in ChartType],
        default=ChartType.IMR.value,
        help="Chart type (default: imr)",
    )
    parser.add_argument(
        "--phase",
        choices=[p.value for p in Phase],
        default=Phase.PHASE1.value,
        help="phase1 estimates the baseline, phase2 uses --mean/--sigma",
    )
    parser.add_argument("--mean", type=float, help="Supplied baseline mean (phase2)")
    parser.add_argument("--sigma", type=float, help="Supplied baseline sigma (phase2)")
    parser.add_argument(
        "-n", "--subgroup-size",
        type=int,
        help=f"Subgroup size (X-bar R default: {settings.xbar_subgroup_size}, "
             "EWMA/CUSUM default: 1)",
    )
    parser.add_argument("--lambda", dest="lam", type=float, default=settings.ewma_lambda,
                        help="EWMA weight in (0, 1]")
    parser.add_argument("--L", dest="width", type=float, default=settings.ewma_l,
                        help="EWMA limit width in sigma units")
    parser.add_argument("--h", type=float, default=settings.cusum_h,
                        help="CUSUM decision interval factor")
    parser.add_argument("--k", type=float, default=settings.cusum_k,
                        help="CUSUM slack factor")
    parser.add_argument("--usl", type=float, help="Upper specification limit")
    parser.add_argument("--lsl", type=float, help="Lower specification limit")
    parser.add_argument("--target", type=float, help="Target value")
    parser.add_argument("--indent", type=int, default=2, help="JSON indent")
    return parser


def build_config(args: argparse.Namespace) -> ChartConfig:
    """Turn parsed arguments into a validated ChartConfig."""
    settings = get_settings()
    chart_type = ChartType(args.chart)

    subgroup_size = args.subgroup_size
    if subgroup_size is None and chart_type == ChartType.XBAR_R:
        subgroup_size = settings.xbar_subgroup_size

    baseline = None
    if args.mean is not None and args.sigma is not None:
        baseline = BaselineInput(mean=args.mean, sigma=args.sigma)

    return ChartConfig(
        chart_type=chart_type,
        phase=Phase(args.phase),
        baseline=baseline,
        subgroup_size=subgroup_size,
        ewma=EWMAParams(lambda_=args.lam, L=args.width),
        cusum=CUSUMParams(h=args.h, k=args.k),
    )


def read_input(source: str) -> str:
    """Read raw text from a file or stdin. Undecodable bytes are replaced,
    so they end up in tokens the parser rejects."""
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8", errors="replace")


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entry point. Returns the process exit code."""
    settings = get_settings()
    configure_logging(settings.log_format, settings.log_level)

    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        raw_text = read_input(args.input)
    except OSError as e:
        print(f"Error reading {args.input}: {e}", file=sys.stderr)
        return 1

    try:
        config = build_config(args)
        spec_limits = SpecLimits(usl=args.usl, lsl=args.lsl, target=args.target)
        result = SPCEngine().analyze(raw_text, config, spec_limits)
    except (ValidationError, SPCEngineError) as e:
        logger.warning("invalid_configuration", error=str(e))
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    print(json.dumps(result.to_dict(), indent=args.indent, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
