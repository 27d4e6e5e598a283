"""
cli.py
======

Command-line entry point.

Runs the full pipeline: validate the run parameters, integrate
dy/dt = cos(t) - y with forward Euler, write the CSV table, render the
chart.

Run:
    eulersim
    eulersim --step-count 200 --csv coarse.csv --plot coarse.png --verbose
    python -m eulersim --help

Exit status is 0 on success and 1 when the parameters are rejected, the
run diverges (NaN or inf values, nothing is written), or an output file
cannot be written.
"""

import argparse
import sys
from typing import List, Optional

from .chart import render_chart
from .core import ConfigurationError, DivergenceError, OutputError, RunConfig
from .integrator import EulerIntegrator
from .table_writer import write_table


def build_parser() -> argparse.ArgumentParser:
    defaults = RunConfig()
    parser = argparse.ArgumentParser(
        prog="eulersim",
        description="Integrate dy/dt = cos(t) - y with forward Euler and "
                    "compare against the exact solution.",
    )
    parser.add_argument("--start-time", type=float, default=defaults.start_time,
                        help="start of the time span, a (default: %(default)s)")
    parser.add_argument("--end-time", type=float, default=defaults.end_time,
                        help="end of the time span, b (default: %(default)s)")
    parser.add_argument("--step-count", type=int, default=defaults.step_count,
                        help="number of Euler steps, n (default: %(default)s)")
    parser.add_argument("--initial-value", type=float, default=defaults.initial_value,
                        help="initial condition y(a) (default: %(default)s)")
    parser.add_argument("--csv", default="solution.csv",
                        help="output table path (default: %(default)s)")
    parser.add_argument("--plot", default="plot.png",
                        help="output chart path (default: %(default)s)")
    parser.add_argument("--verbose", action="store_true",
                        help="print run configuration and error summary")
    parser.add_argument("--progress", action="store_true",
                        help="print integration progress")
    return parser


def config_from_args(args: argparse.Namespace) -> RunConfig:
    return RunConfig(
        start_time=args.start_time,
        end_time=args.end_time,
        step_count=args.step_count,
        initial_value=args.initial_value,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = config_from_args(args).validate()
        scope = EulerIntegrator().run(config, verbose=args.verbose,
                                      progress_bar=args.progress)
        scope.check_finite()

        csv_path = write_table(scope, args.csv)
        print(f"Data saved to {csv_path}")

        plot_path = render_chart(scope, args.plot)
        print(f"✅ Plot saved as {plot_path}")
    except ConfigurationError as e:
        print(f"✗ Invalid run parameters: {e}", file=sys.stderr)
        return 1
    except (DivergenceError, OutputError) as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
