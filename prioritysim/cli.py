"""Command-line entry point.

Runs one simulation (or a replication study) and prints the report:

    python -m prioritysim --seed 42
    python -m prioritysim --config topology.json --max-time 5000 --plot out/run.png
    python -m prioritysim --replications 20 --seed 1
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from prioritysim.config import SimulationConfig
from prioritysim.experiments import run_replications
from prioritysim.logging_config import configure_from_env, enable_console_logging
from prioritysim.simulation import Simulation
from prioritysim.visual.plotting import plot_summary

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="prioritysim",
        description="Finite-buffer queueing network simulation with source-priority rejection",
    )
    parser.add_argument("--config", type=str, default=None, help="JSON topology file (default: reference topology)")
    parser.add_argument("--max-time", type=float, default=None, help="Stop at this simulated time")
    parser.add_argument("--max-served", type=int, default=None, help="Stop after this many served requests")
    parser.add_argument("--buffer-capacity", type=int, default=None, help="Override buffer capacity")
    parser.add_argument("--seed", type=int, default=None, help="Random seed (omit for a random run)")
    parser.add_argument("--replications", type=int, default=1, help="Number of seeded replications")
    parser.add_argument("--plot", type=str, default=None, help="Save summary charts to this file")
    parser.add_argument("--log-level", type=str, default=None, help="Console log level (e.g. DEBUG)")
    parser.add_argument("--json", action="store_true", help="Print the summary as JSON")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.replications < 1:
        parser.error(f"--replications must be >= 1, got {args.replications}")
    if args.plot and args.replications > 1:
        parser.error("--plot charts a single run and cannot be combined with --replications > 1")

    if args.log_level:
        enable_console_logging(level=args.log_level)
    else:
        configure_from_env()

    try:
        config = SimulationConfig.from_json_file(args.config) if args.config else SimulationConfig.default()
        overrides = {
            "max_time": args.max_time,
            "max_served": args.max_served,
            "buffer_capacity": args.buffer_capacity,
            "seed": args.seed,
        }
        # Flags left unset keep the value from the file or the reference topology
        config = config.with_overrides(**{k: v for k, v in overrides.items() if v is not None})
    except (OSError, ValueError) as e:
        print(f"prioritysim: invalid configuration: {e}", file=sys.stderr)
        return 2

    if args.replications > 1:
        base_seed = config.seed if config.seed is not None else 0
        report = run_replications(config, replications=args.replications, base_seed=base_seed)
        if args.json:
            print(report.table.reset_index().to_json(orient="records", indent=2))
        else:
            print(report)
        return 0

    summary = Simulation(config).run()
    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print(summary)

    if args.plot:
        plot_summary(summary, args.plot)
    return 0
