"""Command-line entry points for running and plotting simulations."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from configs.loader import ConfigLoader, SimulationConfig
from data.logger import StatisticsLogger
from engine.simulation import SimulationEngine
from main import build_engine
from visualization.plotting import plot_run

LOGGER = logging.getLogger(__name__)


def _run_single(config: SimulationConfig, db_path: Path | None) -> SimulationEngine:
    if db_path is None:
        engine = build_engine(config=config)
        engine.run(config.days)
        return engine

    logger = StatisticsLogger(db_path)
    try:
        engine = build_engine(config=config, logger=logger)
        engine.run(config.days)
    finally:
        logger.close()
    if engine.run_id is None:
        raise RuntimeError("Expected run id when logger is configured.")
    return engine


def run_cli(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="evosim")
    parser.add_argument("--verbose", action="store_true", help="log every simulated day")
    sub = parser.add_subparsers(dest="command", required=True)

    run_cmd = sub.add_parser("run")
    run_cmd.add_argument("--config", default="configs/default_simulation.yaml")
    run_cmd.add_argument("--days", type=int)
    run_cmd.add_argument("--seed", type=int)
    run_cmd.add_argument("--db")
    run_cmd.add_argument("--summary-out")

    plot_cmd = sub.add_parser("plot")
    plot_cmd.add_argument("--run", required=True)
    plot_cmd.add_argument("--db", default="simulation_statistics.db")
    plot_cmd.add_argument("--out", default="artifacts/statistics.png")

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    if args.command == "run":
        config = ConfigLoader.load(args.config).replace(days=args.days, seed=args.seed)
        engine = _run_single(config, Path(args.db) if args.db else None)
        summary = engine.export_summary()
        if engine.run_id is not None:
            print(engine.run_id)
        print(summary, end="")
        if args.summary_out:
            out = Path(args.summary_out)
            out.parent.mkdir(parents=True, exist_ok=True)
            out.write_text(summary, encoding="utf-8")
            LOGGER.info("Wrote summary to %s", out)
        return 0

    if args.command == "plot":
        path = plot_run(args.db, args.run, args.out)
        print(path)
        return 0

    return 1


if __name__ == "__main__":
    raise SystemExit(run_cli())
