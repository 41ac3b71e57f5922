"""Simple simulation runner for local validation."""

from __future__ import annotations

from pathlib import Path

from configs.loader import ConfigLoader, SimulationConfig
from core.deterministic_rng import DeterministicRNG
from data.logger import StatisticsLogger
from engine.simulation import SimulationEngine


def build_engine(config: SimulationConfig, logger: StatisticsLogger | None = None) -> SimulationEngine:
    """Build a seeded engine from a simulation configuration."""
    return SimulationEngine(config=config, rng=DeterministicRNG(config.seed), logger=logger)


def main(config_path: str = "configs/default_simulation.yaml") -> None:
    """Load config, run the configured number of days and print the summary."""
    config = ConfigLoader.load(config_path)
    logger = StatisticsLogger(Path("simulation_statistics.db"))
    try:
        engine = build_engine(config=config, logger=logger)
        engine.run(config.days)
    finally:
        logger.close()
    print(engine.export_summary(), end="")


if __name__ == "__main__":
    main()
