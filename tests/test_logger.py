"""Tests for SQLite-backed statistics logger and engine hook integration."""

from __future__ import annotations

import sqlite3

from configs.loader import SimulationConfig
from core.statistics import StatisticsAggregator
from data.logger import StatisticsLogger
from main import build_engine


def test_logger_persists_run_and_statistics(tmp_path) -> None:
    db_path = tmp_path / "stats.db"
    logger = StatisticsLogger(db_path)

    run_id = logger.start_run(config={"width": 5, "height": 5}, seed=42)
    statistic = StatisticsAggregator().snapshot(day=1, animals=[], plant_count=2)
    logger.log_statistic(run_id, statistic)

    assert logger.latest_run_id() == run_id
    assert logger.fetch_statistics(run_id) == [
        {
            "day": 1,
            "animals": 0,
            "plants": 2,
            "dominant_genotype": None,
            "avg_lifetime": 0,
            "avg_energy": 0,
            "avg_children": 0,
        }
    ]
    logger.close()

    conn = sqlite3.connect(db_path)
    run_count = conn.execute("SELECT COUNT(*) FROM runs").fetchone()[0]
    stat_count = conn.execute("SELECT COUNT(*) FROM daily_statistics").fetchone()[0]
    conn.close()

    assert run_count == 1
    assert stat_count == 1


def test_engine_logs_one_row_per_day(tmp_path) -> None:
    logger = StatisticsLogger(tmp_path / "engine.db")
    config = SimulationConfig(width=8, height=8, initial_animals=6, seed=4)
    engine = build_engine(config, logger=logger)

    statistics = engine.run(5)

    assert engine.run_id is not None
    rows = logger.fetch_statistics(engine.run_id)
    logger.close()

    assert [row["day"] for row in rows] == [1, 2, 3, 4, 5]
    assert [row["animals"] for row in rows] == [s.animals for s in statistics]
