"""SQLite-backed run metadata and per-day statistics logging."""

from __future__ import annotations

import hashlib
import json
import platform
import sqlite3
import time
from pathlib import Path
from typing import Any, Mapping

from core.statistics import Statistic


class StatisticsLogger:
    """Persist run metadata and per-day statistics in SQLite."""

    def __init__(self, db_path: str | Path) -> None:
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.connection = sqlite3.connect(self.db_path)
        self.connection.row_factory = sqlite3.Row
        self._ensure_schema()

    def close(self) -> None:
        self.connection.close()

    def _ensure_schema(self) -> None:
        self.connection.executescript(
            """
            CREATE TABLE IF NOT EXISTS runs (
                run_id TEXT PRIMARY KEY,
                config_hash TEXT NOT NULL,
                seed INTEGER NOT NULL,
                config_json TEXT NOT NULL,
                runtime_metadata TEXT NOT NULL,
                created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
            );

            CREATE TABLE IF NOT EXISTS daily_statistics (
                run_id TEXT NOT NULL,
                day INTEGER NOT NULL,
                animals INTEGER NOT NULL,
                plants INTEGER NOT NULL,
                dominant_genotype TEXT,
                avg_lifetime INTEGER NOT NULL,
                avg_energy INTEGER NOT NULL,
                avg_children INTEGER NOT NULL,
                PRIMARY KEY (run_id, day),
                FOREIGN KEY (run_id)
                    REFERENCES runs (run_id)
                    ON DELETE CASCADE
            );
            """
        )
        self.connection.commit()

    def start_run(self, config: Mapping[str, Any], seed: int, metadata: Mapping[str, Any] | None = None) -> str:
        config_json = json.dumps(dict(config), sort_keys=True)
        runtime_metadata: dict[str, Any] = {
            "python_version": platform.python_version(),
            "platform": platform.platform(),
        }
        if metadata:
            runtime_metadata.update(dict(metadata))
        config_hash = hashlib.sha256(config_json.encode("utf-8")).hexdigest()
        deterministic_key = hashlib.sha256(f"{config_hash}:{seed}".encode("utf-8")).hexdigest()
        run_nonce = str(time.time_ns())
        run_id = hashlib.sha256(f"{deterministic_key}:{run_nonce}".encode("utf-8")).hexdigest()[:16]
        runtime_metadata["deterministic_key"] = deterministic_key
        metadata_json = json.dumps(runtime_metadata, sort_keys=True)

        self.connection.execute(
            """
            INSERT OR IGNORE INTO runs (
                run_id, config_hash, seed, config_json, runtime_metadata
            ) VALUES (?, ?, ?, ?, ?)
            """,
            (run_id, config_hash, int(seed), config_json, metadata_json),
        )
        self.connection.commit()
        return run_id

    def log_statistic(self, run_id: str, statistic: Statistic) -> None:
        row = statistic.to_dict()
        self.connection.execute(
            """
            INSERT OR REPLACE INTO daily_statistics (
                run_id,
                day,
                animals,
                plants,
                dominant_genotype,
                avg_lifetime,
                avg_energy,
                avg_children
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                run_id,
                row["day"],
                row["animals"],
                row["plants"],
                row["dominant_genotype"],
                row["avg_lifetime"],
                row["avg_energy"],
                row["avg_children"],
            ),
        )
        self.connection.commit()

    def fetch_statistics(self, run_id: str) -> list[dict[str, Any]]:
        """Return ordered daily statistics for plotting/analysis."""
        rows = self.connection.execute(
            """
            SELECT day, animals, plants, dominant_genotype, avg_lifetime, avg_energy, avg_children
            FROM daily_statistics
            WHERE run_id = ?
            ORDER BY day ASC
            """,
            (run_id,),
        ).fetchall()
        return [dict(row) for row in rows]

    def latest_run_id(self) -> str | None:
        """Return most recently created run id, if any."""
        row = self.connection.execute(
            """
            SELECT run_id
            FROM runs
            ORDER BY created_at DESC, rowid DESC
            LIMIT 1
            """
        ).fetchone()
        return str(row[0]) if row is not None else None
