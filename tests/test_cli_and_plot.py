"""Tests for CLI run/plot flow."""

from __future__ import annotations

from pathlib import Path

from cli.main import run_cli
from data.logger import StatisticsLogger


def test_cli_run_and_plot(tmp_path, capsys) -> None:
    db_path = tmp_path / "sim.db"
    summary_path = tmp_path / "out" / "summary.txt"
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        """
simulation:
  width: 10
  height: 10
  initial_animals: 8
  seed: 7
  days: 50
""",
        encoding="utf-8",
    )

    assert (
        run_cli(
            [
                "run",
                "--config",
                str(config_path),
                "--db",
                str(db_path),
                "--days",
                "5",
                "--summary-out",
                str(summary_path),
            ]
        )
        == 0
    )

    summary = summary_path.read_text(encoding="utf-8")
    assert summary.startswith("Total days: 5\n")
    assert "Final dominant genome:" in summary
    assert summary in capsys.readouterr().out

    logger = StatisticsLogger(db_path)
    run_id = logger.latest_run_id()
    logger.close()
    assert run_id is not None

    out_path = tmp_path / "plot.png"
    assert run_cli(["plot", "--run", run_id, "--db", str(db_path), "--out", str(out_path)]) == 0
    assert Path(out_path).exists()


def test_cli_run_without_database(tmp_path, capsys) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text('{"width": 4, "height": 4, "initial_animals": 2, "days": 3}', encoding="utf-8")

    assert run_cli(["run", "--config", str(config_path)]) == 0

    assert capsys.readouterr().out.startswith("Total days: 3\n")
