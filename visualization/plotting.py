"""Plot utilities for persisted simulation statistics."""

from __future__ import annotations

from pathlib import Path

from data.logger import StatisticsLogger


def plot_run(db_path: str | Path, run_id: str, output_path: str | Path) -> Path:
    """Render population and energy curves for a run from SQLite logs."""
    logger = StatisticsLogger(db_path)
    try:
        rows = logger.fetch_statistics(run_id)
    finally:
        logger.close()
    if not rows:
        raise ValueError(f"No statistics stored for run '{run_id}'.")

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    import matplotlib  # type: ignore

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt  # type: ignore

    days = [int(row["day"]) for row in rows]
    animals = [int(row["animals"]) for row in rows]
    plants = [int(row["plants"]) for row in rows]
    energy = [int(row["avg_energy"]) for row in rows]
    lifetime = [int(row["avg_lifetime"]) for row in rows]
    children = [int(row["avg_children"]) for row in rows]

    fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(8, 6), sharex=True)
    ax1.plot(days, animals, label="animals")
    ax1.plot(days, plants, label="plants", color="tab:green")
    ax1.set_ylabel("count")
    ax1.legend()

    ax2.plot(days, energy, label="avg_energy", color="tab:orange")
    ax2.plot(days, lifetime, label="avg_lifetime", color="tab:red")
    ax2.plot(days, children, label="avg_children", color="tab:purple")
    ax2.set_xlabel("day")
    ax2.legend()

    fig.tight_layout()
    fig.savefig(output)
    plt.close(fig)
    return output
