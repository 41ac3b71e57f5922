"""Per-day population statistics and run summaries."""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable, Sequence

if TYPE_CHECKING:
    from agents.genotype import Genotype
    from agents.organisms import Animal


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def rounded_mean(values: Sequence[int]) -> int:
    """Half-up rounded mean, or 0 for an empty sequence."""
    if not values:
        return 0
    return round_half_up(sum(values) / len(values))


@dataclass(frozen=True)
class Statistic:
    """Immutable snapshot of the population at the end of one day."""

    day: int
    animals: int
    plants: int
    dominant_genotype: Genotype | None
    avg_lifetime: int
    avg_energy: int
    avg_children: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "day": self.day,
            "animals": self.animals,
            "plants": self.plants,
            "dominant_genotype": str(self.dominant_genotype) if self.dominant_genotype is not None else None,
            "avg_lifetime": self.avg_lifetime,
            "avg_energy": self.avg_energy,
            "avg_children": self.avg_children,
        }


def dominant_genotype(animals: Iterable[Animal]) -> Genotype | None:
    """Most common genotype; ties go to the one encountered first."""
    counts = Counter(animal.genotype for animal in animals)
    if not counts:
        return None
    # max() keeps the first maximal key and Counter preserves first-seen order.
    return max(counts, key=lambda genotype: counts[genotype])


class StatisticsAggregator:
    """Collects lifetimes of culled animals and day-indexed snapshots."""

    def __init__(self) -> None:
        self.lifetimes: list[int] = []
        self.statistics: list[Statistic] = []

    def record_lifetime(self, age: int) -> None:
        self.lifetimes.append(int(age))

    def snapshot(self, day: int, animals: Sequence[Animal], plant_count: int) -> Statistic:
        """Build and store the statistic for ``day`` from living animals only."""
        alive = [animal for animal in animals if animal.is_alive]
        statistic = Statistic(
            day=int(day),
            animals=len(alive),
            plants=int(plant_count),
            dominant_genotype=dominant_genotype(alive),
            avg_lifetime=rounded_mean(self.lifetimes),
            avg_energy=rounded_mean([animal.energy for animal in alive]),
            avg_children=rounded_mean([animal.children for animal in alive]),
        )
        self.statistics.append(statistic)
        return statistic

    def summary(self, total_days: int) -> str:
        """Render the run summary report; empty when no day was recorded."""
        if not self.statistics:
            return ""

        final_genotype = self.statistics[-1].dominant_genotype
        lines = [
            f"Total days: {int(total_days)}",
            f"Average animals: {rounded_mean([s.animals for s in self.statistics])}",
            f"Average plants: {rounded_mean([s.plants for s in self.statistics])}",
            f"Average lifetime: {rounded_mean([s.avg_lifetime for s in self.statistics])}",
            f"Average energy: {rounded_mean([s.avg_energy for s in self.statistics])}",
            f"Average children: {rounded_mean([s.avg_children for s in self.statistics])}",
            f"Final dominant genome: {final_genotype if final_genotype is not None else 'none'}",
        ]
        return "\n".join(lines) + "\n"
