"""Plants and animals of the simulated ecosystem."""

from __future__ import annotations

from dataclasses import dataclass

from agents.base import Organism
from agents.genotype import Genotype
from core.deterministic_rng import UniformIntSource
from environment.vector import MapDirection, Vector2D


@dataclass(eq=False)
class Plant(Organism):
    """Food source occupying one cell until an animal eats it."""


@dataclass(eq=False)
class Animal(Organism):
    """Single animal state driven by its genotype."""

    animal_id: int = 0
    energy: int = 0
    genotype: Genotype | None = None
    age: int = 0
    children: int = 0
    gene_cursor: int = 0
    orientation: MapDirection = MapDirection.NORTH

    def __post_init__(self) -> None:
        if self.genotype is None:
            raise ValueError("Animal requires a genotype.")
        if self.energy < 0:
            raise ValueError("energy must be >= 0")

    @property
    def is_alive(self) -> bool:
        return self.energy > 0

    def rank_key(self) -> tuple[int, int]:
        """Sort key placing higher energy first, older ids first on ties."""
        return (-self.energy, self.animal_id)

    def consume_energy(self, amount: int) -> None:
        self.energy = max(0, self.energy - int(amount))

    def add_energy(self, amount: int) -> None:
        self.energy += int(amount)

    def grow_older(self) -> None:
        self.age += 1

    def next_step(self) -> Vector2D:
        """Turn by the gene under the cursor and return the cell one step ahead.

        Advances the cursor (wrapping) and updates ``orientation``; the caller
        applies the boundary policy and re-indexes the animal on the map.
        """
        assert self.genotype is not None
        turn = self.genotype[self.gene_cursor]
        self.gene_cursor = (self.gene_cursor + 1) % len(self.genotype)
        self.orientation = self.orientation.rotate(turn)
        return self.position + self.orientation.to_unit_vector()

    def can_reproduce(self, reproduction_cost: int) -> bool:
        return self.is_alive and self.energy > reproduction_cost

    def reproduce(
        self,
        other: "Animal",
        child_position: Vector2D,
        rng: UniformIntSource,
        *,
        reproduction_cost: int,
        mutation_count: int,
        animal_id: int,
    ) -> "Animal":
        """Create a child with ``other`` at ``child_position``.

        Each parent pays ``reproduction_cost`` and the child starts with the
        sum of both payments. The parent with more energy (``self`` on ties)
        contributes the leading block of genes.
        """
        if not (self.can_reproduce(reproduction_cost) and other.can_reproduce(reproduction_cost)):
            raise ValueError(
                f"Animals {self.animal_id} and {other.animal_id} need more than "
                f"{reproduction_cost} energy each to reproduce."
            )
        assert self.genotype is not None and other.genotype is not None

        if other.energy > self.energy:
            stronger, weaker = other, self
        else:
            stronger, weaker = self, other
        child_genotype = stronger.genotype.crossover(weaker.genotype, stronger.energy, weaker.energy)
        child_genotype = child_genotype.mutate(rng, mutation_count)

        for parent in (self, other):
            parent.consume_energy(reproduction_cost)
            parent.children += 1

        return Animal(
            position=child_position,
            animal_id=animal_id,
            energy=2 * int(reproduction_cost),
            genotype=child_genotype,
        )
