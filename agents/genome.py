"""Genome contracts for evolutionary operators."""

from __future__ import annotations

from abc import ABC, abstractmethod

from core.deterministic_rng import UniformIntSource


class Genome(ABC):
    """Abstract genome representation inherited by offspring.

    Implementations must be immutable values: crossover and mutation always
    return new instances, so genomes can be shared between animals and used
    as grouping keys for population statistics.
    """

    @abstractmethod
    def crossover(self, other: "Genome", self_energy: int, other_energy: int) -> "Genome":
        """Create an offspring genome from this genome and ``other``.

        Args:
            other (Genome): The second parent genome.
            self_energy (int): Energy of the parent owning this genome.
            other_energy (int): Energy of the parent owning ``other``.

        Returns:
            Genome: A newly created offspring genome.

        Invariants:
            - Must not mutate either parent genome.
            - Must validate compatibility of parent genome shapes.
            - Must be deterministic (no randomness).
        """

    @abstractmethod
    def mutate(self, rng: UniformIntSource, count: int) -> "Genome":
        """Create a mutated genome derived from this genome.

        Args:
            rng (UniformIntSource): Source of uniform random integers.
            count (int): Number of distinct genes to redraw.

        Returns:
            Genome: A mutated genome instance.

        Invariants:
            - Must not mutate the original genome instance in place.
            - Behavior must be deterministic given equivalent RNG state.
        """
