"""Fixed-length direction-gene genotype used by animals."""

from __future__ import annotations

from dataclasses import dataclass

from agents.genome import Genome
from core.deterministic_rng import UniformIntSource
from core.statistics import round_half_up
from environment.vector import DIRECTION_COUNT

DEFAULT_GENOTYPE_LENGTH = 32


@dataclass(frozen=True)
class Genotype(Genome):
    """Ordered sequence of turn genes, each in ``[0, DIRECTION_COUNT)``.

    Equal gene sequences compare and hash equal, which is what the
    dominant-genotype statistic groups by.
    """

    genes: tuple[int, ...]

    def __post_init__(self) -> None:
        # Normalise to an int tuple so equal sequences hash and compare alike.
        object.__setattr__(self, "genes", tuple(int(gene) for gene in self.genes))
        if not self.genes:
            raise ValueError("Genotype must contain at least one gene.")
        invalid = [gene for gene in self.genes if not 0 <= gene < DIRECTION_COUNT]
        if invalid:
            raise ValueError(f"Genes must be in [0, {DIRECTION_COUNT}), got {invalid}.")

    @classmethod
    def random(cls, length: int, rng: UniformIntSource) -> "Genotype":
        """Draw ``length`` genes uniformly at random."""
        if length <= 0:
            raise ValueError("length must be > 0")
        return cls(genes=tuple(rng.randrange(DIRECTION_COUNT) for _ in range(length)))

    def __len__(self) -> int:
        return len(self.genes)

    def __getitem__(self, index: int) -> int:
        return self.genes[index]

    def __str__(self) -> str:
        return "".join(str(gene) for gene in self.genes)

    def crossover(self, other: Genome, self_energy: int, other_energy: int) -> "Genotype":
        """Combine a prefix of this genotype with the suffix of ``other``.

        The cut index is proportional to this parent's share of the summed
        energy, so the caller passes the stronger parent as ``self`` to make
        it contribute the larger block.
        """
        if not isinstance(other, Genotype):
            raise TypeError("Genotype crossover requires another Genotype.")
        if len(other) != len(self):
            raise ValueError(
                f"Cannot cross genotypes of different lengths ({len(self)} and {len(other)})."
            )

        length = len(self.genes)
        total = int(self_energy) + int(other_energy)
        if total <= 0:
            cut = length // 2
        else:
            cut = round_half_up(length * int(self_energy) / total)
        cut = max(0, min(length, cut))
        return Genotype(genes=self.genes[:cut] + other.genes[cut:])

    def mutate(self, rng: UniformIntSource, count: int) -> "Genotype":
        """Redraw ``count`` distinct genes chosen uniformly without replacement."""
        length = len(self.genes)
        if not 0 <= count <= length:
            raise ValueError(f"count must be in [0, {length}]")
        if count == 0:
            return self

        # Partial Fisher-Yates: the first ``count`` slots end up a uniform sample.
        indices = list(range(length))
        for slot in range(count):
            pick = slot + rng.randrange(length - slot)
            indices[slot], indices[pick] = indices[pick], indices[slot]

        genes = list(self.genes)
        for index in indices[:count]:
            genes[index] = rng.randrange(DIRECTION_COUNT)
        return Genotype(genes=tuple(genes))
