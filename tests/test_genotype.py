"""Tests for genotype construction, crossover and mutation."""

from __future__ import annotations

import random

import pytest

from agents.genotype import Genotype
from environment.vector import DIRECTION_COUNT


class _ScriptedSource:
    """Replays a fixed sequence of draws, failing loudly when exhausted."""

    def __init__(self, values: list[int]) -> None:
        self.values = list(values)
        self.calls: list[int] = []

    def randrange(self, stop: int) -> int:
        self.calls.append(stop)
        value = self.values.pop(0)
        assert 0 <= value < stop
        return value


def test_random_genotype_has_requested_length_and_valid_genes() -> None:
    genotype = Genotype.random(32, random.Random(3))

    assert len(genotype) == 32
    assert all(0 <= gene < DIRECTION_COUNT for gene in genotype.genes)


def test_genotype_rejects_out_of_range_genes() -> None:
    with pytest.raises(ValueError, match="Genes must be in"):
        Genotype(genes=(0, 8))


def test_equal_gene_sequences_are_equal_and_hash_alike() -> None:
    a = Genotype(genes=(1, 2, 3))
    b = Genotype(genes=(1, 2, 3))

    assert a == b
    assert len({a, b}) == 1
    assert str(a) == "123"


def test_crossover_cut_is_proportional_to_stronger_parent_share() -> None:
    stronger = Genotype(genes=(0,) * 32)
    weaker = Genotype(genes=(1,) * 32)

    child = stronger.crossover(weaker, 20, 15)

    # 32 * 20 / 35 = 18.29 -> 18 genes from the stronger parent
    assert child.genes == (0,) * 18 + (1,) * 14


def test_crossover_with_equal_energy_splits_in_half() -> None:
    child = Genotype(genes=(2,) * 10).crossover(Genotype(genes=(5,) * 10), 7, 7)

    assert child.genes == (2,) * 5 + (5,) * 5


def test_crossover_rejects_mismatched_lengths() -> None:
    with pytest.raises(ValueError, match="different lengths"):
        Genotype(genes=(0, 1)).crossover(Genotype(genes=(0, 1, 2)), 5, 5)


def test_crossover_output_is_always_valid() -> None:
    rng = random.Random(17)
    for _ in range(50):
        a = Genotype.random(32, rng)
        b = Genotype.random(32, rng)
        child = a.crossover(b, rng.randrange(1, 100), rng.randrange(1, 100)).mutate(rng, 2)
        assert len(child) == 32
        assert all(0 <= gene < DIRECTION_COUNT for gene in child.genes)


def test_mutate_redraws_the_sampled_gene_only() -> None:
    source = _ScriptedSource([2, 5])
    original = Genotype(genes=(0, 0, 0, 0))

    mutated = original.mutate(source, 1)

    assert mutated.genes == (0, 0, 5, 0)
    assert original.genes == (0, 0, 0, 0)
    assert source.calls == [4, DIRECTION_COUNT]


def test_mutate_picks_distinct_indices() -> None:
    # Second draw would repeat index 0 if sampling were with replacement.
    source = _ScriptedSource([0, 0, 7, 7])
    mutated = Genotype(genes=(0, 0, 0)).mutate(source, 2)

    assert mutated.genes == (7, 7, 0)


def test_mutate_with_zero_count_returns_same_genotype() -> None:
    genotype = Genotype(genes=(1, 2, 3))

    assert genotype.mutate(random.Random(0), 0) is genotype


def test_mutate_rejects_count_larger_than_length() -> None:
    with pytest.raises(ValueError):
        Genotype(genes=(1, 2)).mutate(random.Random(0), 3)


def test_gene_sequences_are_normalised_to_int_tuples() -> None:
    from_list = Genotype(genes=[1, 2, 3])  # type: ignore[arg-type]
    from_strings = Genotype(genes=("1", "2", "3"))  # type: ignore[arg-type]

    assert from_list.genes == (1, 2, 3)
    assert from_list == from_strings == Genotype(genes=(1, 2, 3))
    assert len({from_list, from_strings, Genotype(genes=(1, 2, 3))}) == 1


def test_non_numeric_genes_are_rejected() -> None:
    with pytest.raises(ValueError):
        Genotype(genes=("x",))  # type: ignore[arg-type]
