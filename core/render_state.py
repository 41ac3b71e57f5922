"""Immutable map snapshots handed to renderers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class AnimalState:
    """Read-only copy of one animal."""

    id: int
    position: tuple[int, int]
    energy: int
    age: int
    children: int
    alive: bool
    genotype: str


@dataclass(frozen=True)
class MapView:
    """Top-level immutable frame describing the whole map for one day."""

    day: int
    width: int
    height: int
    fertile_lower_left: tuple[int, int]
    fertile_upper_right: tuple[int, int]
    animals: tuple[AnimalState, ...] = field(default_factory=tuple)
    plants: tuple[tuple[int, int], ...] = field(default_factory=tuple)

    def animals_at(self, position: tuple[int, int]) -> list[AnimalState]:
        return [animal for animal in self.animals if animal.position == tuple(position)]

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable view."""
        return {
            "day": self.day,
            "width": self.width,
            "height": self.height,
            "fertile": [list(self.fertile_lower_left), list(self.fertile_upper_right)],
            "animals": [
                {
                    "id": animal.id,
                    "position": list(animal.position),
                    "energy": animal.energy,
                    "age": animal.age,
                    "children": animal.children,
                    "alive": animal.alive,
                    "genotype": animal.genotype,
                }
                for animal in self.animals
            ],
            "plants": [list(position) for position in self.plants],
        }
