"""Spatial index of animals and plants on a bounded grid."""

from __future__ import annotations

import math
from collections.abc import Iterator

from agents.base import Organism
from agents.organisms import Animal, Plant
from environment.vector import MapDirection, Vector2D


class WorldMap:
    """Rectangular grid split into a centered fertile region and barren rest.

    Cells may hold any number of animals but at most one plant. Animal
    lists keep insertion order; plants are kept in insertion order too so
    that the eating phase visits them deterministically.
    """

    def __init__(self, width: int, height: int, fertile_ratio: float) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Map dimensions must be positive, got {width}x{height}.")
        if not 0.0 <= fertile_ratio <= 1.0:
            raise ValueError(f"fertile_ratio must be in [0.0, 1.0], got {fertile_ratio}.")

        self.width = int(width)
        self.height = int(height)
        self.fertile_ratio = float(fertile_ratio)

        scale = math.sqrt(self.fertile_ratio)
        fertile_width = min(self.width, int(math.floor(self.width * scale + 0.5)))
        fertile_height = min(self.height, int(math.floor(self.height * scale + 0.5)))
        self.fertile_lower_left = Vector2D((self.width - fertile_width) // 2, (self.height - fertile_height) // 2)
        # Exclusive corner; equals lower_left when the region is empty.
        self.fertile_upper_right = Vector2D(
            self.fertile_lower_left.x + fertile_width,
            self.fertile_lower_left.y + fertile_height,
        )

        self._animals: dict[Vector2D, list[Animal]] = {}
        self._plants: dict[Vector2D, Plant] = {}

    def in_bounds(self, position: Vector2D) -> bool:
        return 0 <= position.x < self.width and 0 <= position.y < self.height

    def is_fertile(self, position: Vector2D) -> bool:
        return (
            self.fertile_lower_left.x <= position.x < self.fertile_upper_right.x
            and self.fertile_lower_left.y <= position.y < self.fertile_upper_right.y
        )

    def clamp(self, position: Vector2D) -> Vector2D:
        """Pull a position back onto the grid edge it stepped over."""
        return Vector2D(
            max(0, min(self.width - 1, position.x)),
            max(0, min(self.height - 1, position.y)),
        )

    def add_element(self, element: Organism) -> None:
        """Register an animal or plant at its own position."""
        position = element.position
        assert self.in_bounds(position), f"{position} is outside the {self.width}x{self.height} map"
        if not self.in_bounds(position):
            return
        if isinstance(element, Animal):
            self._animals.setdefault(position, []).append(element)
        elif isinstance(element, Plant):
            assert position not in self._plants, f"cell {position} already holds a plant"
            self._plants.setdefault(position, element)
        else:
            raise TypeError(f"Unsupported map element: {type(element).__name__}")

    def remove_element(self, element: Organism) -> None:
        """Unregister an element; absent elements are ignored."""
        position = element.position
        if isinstance(element, Animal):
            occupants = self._animals.get(position)
            if not occupants:
                return
            for index, occupant in enumerate(occupants):
                if occupant is element:
                    del occupants[index]
                    break
            if not occupants:
                del self._animals[position]
        elif self._plants.get(position) is element:
            del self._plants[position]

    def move_animal(self, animal: Animal, new_position: Vector2D) -> None:
        """Re-index ``animal`` after changing its position.

        Off-grid targets leave the animal untouched.
        """
        assert self.in_bounds(new_position), f"{new_position} is outside the {self.width}x{self.height} map"
        if not self.in_bounds(new_position):
            return
        self.remove_element(animal)
        animal.position = new_position
        self.add_element(animal)

    def animals_at(self, position: Vector2D) -> list[Animal]:
        return list(self._animals.get(position, ()))

    def plant_at(self, position: Vector2D) -> Plant | None:
        return self._plants.get(position)

    def animals(self) -> list[Animal]:
        """All registered animals ordered by id."""
        return sorted(
            (animal for occupants in self._animals.values() for animal in occupants),
            key=lambda animal: animal.animal_id,
        )

    def plants(self) -> list[Plant]:
        return list(self._plants.values())

    def occupied_positions(self) -> list[Vector2D]:
        """Distinct positions currently holding at least one animal."""
        return list(self._animals.keys())

    def _cells(self) -> Iterator[Vector2D]:
        for y in range(self.height):
            for x in range(self.width):
                yield Vector2D(x, y)

    def _is_free(self, position: Vector2D) -> bool:
        return position not in self._animals and position not in self._plants

    def free_positions(self) -> list[Vector2D]:
        return [cell for cell in self._cells() if self._is_free(cell)]

    def free_positions_in_fertile(self) -> list[Vector2D]:
        return [cell for cell in self._cells() if self.is_fertile(cell) and self._is_free(cell)]

    def free_positions_in_barren(self) -> list[Vector2D]:
        return [cell for cell in self._cells() if not self.is_fertile(cell) and self._is_free(cell)]

    def place_for_child(self, parent_position: Vector2D) -> Vector2D | None:
        """Return the first in-bounds neighbour without animals, if any.

        Neighbours are scanned in ``MapDirection`` order starting at North.
        The parent cell itself is never returned: it always holds the parents.
        """
        for direction in MapDirection:
            candidate = parent_position + direction.to_unit_vector()
            if self.in_bounds(candidate) and candidate not in self._animals:
                return candidate
        return None
