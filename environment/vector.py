"""Integer grid coordinates and compass directions."""

from __future__ import annotations

import enum
from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Vector2D:
    """Immutable integer coordinate usable as a map key."""

    x: int
    y: int

    def __add__(self, other: "Vector2D") -> "Vector2D":
        return Vector2D(self.x + other.x, self.y + other.y)

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


class MapDirection(enum.IntEnum):
    """Eight compass directions in clockwise order starting at North."""

    NORTH = 0
    NORTH_EAST = 1
    EAST = 2
    SOUTH_EAST = 3
    SOUTH = 4
    SOUTH_WEST = 5
    WEST = 6
    NORTH_WEST = 7

    def rotate(self, turns: int) -> "MapDirection":
        """Return the direction ``turns`` steps clockwise from this one."""
        return MapDirection((int(self) + int(turns)) % len(MapDirection))

    def to_unit_vector(self) -> Vector2D:
        return _UNIT_VECTORS[self]


_UNIT_VECTORS: dict[MapDirection, Vector2D] = {
    MapDirection.NORTH: Vector2D(0, 1),
    MapDirection.NORTH_EAST: Vector2D(1, 1),
    MapDirection.EAST: Vector2D(1, 0),
    MapDirection.SOUTH_EAST: Vector2D(1, -1),
    MapDirection.SOUTH: Vector2D(0, -1),
    MapDirection.SOUTH_WEST: Vector2D(-1, -1),
    MapDirection.WEST: Vector2D(-1, 0),
    MapDirection.NORTH_WEST: Vector2D(-1, 1),
}

DIRECTION_COUNT = len(MapDirection)
