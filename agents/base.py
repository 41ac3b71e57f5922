"""Base definitions shared by everything that lives on the world map."""

from __future__ import annotations

from dataclasses import dataclass

from environment.vector import Vector2D


@dataclass(eq=False)
class Organism:
    """Positioned entity registered in a ``WorldMap``.

    Organisms compare by identity: two animals with identical state are still
    distinct occupants of a cell. Code that changes ``position`` of an
    organism already on a map must go through ``WorldMap.move_animal`` so the
    spatial index stays consistent.
    """

    position: Vector2D
