"""Day-cycle simulation engine for the grid ecosystem."""

from __future__ import annotations

import logging

from agents.genotype import Genotype
from agents.organisms import Animal, Plant
from configs.loader import SimulationConfig
from core.deterministic_rng import GENOTYPE_STREAM, PLACEMENT_STREAM, PLANTS_STREAM, DeterministicRNG
from core.render_state import AnimalState, MapView
from core.statistics import Statistic, StatisticsAggregator
from data.logger import StatisticsLogger
from environment.vector import Vector2D
from environment.world_map import WorldMap

LOGGER = logging.getLogger(__name__)


class SimulationEngine:
    """Advances the world one day at a time.

    Each ``tick`` runs five phases in a fixed order; later phases observe the
    effects of earlier ones within the same day:

      1) cull animals that died on a previous day,
      2) move and age the survivors,
      3) let the strongest animals on each plant cell eat it,
      4) pair the two strongest animals on each occupied cell,
      5) grow one plant in the barren and one in the fertile region.

    All randomness flows through the injected ``DeterministicRNG``, so two
    engines built from the same config and seed replay identically.
    """

    def __init__(
        self,
        config: SimulationConfig,
        rng: DeterministicRNG | None = None,
        logger: StatisticsLogger | None = None,
    ) -> None:
        self.config = config
        self.rng = rng if rng is not None else DeterministicRNG(config.seed)
        self.world = WorldMap(config.width, config.height, config.fertile_ratio)
        self.aggregator = StatisticsAggregator()
        self.current_day = 0
        self._next_animal_id = 0

        self.logger = logger
        self.run_id: str | None = None
        if self.logger is not None:
            self.run_id = self.logger.start_run(
                config=config.to_dict(),
                seed=int(self.rng.seed),
                metadata={"engine_version": "0.1.0"},
            )

        placement = self.rng.stream(PLACEMENT_STREAM)
        for index in range(config.initial_animals):
            free = self.world.free_positions()
            if not free:
                LOGGER.warning(
                    "Grid is full after placing %d of %d initial animals", index, config.initial_animals
                )
                break
            self.spawn_animal(free[placement.randrange(len(free))])

        LOGGER.info(
            "Created %dx%d world with %d animals (seed=%s)",
            config.width,
            config.height,
            len(self.world.animals()),
            self.rng.seed,
        )

    @property
    def statistics(self) -> list[Statistic]:
        return list(self.aggregator.statistics)

    def spawn_animal(
        self,
        position: Vector2D,
        energy: int | None = None,
        genotype: Genotype | None = None,
    ) -> Animal:
        """Create an initial animal at ``position`` and register it on the map."""
        if genotype is None:
            genotype = Genotype.random(self.config.genotype_length, self.rng.stream(GENOTYPE_STREAM))
        animal = Animal(
            position=position,
            animal_id=self._allocate_animal_id(),
            energy=int(self.config.start_energy if energy is None else energy),
            genotype=genotype,
        )
        self.world.add_element(animal)
        return animal

    def _allocate_animal_id(self) -> int:
        animal_id = self._next_animal_id
        self._next_animal_id += 1
        return animal_id

    def remove_dead_animals(self) -> None:
        for animal in self.world.animals():
            if not animal.is_alive:
                self.aggregator.record_lifetime(animal.age)
                self.world.remove_element(animal)

    def move_animals(self) -> None:
        for animal in self.world.animals():
            animal.consume_energy(self.config.move_energy)
            if not animal.is_alive:
                continue
            self.world.move_animal(animal, self.world.clamp(animal.next_step()))
            animal.grow_older()

    def eat_plants(self) -> None:
        for plant in self.world.plants():
            animals = sorted(self.world.animals_at(plant.position), key=Animal.rank_key)
            if not animals or not animals[0].is_alive:
                continue

            top_energy = animals[0].energy
            tied = 1
            while tied < len(animals) and animals[tied].is_alive and animals[tied].energy == top_energy:
                tied += 1

            share = self.config.plant_energy // tied
            for animal in animals[:tied]:
                animal.add_energy(share)
            self.world.remove_element(plant)

    def reproduce_animals(self) -> None:
        reproduction_cost = self.config.reproduction_cost
        mutation_rng = self.rng.stream(GENOTYPE_STREAM)

        # Snapshot first so children never trigger a second birth the same day.
        for position in list(self.world.occupied_positions()):
            child_position = self.world.place_for_child(position)
            if child_position is None:
                LOGGER.debug("No room for a child next to %s on day %d", position, self.current_day)
                continue
            animals = self.world.animals_at(position)
            if len(animals) < 2:
                continue
            animals.sort(key=Animal.rank_key)
            first, second = animals[0], animals[1]
            if not (first.can_reproduce(reproduction_cost) and second.can_reproduce(reproduction_cost)):
                continue

            child = first.reproduce(
                second,
                child_position,
                mutation_rng,
                reproduction_cost=reproduction_cost,
                mutation_count=self.config.mutation_count,
                animal_id=self._allocate_animal_id(),
            )
            self.world.add_element(child)

    def grow_plants(self) -> None:
        plant_rng = self.rng.stream(PLANTS_STREAM)
        for region, free in (
            ("barren", self.world.free_positions_in_barren()),
            ("fertile", self.world.free_positions_in_fertile()),
        ):
            if not free:
                LOGGER.debug("No free %s cell for a plant on day %d", region, self.current_day)
                continue
            self.world.add_element(Plant(position=free[plant_rng.randrange(len(free))]))

    def tick(self) -> Statistic:
        """Run one full day and return its statistic."""
        self.remove_dead_animals()
        self.move_animals()
        self.eat_plants()
        self.reproduce_animals()
        self.grow_plants()

        self.current_day += 1
        statistic = self.aggregator.snapshot(
            day=self.current_day,
            animals=self.world.animals(),
            plant_count=len(self.world.plants()),
        )
        LOGGER.debug("Day %d: %s", self.current_day, statistic)

        if self.logger is not None and self.run_id is not None:
            self.logger.log_statistic(self.run_id, statistic)
        return statistic

    def run(self, days: int) -> list[Statistic]:
        """Run ``days`` ticks and return the statistics they produced."""
        if days < 0:
            raise ValueError("days must be non-negative")
        return [self.tick() for _ in range(days)]

    def map_view(self) -> MapView:
        """Return an immutable snapshot of the map for rendering."""
        return MapView(
            day=self.current_day,
            width=self.world.width,
            height=self.world.height,
            fertile_lower_left=(self.world.fertile_lower_left.x, self.world.fertile_lower_left.y),
            fertile_upper_right=(self.world.fertile_upper_right.x, self.world.fertile_upper_right.y),
            animals=tuple(
                AnimalState(
                    id=animal.animal_id,
                    position=(animal.position.x, animal.position.y),
                    energy=animal.energy,
                    age=animal.age,
                    children=animal.children,
                    alive=animal.is_alive,
                    genotype=str(animal.genotype),
                )
                for animal in self.world.animals()
            ),
            plants=tuple((plant.position.x, plant.position.y) for plant in self.world.plants()),
        )

    def export_summary(self) -> str:
        return self.aggregator.summary(self.current_day)
