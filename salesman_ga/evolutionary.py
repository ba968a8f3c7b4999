import random
from dataclasses import asdict, dataclass, fields
from operator import attrgetter
from typing import Dict, List, Optional

from .data import DistanceTable
from .errors import ArgumentError
from .solvers.base import Solver
from .solvers.tour import Tour


@dataclass
class EvolutionConfig:
    population_size: int = 200
    mutation_rate: float = 0.1
    generations: int = 100
    random_seed: Optional[int] = None

    def __post_init__(self):
        for name in ("population_size", "generations"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ArgumentError(f"{name} must be an integer, got {value!r}")
        if isinstance(self.mutation_rate, bool) or not isinstance(self.mutation_rate, (int, float)):
            raise ArgumentError(f"mutation_rate must be a number, got {self.mutation_rate!r}")
        if not 0.0 <= self.mutation_rate <= 1.0:
            raise ArgumentError("mutation_rate must be a percentage [0.0,1.0]")
        if self.population_size < 4:
            raise ArgumentError("population_size must be at least 4")
        if self.generations < 1:
            raise ArgumentError("generations must be positive")

    @classmethod
    def from_dict(cls, data: Dict) -> "EvolutionConfig":
        if not isinstance(data, dict):
            raise ArgumentError(f"config must be a mapping, got {type(data).__name__}")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ArgumentError(f"unknown config keys: {', '.join(unknown)}")
        try:
            return cls(**data)
        except TypeError as e:
            raise ArgumentError(f"invalid config value: {e}") from e

    def to_dict(self) -> Dict:
        return asdict(self)


_by_fitness = attrgetter("fitness")


class Population:
    """
    The members of one generation, kept sorted by fitness (best first).

    Parents are drawn from the fitter half of the current generation, so the
    population needs at least four members. ``mutation_rate`` is the chance
    that a freshly crossed child gets one swap mutation and must lie in
    [0.0, 1.0].
    """

    def __init__(
        self,
        table: DistanceTable,
        mutation_rate: float,
        size: int = 200,
        rng: random.Random = None,
    ):
        if table is None:
            raise ArgumentError("table is None")
        if not 0.0 <= mutation_rate <= 1.0:
            raise ArgumentError("mutation_rate must be a percentage [0.0,1.0]")
        if size < 4:
            raise ArgumentError("population size must be at least 4")
        self.table = table
        self.mutation_rate = mutation_rate
        self.size = size
        self.rng = rng or random.Random()
        self.generation = 0
        members: List[Tour] = []
        for _ in range(size):
            tour = Tour(table)
            tour.generate_random(self.rng)
            tour.calculate_fitness()
            members.append(tour)
        members.sort(key=_by_fitness)
        self.members = members
        self.best_ever = members[0]
        self.history: List[int] = [members[0].fitness]

    @classmethod
    def from_config(cls, table: DistanceTable, config: EvolutionConfig) -> "Population":
        return cls(
            table,
            config.mutation_rate,
            size=config.population_size,
            rng=random.Random(config.random_seed),
        )

    def best(self) -> Tour:
        return self.members[0]

    def _pick_parents(self):
        half = len(self.members) // 2
        parent_a = self.members[self.rng.randrange(half)]
        parent_b = parent_a
        while parent_b is parent_a:
            parent_b = self.members[self.rng.randrange(half)]
        return parent_a, parent_b

    def step(self) -> None:
        new_pop: List[Tour] = []
        for _ in range(len(self.members)):
            parent_a, parent_b = self._pick_parents()
            child = Tour(self.table)
            child.cross(parent_a, parent_b, self.rng)
            if self.rng.random() < self.mutation_rate:
                child.mutate(self.rng)
            child.calculate_fitness()
            new_pop.append(child)
        new_pop.sort(key=_by_fitness)
        self.members = new_pop
        self.generation += 1
        best = new_pop[0]
        self.history.append(best.fitness)
        if best.fitness < self.best_ever.fitness:
            self.best_ever = best

    def evolve(self, generations: int) -> None:
        if generations < 1:
            raise ArgumentError("generations must be positive")
        for _ in range(generations):
            self.step()


class GeneticSolver(Solver):
    name = "genetic"

    def __init__(self, config: EvolutionConfig = None):
        self.cfg = config or EvolutionConfig()
        self.population: Optional[Population] = None

    def solve(self, table: DistanceTable) -> Tour:
        self.population = Population.from_config(table, self.cfg)
        self.population.evolve(self.cfg.generations)
        return self.population.best()
