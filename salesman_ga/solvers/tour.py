import random
from typing import List, Optional

from ..data import DistanceTable
from ..errors import ArgumentError, RangeError
from .base import tour_length


class Tour:
    """
    One candidate solution: the order in which the salesman visits the cities.

    The salesman always returns to the first city after the last one, so the
    path is a closed cycle. ``fitness`` is the cached cycle length and stays
    ``None`` until ``calculate_fitness`` is called; any change to the path
    clears it again.
    """

    def __init__(self, table: DistanceTable, path: Optional[List[int]] = None):
        if table is None:
            raise ArgumentError("table is None")
        self.table = table
        self.path: Optional[List[int]] = None
        self.fitness: Optional[int] = None
        if path is not None:
            self._set_path(list(path))

    @property
    def size(self) -> int:
        return self.table.num_cities

    def _set_path(self, path: List[int]) -> None:
        if sorted(path) != list(range(self.size)):
            raise ArgumentError(f"path is not a permutation of 0..{self.size - 1}: {path}")
        self.path = path
        self.fitness = None

    def _require_path(self) -> List[int]:
        if self.path is None:
            raise ArgumentError("tour has no path yet")
        return self.path

    def generate_random(self, rng: random.Random) -> None:
        path = list(range(self.size))
        rng.shuffle(path)
        self.path = path
        self.fitness = None

    def distance(self) -> int:
        return tour_length(self.table, self._require_path())

    def calculate_fitness(self) -> int:
        self.fitness = self.distance()
        return self.fitness

    def index_of_city(self, city: int) -> int:
        if not 0 <= city < self.size:
            raise RangeError(f"city out of range: {city}")
        for i, c in enumerate(self._require_path()):
            if c == city:
                return i
        raise RangeError(f"city {city} not in path")

    def cross(self, parent_a: "Tour", parent_b: "Tour", rng: random.Random) -> None:
        """
        Replace this tour with a child of ``parent_a`` and ``parent_b``.

        The child starts as a copy of parent A. A window ``[start, end)`` is
        drawn with both ``start`` and its length below ``size // 2``, and the
        cities inside it are reordered to follow the order they have in
        parent B. Cities outside the window keep parent A's order.
        """
        if parent_a is None or parent_b is None:
            raise ArgumentError("parents cannot be None")
        if parent_a.path is None or parent_b.path is None:
            raise ArgumentError("parents must have a path")
        path = list(parent_a.path)
        half = self.size // 2
        if half > 0:
            start = rng.randrange(half)
            end = start + rng.randrange(half)
            path[start:end] = sorted(path[start:end], key=parent_b.index_of_city)
        self.path = path
        self.fitness = None

    def mutate(self, rng: random.Random) -> None:
        """Swap two distinct, randomly chosen cities."""
        path = self._require_path()
        n = len(path)
        if n <= 1:
            return
        i = rng.randrange(n)
        j = i
        while j == i:
            j = rng.randrange(n)
        path[i], path[j] = path[j], path[i]
        self.fitness = None

    def copy(self) -> "Tour":
        clone = Tour(self.table)
        clone.path = None if self.path is None else list(self.path)
        clone.fitness = self.fitness
        return clone

    def display(self) -> str:
        path = self._require_path()
        return "->".join(str(c) for c in path + path[:1])

    def __str__(self) -> str:
        if self.path is None:
            return "<empty tour>"
        return self.display()

    def __repr__(self) -> str:
        return f"Tour(size={self.size}, fitness={self.fitness})"
