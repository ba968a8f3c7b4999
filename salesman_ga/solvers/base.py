from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

import numpy as np

from ..data import DistanceTable

if TYPE_CHECKING:
    from .tour import Tour


def tour_length(table: DistanceTable, path: Sequence[int]) -> int:
    if len(path) == 0:
        return 0
    idx = np.asarray(path, dtype=np.int64)
    return int(table.matrix[idx, np.roll(idx, -1)].sum())


class Solver(ABC):
    name: str = "base"

    @abstractmethod
    def solve(self, table: DistanceTable) -> "Tour":
        raise NotImplementedError


@dataclass
class SolveResult:
    tour: "Tour"
    length: int
    solver_name: str
    runtime: float
    generations: int = 0

    @property
    def seconds_per_generation(self) -> float:
        if self.generations <= 0:
            return float("inf")
        return self.runtime / self.generations
