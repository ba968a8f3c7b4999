import time
from typing import Dict

import numpy as np

from .data import DistanceTable
from .evolutionary import Population
from .solvers.base import SolveResult, Solver


def evaluate_solver(solver: Solver, table: DistanceTable) -> SolveResult:
    start = time.perf_counter()
    tour = solver.solve(table)
    runtime = time.perf_counter() - start
    population = getattr(solver, "population", None)
    generations = population.generation if population is not None else 0
    return SolveResult(
        tour=tour,
        length=tour.distance(),
        solver_name=solver.name,
        runtime=runtime,
        generations=generations,
    )


def population_stats(population: Population) -> Dict[str, float]:
    scores = np.array([t.fitness for t in population.members], dtype=float)
    return {
        "best": float(scores.min()),
        "mean": float(scores.mean()),
        "worst": float(scores.max()),
    }
