"""
Genetic search for short round-trip routes over a table of city distances.
"""

from .data import DistanceTable
from .errors import ArgumentError, FormatError, RangeError, SalesmanError, ValidationError
from .evolutionary import EvolutionConfig, GeneticSolver, Population
from .solvers import Tour

__all__ = [
    "data",
    "evaluation",
    "evolutionary",
    "menu",
    "DistanceTable",
    "Tour",
    "Population",
    "EvolutionConfig",
    "GeneticSolver",
    "SalesmanError",
    "FormatError",
    "ValidationError",
    "RangeError",
    "ArgumentError",
]
