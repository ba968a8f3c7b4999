from .base import Solver, SolveResult, tour_length
from .tour import Tour

__all__ = [
    "Solver",
    "SolveResult",
    "Tour",
    "tour_length",
]
