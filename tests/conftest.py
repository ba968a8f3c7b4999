import random

import pytest

from salesman_ga.data import DistanceTable


FIVE_CITIES = """5
0 3 4 2 7
3 0 4 6 3
4 4 0 5 8
2 6 5 0 6
7 3 8 6 0
"""


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def triangle():
    return DistanceTable([[0, 1, 3], [1, 0, 2], [3, 2, 0]])


@pytest.fixture
def five_cities():
    return DistanceTable.loads(FIVE_CITIES)


@pytest.fixture
def random_table(rng):
    return DistanceTable.generate_random(12, rng)
