"""Tests for the Tour candidate solution and its operators."""

import random

import pytest

from salesman_ga.data import DistanceTable
from salesman_ga.errors import ArgumentError, RangeError
from salesman_ga.solvers import Tour, tour_length


class ScriptedRandom(random.Random):
    """Random source whose randrange answers come from a fixed script."""

    def __init__(self, answers):
        super().__init__(0)
        self.answers = list(answers)

    def randrange(self, *args, **kwargs):
        return self.answers.pop(0)


def is_permutation(path, size):
    return sorted(path) == list(range(size))


def random_tour(table, rng):
    tour = Tour(table)
    tour.generate_random(rng)
    tour.calculate_fitness()
    return tour


def test_new_tour_is_empty(triangle):
    tour = Tour(triangle)
    assert tour.path is None
    assert tour.fitness is None
    assert str(tour) == "<empty tour>"


def test_tour_requires_table():
    with pytest.raises(ArgumentError):
        Tour(None)


def test_tour_rejects_invalid_path(triangle):
    with pytest.raises(ArgumentError):
        Tour(triangle, [0, 0, 1])


@pytest.mark.parametrize("size", [1, 2, 3, 7, 25])
def test_generate_random_is_permutation(size, rng):
    table = DistanceTable.generate_random(size, rng)
    for _ in range(10):
        tour = Tour(table)
        tour.generate_random(rng)
        assert is_permutation(tour.path, size)


def test_generate_random_covers_all_orders(triangle):
    rng = random.Random(5)
    seen = set()
    for _ in range(300):
        tour = Tour(triangle)
        tour.generate_random(rng)
        seen.add(tuple(tour.path))
    assert len(seen) == 6


def test_distance_closes_the_cycle(triangle):
    tour = Tour(triangle, [0, 1, 2])
    assert tour.distance() == 6
    assert tour_length(triangle, [0, 1, 2]) == 6


def test_distance_on_asymmetric_table():
    table = DistanceTable.loads("3\n0 1 9\n9 0 1\n1 9 0\n")
    assert Tour(table, [0, 1, 2]).distance() == 3
    assert Tour(table, [0, 2, 1]).distance() == 27


def test_fitness_is_unscored_until_calculated(triangle):
    tour = Tour(triangle, [2, 0, 1])
    assert tour.fitness is None
    assert tour.calculate_fitness() == 6
    assert tour.fitness == 6


def test_calculate_fitness_is_idempotent(random_table, rng):
    tour = random_tour(random_table, rng)
    first = tour.fitness
    assert tour.calculate_fitness() == first
    assert tour.fitness == first


def test_index_of_city(triangle):
    tour = Tour(triangle, [2, 0, 1])
    assert tour.index_of_city(2) == 0
    assert tour.index_of_city(1) == 2


@pytest.mark.parametrize("city", [-1, 3])
def test_index_of_city_out_of_range(triangle, city):
    tour = Tour(triangle, [2, 0, 1])
    with pytest.raises(RangeError):
        tour.index_of_city(city)


def test_cross_sorts_window_by_parent_b_order():
    table = DistanceTable.generate_random(8, random.Random(1))
    parent_a = Tour(table, list(range(8)))
    parent_b = Tour(table, list(range(7, -1, -1)))
    child = Tour(table)
    child.cross(parent_a, parent_b, ScriptedRandom([1, 3]))
    assert child.path == [0, 3, 2, 1, 4, 5, 6, 7]
    assert child.fitness is None


def test_cross_with_empty_window_copies_parent_a():
    table = DistanceTable.generate_random(6, random.Random(1))
    parent_a = Tour(table, [3, 1, 4, 0, 5, 2])
    parent_b = Tour(table, [0, 1, 2, 3, 4, 5])
    child = Tour(table)
    child.cross(parent_a, parent_b, ScriptedRandom([2, 0]))
    assert child.path == parent_a.path
    assert child.path is not parent_a.path


def test_cross_leaves_parents_untouched(random_table, rng):
    parent_a = random_tour(random_table, rng)
    parent_b = random_tour(random_table, rng)
    a_path, b_path = list(parent_a.path), list(parent_b.path)
    Tour(random_table).cross(parent_a, parent_b, rng)
    assert parent_a.path == a_path
    assert parent_b.path == b_path


@pytest.mark.parametrize("size", [1, 2, 3, 4, 9, 30])
def test_cross_preserves_permutation(size, rng):
    table = DistanceTable.generate_random(size, rng)
    for _ in range(50):
        parent_a = random_tour(table, rng)
        parent_b = random_tour(table, rng)
        child = Tour(table)
        child.cross(parent_a, parent_b, rng)
        assert is_permutation(child.path, size)


def test_cross_only_reorders_inside_window(rng):
    size = 20
    table = DistanceTable.generate_random(size, rng)
    for _ in range(50):
        parent_a = random_tour(table, rng)
        parent_b = random_tour(table, rng)
        child = Tour(table)
        child.cross(parent_a, parent_b, rng)
        changed = [i for i in range(size) if child.path[i] != parent_a.path[i]]
        if changed:
            assert changed[0] < size // 2
            assert changed[-1] < size - 1


def test_cross_requires_parents(triangle, rng):
    parent = Tour(triangle, [0, 1, 2])
    with pytest.raises(ArgumentError):
        Tour(triangle).cross(parent, None, rng)
    with pytest.raises(ArgumentError):
        Tour(triangle).cross(None, parent, rng)
    with pytest.raises(ArgumentError):
        Tour(triangle).cross(parent, Tour(triangle), rng)


def test_mutate_swaps_exactly_two_positions(random_table, rng):
    for _ in range(50):
        tour = random_tour(random_table, rng)
        before = list(tour.path)
        tour.mutate(rng)
        changed = [i for i in range(len(before)) if before[i] != tour.path[i]]
        assert len(changed) == 2
        i, j = changed
        assert tour.path[i] == before[j]
        assert tour.path[j] == before[i]
        assert tour.fitness is None


def test_mutate_single_city_is_noop(rng):
    table = DistanceTable([[0]])
    tour = Tour(table, [0])
    tour.calculate_fitness()
    tour.mutate(rng)
    assert tour.path == [0]
    assert tour.fitness == 0


def test_mutate_requires_path(triangle, rng):
    with pytest.raises(ArgumentError):
        Tour(triangle).mutate(rng)


def test_display_returns_to_first_city(triangle):
    tour = Tour(triangle, [1, 2, 0])
    assert tour.display() == "1->2->0->1"
    assert str(tour) == "1->2->0->1"


def test_copy_is_independent(triangle):
    tour = Tour(triangle, [0, 1, 2])
    tour.calculate_fitness()
    clone = tour.copy()
    clone.mutate(random.Random(0))
    assert tour.path == [0, 1, 2]
    assert clone.table is tour.table
