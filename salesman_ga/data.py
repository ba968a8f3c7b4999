import io
import random
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, TextIO, Union

import networkx as nx
import numpy as np
import tsplib95

from .errors import ArgumentError, FormatError, RangeError, ValidationError


MIN_RANDOM_DISTANCE = 1
MAX_RANDOM_DISTANCE = 10

_INT64 = np.iinfo(np.int64)


class DistanceTable:
    """
    Square table of travel costs between cities.

    ``matrix[i][j]`` is the cost of travelling from city ``i`` to city ``j``.
    Costs are non-negative integers and every city is zero away from itself.
    The table is read-only once built and is shared by every tour that is
    scored against it.
    """

    def __init__(self, matrix: Union[np.ndarray, Sequence[Sequence[int]]]):
        try:
            mat = np.array(matrix, dtype=np.int64)
        except (OverflowError, TypeError, ValueError) as e:
            raise ValidationError(f"distance table must hold integer distances: {e}") from e
        if mat.ndim != 2 or mat.shape[0] != mat.shape[1]:
            raise ValidationError(f"distance table must be square, got shape {mat.shape}")
        if mat.shape[0] <= 0:
            raise ValidationError("number of cities must be positive")
        _validate_entries(mat)
        mat.setflags(write=False)
        self._matrix = mat

    @property
    def matrix(self) -> np.ndarray:
        return self._matrix

    @property
    def size(self) -> int:
        return int(self._matrix.shape[0])

    @property
    def num_cities(self) -> int:
        return self.size

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        return f"DistanceTable(num_cities={self.size})"

    def get_distance(self, city_a: int, city_b: int) -> int:
        if not 0 <= city_a < self.size:
            raise RangeError(f"city_a out of range: {city_a}")
        if not 0 <= city_b < self.size:
            raise RangeError(f"city_b out of range: {city_b}")
        return int(self._matrix[city_a, city_b])

    def is_symmetric(self) -> bool:
        return bool(np.array_equal(self._matrix, self._matrix.T))

    # -----------------------------------------------------------------
    # Loading
    # -----------------------------------------------------------------

    @classmethod
    def load(cls, source: TextIO) -> "DistanceTable":
        """
        Parse a table from a text stream.

        The format is the number of cities N followed by N*N distances in
        row-major order, all separated by whitespace. Raises FormatError when
        tokens are missing or not integers and ValidationError when the
        numbers describe an invalid table.
        """
        tokens = _tokens(source)
        num = _next_int(tokens, "number of cities")
        if num <= 0:
            raise ValidationError(f"number of cities must be positive, got {num}")
        rows: List[List[int]] = []
        for i in range(num):
            row = []
            for j in range(num):
                dist = _next_int(tokens, f"distance from city {i} to city {j}")
                if i == j and dist != 0:
                    raise ValidationError(f"distance from city {i} to itself is not 0")
                if dist < 0:
                    raise ValidationError(f"invalid distance from {i} to {j}: {dist}")
                row.append(dist)
            rows.append(row)
        return cls(rows)

    @classmethod
    def loads(cls, text: str) -> "DistanceTable":
        return cls.load(io.StringIO(text))

    @classmethod
    def load_file(cls, path: Union[str, Path]) -> "DistanceTable":
        with Path(path).open("r") as f:
            return cls.load(f)

    @classmethod
    def from_tsplib(cls, path: Union[str, Path]) -> "DistanceTable":
        """Build a table from a TSPLIB problem file (any edge weight type)."""
        try:
            problem = tsplib95.load(str(path))
            graph = problem.get_graph()
        except OSError:
            raise
        except Exception as e:
            raise FormatError(f"could not parse TSPLIB problem {path}: {e}") from e
        nodes = sorted(graph.nodes())
        if not nodes:
            raise ValidationError(f"no cities found in {path}")
        mat = nx.to_numpy_array(graph, nodelist=nodes, weight="weight")
        np.fill_diagonal(mat, 0)
        return cls(np.rint(mat).astype(np.int64))

    @classmethod
    def generate_random(cls, num_cities: int, rng: Optional[random.Random] = None) -> "DistanceTable":
        """Symmetric table with distances drawn uniformly from [1, 10]."""
        if num_cities <= 0:
            raise ArgumentError("num_cities must be positive")
        rng = rng or random.Random()
        mat = np.zeros((num_cities, num_cities), dtype=np.int64)
        for i in range(num_cities):
            for j in range(i):
                distance = rng.randint(MIN_RANDOM_DISTANCE, MAX_RANDOM_DISTANCE)
                mat[i, j] = distance
                mat[j, i] = distance
        return cls(mat)

    # -----------------------------------------------------------------
    # Saving
    # -----------------------------------------------------------------

    def save(self, sink: TextIO) -> None:
        sink.write(f"{self.size}\n")
        for row in self._matrix:
            sink.write(" ".join(str(int(d)) for d in row) + "\n")
        sink.write("\n")

    def dumps(self) -> str:
        buf = io.StringIO()
        self.save(buf)
        return buf.getvalue()

    def save_file(self, path: Union[str, Path]) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.dumps())

    def to_graph(self) -> nx.DiGraph:
        graph = nx.DiGraph()
        graph.add_nodes_from(range(self.size))
        for i in range(self.size):
            for j in range(self.size):
                if i != j:
                    graph.add_edge(i, j, weight=int(self._matrix[i, j]))
        return graph


def _tokens(source: TextIO) -> Iterator[str]:
    try:
        for line in source:
            yield from line.split()
    except UnicodeDecodeError as e:
        raise FormatError(f"input is not valid text: {e}") from e


def _next_int(tokens: Iterator[str], what: str) -> int:
    try:
        token = next(tokens)
    except StopIteration:
        raise FormatError(f"unexpected end of input while reading {what}") from None
    try:
        value = int(token)
    except ValueError:
        raise FormatError(f"expected an integer for {what}, got {token!r}") from None
    if not _INT64.min <= value <= _INT64.max:
        raise FormatError(f"{what} is out of range: {token}")
    return value


def _validate_entries(mat: np.ndarray) -> None:
    diag = np.flatnonzero(np.diag(mat))
    if diag.size:
        i = int(diag[0])
        raise ValidationError(f"distance from city {i} to itself is not 0")
    negative = np.argwhere(mat < 0)
    if negative.size:
        i, j = (int(v) for v in negative[0])
        raise ValidationError(f"invalid distance from {i} to {j}: {int(mat[i, j])}")
