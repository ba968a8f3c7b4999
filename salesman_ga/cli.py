import argparse
import dataclasses
import json
import random
import sys
import time
from pathlib import Path
from typing import Callable, List, Optional

from salesman_ga.data import DistanceTable
from salesman_ga.errors import ArgumentError, SalesmanError
from salesman_ga.evaluation import evaluate_solver, population_stats
from salesman_ga.evolutionary import EvolutionConfig, GeneticSolver, Population
from salesman_ga.menu import Menu


MIN_MENU_CITIES = 3


def log(msg: str) -> None:
    ts = time.strftime("%H:%M:%S")
    print(f"[{ts}] {msg}", flush=True)


def load_config(path: Path) -> EvolutionConfig:
    try:
        data = json.loads(Path(path).read_text())
    except ValueError as e:
        raise ArgumentError(f"config file {path} is not valid JSON: {e}") from e
    return EvolutionConfig.from_dict(data)


def build_config(args) -> EvolutionConfig:
    cfg = load_config(args.config) if args.config else EvolutionConfig()
    overrides = {
        "population_size": args.population_size,
        "mutation_rate": args.mutation_rate,
        "generations": args.generations,
        "random_seed": args.seed,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    return dataclasses.replace(cfg, **overrides)


def _load_table(args) -> DistanceTable:
    if args.table:
        log(f"loading distance table from {args.table}")
        return DistanceTable.load_file(args.table)
    if args.tsplib:
        log(f"loading TSPLIB problem from {args.tsplib}")
        return DistanceTable.from_tsplib(args.tsplib)
    log(f"generating {args.random} random cities")
    return DistanceTable.generate_random(args.random, random.Random(args.seed))


def run(args) -> None:
    cfg = build_config(args)
    table = _load_table(args)
    log(
        f"cities={table.num_cities} population={cfg.population_size} "
        f"mutation_rate={cfg.mutation_rate} generations={cfg.generations}"
    )
    solver = GeneticSolver(cfg)
    result = evaluate_solver(solver, table)
    stats = population_stats(solver.population)
    log(f"final generation: best={stats['best']:.0f} avg={stats['mean']:.2f} worst={stats['worst']:.0f}")
    print(f"Evolved {result.generations} generations in {result.runtime:.3f} seconds")
    print(f"Solution: {result.tour}")
    print(f"Distance: {result.length}")
    best_ever = solver.population.best_ever
    if best_ever.fitness < result.length:
        print(f"Best seen during run: {best_ever} (distance {best_ever.fitness})")


def generate(args) -> None:
    table = DistanceTable.generate_random(args.cities, random.Random(args.seed))
    table.save_file(args.output)
    log(f"wrote {table.num_cities} cities to {args.output}")


class SalesmanApp:
    """Interactive menu around a distance table and the genetic search."""

    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
        rng: random.Random = None,
    ):
        self.table: Optional[DistanceTable] = None
        self.loaded_file = ""
        self.rng = rng or random.Random()
        self.out = output_fn
        self.menu = Menu(self.title, input_fn=input_fn, output_fn=output_fn)
        self.menu.add_item("1", "Load file", self.load_file)
        self.menu.add_item("2", "Generate Random Cities", self.generate_cities)
        self.menu.add_item("3", "Save Cities to File", self.save_cities)
        self.menu.add_item("4", "Run Genetic Algorithm", self.run_genetic_algorithm)
        self.menu.add_item("5", "Quit", lambda: True)

    def title(self) -> str:
        if not self.loaded_file:
            return "Traveling Salesman\n<no file loaded>"
        return f"Traveling Salesman\nFile: {self.loaded_file}\nCities: {self.table.num_cities}"

    def run(self) -> None:
        self.menu.run()

    def load_file(self) -> bool:
        path = self.menu.read_string("Enter file name:").strip()
        try:
            self.table = DistanceTable.load_file(path)
            self.loaded_file = path
        except FileNotFoundError:
            self.out("File not found")
        except OSError:
            self.out("File error")
        except SalesmanError as e:
            self.out(f"File format invalid: {e}")
        return False

    def generate_cities(self) -> bool:
        num = self.menu.read_int("How many cities?", MIN_MENU_CITIES, sys.maxsize)
        self.table = DistanceTable.generate_random(num, self.rng)
        self.loaded_file = "<generated>"
        return False

    def save_cities(self) -> bool:
        if self.table is None:
            self.out("No city data loaded")
            return False
        path = self.menu.read_string("Enter filename:").strip()
        try:
            self.table.save_file(path)
            self.out("Saved")
        except OSError:
            self.out("File error")
        return False

    def run_genetic_algorithm(self) -> bool:
        if self.table is None:
            self.out("No city data loaded")
            return False
        generations = self.menu.read_int("How many generations?", 1, sys.maxsize)
        mutation_rate = self.menu.read_float("Enter mutation rate:", 0.0, 1.0)
        self.run_algorithm(generations, mutation_rate)
        return False

    def run_algorithm(self, generations: int, mutation_rate: float) -> Population:
        pop = Population(self.table, mutation_rate, rng=self.rng)
        start = time.perf_counter()
        pop.evolve(generations)
        elapsed = time.perf_counter() - start
        self.out(f"Evolved {generations} generations in {elapsed:.3f} seconds")
        self.out(f"Solution: {pop.best()}")
        self.out(f"Distance: {pop.best().distance()}")
        return pop


def menu(args) -> None:
    rng = random.Random(args.seed) if args.seed is not None else None
    SalesmanApp(rng=rng).run()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Traveling salesman genetic search")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Evolve a population over a distance table")
    source = run_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--table", help="distance table file (N, then N*N distances)")
    source.add_argument("--tsplib", help="TSPLIB problem file")
    source.add_argument("--random", type=int, metavar="N", help="generate N random cities")
    run_parser.add_argument("--generations", type=int)
    run_parser.add_argument("--mutation-rate", type=float)
    run_parser.add_argument("--population-size", type=int)
    run_parser.add_argument("--seed", type=int)
    run_parser.add_argument("--config", help="JSON file with EvolutionConfig fields")
    run_parser.set_defaults(func=run)

    gen_parser = subparsers.add_parser("generate", help="Write a random distance table")
    gen_parser.add_argument("cities", type=int)
    gen_parser.add_argument("--output", required=True)
    gen_parser.add_argument("--seed", type=int)
    gen_parser.set_defaults(func=generate)

    menu_parser = subparsers.add_parser("menu", help="Interactive menu")
    menu_parser.add_argument("--seed", type=int)
    menu_parser.set_defaults(func=menu)
    return parser


def main(argv: List[str] = None) -> int:
    args = _build_parser().parse_args(argv)
    try:
        args.func(args)
    except OSError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except SalesmanError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
