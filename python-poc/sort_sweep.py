"""
Time every selected sorting algorithm over a grid of sample sizes and sample kinds.

    $ python sort_sweep.py --sizes 1000 4000 16000 --kinds random reversed --plot sweep.svg

Each measurement sorts a fresh copy of the same sample `repeat` times and keeps the minimum and the median
of the wall-clock times. Every result is verified; a broken algorithm aborts the sweep.
"""
import argparse
import logging
import sys
import time
from dataclasses import dataclass
from typing import Optional

import numpy as np
from prettytable import PrettyTable
from rich.console import Console
from rich.table import Table

from draw_sweep import plot_sweep
from samples import DEFAULT_SEED, SAMPLE_KINDS, generate_sample, hex_seed
from sort_benchmark import configure_logging, verify_sorted
from sorting_algorithms import CUTOFF, SORTING_ALGORITHMS, get_sorter

logger = logging.getLogger(__name__)

DEFAULT_SIZES = (1000, 2000, 4000)
DEFAULT_REPEAT = 3
BUBBLE_LIMIT = 5000 # bubble sort is skipped above this size


@dataclass
class SweepResult:
    kind: str
    size: int
    algo: str
    min_time: Optional[float] = None
    median_time: Optional[float] = None
    skipped: bool = False

    def cell(self) -> str:
        if self.skipped:
            return "skipped"
        return f"{self.median_time * 1e3:.2f} ms (min {self.min_time * 1e3:.2f})"


def time_algorithm(sample, algo_type: str, repeat: int = DEFAULT_REPEAT, cutoff: int = CUTOFF):
    """
    Sort copies of `sample` `repeat` times with one algorithm.

    Returns:
        np.ndarray: the elapsed seconds of every run
    """
    assert repeat > 0, "repeat should be positive"
    sorter = get_sorter(algo_type, cutoff)
    times = np.empty(repeat)
    for r in range(repeat):
        arr = list(sample)
        st = time.perf_counter()
        sorter(arr)
        times[r] = time.perf_counter() - st
        verify_sorted(sample, arr)
    return times


def run_sweep(algos=None, sizes=DEFAULT_SIZES, kinds=SAMPLE_KINDS, repeat: int = DEFAULT_REPEAT,
              cutoff: int = CUTOFF, seed: int = DEFAULT_SEED, bubble_limit: int = BUBBLE_LIMIT) -> list[SweepResult]:
    """
    Run the full grid kinds x sizes x algos.

    Returns:
        list[SweepResult]: one result per (kind, size, algo), in that nesting order
    """
    algos = list(SORTING_ALGORITHMS) if algos is None else list(algos)
    results = []
    for kind in kinds:
        for size in sizes:
            sample = generate_sample(kind, size, seed=seed)
            for algo in algos:
                if algo == 'bubble' and size > bubble_limit:
                    logger.info("skip bubble on %s sample of size %d", kind, size)
                    results.append(SweepResult(kind, size, algo, skipped=True))
                    continue
                times = time_algorithm(sample, algo, repeat=repeat, cutoff=cutoff)
                result = SweepResult(kind, size, algo, float(np.min(times)), float(np.median(times)))
                logger.info("%s, size %d, %s: median %.6f s", kind, size, algo, result.median_time)
                results.append(result)
    return results


def _rows(results):
    algos = list(dict.fromkeys(r.algo for r in results))
    rows = {}
    for r in results:
        rows.setdefault((r.kind, r.size), {})[r.algo] = r.cell()
    return algos, [[kind, str(size)] + [cells.get(a, "-") for a in algos] for (kind, size), cells in rows.items()]


def sweep_table(results, title="Sorting time (median of repeats)") -> Table:
    algos, rows = _rows(results)
    table = Table(title=title,
                  padding=(0, 1),
                  header_style="bold red",
                  title_style="bold white underline on blue"
                  )
    table.add_column("kind", justify="left")
    table.add_column("n", justify="right")
    for algo in algos:
        table.add_column(algo, justify="center")
    for row in rows:
        table.add_row(*row)
    return table


def sweep_plain_table(results, title="Sorting time (median of repeats)") -> PrettyTable:
    algos, rows = _rows(results)
    pt = PrettyTable(["kind", "n"] + algos)
    pt.title = title
    for row in rows:
        pt.add_row(row)
    return pt


def main(argv=None):
    parser = argparse.ArgumentParser(description="Compare the sorting algorithms over several sizes and sample kinds.")
    parser.add_argument('--algos', type=str, nargs='+', default=list(SORTING_ALGORITHMS), choices=list(SORTING_ALGORITHMS),
                        help='Algorithms to compare (default: all)')
    parser.add_argument('--sizes', type=int, nargs='+', default=list(DEFAULT_SIZES),
                        help='Sample sizes (default: 1000 2000 4000)')
    parser.add_argument('--kinds', type=str, nargs='+', default=list(SAMPLE_KINDS), choices=SAMPLE_KINDS,
                        help='Sample kinds (default: all)')
    parser.add_argument('--repeat', type=int, default=DEFAULT_REPEAT, help='Runs per measurement (default: 3)')
    parser.add_argument('--cutoff', type=int, default=CUTOFF, help=f'Bubble sort cutoff (default: {CUTOFF})')
    parser.add_argument('--bubble-limit', type=int, default=BUBBLE_LIMIT,
                        help=f'Skip bubble sort above this size (default: {BUBBLE_LIMIT})')
    parser.add_argument('--seed', type=hex_seed, default=DEFAULT_SEED, help='Hex string for seed (default: 0xdeadbeef)')
    parser.add_argument('--plain', action='store_true', help='Print a plain text table')
    parser.add_argument('--plot', type=str, default=None, help='Save a time-vs-size chart to this path (svg, pdf, png)')
    parser.add_argument('-v', '--verbose', action='count', default=0, help='Increase log verbosity')
    args = parser.parse_args(argv)
    if args.repeat <= 0:
        parser.error("--repeat must be positive")
    if args.cutoff < 0:
        parser.error("--cutoff must be non-negative")
    if any(size < 0 for size in args.sizes):
        parser.error("--sizes must be non-negative")
    configure_logging(args.verbose)

    results = run_sweep(args.algos, args.sizes, args.kinds, repeat=args.repeat, cutoff=args.cutoff,
                        seed=args.seed, bubble_limit=args.bubble_limit)
    if args.plain:
        print(sweep_plain_table(results))
    else:
        Console().print(sweep_table(results))
    if args.plot is not None:
        plot_sweep(results, args.plot)
        print(f"Saved chart to {args.plot}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
