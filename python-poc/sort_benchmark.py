"""
Sort the integers of a sample file with one algorithm, check the result and report the sorted values or the
execution time.

    $ python sort_benchmark.py -f sample.txt --algo quickMed
    execution time: 0.0123 sec
    $ python sort_benchmark.py -f sample.txt --algo counting -p
"""
import argparse
import logging
import sys
import time
from collections import Counter

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

from memory_monitor import MEMORY_MODES, run_with_memory_mode
from samples import InvalidInputError, load_sample
from sorting_algorithms import CUTOFF, SORTING_ALGORITHMS, algorithm_types, get_sorter

logger = logging.getLogger(__name__)


class SortVerificationFailed(Exception):
    """The sorted sample is out of order or is not a permutation of the input."""

    def __init__(self, message, index=None):
        super().__init__(message)
        self.index = index


def configure_logging(verbose: int = 0):
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(message)s", datefmt="[%X]",
                        handlers=[RichHandler(console=Console(stderr=True), show_path=False)], force=True)


def first_unsorted_index(arr):
    """Return the first index i with arr[i] > arr[i + 1], or None if arr is non-decreasing."""
    for i in range(len(arr) - 1):
        if arr[i] > arr[i + 1]:
            return i
    return None


def is_sorted(arr) -> bool:
    return first_unsorted_index(arr) is None


def verify_sorted(original, result):
    """
    Check that `result` is `original` in non-decreasing order.

    Raises:
        SortVerificationFailed: if an element is out of order or the multisets differ
    """
    i = first_unsorted_index(result)
    if i is not None:
        raise SortVerificationFailed(f"not sorted at index {i}: {result[i]} > {result[i + 1]}", index=i)
    if len(original) != len(result) or Counter(original) != Counter(result):
        raise SortVerificationFailed("sorted output is not a permutation of the input")


def run_sort(sample, algo_type: str, cutoff: int = CUTOFF, trace_memory: str = 'none'):
    """
    Sort `sample` in place with the chosen algorithm and verify it.

    Args:
        sample (list[int]): the integers to sort, modified in place
        algo_type (str): one of ['bubble', 'counting', 'quick', 'quick2', 'quickMed']
        cutoff (int, optional): bubble sort cutoff for 'quick' and 'quickMed'. Defaults to 256.
        trace_memory (str, optional): one of ['none', 'rss', 'alloc']. Defaults to 'none'.
            Tracing memory makes the measured time much longer.

    Returns:
        (float, MemoryReport | None): elapsed seconds of the sort call and the memory report
    """
    sorter = get_sorter(algo_type, cutoff)
    original = list(sample)
    logger.info("Run %s on %d integers", algorithm_types[algo_type], len(sample))
    st = time.perf_counter()
    _, report = run_with_memory_mode(trace_memory, sorter, sample)
    et = time.perf_counter()
    logger.info("Time taken: %.4f seconds", et - st)
    verify_sorted(original, sample)
    return et - st, report


def print_memory_report(report, console=None):
    console = console or Console()
    console.print(Panel.fit("\n".join(report.lines()), title=f"Memory ({report.mode})", border_style="blue"))


def main(argv=None):
    parser = argparse.ArgumentParser(description="Sort the integers of a file and report the execution time.")
    parser.add_argument('-f', '--file', type=str, required=True,
                        help='Path to the text file containing the sequence to be sorted')
    parser.add_argument('-p', '--print', dest='print_sorted', action='store_true',
                        help='Print the sorted sequence instead of the execution time')
    parser.add_argument('--algo', type=str, default='bubble', choices=list(SORTING_ALGORITHMS),
                        help='Sorting algorithm: bubble, counting, quick, quick2, quickMed (default: bubble)')
    parser.add_argument('--cutoff', type=int, default=CUTOFF,
                        help=f'Largest range quick/quickMed hand to bubble sort (default: {CUTOFF})')
    parser.add_argument('--trace-memory', type=str, default='none', choices=MEMORY_MODES,
                        help='Measure process RSS (rss) or extra allocations (alloc) while sorting (default: none)')
    parser.add_argument('-v', '--verbose', action='count', default=0, help='Increase log verbosity')
    args = parser.parse_args(argv)
    if args.cutoff < 0:
        parser.error("--cutoff must be non-negative")
    configure_logging(args.verbose)

    try:
        samples = load_sample(args.file)
    except InvalidInputError as e:
        print(e)
        return 1

    try:
        elapsed, report = run_sort(samples, args.algo, cutoff=args.cutoff, trace_memory=args.trace_memory)
    except SortVerificationFailed as e:
        logger.error("%s", e)
        print("unable to sort the input vector")
        return 1

    if args.print_sorted:
        sys.stdout.write("".join(f"{val}\n" for val in samples))
    else:
        print(f"execution time: {elapsed:.6f} sec")
    if report is not None:
        print_memory_report(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
