"""
Integer samples for the sorting benchmarks: reading/writing sample files and generating synthetic inputs.

A sample file holds whitespace-separated integers. Reading stops at the first token that is not an integer.
"""
import argparse
import logging
import random

logger = logging.getLogger(__name__)

DEFAULT_SEED = 0xdeadbeef
DEFAULT_MAX_VALUE = 1_000_000

sample_kinds = {
    'random': "Uniformly random integers",
    'sorted': "Already sorted (non-decreasing)",
    'reversed': "Reverse sorted",
    'equal': "All elements equal",
    'few_unique': "Random with only a handful of distinct values",
}
SAMPLE_KINDS = tuple(sample_kinds)


class InvalidInputError(Exception):
    """The sample file is missing, unreadable or holds no integers."""

    def __init__(self, path):
        super().__init__(f"{path} is an invalid path")
        self.path = path


def extract_sample_from_file(path) -> list[int]:
    """
    Read all integers from a file.

    Args:
        path (str | os.PathLike): the sample file

    Returns:
        list[int]: the integers in file order, empty if the file cannot be opened
    """
    sample = []
    try:
        with open(path, "r") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.info("cannot read sample file %s: %s", path, e)
        return sample
    for token in content.split():
        try:
            sample.append(int(token))
        except ValueError:
            logger.info("stopped reading %s at non-integer token %r", path, token)
            break
    return sample


def load_sample(path) -> list[int]:
    """Like extract_sample_from_file, but an empty result raises InvalidInputError."""
    sample = extract_sample_from_file(path)
    if not sample:
        raise InvalidInputError(path)
    logger.info("loaded %d integers from %s", len(sample), path)
    return sample


def write_sample_file(path, values):
    """Write one integer per line."""
    with open(path, "w") as f:
        for val in values:
            f.write(f"{int(val)}\n")


def generate_sample(kind: str, size: int, seed: int = DEFAULT_SEED, max_value: int = DEFAULT_MAX_VALUE) -> list[int]:
    """
    Generate a synthetic sample.

    Args:
        kind (str): one of ['random', 'sorted', 'reversed', 'equal', 'few_unique']
        size (int): number of integers
        seed (int, optional): seed of the private random generator. Defaults to 0xdeadbeef.
        max_value (int, optional): values are drawn from [0, max_value). Defaults to 1_000_000.

    Returns:
        list[int]: the sample
    """
    if kind not in sample_kinds:
        raise ValueError(f"Unknown sample kind: {kind}")
    if size < 0:
        raise ValueError(f"size must be non-negative, got {size}")
    rng = random.Random(seed)
    if kind == 'equal':
        return [rng.randrange(max_value)] * size
    if kind == 'few_unique':
        values = [rng.randrange(max_value) for _ in range(8)]
        return [rng.choice(values) for _ in range(size)]
    data = [rng.randrange(max_value) for _ in range(size)]
    if kind == 'sorted':
        data.sort()
    elif kind == 'reversed':
        data.sort(reverse=True)
    return data


def hex_seed(text: str) -> int:
    """argparse type for seeds given as hex strings, with or without the 0x prefix."""
    return int(text, 16)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Generate a sample file of whitespace-separated integers.")
    parser.add_argument('--kind', type=str, default='random', choices=SAMPLE_KINDS,
                        help='Shape of the sample (default: random)')
    parser.add_argument('--size', type=int, default=10000, help='Number of integers (default: 10000)')
    parser.add_argument('--seed', type=hex_seed, default=DEFAULT_SEED, help='Hex string for seed (default: 0xdeadbeef)')
    parser.add_argument('--max-value', type=int, default=DEFAULT_MAX_VALUE,
                        help='Values are drawn from [0, max-value) (default: 1000000)')
    parser.add_argument('--out', type=str, required=True, help='Path of the sample file to write')
    args = parser.parse_args(argv)
    if args.size < 0:
        parser.error("--size must be non-negative")
    if args.max_value <= 0:
        parser.error("--max-value must be positive")
    data = generate_sample(args.kind, args.size, seed=args.seed, max_value=args.max_value)
    write_sample_file(args.out, data)
    print(f"Wrote {len(data)} integers ({sample_kinds[args.kind]}) to {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
