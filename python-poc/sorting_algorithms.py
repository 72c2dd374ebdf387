"""
In-place sorting algorithms for integer samples. All of them sort the given sequence in place and return None.
    - bubble_sort: O(n^2) time, O(n) on already sorted input (early exit on a swap-free pass).
    - counting_sort: O(n + k) time with O(k) extra memory where k is the range of input values.
    - quick_sort: middle-pivot quick sort, falls back to bubble sort for ranges of at most `cutoff` elements.
    - quick_sort_tail: quick sort recursing only into the smaller side, O(log n) stack depth.
    - quick_sort_median: median-of-three quick sort with the bubble sort cutoff.

Ranges are inclusive index pairs [left, right]. Public functions accept optional `left`/`right` and
check them on entry; a range with left >= right is already sorted.
"""
import logging

logger = logging.getLogger(__name__)

CUTOFF = 256 # ranges of at most CUTOFF elements are handed to bubble sort
MIN_MEDIAN3_SIZE = 3

algorithm_types = {
    'bubble': "Bubble Sort",
    'counting': "Counting Sort",
    'quick': "Quick Sort (bubble cutoff)",
    'quick2': "Quick Sort (tail-minimized)",
    'quickMed': "Quick Sort (median-of-three + bubble cutoff)",
}


def _resolve_range(arr, left, right):
    """
    Check an explicit [left, right] range against the sequence.

    Returns:
        (int, int): the inclusive range, right defaults to len(arr) - 1
    """
    n = len(arr)
    right = n - 1 if right is None else right
    if n == 0 or left > right:
        return left, right
    if left < 0 or right >= n:
        raise IndexError(f"range [{left}, {right}] out of bounds for a sequence of length {n}")
    return left, right


def swap(arr, i: int, j: int):
    """Exchange arr[i] and arr[j]."""
    arr[i], arr[j] = arr[j], arr[i]


def _bubble(arr, left, right):
    for i in range(right - left):
        is_sorted = True
        for j in range(left, right - i):
            if arr[j] > arr[j + 1]:
                swap(arr, j, j + 1)
                is_sorted = False
        if is_sorted:
            return


def bubble_sort(arr, left: int = 0, right: int = None):
    """
    Bubble sort of arr[left..right]. Stops after the first pass without a swap, so an already sorted
    range costs a single pass of n - 1 comparisons.

    Args:
        arr (MutableSequence): the sequence to sort in place
        left (int, optional): first index of the range. Defaults to 0.
        right (int, optional): last index of the range (inclusive). Defaults to len(arr) - 1.
    """
    left, right = _resolve_range(arr, left, right)
    _bubble(arr, left, right)


def counting_sort(arr):
    """
    Counting sort in O(n + k) time and O(k) extra memory, k = max(arr) - min(arr) + 1.

    Note:
        The caller is responsible for keeping the value range reasonable: a sample such as [0, 2**40]
        allocates a count list of 2**40 entries.
    """
    n = len(arr)
    if n == 0:
        return
    lo = hi = arr[0]
    for i in range(1, n):
        if arr[i] < lo:
            lo = arr[i]
        elif arr[i] > hi:
            hi = arr[i]

    # plain ints, a narrow numpy dtype would overflow in hi - lo
    lo, hi = int(lo), int(hi)
    counts = [0] * (hi - lo + 1)
    for val in arr:
        counts[int(val) - lo] += 1
    logger.debug("counting sort: n = %d, value range = %d", n, len(counts))

    idx = 0
    for offset, count in enumerate(counts):
        for _ in range(count):
            arr[idx] = lo + offset
            idx += 1


def partition(arr, left: int, right: int) -> int:
    """
    Partition arr[left..right] around the pivot arr[right].

    Both scans are bounded to the range, so an all-equal range or a pivot that is the range maximum or
    minimum never reads outside [left, right].

    Returns:
        int: final index of the pivot. Everything before it is <= pivot, everything after it is >= pivot.
    """
    pivot = arr[right]
    i = left
    j = right - 1
    while True:
        while i < right and arr[i] < pivot:
            i += 1
        while j > left and arr[j] > pivot:
            j -= 1
        if i < j:
            swap(arr, i, j)
            i += 1
            j -= 1
        else:
            break
    swap(arr, i, right)
    return i


def median3(arr, left: int, right: int):
    """
    Order arr[left] <= arr[center] <= arr[right], then park the median at right - 1 where partition_med
    picks it up as the pivot. The minimum stays at left and the maximum at right.
    Only valid for ranges of at least 3 elements.
    """
    assert right - left + 1 >= MIN_MEDIAN3_SIZE, "median3 needs at least 3 elements"
    center = (left + right) // 2
    if arr[center] < arr[left]:
        swap(arr, left, center)
    if arr[right] < arr[left]:
        swap(arr, left, right)
    if arr[right] < arr[center]:
        swap(arr, center, right)
    swap(arr, center, right - 1)


def partition_med(arr, left: int, right: int) -> int:
    """
    Partition arr[left..right] around the pivot stored at arr[right] (placed there by median3).

    The pivot is moved to `left` while scanning. `high` skips values greater than the pivot and `low`
    skips values less than it, so both stop on duplicates of the pivot and a run of equal keys is split
    in the middle instead of degrading to one-sided partitions.

    Returns:
        int: final index of the pivot.
    """
    swap(arr, left, right)
    pivot = arr[left]
    low, high = left + 1, right
    while low <= high:
        while high > left and arr[high] > pivot:
            high -= 1
        while low <= high and arr[low] < pivot:
            low += 1
        if low <= high:
            swap(arr, low, high)
            low += 1
            high -= 1
    swap(arr, left, high)
    return high


def _quick(arr, left, right, cutoff):
    while left < right and right - left + 1 > cutoff:
        # middle element as pivot, sorted and reversed ranges split in half
        swap(arr, (left + right) // 2, right)
        q = partition_med(arr, left, right)
        if q - left < right - q:
            _quick(arr, left, q - 1, cutoff)
            left = q + 1
        else:
            _quick(arr, q + 1, right, cutoff)
            right = q - 1
    if left < right:
        _bubble(arr, left, right)


def _quick2(arr, left, right):
    while left < right:
        q = partition(arr, left, right)
        if q - left < right - q:
            _quick2(arr, left, q - 1)
            left = q + 1
        else:
            _quick2(arr, q + 1, right)
            right = q - 1


def _quick_med(arr, left, right, cutoff):
    while left < right:
        size = right - left + 1
        if size <= cutoff or size < MIN_MEDIAN3_SIZE:
            _bubble(arr, left, right)
            return
        median3(arr, left, right)
        q = partition_med(arr, left + 1, right - 1)
        if q - left < right - q:
            _quick_med(arr, left, q - 1, cutoff)
            left = q + 1
        else:
            _quick_med(arr, q + 1, right, cutoff)
            right = q - 1


def _check_cutoff(cutoff):
    if cutoff < 0:
        raise ValueError(f"cutoff must be non-negative, got {cutoff}")


def quick_sort(arr, cutoff: int = CUTOFF, left: int = 0, right: int = None):
    """
    Quick sort using partition_med with the middle element as pivot. Ranges of at most `cutoff` elements
    are finished with bubble sort. Only the smaller side of each partition is sorted recursively, so the
    recursion depth stays O(log n).

    Args:
        arr (MutableSequence): the sequence to sort in place
        cutoff (int, optional): largest range handed to bubble sort. Defaults to CUTOFF (256).
        left (int, optional): first index of the range. Defaults to 0.
        right (int, optional): last index of the range (inclusive). Defaults to len(arr) - 1.
    """
    _check_cutoff(cutoff)
    left, right = _resolve_range(arr, left, right)
    _quick(arr, left, right, cutoff)


def quick_sort_tail(arr, left: int = 0, right: int = None):
    """
    Quick sort with the simple last-element partition. Only the smaller side is sorted recursively, the
    larger one is handled by the loop, so the recursion depth stays below log2(n) + 1 even on sorted or
    reverse sorted input where every pivot is an extreme value.
    """
    left, right = _resolve_range(arr, left, right)
    _quick2(arr, left, right)


def quick_sort_median(arr, cutoff: int = CUTOFF, left: int = 0, right: int = None):
    """
    Median-of-three quick sort. Above the cutoff the range is prepared by median3 and the interior
    [left + 1, right - 1] is partitioned by partition_med (the two ends already hold a value <= pivot and
    one >= pivot). At or below the cutoff, and always below 3 elements, bubble sort finishes the range.
    The smaller side is sorted recursively and the larger one by the loop.

    Args:
        arr (MutableSequence): the sequence to sort in place
        cutoff (int, optional): largest range handed to bubble sort. Defaults to CUTOFF (256).
        left (int, optional): first index of the range. Defaults to 0.
        right (int, optional): last index of the range (inclusive). Defaults to len(arr) - 1.
    """
    _check_cutoff(cutoff)
    left, right = _resolve_range(arr, left, right)
    _quick_med(arr, left, right, cutoff)


SORTING_ALGORITHMS = {
    'bubble': bubble_sort,
    'counting': counting_sort,
    'quick': quick_sort,
    'quick2': quick_sort_tail,
    'quickMed': quick_sort_median,
}

CUTOFF_ALGORITHMS = ('quick', 'quickMed')


def get_sorter(algo_type: str, cutoff: int = None):
    """
    Look up a sorting algorithm by its command line name.

    Args:
        algo_type (str): one of ['bubble', 'counting', 'quick', 'quick2', 'quickMed']
        cutoff (int, optional): bubble sort cutoff, only used by 'quick' and 'quickMed'. Defaults to CUTOFF.

    Returns:
        function: sort(arr) -> None
    """
    if algo_type not in SORTING_ALGORITHMS:
        raise ValueError(f"Unknown sorting method: {algo_type}")
    func = SORTING_ALGORITHMS[algo_type]
    if algo_type in CUTOFF_ALGORITHMS and cutoff is not None:
        _check_cutoff(cutoff)

        def sorter(arr):
            func(arr, cutoff=cutoff)
        sorter.__name__ = func.__name__
        return sorter
    return func
