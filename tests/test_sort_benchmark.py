import pytest

import sort_benchmark
from sort_benchmark import SortVerificationFailed, first_unsorted_index, is_sorted, run_sort, verify_sorted
from sorting_algorithms import SORTING_ALGORITHMS


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "sample.txt"
    path.write_text("5 3 8 1 9 2\n")
    return path


def test_is_sorted():
    assert is_sorted([])
    assert is_sorted([1])
    assert is_sorted([1, 1, 2, 3])
    assert not is_sorted([1, 3, 2])
    assert first_unsorted_index([1, 2, 5, 4, 6]) == 2


def test_verify_sorted_order():
    with pytest.raises(SortVerificationFailed) as excinfo:
        verify_sorted([2, 1, 3], [2, 1, 3])
    assert excinfo.value.index == 0


def test_verify_sorted_permutation():
    verify_sorted([3, 1, 2], [1, 2, 3])
    with pytest.raises(SortVerificationFailed):
        verify_sorted([3, 1, 2], [1, 2, 2])
    with pytest.raises(SortVerificationFailed):
        verify_sorted([3, 1, 2], [1, 2])


@pytest.mark.parametrize("algo", list(SORTING_ALGORITHMS))
def test_run_sort(algo):
    sample = [5, 3, 8, 1, 9, 2]
    elapsed, report = run_sort(sample, algo, cutoff=2)
    assert sample == [1, 2, 3, 5, 8, 9]
    assert elapsed >= 0
    assert report is None


def test_run_sort_with_memory_trace():
    sample = list(range(50, 0, -1))
    _, report = run_sort(sample, 'quickMed', trace_memory='alloc')
    assert sample == list(range(1, 51))
    assert report.func_name == 'quick_sort_median'


@pytest.mark.parametrize("algo", list(SORTING_ALGORITHMS))
def test_main_print(sample_file, capsys, algo):
    assert sort_benchmark.main(['-f', str(sample_file), '--algo', algo, '-p']) == 0
    assert capsys.readouterr().out.split() == ['1', '2', '3', '5', '8', '9']


def test_main_timing(sample_file, capsys):
    assert sort_benchmark.main(['-f', str(sample_file)]) == 0
    out = capsys.readouterr().out
    assert out.startswith("execution time: ")
    assert out.rstrip().endswith(" sec")


def test_main_memory_report(sample_file, capsys):
    assert sort_benchmark.main(['-f', str(sample_file), '--trace-memory', 'rss']) == 0
    out = capsys.readouterr().out
    assert "Peak while running bubble_sort" in out


def test_main_empty_file(tmp_path, capsys):
    path = tmp_path / "empty.txt"
    path.write_text("\n")
    assert sort_benchmark.main(['-f', str(path)]) == 1
    assert "is an invalid path" in capsys.readouterr().out


def test_main_missing_file(tmp_path, capsys):
    assert sort_benchmark.main(['-f', str(tmp_path / "nope.txt")]) == 1
    assert "is an invalid path" in capsys.readouterr().out


def test_main_reports_broken_sort(sample_file, capsys, monkeypatch):
    def broken_sort(arr):
        arr.reverse()

    monkeypatch.setattr(sort_benchmark, "get_sorter", lambda algo_type, cutoff=None: broken_sort)
    assert sort_benchmark.main(['-f', str(sample_file)]) == 1
    assert "unable to sort the input vector" in capsys.readouterr().out


def test_main_reports_lost_elements(sample_file, capsys, monkeypatch):
    def lossy_sort(arr):
        arr[:] = [1] * len(arr)

    monkeypatch.setattr(sort_benchmark, "get_sorter", lambda algo_type, cutoff=None: lossy_sort)
    assert sort_benchmark.main(['-f', str(sample_file)]) == 1
    assert "unable to sort the input vector" in capsys.readouterr().out


@pytest.mark.parametrize("algo", ['quick', 'quickMed'])
@pytest.mark.parametrize("values", [range(20000), range(20000, 0, -1)])
def test_main_large_sorted_inputs(tmp_path, capsys, algo, values):
    path = tmp_path / "sample.txt"
    path.write_text(" ".join(str(i) for i in values))
    assert sort_benchmark.main(['-f', str(path), '--algo', algo, '-p']) == 0
    assert capsys.readouterr().out.split() == [str(i) for i in sorted(values)]


@pytest.mark.parametrize("argv", [
    [],
    ['-f', 'x.txt', '--algo', 'heap'],
    ['-f', 'x.txt', '--cutoff', '-1'],
    ['-f', 'x.txt', '--trace-memory', 'gpu'],
])
def test_main_argument_errors(argv):
    with pytest.raises(SystemExit) as excinfo:
        sort_benchmark.main(argv)
    assert excinfo.value.code == 2
