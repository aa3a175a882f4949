import pytest
import numpy as np

from mate_selection.pairing import reduce_repeats, as_pairs


reduce_test_data = [
    ([0, 0, 1, 2], [1, 0, 0, 2]),
    ([1, 2, 0, 0], [0, 2, 1, 0]),  # wraps around to earlier pairs
    ([0, 0, 1, 1], [1, 0, 0, 1]),  # one swap fixes both self-pairs
    ([3, 3, 3, 4], [3, 3, 3, 4]),  # no pair without a 3
    ([5, 5], [5, 5]),
    ([0, 1, 2, 3], [0, 1, 2, 3]),
    ([], []),
]


@pytest.mark.parametrize("draws, expected", reduce_test_data)
def test_reduce_repeats(draws: list[int], expected: list[int]):
    draws = np.array(draws, dtype=np.intp)
    reduce_repeats(draws)
    assert draws.tolist() == expected


def test_reduce_repeats_keeps_multiset(rng):
    draws = rng.integers(0, 4, size=200)
    original = draws.copy()
    n_repeats = np.count_nonzero(original[::2] == original[1::2])
    assert n_repeats > 0

    reduce_repeats(draws)
    assert np.array_equal(np.sort(draws), np.sort(original))
    assert np.count_nonzero(draws[::2] == draws[1::2]) == 0

    # deterministic, and a no-op once there is nothing left to fix
    again = original.copy()
    reduce_repeats(again)
    assert np.array_equal(again, draws)
    reduce_repeats(again)
    assert np.array_equal(again, draws)


def test_reduce_repeats_raises():
    with pytest.raises(ValueError):
        reduce_repeats(np.array([1, 2, 3]))
    with pytest.raises(ValueError):
        reduce_repeats([1, 1])


def test_as_pairs_is_view():
    draws = np.arange(6, dtype=np.intp)
    pairs = as_pairs(draws)
    assert pairs.shape == (3, 2)
    assert pairs.tolist() == [[0, 1], [2, 3], [4, 5]]
    assert np.shares_memory(pairs, draws)

    pairs[1, 0] = 42
    assert draws[2] == 42


def test_as_pairs():
    assert as_pairs(np.empty(0, dtype=np.intp)).shape == (0, 2)
    assert as_pairs([7, 8]).tolist() == [[7, 8]]
    with pytest.raises(ValueError):
        as_pairs(np.arange(5))
