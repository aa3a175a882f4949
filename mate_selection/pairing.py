import logging
import numpy as np

logger = logging.getLogger(__name__)


def _check_even(draws: np.ndarray):
    if draws.ndim != 1:
        raise ValueError("draws must be one-dimensional")
    if len(draws) % 2 != 0:
        raise ValueError(f"draws must have an even length to form pairs, got {len(draws)}")


def reduce_repeats(draws: np.ndarray) -> None:
    """Break up self-pairs, i.e. pairs `(draws[2k], draws[2k + 1])` of two equal indices, in place.

    Greedy single pass over the pairs: for a self-pair of value `v` find the first later pair which does not contain
    `v`, or else the first earlier one, and swap its first element with `draws[2k]`. Such a swap never creates a new
    self-pair. Self-pairs without any candidate (e.g. a population of one) remain.

    Only the pairing changes, never the multiset of drawn indices, so the selection probabilities of the individuals
    are not affected. The pass uses no randomness and is quadratic in the worst case.

    :param draws: A one-dimensional, writable integer array of even length.
    """
    if not isinstance(draws, np.ndarray):
        raise ValueError("draws must be a numpy array, since it is modified in place")
    _check_even(draws)

    # a one-dimensional array can always be reshaped into a view
    pairs = draws.reshape((-1, 2))
    unresolved = 0
    for k in np.flatnonzero(pairs[:, 0] == pairs[:, 1]):
        value = pairs[k, 0]
        if pairs[k, 1] != value:  # already fixed by an earlier swap
            continue
        candidates = np.flatnonzero((pairs[:, 0] != value) & (pairs[:, 1] != value))
        if len(candidates) == 0:
            unresolved += 1
            continue
        later = candidates[candidates > k]
        search = later[0] if len(later) > 0 else candidates[0]
        pairs[k, 0] = pairs[search, 0]
        pairs[search, 0] = value

    if unresolved:
        logger.debug(f"{unresolved} of {len(pairs)} pairs remain self-pairs")


def as_pairs(draws: np.ndarray) -> np.ndarray:
    """View the flat draw sequence as pairs: row `k` of the result is `(draws[2k], draws[2k + 1])`.

    The result shares memory with `draws` whenever `draws` is a numpy array; nothing is copied.

    :return: An integer array of shape `(len(draws) // 2, 2)`.
    """
    draws = np.asarray(draws)
    _check_even(draws)
    return draws.reshape((-1, 2))
