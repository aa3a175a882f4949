import logging
from typing import Sequence
import numpy as np
from numpy.typing import ArrayLike

from .rng import RandomSource

logger = logging.getLogger(__name__)


def _empty() -> np.ndarray:
    return np.empty(0, dtype=np.intp)


def choose_multiple_weighted(rng: RandomSource, amount: int, weights: Sequence[float] | ArrayLike) -> np.ndarray:
    """Draw `amount` indices into `weights` with replacement, using stochastic universal sampling.

    A single uniform offset `u` in `[0, S / amount)` places `amount` evenly spaced pointers `u + i * S / amount` on
    the cumulative weight curve with total `S`. Each pointer selects the index whose cumulative interval contains it.
    Compared to independent roulette draws this has minimal variance: every index is drawn within one unit of its
    ideal share `amount * w_i / S`, and an index with zero weight is never drawn.

    The picks come out ordered by index, so they are shuffled before they are returned; otherwise consecutive draws
    (which become mating partners) would always be neighbours in the population.

    :param rng:     The randomness source; consumes one uniform float and one shuffle.
    :param amount:  The number of indices to draw.
    :param weights: Finite, non-negative sampling weights. They need not be normalized.
    :return: An integer array of length `amount`, or an empty array if `amount` is zero, there are no weights, or all
             weights are zero (a degenerate distribution, which is logged as a warning).
    """
    if amount < 0:
        raise ValueError(f"amount must not be negative, got {amount}")
    weights = np.asarray(weights, dtype=float)
    if weights.ndim != 1:
        raise ValueError("weights must be one-dimensional")
    if amount == 0 or len(weights) == 0:
        return _empty()
    if not np.all(np.isfinite(weights)) or np.any(weights < 0.0):
        raise ValueError("weights must be finite and non-negative")

    w_max = np.max(weights)
    if w_max == 0.0:
        logger.warning(f"all {len(weights)} sampling weights are zero, no individual can be selected")
        return _empty()
    # scaling by the maximum keeps the cumulative sum from overflowing
    cumulative = np.cumsum(weights / w_max)
    step = cumulative[-1] / amount
    pointers = step * (rng.random() + np.arange(amount))
    picks = np.searchsorted(cumulative, pointers, side='right')
    # round-off may push the last pointer past the end of the curve
    np.minimum(picks, np.flatnonzero(weights)[-1], out=picks)

    picks = picks.astype(np.intp, copy=False)
    rng.shuffle(picks)
    return picks


def choose_multiple_uniform(rng: RandomSource, amount: int, population: int) -> np.ndarray:
    """Draw `amount` indices from `range(population)` with exact coverage: every index appears either
    `amount // population` or `amount // population + 1` times. The remainder is filled by sampling without replacement
    and the whole draw is shuffled.

    This gives fewer self-pairs than weighted sampling, in particular for small populations.
    """
    if amount < 0:
        raise ValueError(f"amount must not be negative, got {amount}")
    if amount == 0 or population == 0:
        return _empty()

    repeats, remainder = divmod(amount, population)
    picks = np.concatenate([
        np.tile(np.arange(population), repeats),
        rng.choice(population, size=remainder, replace=False),
    ]).astype(np.intp, copy=False)
    rng.shuffle(picks)
    return picks
