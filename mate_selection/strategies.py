"""Mate selection strategies for evolutionary algorithms.

A mate selection strategy randomly selects pairs of individuals from a population, with the intent of mating them
together. Individuals are selected based on their reproductive fitness "score": each strategy transforms the scores
into sampling weights, which are then sampled with stochastic universal sampling.
"""
from math import ceil, isfinite, log
from typing import Sequence
from attrs import Attribute, define, field
import numpy as np
from numpy.typing import ArrayLike

from .errors import DegenerateDistributionError, InvalidParameterError
from .pairing import as_pairs, reduce_repeats
from .ranking import argsort, rank_from_best
from .rng import RandomSource, resolve_rng
from .sampling import choose_multiple_uniform, choose_multiple_weighted

Scores = Sequence[float] | ArrayLike
Rng = RandomSource | int | np.random.SeedSequence | None


def _as_scores(scores: Scores) -> np.ndarray:
    scores = np.asarray(scores, dtype=float)
    if scores.ndim != 1:
        raise ValueError(f"scores must be one-dimensional, got shape {scores.shape}")
    return scores


def _check_amount(amount: int):
    if isinstance(amount, bool) or not isinstance(amount, (int, np.integer)):
        raise ValueError(f"amount must be an integer, got {amount!r}")
    if amount < 0:
        raise ValueError(f"amount must not be negative, got {amount}")


def _unit_interval(instance, attribute: Attribute, value: float):
    if not 0.0 <= value <= 1.0:
        raise InvalidParameterError(f"{attribute.name} must be in the range [0, 1], got {value!r}")


def _finite(instance, attribute: Attribute, value: float):
    if not isfinite(value):
        raise InvalidParameterError(f"{attribute.name} must be finite, got {value!r}")


def _positive_int(instance, attribute: Attribute, value: int):
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value <= 0:
        raise InvalidParameterError(f"{attribute.name} must be a positive integer, got {value!r}")


class MateSelection:
    """Common interface of all mate selection strategies. Concrete strategies are immutable values; they only
    implement `sample_weight`."""

    __slots__ = ()

    def pairs(self, amount: int, scores: Scores, rng: Rng = None) -> np.ndarray:
        """Apply the mate selection algorithm. This almost never mates an individual with itself.

        :param amount:  The desired number of mating pairs.
        :param scores:  The reproductive fitness of each individual.
        :param rng:     Randomness source, seed, or None (see `resolve_rng`).
        :return:    An integer array of shape `(amount, 2)`; each row is a pair of parents to mate together, given as
                    indices into `scores`. The array is empty if there are no scores or all weights are zero.
        """
        _check_amount(amount)
        draws = self.select(2 * amount, scores, rng)
        reduce_repeats(draws)
        return as_pairs(draws)

    def select(self, amount: int, scores: Scores, rng: Rng = None) -> np.ndarray:
        """Choose `amount` individuals with replacement, weighted by `sample_weight`.

        :return: An integer array of indices into `scores`, of length `amount` (or empty, see `pairs`).
        """
        _check_amount(amount)
        scores = _as_scores(scores)
        if amount == 0 or len(scores) == 0:
            return np.empty(0, dtype=np.intp)
        weights = self.sample_weight(scores)
        return choose_multiple_weighted(resolve_rng(rng), amount, weights)

    def pdf(self, scores: Scores) -> np.ndarray:
        """Probability Density Function: the probability of each individual to be selected by a single draw.

        :raises DegenerateDistributionError: If all sampling weights are zero, which leaves the distribution undefined.
        """
        weights = self.sample_weight(_as_scores(scores))
        if len(weights) == 0:
            return weights
        w_max = np.max(weights)
        if w_max == 0.0:
            raise DegenerateDistributionError(f"{self!r} assigns zero weight to all {len(weights)} individuals")
        weights = weights / w_max
        return weights / np.sum(weights)

    def sample_weight(self, scores: np.ndarray) -> np.ndarray:
        """Transform the reproductive fitness scores into sampling weights. The weights are finite, non-negative and
        index aligned with the scores; the scores are not modified."""
        raise NotImplementedError


@define(frozen=True)
class Random(MateSelection):
    """Select parents with a uniform random probability, ignoring the scores.

    Instead of weighted sampling this guarantees exact coverage: each individual is selected either
    `amount // N` or `amount // N + 1` times.
    """

    def sample_weight(self, scores: np.ndarray) -> np.ndarray:
        return np.ones_like(scores)

    def pdf(self, scores: Scores) -> np.ndarray:
        scores = _as_scores(scores)
        return np.full_like(scores, 1.0 / max(len(scores), 1))

    def select(self, amount: int, scores: Scores, rng: Rng = None) -> np.ndarray:
        _check_amount(amount)
        return choose_multiple_uniform(resolve_rng(rng), amount, len(_as_scores(scores)))


@define(frozen=True)
class Proportional(MateSelection):
    """Select parents with a probability that is directly proportional to the magnitude of their score.
    >   `probability(i) = score(i) / sum(score(x) for x in population)`

    Typically this method does not directly prevent any individuals from mating, instead it biases the selection based
    on their scores. This method is significantly influenced by the magnitude of the fitness scoring function, and by
    the signal-to-noise ratio between the average score and the variations in the scores.

    Negative or invalid (NaN, infinite) scores are discarded and those individuals are not permitted to mate.
    """

    def sample_weight(self, scores: np.ndarray) -> np.ndarray:
        valid = np.isfinite(scores) & (scores > 0.0)
        return np.where(valid, scores, 0.0)


@define(frozen=True)
class Normalized(MateSelection):
    """Normalize the fitness scores into a standard normal distribution. First the scores are normalized into a
    standard distribution and then shifted by the cutoff, which is naturally measured in standard deviations. All scores
    which are less than the cutoff (now sub-zero) are discarded and those individuals are not permitted to mate. This
    method improves upon the proportional method by controlling for the magnitude and variation of the fitness scoring
    function.

    Non-finite scores do not enter the mean and standard deviation, and are not permitted to mate. If all finite scores
    are equal, every one of them lies exactly at the mean.

    :param cutoff:  The minimum deviation (in standard deviations from the mean) required for mating.
    """
    cutoff: float = field(converter=float, validator=_finite)

    def sample_weight(self, scores: np.ndarray) -> np.ndarray:
        weights = np.zeros_like(scores)
        finite = np.isfinite(scores)
        if not np.any(finite):
            return weights

        values = scores[finite]
        # z-scores do not change under scaling, which keeps the sums below from overflowing
        scale = np.max(np.abs(values))
        if scale > 0.0:
            values = values / scale
        values = values - np.mean(values)
        # population standard deviation, i.e. divided by N rather than N-1
        std = np.sqrt(np.mean(values**2))
        z = values / std if std > 0.0 else np.zeros_like(values)
        # shift the distribution and cut off everything below zero
        weights[finite] = np.maximum(z - self.cutoff, 0.0)
        return weights


@define(frozen=True)
class Percentile(MateSelection):
    """Apply a simple percentile based threshold to the population. Mating pairs are selected with uniform random
    probability from the eligible members of the population; beyond the threshold the selection is not biased by the
    score.

    The threshold is the score at position `ceil(percentile * M)` (clamped to the last position) of the M non-NaN
    scores in ascending order. Everyone scoring at least the threshold may mate, hence a tie at the threshold lets all
    tied individuals mate. NaN scores never mate.

    :param percentile:  The fraction of the population which is denied the chance to mate. At `0` everyone is allowed
                        to mate and at `1` only the single best individual (and those tied with it) is allowed to mate.
    """
    percentile: float = field(converter=float, validator=_unit_interval)

    def sample_weight(self, scores: np.ndarray) -> np.ndarray:
        eligible = scores[~np.isnan(scores)]
        if len(eligible) == 0:
            return np.zeros_like(scores)
        # rounding first, since e.g. 0.07 * 100 = 7.000000000000001 must not move the position up by one
        position = min(ceil(round(self.percentile * len(eligible), 9)), len(eligible) - 1)
        threshold = np.partition(eligible, position)[position]
        # comparisons with NaN are false, so NaN scores get zero weight
        return (scores >= threshold).astype(float)


@define(frozen=True)
class RankedLinear(MateSelection):
    """Select parents based on their ranking in the population. This method sorts the individuals by their scores.
    Statistically, better ranked individuals will have more children than worse ranked individuals. The actual magnitude
    of the scores is irrelevant, they only order the population.
    >   `probability(rank) = (1/N) * (1 + SP - 2 * SP * (rank-1)/(N-1))`
    >   Where `N` is the population size, and
    >   Where `rank = 1` is the best individual and `rank = N` is the worst.

    Individuals with a NaN score are not ranked and not permitted to mate.

    :param selection_pressure:  The inequality of the probability of being selected, in the range [0, 1]. At zero, all
                                members are equally likely to be selected. At one, the worst ranked individual will
                                never be selected.
    """
    selection_pressure: float = field(converter=float, validator=_unit_interval)

    def sample_weight(self, scores: np.ndarray) -> np.ndarray:
        weights = np.zeros_like(scores)
        indices, ranks = rank_from_best(scores)
        if len(indices) == 1:
            # the single ranked individual, no need to scale
            weights[indices] = 1.0
            return weights

        sp = self.selection_pressure
        # scale the ranking into the range [0, 1]; zero is the best
        fraction = ranks / (len(indices) - 1)
        weights[indices] = 1.0 + sp - 2.0 * sp * fraction
        return weights


@define(frozen=True)
class RankedExponential(MateSelection):
    """Select parents based on their ranking in the population, with an exponentially weighted bias towards better
    ranked individuals. This method can apply more selection pressure than the RankedLinear method can, which is useful
    when dealing with very large populations or with a very large number of offspring.
    >   `weight(rank) = 2 ** (-rank / median)`, where `rank = 0` is the best individual.

    Individuals with a NaN score are not ranked and not permitted to mate.

    :param median:  The exponential slope of the weights curve. A small median will strongly favor the best
                    individuals, whereas a large median will sample the individuals more equally. The median is a rank,
                    and so it is naturally measured in units of individuals. Approximately half of the sample will be
                    drawn from individuals ranked better than the median, and the other half will be selected from
                    individuals with a worse ranking than the median.
    """
    median: int = field(validator=_positive_int)

    def sample_weight(self, scores: np.ndarray) -> np.ndarray:
        weights = np.zeros_like(scores)
        indices, ranks = rank_from_best(scores)
        weights[indices] = np.exp(-log(2.0) * ranks / self.median)
        return weights


@define(frozen=True)
class Best(MateSelection):
    """Select parents from the best ranked individuals in the population, all with equal probability.

    The `amount` highest non-NaN scores are eligible; among equal scores the lower index is preferred. If there are
    fewer than `amount` non-NaN scores, all of them are eligible.

    :param amount:  The number of individuals who are allowed to mate.
    """
    amount: int = field(validator=_positive_int)

    def sample_weight(self, scores: np.ndarray) -> np.ndarray:
        weights = np.zeros_like(scores)
        weights[argsort(scores, descending=True)[:self.amount]] = 1.0
        return weights


def strategy_from_name(name: str, *args, **kwargs) -> MateSelection:
    """Create a mate selection strategy from its name, e.g. `strategy_from_name('percentile', 0.5)`.

    :param name:    One of 'random', 'proportional', 'normalized', 'percentile', 'ranked-linear', 'ranked-exponential'
                    or 'best'. Underscores may be used instead of hyphens, and case is ignored.
    :param args:    The parameters of the strategy, passed on to its constructor.
    :param kwargs:  The parameters of the strategy, passed on to its constructor.
    :return: The strategy, with validated parameters.
    """
    match name.lower().replace('_', '-'):
        case 'random':
            cls = Random
        case 'proportional':
            cls = Proportional
        case 'normalized':
            cls = Normalized
        case 'percentile':
            cls = Percentile
        case 'ranked-linear':
            cls = RankedLinear
        case 'ranked-exponential':
            cls = RankedExponential
        case 'best':
            cls = Best
        case _:
            raise ValueError(f"unknown mate selection strategy '{name}'")
    return cls(*args, **kwargs)


def transform(strategy: MateSelection, scores: Scores) -> np.ndarray:
    """Transform the scores into the sampling weights of the given strategy."""
    return strategy.sample_weight(_as_scores(scores))


def pdf(strategy: MateSelection, scores: Scores) -> np.ndarray:
    """The selection probability of each individual under the given strategy, see `MateSelection.pdf`."""
    return strategy.pdf(scores)


def select(strategy: MateSelection, amount: int, scores: Scores, rng: Rng = None) -> np.ndarray:
    """Select `amount` individuals with replacement, see `MateSelection.select`."""
    return strategy.select(amount, scores, rng)


def pairs(strategy: MateSelection, amount: int, scores: Scores, rng: Rng = None) -> np.ndarray:
    """Select `amount` mating pairs, see `MateSelection.pairs`."""
    return strategy.pairs(amount, scores, rng)
