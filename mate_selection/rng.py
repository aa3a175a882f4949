import random
from typing import Protocol, runtime_checkable
import numpy as np


@runtime_checkable
class RandomSource(Protocol):
    """The randomness consumed by the samplers. A `numpy.random.Generator` satisfies this protocol, so does any other
    object providing these three methods with the same semantics."""

    def random(self) -> float:
        """A uniform float in the half-open interval [0, 1)."""
        ...

    def choice(self, a: int, size: int, replace: bool = True) -> np.ndarray:
        """Sample `size` integers from `range(a)`; with `replace=False` no integer is drawn twice."""
        ...

    def shuffle(self, x: np.ndarray) -> None:
        """Shuffle the array in place."""
        ...


def resolve_rng(rng: RandomSource | int | np.random.SeedSequence | None) -> RandomSource:
    """Turn the `rng` argument of the public functions into a randomness source.

    :param rng: An existing randomness source (returned as is), a seed for a new `numpy.random.Generator`, or None
                for a generator seeded from fresh OS entropy. There is no module level generator. A source must follow
                the numpy signatures, in particular `choice(a, size, replace)`; a `random.Random` does not and is
                rejected.
    :return: The randomness source to use for a single call.
    """
    if rng is None or isinstance(rng, (int, np.integer, np.random.SeedSequence)):
        return np.random.default_rng(rng)
    if isinstance(rng, random.Random):
        raise ValueError("random.Random has a different choice() signature, use a numpy.random.Generator or a seed")
    if not isinstance(rng, RandomSource):
        raise ValueError(f"rng must be a seed or provide random(), choice() and shuffle(), got {type(rng).__name__}")
    return rng
