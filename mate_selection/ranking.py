import numpy as np


def argsort(scores: np.ndarray, descending: bool = False) -> np.ndarray:
    """Indices of the non-NaN scores in sorted order. The sort is stable, so equal scores keep the order of their
    original indices (in both directions). NaN scores have no place in the ranking and are left out, hence the result
    may be shorter than `scores`.
    """
    keys = -scores if descending else scores
    # numpy sorts NaN last regardless of its sign bit
    order = np.argsort(keys, kind='stable')
    return order[:np.count_nonzero(~np.isnan(scores))]


def rank_from_best(scores: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Rank the population, such that rank 0 is the best (highest) score and rank M-1 the worst, for M the number of
    non-NaN scores. Ties are ranked by index: among equal scores the lower index gets the worse rank.

    :return: A tuple `(indices, ranks)` of equally long integer arrays: `ranks[i]` is the rank of `scores[indices[i]]`.
             Individuals with a NaN score do not appear in `indices`.
    """
    order = argsort(scores)
    ranks = np.arange(len(order) - 1, -1, -1)
    return order, ranks
