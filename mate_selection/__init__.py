from .errors import MateSelectionError, InvalidParameterError, DegenerateDistributionError
from .rng import RandomSource, resolve_rng
from .strategies import (
    MateSelection, Random, Proportional, Normalized, Percentile, RankedLinear, RankedExponential, Best,
    strategy_from_name, transform, pdf, select, pairs,
)
