class MateSelectionError(Exception):
    """Base class of all errors raised by the mate selection package."""


class InvalidParameterError(MateSelectionError, ValueError):
    """A strategy parameter lies outside of its documented domain. Raised when the strategy is constructed, the value
    is never clamped into range."""


class DegenerateDistributionError(MateSelectionError, ValueError):
    """All sampling weights are zero, so there is no probability distribution to normalize. This happens e.g. when
    every score was excluded by the strategy."""
