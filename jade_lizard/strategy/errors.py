"""Input validation errors raised before a payoff table is built."""


class PayoffInputError(ValueError):
    """Base class for rejected strategy inputs."""


class InvalidRangeError(PayoffInputError):
    """Spot price or range multipliers cannot produce a spot range."""


class InvalidStrikeOrderingError(PayoffInputError):
    """Strikes are not in the order the strategy is built from."""


class InvalidPremiumError(PayoffInputError):
    """Premium is negative or not a finite number."""
