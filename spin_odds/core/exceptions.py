"""Exceptions raised by the Spin Odds engine."""


class SpinOddsError(Exception):
    """Base class for all Spin Odds errors."""


class InvalidInputError(SpinOddsError, ValueError):
    """
    Raised when a prize list, trial price, or query argument is invalid.

    Construction errors are fatal to the engine instance; build a new one
    with valid inputs.
    """


class UnreachablePrizeError(SpinOddsError, LookupError):
    """Raised when an expectation is requested for a prize with zero probability."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Prize '{name}' has zero probability and can never be drawn")
