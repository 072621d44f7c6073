"""Core data models and exceptions."""

from spin_odds.core.models import (
    # Data classes
    Prize,
    RankedPrize,
    Distribution,
    CollectionEstimate,
    TrialCostRow,
    PrizeProfitability,
)
from spin_odds.core.exceptions import (
    SpinOddsError,
    InvalidInputError,
    UnreachablePrizeError,
)

__all__ = [
    "Prize",
    "RankedPrize",
    "Distribution",
    "CollectionEstimate",
    "TrialCostRow",
    "PrizeProfitability",
    "SpinOddsError",
    "InvalidInputError",
    "UnreachablePrizeError",
]
