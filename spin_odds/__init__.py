"""
Spin Odds - Probability engine for weighted spin-for-a-prize draws.

Ranks prizes into a draw distribution from their value and the trial price,
then answers how likely a prize is within a number of trials, how many
trials it takes, and how long it takes to collect every prize.
"""

__version__ = "0.1.0"

from spin_odds.core import (
    # Data classes
    Prize,
    RankedPrize,
    Distribution,
    CollectionEstimate,
    TrialCostRow,
    PrizeProfitability,
    # Errors
    SpinOddsError,
    InvalidInputError,
    UnreachablePrizeError,
)

from spin_odds.engine import (
    WeightRanker,
    rank_prizes,
    ProbabilityEngine,
    joint_query,
    minimum_trials_for_confidence,
    probability_table,
    profitability,
)

__all__ = [
    # Version
    "__version__",
    # Data classes
    "Prize",
    "RankedPrize",
    "Distribution",
    "CollectionEstimate",
    "TrialCostRow",
    "PrizeProfitability",
    # Errors
    "SpinOddsError",
    "InvalidInputError",
    "UnreachablePrizeError",
    # Engine
    "WeightRanker",
    "rank_prizes",
    "ProbabilityEngine",
    "joint_query",
    "minimum_trials_for_confidence",
    "probability_table",
    "profitability",
]
