"""
Probability engine for Spin Odds.

Contains modules for ranking prizes into a distribution, answering
probability queries over it, and building report rows.
"""

from spin_odds.engine.weighting import (
    WeightRanker,
    rank_prizes,
    coerce_prizes,
)
from spin_odds.engine.probability import (
    ProbabilityEngine,
)
from spin_odds.engine.queries import (
    joint_query,
    minimum_trials_for_confidence,
)
from spin_odds.engine.analysis import (
    probability_table,
    profitability,
)

__all__ = [
    # Weighting
    "WeightRanker",
    "rank_prizes",
    "coerce_prizes",
    # Queries
    "ProbabilityEngine",
    "joint_query",
    "minimum_trials_for_confidence",
    # Reports
    "probability_table",
    "profitability",
]
