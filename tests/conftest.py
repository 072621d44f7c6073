"""Shared fixtures for the Spin Odds tests."""

import pytest

from spin_odds.core import Distribution, RankedPrize
from spin_odds.engine.probability import ProbabilityEngine


@pytest.fixture
def unreachable_engine():
    """Engine whose last prize has zero probability (weight underflowed)."""
    dist = Distribution(
        prizes=(
            RankedPrize("A", 10, 0.1, 31.62, 0.75),
            RankedPrize("B", 50, 0.5, 2.83, 0.25),
            RankedPrize("Z", 1e9, 1e7, 0.0, 0.0),
        ),
        trial_price=100.0,
        exponent=1.5,
        total_weight=34.45,
    )
    return ProbabilityEngine.from_distribution(dist, seed=7)
