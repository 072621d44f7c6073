"""
Query API

Convenience entry points for callers that only need an answer, not an
engine. Each call builds a fresh ProbabilityEngine over the supplied prizes.
"""

from typing import Optional, Sequence, Tuple

from spin_odds.config.settings import (
    COLLECTION_SIMULATIONS,
    DEFAULT_CONFIDENCE,
    MAX_SEARCH_TRIALS,
)
from spin_odds.core import InvalidInputError
from spin_odds.engine.probability import ProbabilityEngine, require_count
from spin_odds.engine.weighting import PrizeLike
from spin_odds.utils import get_logger

logger = get_logger(__name__)


def joint_query(
    prizes: Sequence[PrizeLike],
    target_name: str,
    trial_price: float,
    trials: int,
    seed: Optional[int] = None,
    simulations: int = COLLECTION_SIMULATIONS,
) -> Tuple[float, float]:
    """
    Probability of winning the target and of collecting every prize.

    Args:
        prizes: Prize objects or (name, value) pairs.
        target_name: Prize of interest.
        trial_price: Cost of a single trial.
        trials: Number of trials.
        seed: Optional seed for the collection estimate.
        simulations: Monte Carlo runs for the collection estimate.

    Returns:
        (P(target within trials), P(all prizes within trials))
    """
    engine = ProbabilityEngine(prizes, trial_price, seed=seed)
    return (
        engine.probability_within_trials(target_name, trials),
        engine.probability_all_collected_within(trials, simulations=simulations),
    )


def minimum_trials_for_confidence(
    prizes: Sequence[PrizeLike],
    target_name: str,
    trial_price: float,
    confidence: float = DEFAULT_CONFIDENCE,
    max_trials: int = MAX_SEARCH_TRIALS,
) -> Optional[int]:
    """
    Smallest number of trials that wins the target with at least
    ``confidence`` probability.

    P(target within k) is non-decreasing in k, so a binary search over
    1..max_trials finds the same k as a linear scan.

    Returns:
        The trial count, or None if no k <= max_trials reaches confidence.

    Raises:
        InvalidInputError: If confidence is outside (0, 1] or the prizes
            or price are invalid.
    """
    if not 0.0 < confidence <= 1.0:
        raise InvalidInputError(f"Confidence must be in (0, 1], got {confidence!r}")
    max_trials = require_count("max_trials", max_trials, 1)

    engine = ProbabilityEngine(prizes, trial_price)

    if engine.probability_within_trials(target_name, max_trials) < confidence:
        logger.info(
            f"'{target_name}' does not reach {confidence:.0%} within {max_trials} trials"
        )
        return None

    low, high = 1, max_trials
    while low < high:
        mid = (low + high) // 2
        if engine.probability_within_trials(target_name, mid) >= confidence:
            high = mid
        else:
            low = mid + 1

    logger.info(f"'{target_name}' reaches {confidence:.0%} after {low} trials")
    return low
