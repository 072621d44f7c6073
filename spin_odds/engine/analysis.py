"""
Prize Analysis

Report rows built on top of the probability engine:
1. Probability of winning a prize as the number of trials (and cost) grows.
2. Expected cost of winning each prize compared with its value.
"""

from typing import List

from spin_odds.core import (
    PrizeProfitability,
    TrialCostRow,
    UnreachablePrizeError,
)
from spin_odds.engine.probability import ProbabilityEngine, require_count
from spin_odds.utils import get_logger

logger = get_logger(__name__)


def probability_table(
    engine: ProbabilityEngine,
    target_name: str,
    max_trials: int = 50,
    step: int = 5,
) -> List[TrialCostRow]:
    """
    Probability of winning a prize for trials = 1, 1 + step, ... <= max_trials.

    Args:
        engine: Engine to query.
        target_name: Prize of interest.
        max_trials: Largest trial count to include.
        step: Gap between consecutive rows.

    Returns:
        List of TrialCostRow in increasing trial order.
    """
    step = require_count("step", step, 1)
    max_trials = require_count("max_trials", max_trials, 1)

    return [
        TrialCostRow(
            trials=trials,
            probability=engine.probability_within_trials(target_name, trials),
            cost=engine.cost_of_trials(trials),
        )
        for trials in range(1, max_trials + 1, step)
    ]


def profitability(engine: ProbabilityEngine) -> List[PrizeProfitability]:
    """
    Compare each prize's value with the expected cost of winning it.

    expected_cost = expected_trials * trial_price
    profit        = value - expected_cost
    profit_ratio  = profit / expected_cost

    Prizes that can never be drawn are skipped.
    """
    results = []

    for prize in engine.distribution:
        try:
            expected_trials = engine.expected_trials_for(prize.name)
        except UnreachablePrizeError as e:
            logger.warning(f"Skipping profitability for {e.name}: unreachable")
            continue

        expected_cost = expected_trials * engine.trial_price
        profit = prize.value - expected_cost

        results.append(PrizeProfitability(
            name=prize.name,
            value=prize.value,
            expected_trials=expected_trials,
            expected_cost=expected_cost,
            profit=profit,
            profit_ratio=profit / expected_cost,
        ))

    profitable = sum(1 for r in results if r.is_profitable)
    logger.info(f"Profitability: {profitable}/{len(results)} prizes worth more than their expected cost")

    return results
