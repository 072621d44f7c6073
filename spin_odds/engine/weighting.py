"""
Weight Ranker

Turns a prize list and a trial price into a normalized probability
distribution. Each prize is scored by how many trials its value is worth:

    trials_needed = value / trial_price
    weight        = 1 / trials_needed ** exponent
    probability   = weight / Σ weight

With the default exponent of 1.5 the probability of expensive prizes falls
off faster than under plain inverse-value weighting (exponent 1.0), which
models a house edge that grows with prize value.
"""

import math
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from spin_odds.config.settings import WEIGHT_EXPONENT
from spin_odds.core import (
    Distribution,
    InvalidInputError,
    Prize,
    RankedPrize,
)
from spin_odds.utils import get_logger

logger = get_logger(__name__)

PrizeLike = Union[Prize, Tuple[str, float]]


def _is_positive_finite(x: float) -> bool:
    return isinstance(x, (int, float)) and not isinstance(x, bool) and math.isfinite(x) and x > 0


def coerce_prizes(prizes: Iterable[PrizeLike]) -> List[Prize]:
    """
    Normalize caller input into a validated list of Prize objects.

    Accepts Prize instances or (name, value) pairs, preserving order.

    Raises:
        InvalidInputError: If the list is empty, a value is not a positive
            finite number, or a name is blank or repeated.
    """
    if prizes is None:
        raise InvalidInputError("Prize list is required")

    result: List[Prize] = []
    seen = set()

    for item in prizes:
        if isinstance(item, Prize):
            prize = item
        else:
            try:
                name, value = item
            except (TypeError, ValueError):
                raise InvalidInputError(f"Expected a (name, value) pair, got {item!r}") from None
            prize = Prize(name=name, value=value)

        if not isinstance(prize.name, str) or not prize.name.strip():
            raise InvalidInputError(f"Prize name must be a non-empty string, got {prize.name!r}")
        if prize.name in seen:
            raise InvalidInputError(f"Duplicate prize name: '{prize.name}'")
        if not _is_positive_finite(prize.value):
            raise InvalidInputError(
                f"Prize '{prize.name}' must have a positive value, got {prize.value!r}"
            )

        seen.add(prize.name)
        result.append(prize)

    if not result:
        raise InvalidInputError("Prize list must not be empty")

    return result


def validate_trial_price(trial_price: float) -> float:
    """Return the trial price as a float, or raise InvalidInputError."""
    if not _is_positive_finite(trial_price):
        raise InvalidInputError(f"Trial price must be a positive number, got {trial_price!r}")
    return float(trial_price)


class WeightRanker:
    """
    Ranks prizes into a probability distribution.

    Normalization is carried out in log space, so prize/price ratios that
    would overflow or underflow a direct power still produce finite,
    correctly ordered probabilities. The reported ``weight`` and
    ``total_weight`` are the direct values and may be 0 or inf in such
    extreme cases.
    """

    def __init__(self, exponent: Optional[float] = None):
        """
        Initialize the ranker.

        Args:
            exponent: Convexity of the weighting policy. Defaults to
                WEIGHT_EXPONENT (1.5); 1.0 gives inverse-value weighting.
        """
        exponent = WEIGHT_EXPONENT if exponent is None else exponent
        if not _is_positive_finite(exponent):
            raise InvalidInputError(f"Weight exponent must be positive, got {exponent!r}")
        self.exponent = float(exponent)

    def weight_for(self, value: float, trial_price: float) -> float:
        """Unnormalized weight of a single prize."""
        trials_needed = value / trial_price
        try:
            return 1.0 / trials_needed ** self.exponent
        except OverflowError:
            return 0.0
        except ZeroDivisionError:
            return math.inf

    def rank(self, prizes: Iterable[PrizeLike], trial_price: float) -> Distribution:
        """
        Build the distribution for a prize list.

        Args:
            prizes: Prize objects or (name, value) pairs.
            trial_price: Cost of a single trial.

        Returns:
            Immutable Distribution in the input order.

        Raises:
            InvalidInputError: On an empty list, a non-positive value or price,
                or duplicate names.
        """
        prize_list = coerce_prizes(prizes)
        trial_price = validate_trial_price(trial_price)

        log_price = math.log(trial_price)
        log_weights = [
            -self.exponent * (math.log(p.value) - log_price) for p in prize_list
        ]

        # Shift by the largest log weight so the biggest term is exp(0) == 1
        peak = max(log_weights)
        scaled = [math.exp(lw - peak) for lw in log_weights]
        scaled_total = sum(scaled)

        ranked = []
        for prize, share in zip(prize_list, scaled):
            weight = self.weight_for(prize.value, trial_price)
            probability = share / scaled_total
            if probability == 0.0:
                logger.warning(
                    f"Prize '{prize.name}' underflowed to zero probability "
                    f"(value={prize.value}, price={trial_price})"
                )
            logger.debug(
                f"{prize.name}: value={prize.value}, weight={weight:.6g}, "
                f"probability={probability:.6%}"
            )
            ranked.append(RankedPrize(
                name=prize.name,
                value=prize.value,
                trials_needed=prize.value / trial_price,
                weight=weight,
                probability=probability,
            ))

        total_weight = sum(p.weight for p in ranked)

        logger.info(
            f"Ranked {len(ranked)} prizes at price {trial_price:g} "
            f"(exponent={self.exponent:g}, total_weight={total_weight:.4g})"
        )

        return Distribution(
            prizes=tuple(ranked),
            trial_price=trial_price,
            exponent=self.exponent,
            total_weight=total_weight,
        )


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def rank_prizes(
    prizes: Sequence[PrizeLike],
    trial_price: float,
    exponent: Optional[float] = None,
) -> Distribution:
    """
    Convenience function to rank prizes with default settings.

    Args:
        prizes: Prize objects or (name, value) pairs.
        trial_price: Cost of a single trial.
        exponent: Optional weighting exponent. Uses WEIGHT_EXPONENT if None.

    Returns:
        Distribution over the prizes.
    """
    return WeightRanker(exponent=exponent).rank(prizes, trial_price)
