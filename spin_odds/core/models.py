"""
Core data models for Spin Odds.

Prizes are supplied by the caller; ranked prizes and the distribution are
derived by the weight ranker and never mutated afterwards.
"""

from dataclasses import dataclass, field
from itertools import accumulate
from typing import Dict, Iterator, Optional, Tuple


# =============================================================================
# DATA CLASSES
# =============================================================================


@dataclass(frozen=True)
class Prize:
    """A prize that can be won on a spin."""
    name: str              # Unique identifier within a prize set
    value: float           # Worth, in the same currency as the trial price


@dataclass(frozen=True)
class RankedPrize:
    """A prize together with the weight and probability assigned to it."""
    name: str
    value: float
    trials_needed: float   # value / trial_price
    weight: float          # Unnormalized draw score
    probability: float     # Normalized single-trial probability

    @property
    def is_reachable(self) -> bool:
        """True if the prize can be drawn at all."""
        return self.probability > 0.0


@dataclass(frozen=True)
class Distribution:
    """
    Normalized probability distribution over a prize set.

    Prize order is the order the prizes were supplied in; the sampling
    intervals follow that order.
    """
    prizes: Tuple[RankedPrize, ...]
    trial_price: float
    exponent: float
    total_weight: float
    _index: Dict[str, RankedPrize] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_index", {p.name: p for p in self.prizes})

    def __len__(self) -> int:
        return len(self.prizes)

    def __iter__(self) -> Iterator[RankedPrize]:
        return iter(self.prizes)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(p.name for p in self.prizes)

    @property
    def probabilities(self) -> Tuple[float, ...]:
        return tuple(p.probability for p in self.prizes)

    @property
    def cumulative_probabilities(self) -> Tuple[float, ...]:
        """Upper bounds of each prize's sampling interval in [0, 1)."""
        return tuple(accumulate(self.probabilities))

    @property
    def total_probability(self) -> float:
        return sum(self.probabilities)

    @property
    def all_reachable(self) -> bool:
        """True if every prize has a strictly positive probability."""
        return all(p.is_reachable for p in self.prizes)

    def get(self, name: str) -> Optional[RankedPrize]:
        """Return the ranked prize with this name, or None."""
        return self._index.get(name)

    def probability_of(self, name: str) -> float:
        """Single-trial probability of a prize; 0.0 if the name is unknown."""
        prize = self._index.get(name)
        return prize.probability if prize is not None else 0.0


@dataclass(frozen=True)
class CollectionEstimate:
    """
    Monte Carlo estimate of the trials needed to collect every prize.

    Runs that hit ``max_draws`` before completing the set are counted as
    ``max_draws`` draws, so ``mean_trials`` is biased downward whenever
    ``capped_runs`` is non-zero.
    """
    mean_trials: float
    simulations: int
    capped_runs: int
    max_draws: int

    @property
    def is_biased(self) -> bool:
        """True if any run was truncated at the draw cap."""
        return self.capped_runs > 0

    @property
    def capped_fraction(self) -> float:
        return self.capped_runs / self.simulations if self.simulations else 0.0


@dataclass(frozen=True)
class TrialCostRow:
    """One row of a probability-versus-cost table."""
    trials: int
    probability: float     # P(target drawn at least once within `trials`)
    cost: float            # trials * trial_price


@dataclass(frozen=True)
class PrizeProfitability:
    """Expected cost of winning a prize compared with its value."""
    name: str
    value: float
    expected_trials: float
    expected_cost: float
    profit: float          # value - expected_cost
    profit_ratio: float    # profit / expected_cost

    @property
    def is_profitable(self) -> bool:
        """True if the prize is worth more than it is expected to cost."""
        return self.profit > 0
