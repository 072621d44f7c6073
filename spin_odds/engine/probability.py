"""
Probability Engine

Analytic queries
- Single-trial probability read straight from the distribution
- Probability of winning a prize within k trials: 1 - (1 - p)^k
- Expected trials to win a prize: 1 / p (geometric distribution)

Monte Carlo estimators
- Probability of collecting every prize within k trials
- Expected trials to collect every prize (weighted coupon collector)

Every trial is an independent draw, with replacement, from a distribution
that is fixed when the engine is built.
"""

import numbers
from typing import Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np

from spin_odds.config.settings import (
    COLLECTION_SIMULATIONS,
    EXPECTATION_SIMULATIONS,
    MAX_DRAWS_PER_SIMULATION,
    SIMULATION_BATCH_ELEMENTS,
    SIMULATION_CHUNK_DRAWS,
)
from spin_odds.core import (
    CollectionEstimate,
    Distribution,
    InvalidInputError,
    UnreachablePrizeError,
)
from spin_odds.engine.weighting import PrizeLike, WeightRanker
from spin_odds.utils import get_logger

logger = get_logger(__name__)


def require_count(name: str, value, minimum: int) -> int:
    """Validate an integer argument that must be >= minimum."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidInputError(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise InvalidInputError(f"{name} must be >= {minimum}, got {value}")
    return int(value)


class ProbabilityEngine:
    """
    Answers probability questions about a weighted prize draw.

    The distribution is computed once at construction and never changes.
    The engine owns a numpy Generator seeded once per instance; pass
    ``seed`` for reproducible Monte Carlo results. Instances are not meant
    to be shared between threads, but the distribution is.
    """

    def __init__(
        self,
        prizes: Sequence[PrizeLike],
        trial_price: float,
        exponent: Optional[float] = None,
        seed: Optional[int] = None,
        batch_elements: int = SIMULATION_BATCH_ELEMENTS,
        chunk_draws: int = SIMULATION_CHUNK_DRAWS,
    ):
        """
        Build the engine.

        Args:
            prizes: Prize objects or (name, value) pairs.
            trial_price: Cost of a single trial.
            exponent: Weighting exponent (default WEIGHT_EXPONENT).
            seed: Seed for the random generator. None draws OS entropy.
            batch_elements: Maximum simulated draws held in memory at once.
            chunk_draws: Draws simulated per run between completion checks.

        Raises:
            InvalidInputError: If the prize list or price is invalid.
        """
        distribution = WeightRanker(exponent=exponent).rank(prizes, trial_price)
        self._setup(distribution, seed, batch_elements, chunk_draws)

    @classmethod
    def from_distribution(
        cls,
        distribution: Distribution,
        seed: Optional[int] = None,
        batch_elements: int = SIMULATION_BATCH_ELEMENTS,
        chunk_draws: int = SIMULATION_CHUNK_DRAWS,
    ) -> "ProbabilityEngine":
        """Build an engine over an already ranked distribution."""
        engine = cls.__new__(cls)
        engine._setup(distribution, seed, batch_elements, chunk_draws)
        return engine

    def _setup(
        self,
        distribution: Distribution,
        seed: Optional[int],
        batch_elements: int,
        chunk_draws: int,
    ):
        self._distribution = distribution
        self._batch_elements = require_count("batch_elements", batch_elements, 1)
        self._chunk_draws = require_count("chunk_draws", chunk_draws, 1)
        self._rng = np.random.default_rng(seed)
        self._names = distribution.names
        self._cumulative = np.cumsum(np.asarray(distribution.probabilities, dtype=float))

        # Uniform values past the last boundary (rounding) go to the last drawable prize
        reachable = [i for i, p in enumerate(distribution) if p.is_reachable]
        self._last_index = reachable[-1] if reachable else len(distribution) - 1

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def distribution(self) -> Distribution:
        return self._distribution

    @property
    def trial_price(self) -> float:
        return self._distribution.trial_price

    @property
    def prize_count(self) -> int:
        return len(self._distribution)

    # =========================================================================
    # ANALYTIC QUERIES
    # =========================================================================

    def probability_of(self, name: str) -> float:
        """Single-trial probability of a prize; 0.0 if it is not in the set."""
        return self._distribution.probability_of(name)

    def probability_within_trials(self, name: str, trials: int) -> float:
        """
        Probability of drawing a prize at least once in ``trials`` trials.

        P(at least once) = 1 - P(never) = 1 - (1 - p)^k

        Returns:
            0.0 for an unknown or zero-probability prize, or when trials == 0.

        Raises:
            InvalidInputError: If trials is negative or not an integer.
        """
        trials = require_count("trials", trials, 0)
        p = self.probability_of(name)
        if p == 0.0:
            return 0.0
        return 1.0 - (1.0 - p) ** trials

    def expected_trials_for(self, name: str) -> float:
        """
        Expected trials to draw a prize: 1 / p.

        Raises:
            UnreachablePrizeError: If the prize is absent or has probability 0.
        """
        p = self.probability_of(name)
        if p == 0.0:
            raise UnreachablePrizeError(name)
        return 1.0 / p

    def cost_of_trials(self, trials: int) -> float:
        """Total price paid for ``trials`` trials."""
        trials = require_count("trials", trials, 0)
        return trials * self.trial_price

    # =========================================================================
    # SAMPLING
    # =========================================================================

    def _sample_indices(self, shape: Union[int, tuple]) -> np.ndarray:
        """
        Draw prize indices by locating uniform [0, 1) values in the
        cumulative-probability intervals, in stored prize order.
        """
        uniforms = self._rng.random(shape)
        indices = np.searchsorted(self._cumulative, uniforms, side="right")
        np.minimum(indices, self._last_index, out=indices)
        return indices

    def _batches(self, simulations: int, draws_per_run: int) -> Iterator[int]:
        """Yield run counts so that runs x draws stays within the batch budget."""
        runs_per_batch = max(1, self._batch_elements // max(1, draws_per_run))
        remaining = simulations
        while remaining > 0:
            batch = min(runs_per_batch, remaining)
            yield batch
            remaining -= batch

    def _simulate_collection(
        self, simulations: int, budget: int
    ) -> Iterator[Tuple[np.ndarray, np.ndarray]]:
        """
        Run ``simulations`` draw sequences of at most ``budget`` draws each,
        stopping a run as soon as it has seen every prize.

        Runs advance ``chunk_draws`` columns at a time. After each chunk the
        per-run seen mask is updated and completed runs leave the batch, so
        memory is bounded by the batch budget and work by the collection
        time rather than by ``budget``.

        Yields:
            Per batch, ``(completed_at, collected)``: the draw on which each
            run completed the set (``budget`` if it never did) and whether
            it completed.
        """
        n = self.prize_count
        width = min(self._chunk_draws, budget)

        # Each run holds a chunk of draws and a seen mask of n prizes
        for batch in self._batches(simulations, max(width, n)):
            completed_at = np.full(batch, budget, dtype=np.int64)
            collected = np.zeros(batch, dtype=bool)
            active = np.arange(batch)
            seen = np.zeros((batch, n), dtype=bool)
            drawn = 0

            while active.size and drawn < budget:
                chunk = min(width, budget - drawn)
                runs = self._sample_indices((active.size, chunk))
                finished_at = np.zeros(active.size, dtype=np.int64)

                for prize_index in range(n):
                    hits = runs == prize_index
                    hit = hits.any(axis=1)
                    # The set completes on the first hit of the last new prize
                    new = hit & ~seen[:, prize_index]
                    first_hit = np.where(new, hits.argmax(axis=1) + 1, 0)
                    np.maximum(finished_at, first_hit, out=finished_at)
                    seen[:, prize_index] |= hit

                done = seen.all(axis=1)
                completed_at[active[done]] = drawn + finished_at[done]
                collected[active[done]] = True

                active = active[~done]
                seen = seen[~done]
                drawn += chunk

            yield completed_at, collected

    def draw(self, size: Optional[int] = None) -> Union[str, List[str]]:
        """
        Spin the wheel.

        Args:
            size: Number of draws. None returns a single prize name.

        Returns:
            A prize name, or a list of names when size is given.
        """
        if size is None:
            return self._names[int(self._sample_indices(1)[0])]
        size = require_count("size", size, 0)
        return [self._names[i] for i in self._sample_indices(size)]

    # =========================================================================
    # MONTE CARLO ESTIMATORS
    # =========================================================================

    def probability_all_collected_within(
        self,
        trials: int,
        simulations: int = COLLECTION_SIMULATIONS,
    ) -> float:
        """
        Estimate the probability that ``trials`` draws contain every prize.

        Each run draws up to ``trials`` prizes and succeeds as soon as every
        prize has appeared. Runs are simulated in vectorized batches and
        stop drawing once complete.

        Standard error is about 0.5 / sqrt(simulations) near 50%.

        Returns:
            successes / simulations, or 0.0 immediately if ``trials`` is
            below the number of prizes or some prize can never be drawn.
        """
        trials = require_count("trials", trials, 0)
        simulations = require_count("simulations", simulations, 1)
        n = self.prize_count

        if trials < n:
            return 0.0
        if not self._distribution.all_reachable:
            logger.warning("Some prizes have zero probability; the set can never be completed")
            return 0.0

        successes = 0
        for _, collected in self._simulate_collection(simulations, trials):
            successes += int(np.count_nonzero(collected))

        estimate = successes / simulations
        logger.info(
            f"P(all {n} prizes within {trials} trials) ~ {estimate:.4%} "
            f"({successes}/{simulations} runs)"
        )
        return estimate

    def estimate_trials_for_all_collected(
        self,
        simulations: int = EXPECTATION_SIMULATIONS,
        max_draws: int = MAX_DRAWS_PER_SIMULATION,
    ) -> CollectionEstimate:
        """
        Estimate the expected trials needed to collect every prize.

        Each run draws until the full set is collected or ``max_draws`` is
        reached. A capped run contributes ``max_draws``, so the mean is
        biased downward when any run is capped; the returned estimate
        reports how many were.
        """
        simulations = require_count("simulations", simulations, 1)
        max_draws = require_count("max_draws", max_draws, 1)
        n = self.prize_count

        if self._distribution.all_reachable:
            total_draws = 0
            capped_runs = 0
            for completed_at, collected in self._simulate_collection(simulations, max_draws):
                total_draws += int(completed_at.sum())
                capped_runs += int(np.count_nonzero(~collected))
        else:
            # Some prize can never be drawn, so every run hits the cap
            total_draws = simulations * max_draws
            capped_runs = simulations

        estimate = CollectionEstimate(
            mean_trials=total_draws / simulations,
            simulations=simulations,
            capped_runs=capped_runs,
            max_draws=max_draws,
        )

        if estimate.is_biased:
            logger.warning(
                f"{capped_runs}/{simulations} runs hit the {max_draws}-draw cap; "
                f"expected trials {estimate.mean_trials:.1f} is an underestimate"
            )
        logger.info(f"E[trials to collect all {n} prizes] ~ {estimate.mean_trials:.2f}")

        return estimate

    def expected_trials_for_all_collected(
        self,
        simulations: int = EXPECTATION_SIMULATIONS,
        max_draws: int = MAX_DRAWS_PER_SIMULATION,
    ) -> float:
        """
        Mean trials needed to collect every prize, capped at ``max_draws``
        per run. See estimate_trials_for_all_collected for the bias details.
        """
        return self.estimate_trials_for_all_collected(simulations, max_draws).mean_trials
