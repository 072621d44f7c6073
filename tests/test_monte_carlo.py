"""
Tests for the Monte Carlo estimators.

Uniform prize sets have closed-form coupon-collector answers, which the
estimates are checked against with statistical tolerances.
"""

import math
import statistics
import tracemalloc

import pytest

from spin_odds.core import CollectionEstimate, InvalidInputError
from spin_odds.engine.probability import ProbabilityEngine


# =============================================================================
# TEST DATA HELPERS
# =============================================================================

APPLE_PRIZES = [("A", 10), ("B", 50), ("C", 200), ("D", 1000)]
UNIFORM_PRIZES = [("a", 25), ("b", 25), ("c", 25), ("d", 25)]
PRICE = 100


def uniform_all_collected(n: int, k: int) -> float:
    """Exact P(all n equally likely prizes within k draws), by inclusion-exclusion."""
    return sum(
        (-1) ** j * math.comb(n, j) * (1 - j / n) ** k
        for j in range(n + 1)
    )


def uniform_expected_trials(n: int) -> float:
    """n * H(n) for the classic coupon collector."""
    return n * sum(1 / i for i in range(1, n + 1))


# =============================================================================
# ALL COLLECTED WITHIN K TESTS
# =============================================================================


class TestProbabilityAllCollectedWithin:
    """Tests for P(every prize drawn within k trials)."""

    @pytest.mark.parametrize("trials", [0, 1, 2, 3])
    def test_zero_below_prize_count(self, trials):
        engine = ProbabilityEngine(APPLE_PRIZES, PRICE, seed=1)
        assert engine.probability_all_collected_within(trials) == 0.0

    def test_matches_uniform_closed_form(self):
        engine = ProbabilityEngine(UNIFORM_PRIZES, PRICE, seed=42)
        estimate = engine.probability_all_collected_within(8)
        assert estimate == pytest.approx(uniform_all_collected(4, 8), abs=0.01)

    def test_exactly_prize_count_trials(self):
        engine = ProbabilityEngine(UNIFORM_PRIZES, PRICE, seed=3)
        # 4! / 4^4 ~ 0.094
        estimate = engine.probability_all_collected_within(4, simulations=50_000)
        assert estimate == pytest.approx(uniform_all_collected(4, 4), abs=0.01)

    def test_single_prize_is_certain(self):
        engine = ProbabilityEngine([("only", 10)], PRICE, seed=0)
        assert engine.probability_all_collected_within(1, simulations=100) == 1.0

    def test_rare_prize_keeps_estimate_low(self):
        engine = ProbabilityEngine(APPLE_PRIZES, PRICE, seed=11)
        # D alone has ~0.9% chance in 10 trials
        assert engine.probability_all_collected_within(10, simulations=20_000) < 0.02

    def test_estimate_in_unit_interval(self):
        engine = ProbabilityEngine(APPLE_PRIZES, PRICE, seed=5)
        for k in (10, 200, 2000):
            estimate = engine.probability_all_collected_within(k, simulations=2_000)
            assert 0.0 <= estimate <= 1.0

    def test_unreachable_prize_gives_zero(self, unreachable_engine):
        assert unreachable_engine.probability_all_collected_within(500, simulations=100) == 0.0

    def test_batching_does_not_change_result(self):
        whole = ProbabilityEngine(UNIFORM_PRIZES, PRICE, seed=8)
        chunked = ProbabilityEngine(UNIFORM_PRIZES, PRICE, seed=8, batch_elements=30)
        assert whole.probability_all_collected_within(6, simulations=1_000) == \
            chunked.probability_all_collected_within(6, simulations=1_000)

    def test_huge_budget_stops_at_completion(self):
        engine = ProbabilityEngine(UNIFORM_PRIZES, PRICE, seed=2)
        tracemalloc.start()
        try:
            estimate = engine.probability_all_collected_within(2_000_000_000, simulations=20)
            _, peak = tracemalloc.get_traced_memory()
        finally:
            tracemalloc.stop()
        assert estimate == 1.0
        assert peak < 10_000_000

    def test_small_chunks_match_closed_form(self):
        # Runs complete across several 3-draw chunks
        engine = ProbabilityEngine(UNIFORM_PRIZES, PRICE, seed=42, chunk_draws=3)
        estimate = engine.probability_all_collected_within(8, simulations=100_000)
        assert estimate == pytest.approx(uniform_all_collected(4, 8), abs=0.01)

    def test_seeded_runs_reproducible(self):
        first = ProbabilityEngine(APPLE_PRIZES, PRICE, seed=21)
        second = ProbabilityEngine(APPLE_PRIZES, PRICE, seed=21)
        assert first.probability_all_collected_within(500, simulations=5_000) == \
            second.probability_all_collected_within(500, simulations=5_000)

    def test_more_simulations_narrow_spread(self):
        exact = uniform_all_collected(4, 8)
        small = [
            ProbabilityEngine(UNIFORM_PRIZES, PRICE, seed=s).probability_all_collected_within(
                8, simulations=1_000
            )
            for s in range(6)
        ]
        large = [
            ProbabilityEngine(UNIFORM_PRIZES, PRICE, seed=s).probability_all_collected_within(
                8, simulations=100_000
            )
            for s in range(6)
        ]
        assert statistics.pstdev(large) < statistics.pstdev(small)
        assert max(abs(x - exact) for x in large) < 0.01

    def test_invalid_arguments(self):
        engine = ProbabilityEngine(APPLE_PRIZES, PRICE, seed=1)
        with pytest.raises(InvalidInputError):
            engine.probability_all_collected_within(-1)
        with pytest.raises(InvalidInputError):
            engine.probability_all_collected_within(10, simulations=0)


# =============================================================================
# EXPECTED TRIALS FOR ALL TESTS
# =============================================================================


class TestExpectedTrialsForAllCollected:
    """Tests for E[trials to collect every prize]."""

    def test_matches_uniform_closed_form(self):
        engine = ProbabilityEngine(UNIFORM_PRIZES, PRICE, seed=42)
        estimate = engine.expected_trials_for_all_collected()
        assert estimate == pytest.approx(uniform_expected_trials(4), abs=0.2)

    def test_estimate_reports_no_capping(self):
        engine = ProbabilityEngine(UNIFORM_PRIZES, PRICE, seed=42)
        estimate = engine.estimate_trials_for_all_collected(simulations=2_000)
        assert isinstance(estimate, CollectionEstimate)
        assert estimate.simulations == 2_000
        assert estimate.max_draws == 1_000
        assert estimate.capped_runs == 0
        assert not estimate.is_biased

    def test_single_prize_takes_one_trial(self):
        engine = ProbabilityEngine([("only", 10)], PRICE, seed=0)
        assert engine.expected_trials_for_all_collected(simulations=100) == 1.0

    def test_cap_bounds_every_run(self):
        engine = ProbabilityEngine(UNIFORM_PRIZES, PRICE, seed=2)
        estimate = engine.estimate_trials_for_all_collected(simulations=500, max_draws=3)
        # Four prizes can never be collected in three draws
        assert estimate.mean_trials == 3.0
        assert estimate.capped_runs == 500
        assert estimate.capped_fraction == 1.0
        assert estimate.is_biased

    def test_rare_prize_biases_scenario_downward(self):
        engine = ProbabilityEngine(APPLE_PRIZES, PRICE, seed=17)
        estimate = engine.estimate_trials_for_all_collected(simulations=2_000)
        # D is missed in ~40% of 1000-draw runs
        assert estimate.is_biased
        assert 0.3 < estimate.capped_fraction < 0.5
        assert estimate.mean_trials <= 1_000
        assert estimate.mean_trials < engine.expected_trials_for("D")

    def test_unreachable_prize_caps_all_runs(self, unreachable_engine):
        estimate = unreachable_engine.estimate_trials_for_all_collected(simulations=200, max_draws=50)
        assert estimate.mean_trials == 50.0
        assert estimate.capped_runs == 200

    def test_batching_does_not_change_result(self):
        whole = ProbabilityEngine(UNIFORM_PRIZES, PRICE, seed=4)
        chunked = ProbabilityEngine(UNIFORM_PRIZES, PRICE, seed=4, batch_elements=100)
        assert whole.expected_trials_for_all_collected(simulations=300, max_draws=40) == \
            chunked.expected_trials_for_all_collected(simulations=300, max_draws=40)

    def test_huge_cap_stops_at_completion(self):
        engine = ProbabilityEngine(UNIFORM_PRIZES, PRICE, seed=6)
        tracemalloc.start()
        try:
            estimate = engine.estimate_trials_for_all_collected(
                simulations=1_000, max_draws=2_000_000_000
            )
            _, peak = tracemalloc.get_traced_memory()
        finally:
            tracemalloc.stop()
        assert estimate.capped_runs == 0
        assert estimate.mean_trials == pytest.approx(uniform_expected_trials(4), abs=0.6)
        assert peak < 20_000_000

    def test_small_chunks_match_closed_form(self):
        engine = ProbabilityEngine(UNIFORM_PRIZES, PRICE, seed=9, chunk_draws=2)
        estimate = engine.estimate_trials_for_all_collected(simulations=20_000, max_draws=1_000)
        assert estimate.capped_runs == 0
        assert estimate.mean_trials == pytest.approx(uniform_expected_trials(4), abs=0.2)

    def test_unreachable_prize_with_huge_cap(self, unreachable_engine):
        estimate = unreachable_engine.estimate_trials_for_all_collected(
            simulations=10, max_draws=2_000_000_000
        )
        assert estimate.capped_runs == 10
        assert estimate.mean_trials == 2_000_000_000.0

    def test_invalid_arguments(self):
        engine = ProbabilityEngine(APPLE_PRIZES, PRICE, seed=1)
        with pytest.raises(InvalidInputError):
            engine.expected_trials_for_all_collected(simulations=0)
        with pytest.raises(InvalidInputError):
            engine.expected_trials_for_all_collected(max_draws=0)
