"""Command-line interface for Spin Odds."""

from typing import List, Optional, Tuple

import click

from spin_odds import __version__
from spin_odds.config import (
    COLLECTION_SIMULATIONS,
    DEFAULT_CONFIDENCE,
    EXPECTATION_SIMULATIONS,
    MAX_DRAWS_PER_SIMULATION,
    MAX_SEARCH_TRIALS,
)
from spin_odds.core import Prize, SpinOddsError
from spin_odds.engine import (
    ProbabilityEngine,
    joint_query,
    minimum_trials_for_confidence,
    probability_table,
    profitability,
)
from spin_odds.cli.display import Report
from spin_odds.utils import setup_logging

# Demonstration prize set used when no --prize is given
DEFAULT_PRIZES: Tuple[Prize, ...] = (
    Prize("iPhone", 10.0),
    Prize("iPad", 50.0),
    Prize("MacBook", 200.0),
    Prize("AirPods", 1000.0),
)
DEFAULT_PRICE = 100.0


def _parse_prizes(ctx, param, values) -> List[Prize]:
    """Turn repeated NAME=VALUE options into prizes."""
    if not values:
        return list(DEFAULT_PRIZES)

    prizes = []
    for raw in values:
        name, sep, value = raw.rpartition("=")
        if not sep or not name:
            raise click.BadParameter(f"expected NAME=VALUE, got '{raw}'")
        try:
            prizes.append(Prize(name.strip(), float(value)))
        except ValueError:
            raise click.BadParameter(f"value for '{name}' is not a number: '{value}'")
    return prizes


def prize_options(func):
    """Options shared by every command: the prize set, price and seed."""
    func = click.option("--seed", type=int, default=None, help="Seed for Monte Carlo estimates")(func)
    func = click.option("--price", "-p", type=float, default=DEFAULT_PRICE, show_default=True,
                        help="Price of a single trial")(func)
    func = click.option("--prize", "prizes", multiple=True, callback=_parse_prizes,
                        metavar="NAME=VALUE", help="Prize and its value (repeatable)")(func)
    return func


def _fail(message: str):
    click.echo(f"Error: {message}", err=True)
    click.get_current_context().exit(1)


def _build_engine(prizes: List[Prize], price: float, seed: Optional[int]) -> ProbabilityEngine:
    try:
        return ProbabilityEngine(prizes, price, seed=seed)
    except SpinOddsError as e:
        _fail(str(e))


@click.group()
@click.version_option(version=__version__)
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """Spin Odds - Probability analysis for weighted prize draws."""
    setup_logging(level="DEBUG" if debug else "WARNING")


@main.command()
@prize_options
def odds(prizes: List[Prize], price: float, seed: Optional[int]):
    """Show the draw probability of every prize."""
    engine = _build_engine(prizes, price, seed)
    Report().show_distribution(engine.distribution)


@main.command()
@prize_options
@click.option("--target", "-t", required=True, help="Prize of interest")
@click.option("--trials", "-k", type=int, default=10, show_default=True, help="Number of trials")
@click.option("--simulations", type=int, default=COLLECTION_SIMULATIONS, show_default=True,
              help="Monte Carlo runs for the collect-all estimate")
def chance(prizes, price, seed, target: str, trials: int, simulations: int):
    """Chance of winning a prize (and every prize) within a number of trials."""
    engine = _build_engine(prizes, price, seed)
    if target not in engine.distribution:
        _fail(f"Unknown prize '{target}'")

    try:
        within, all_collected = joint_query(
            prizes, target, price, trials, seed=seed, simulations=simulations
        )
        expected = engine.expected_trials_for(target)
        cost = engine.cost_of_trials(trials)
    except SpinOddsError as e:
        _fail(str(e))

    Report().show_summary(f"{target} in {trials} trials", [
        ("Single trial probability:", f"{engine.probability_of(target):.4%}"),
        (f"Probability within {trials} trials:", f"{within:.4%}"),
        ("Expected trials:", f"{expected:.2f}"),
        ("Expected cost:", f"{expected * price:,.2f}"),
        (f"Cost of {trials} trials:", f"{cost:,.2f}"),
        (f"All prizes within {trials} trials:", f"{all_collected:.2%}"),
    ])


@main.command()
@prize_options
@click.option("--target", "-t", required=True, help="Prize of interest")
@click.option("--confidence", "-c", type=float, default=DEFAULT_CONFIDENCE, show_default=True,
              help="Target probability of winning")
@click.option("--max-trials", type=int, default=MAX_SEARCH_TRIALS, show_default=True,
              help="Largest trial count to consider")
def recommend(prizes, price, seed, target: str, confidence: float, max_trials: int):
    """Fewest trials needed to win a prize with the given confidence."""
    try:
        trials = minimum_trials_for_confidence(
            prizes, target, price, confidence=confidence, max_trials=max_trials
        )
    except SpinOddsError as e:
        _fail(str(e))

    if trials is None:
        click.echo(f"{target} does not reach {confidence:.0%} within {max_trials} trials")
        return

    Report().show_summary(f"Recommended trials for {target}", [
        ("Confidence:", f"{confidence:.0%}"),
        ("Trials:", str(trials)),
        ("Cost:", f"{trials * price:,.2f}"),
    ])


@main.command()
@prize_options
@click.option("--trials", "-k", "budgets", type=int, multiple=True,
              help="Trial budgets to evaluate (repeatable, default 10..90)")
@click.option("--simulations", type=int, default=COLLECTION_SIMULATIONS, show_default=True,
              help="Monte Carlo runs per budget")
@click.option("--expectation-simulations", type=int, default=EXPECTATION_SIMULATIONS,
              show_default=True, help="Monte Carlo runs for the expected trials")
@click.option("--max-draws", type=int, default=MAX_DRAWS_PER_SIMULATION, show_default=True,
              help="Draw cap per expected-trials run")
def collect(prizes, price, seed, budgets, simulations: int, expectation_simulations: int,
            max_draws: int):
    """Trials needed to collect every prize."""
    engine = _build_engine(prizes, price, seed)
    budgets = budgets or tuple(range(10, 101, 20))

    try:
        estimate = engine.estimate_trials_for_all_collected(
            simulations=expectation_simulations, max_draws=max_draws
        )
        results = [
            (k, engine.probability_all_collected_within(k, simulations=simulations))
            for k in budgets
        ]
    except SpinOddsError as e:
        _fail(str(e))

    Report().show_collection(estimate, results)


@main.command()
@prize_options
@click.option("--target", "-t", required=True, help="Prize of interest")
@click.option("--max-trials", type=int, default=30, show_default=True, help="Largest trial count")
@click.option("--step", type=int, default=5, show_default=True, help="Gap between rows")
def table(prizes, price, seed, target: str, max_trials: int, step: int):
    """Probability of winning a prize as trials and cost grow."""
    engine = _build_engine(prizes, price, seed)
    try:
        rows = probability_table(engine, target, max_trials=max_trials, step=step)
    except SpinOddsError as e:
        _fail(str(e))

    Report().show_probability_table(target, rows)


@main.command()
@prize_options
def profit(prizes, price, seed):
    """Expected cost of each prize compared with its value."""
    engine = _build_engine(prizes, price, seed)
    Report().show_profitability(profitability(engine))


if __name__ == "__main__":
    main()
