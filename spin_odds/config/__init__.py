"""Configuration module for Spin Odds."""

from spin_odds.config.settings import (
    # Weighting
    WEIGHT_EXPONENT,
    INVERSE_VALUE_EXPONENT,
    PROBABILITY_TOLERANCE,
    # Monte Carlo
    COLLECTION_SIMULATIONS,
    EXPECTATION_SIMULATIONS,
    MAX_DRAWS_PER_SIMULATION,
    SIMULATION_BATCH_ELEMENTS,
    SIMULATION_CHUNK_DRAWS,
    # Queries
    MAX_SEARCH_TRIALS,
    DEFAULT_CONFIDENCE,
    # Logging
    LOG_LEVEL,
    LOG_FORMAT,
)

__all__ = [
    # Weighting
    "WEIGHT_EXPONENT",
    "INVERSE_VALUE_EXPONENT",
    "PROBABILITY_TOLERANCE",
    # Monte Carlo
    "COLLECTION_SIMULATIONS",
    "EXPECTATION_SIMULATIONS",
    "MAX_DRAWS_PER_SIMULATION",
    "SIMULATION_BATCH_ELEMENTS",
    "SIMULATION_CHUNK_DRAWS",
    # Queries
    "MAX_SEARCH_TRIALS",
    "DEFAULT_CONFIDENCE",
    # Logging
    "LOG_LEVEL",
    "LOG_FORMAT",
]
