"""
Global settings and constants for Spin Odds.

Weighting policy, Monte Carlo budgets, and logging defaults.
"""

import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


# =============================================================================
# WEIGHTING PARAMETERS
# =============================================================================

# weight = 1 / (value / trial_price) ** exponent
WEIGHT_EXPONENT = float(os.getenv("WEIGHT_EXPONENT", "1.5"))

# Plain inverse-value weighting (weight = trial_price / value)
INVERSE_VALUE_EXPONENT = 1.0

# Probabilities must sum to 1.0 within this tolerance
PROBABILITY_TOLERANCE = 1e-9


# =============================================================================
# MONTE CARLO PARAMETERS
# =============================================================================

# Runs used to estimate P(all prizes collected within k trials)
COLLECTION_SIMULATIONS = int(os.getenv("COLLECTION_SIMULATIONS", "100000"))

# Runs used to estimate E[trials to collect every prize]
EXPECTATION_SIMULATIONS = int(os.getenv("EXPECTATION_SIMULATIONS", "10000"))

# Per-run draw cap for the expectation estimator
MAX_DRAWS_PER_SIMULATION = int(os.getenv("MAX_DRAWS_PER_SIMULATION", "1000"))

# Upper bound on simulated draws held in memory at once (runs x draws)
SIMULATION_BATCH_ELEMENTS = int(os.getenv("SIMULATION_BATCH_ELEMENTS", "2000000"))

# Draws simulated per run before checking whether the set is complete
SIMULATION_CHUNK_DRAWS = int(os.getenv("SIMULATION_CHUNK_DRAWS", "256"))


# =============================================================================
# QUERY PARAMETERS
# =============================================================================

MAX_SEARCH_TRIALS = int(os.getenv("MAX_SEARCH_TRIALS", "1000"))
DEFAULT_CONFIDENCE = float(os.getenv("DEFAULT_CONFIDENCE", "0.8"))  # 80%


# =============================================================================
# LOGGING
# =============================================================================

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
