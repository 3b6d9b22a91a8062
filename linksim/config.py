"""
Configuration file for the data-link protocol simulator.
Contains the baseline parameters shared by the channels, the protocol
drivers, the batch runner and the CLI.
"""

import os

# =============================================================================
# PROTOCOL PARAMETERS
# =============================================================================

# Time the stop-and-wait sender waits for a confirmation (seconds)
ACK_TIMEOUT = 0.5  # 500 ms

# Sleep between two polls of the sender queue (seconds)
POLL_INTERVAL = 0.010  # 10 ms

# Frame ids are small unsigned integers
MAX_FRAME_ID = 255

# Demonstration message and number of frames sent per run
DEFAULT_MESSAGE = "Hello World!"
DEFAULT_FRAME_COUNT = 10

# =============================================================================
# NOISY CHANNEL PARAMETERS
# =============================================================================

# Probability that a frame is delivered (NOT the loss probability)
DEFAULT_DELIVERY_RATE = 0.8

# =============================================================================
# GILBERT-ELLIOTT BURST LOSS MODEL PARAMETERS
# =============================================================================

# Delivery probability in each state
GOOD_STATE_DELIVERY = 0.98
BAD_STATE_DELIVERY = 0.20

# State transition probabilities (evaluated once per frame)
P_GOOD_TO_BAD = 0.05    # P(G → B)
P_BAD_TO_GOOD = 0.30    # P(B → G)

# =============================================================================
# PARAMETER SWEEP CONFIGURATION
# =============================================================================

# Delivery rates to evaluate
DELIVERY_RATES = [0.5, 0.6, 0.7, 0.8, 0.9, 1.0]

# Frames sent per run
SWEEP_FRAME_COUNT = 50

# ACK timeout used by batch runs (seconds)
SWEEP_ACK_TIMEOUT = 0.02

# Number of simulation runs per delivery rate
RUNS_PER_CONFIGURATION = 5

# =============================================================================
# SIMULATION SETTINGS
# =============================================================================

# Default RNG seed base (actual seed = base + offset)
RNG_SEED_BASE = 42

# Logging verbosity levels
LOG_LEVEL_DEBUG = 0
LOG_LEVEL_INFO = 1
LOG_LEVEL_WARNING = 2
LOG_LEVEL_ERROR = 3

DEFAULT_LOG_LEVEL = LOG_LEVEL_INFO

# =============================================================================
# OUTPUT PATHS
# =============================================================================

BASE_DIR = os.getcwd()
OUTPUT_DIR = os.path.join(BASE_DIR, "data", "output")

# Results CSV filename
RESULTS_CSV = os.path.join(OUTPUT_DIR, "results.csv")

# =============================================================================
# DERIVED PARAMETERS (calculated from fixed parameters)
# =============================================================================

def calculate_steady_state_probabilities(p_gb=P_GOOD_TO_BAD, p_bg=P_BAD_TO_GOOD):
    """
    Calculate steady-state probabilities for Good and Bad states.
    π_G = P(B→G) / (P(G→B) + P(B→G))
    π_B = P(G→B) / (P(G→B) + P(B→G))
    """
    sum_transitions = p_gb + p_bg
    if sum_transitions == 0:
        return 1.0, 0.0
    pi_good = p_bg / sum_transitions
    pi_bad = p_gb / sum_transitions
    return pi_good, pi_bad


def calculate_average_delivery_rate():
    """
    Calculate the long-run delivery rate of the burst loss model.
    D_avg = π_G * d_G + π_B * d_B
    """
    pi_good, pi_bad = calculate_steady_state_probabilities()
    return pi_good * GOOD_STATE_DELIVERY + pi_bad * BAD_STATE_DELIVERY
