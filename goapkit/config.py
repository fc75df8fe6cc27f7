"""
Configuration constants.

Centralizes the tuning values used by the planner and the agent integration
layer. Organized by functional area for easy maintenance.
"""

# =============================================================================
# GENERAL
# =============================================================================

# None means non-deterministic streams (system entropy).
RANDOM_SEED = None

# =============================================================================
# PLANNING
# =============================================================================

# Defaults applied when an action or goal does not specify its own value.
DEFAULT_ACTION_COST = 1.0
DEFAULT_GOAL_PRIORITY = 1.0

# Subtracted from the priority of the goal the agent achieved last, so that
# equally ranked goals take turns instead of the same goal winning every pass.
MOST_RECENT_GOAL_PENALTY = 0.01

# Hard ceiling on search nodes expanded per plan() call. Hitting it makes the
# call report "no plan" instead of hanging on a pathological action pool.
MAX_SEARCH_NODES = 10_000

# Rolling window for planner search metrics.
PLANNER_METRIC_SAMPLES = 256

# =============================================================================
# STRATEGIES
# =============================================================================

# How many random points WanderStrategy tries before giving up on a start.
WANDER_ATTEMPTS = 5

# Navigators report arrival once the remaining distance drops to this value.
ARRIVAL_DISTANCE = 2.0

# =============================================================================
# PERCEPTION
# =============================================================================

DEFAULT_DETECTION_RADIUS = 5.0
