"""Configuration constants for randomness and bias analysis."""

# =============================================================================
# DISTRIBUTION
# =============================================================================

# Both category and position normalized entropy must exceed this to call
# the selections uniformly distributed
UNIFORM_ENTROPY_THRESHOLD = 0.95

# Expected chi-square cell counts below this trigger a DataQualityWarning
MIN_EXPECTED_COUNT = 5

# =============================================================================
# SEQUENTIAL INDEPENDENCE
# =============================================================================

RUNS_MIN_RECORDS = 10

# Two-sided 95% normal critical value. Drives both is_random and the
# interpretation for every sample size.
RUNS_Z_THRESHOLD = 1.96

# =============================================================================
# POSITION BIAS
# =============================================================================

DEFAULT_POSITION_COUNT = 4

POSITION_BIAS_THRESHOLD = 0.15         # 15% relative deviation
STRONG_POSITION_BIAS_THRESHOLD = 0.30  # bias index above this is "strong"
EDGE_BIAS_THRESHOLD = 0.15

# Relative deviation from the independence expectation for a
# (category, position) cell to be reported
CORRELATION_DEVIATION_THRESHOLD = 0.30
