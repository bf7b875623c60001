"""Statistical algorithms for randomness and bias analysis."""

from pychoicebias.algorithms.frequency import (
    compute_frequency_distribution,
    compute_category_frequency,
    compute_position_frequency,
    zero_fill_distribution,
)
from pychoicebias.algorithms.entropy import compute_entropy
from pychoicebias.algorithms.dispersion import compute_dispersion
from pychoicebias.algorithms.goodness_of_fit import (
    compute_chi_square,
    interpret_chi_square,
)
from pychoicebias.algorithms.runs import count_runs, runs_test
from pychoicebias.algorithms.position_bias import (
    detect_position_bias,
    detect_edge_bias,
    detect_category_position_correlation,
)
from pychoicebias.algorithms.assessment import assess_randomness

__all__ = [
    # Frequencies
    "compute_frequency_distribution",
    "compute_category_frequency",
    "compute_position_frequency",
    "zero_fill_distribution",
    # Distribution shape
    "compute_entropy",
    "compute_dispersion",
    "compute_chi_square",
    "interpret_chi_square",
    # Sequential independence
    "count_runs",
    "runs_test",
    # Position bias
    "detect_position_bias",
    "detect_edge_bias",
    "detect_category_position_correlation",
    # Composite
    "assess_randomness",
]
