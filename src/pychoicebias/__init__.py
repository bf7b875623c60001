"""
pychoicebias: Randomness and Bias Analysis for Repeated Selections.

Statistical checks for whether a selector picking one option at a time from
a shuffled list behaves like a uniform, position-independent random process.
"""

import logging

from pychoicebias.core.session import SelectionRecord, SelectionLog
from pychoicebias.core.result import (
    EntropyResult,
    DispersionResult,
    GoodnessOfFitResult,
    RunsTestResult,
    PositionBiasResult,
    EdgeBiasResult,
    SignificantPair,
    CorrelationResult,
    AttributeAnalysis,
    RandomnessAssessment,
)
from pychoicebias.core.exceptions import (
    ChoiceBiasError,
    DataValidationError,
    DomainViolationError,
    PositionRangeError,
    CategoryMismatchError,
    DimensionError,
    ValueRangeError,
    StatisticalError,
    DegenerateInputError,
    InsufficientDataError,
    DataQualityWarning,
    NumericalInstabilityWarning,
)
from pychoicebias.algorithms.frequency import (
    compute_frequency_distribution,
    compute_category_frequency,
    compute_position_frequency,
    zero_fill_distribution,
)
from pychoicebias.algorithms.entropy import compute_entropy
from pychoicebias.algorithms.dispersion import compute_dispersion
from pychoicebias.algorithms.goodness_of_fit import compute_chi_square, interpret_chi_square
from pychoicebias.algorithms.runs import count_runs, runs_test
from pychoicebias.algorithms.position_bias import (
    detect_position_bias,
    detect_edge_bias,
    detect_category_position_correlation,
)
from pychoicebias.algorithms.assessment import assess_randomness

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Data structures
    "SelectionRecord",
    "SelectionLog",
    # Result types
    "EntropyResult",
    "DispersionResult",
    "GoodnessOfFitResult",
    "RunsTestResult",
    "PositionBiasResult",
    "EdgeBiasResult",
    "SignificantPair",
    "CorrelationResult",
    "AttributeAnalysis",
    "RandomnessAssessment",
    # Exceptions
    "ChoiceBiasError",
    "DataValidationError",
    "DomainViolationError",
    "PositionRangeError",
    "CategoryMismatchError",
    "DimensionError",
    "ValueRangeError",
    "StatisticalError",
    "DegenerateInputError",
    "InsufficientDataError",
    "DataQualityWarning",
    "NumericalInstabilityWarning",
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
    # Convenience
    "get_randomness_score",
]


def get_randomness_score(data: SelectionLog) -> float:
    """
    Convenience function to get a single randomness score in [0, 1].

    Returns the lower of the category and position normalized entropies.

    Args:
        data: SelectionLog or sequence of SelectionRecord

    Returns:
        Float between 0 (all selections identical) and 1 (perfectly even)
    """
    result = assess_randomness(data)
    return min(
        result.category.entropy.normalized_entropy,
        result.position.entropy.normalized_entropy,
    )
