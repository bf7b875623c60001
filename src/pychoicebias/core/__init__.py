"""Core data structures for pychoicebias."""

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

__all__ = [
    "SelectionRecord",
    "SelectionLog",
    # Results
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
    # Warnings
    "DataQualityWarning",
    "NumericalInstabilityWarning",
]
