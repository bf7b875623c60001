"""Custom exceptions and warnings for pychoicebias.

All exceptions inherit from ValueError so that callers catching ValueError
keep working.

Exception Hierarchy:
    ChoiceBiasError (ValueError)
    ├── DataValidationError
    │   ├── DomainViolationError
    │   │   ├── PositionRangeError
    │   │   └── CategoryMismatchError
    │   ├── DimensionError
    │   └── ValueRangeError
    ├── StatisticalError
    │   └── DegenerateInputError
    └── InsufficientDataError

Warning Classes:
    DataQualityWarning (UserWarning)
    NumericalInstabilityWarning (UserWarning)

Statistical edge cases (too few records, all-identical sequences) are not
raised by the analysis functions. They come back as flagged results whose
``is_computable`` is False. Use ``result.require_computable()`` to turn a
flagged result into InsufficientDataError or DegenerateInputError.
"""

from __future__ import annotations


# =============================================================================
# BASE EXCEPTION
# =============================================================================


class ChoiceBiasError(ValueError):
    """Base exception for all pychoicebias errors.

    Example:
        >>> try:
        ...     record = SelectionRecord("red", 5, ("red", "blue"))
        ... except ChoiceBiasError as e:
        ...     print(f"pychoicebias error: {e}")
    """

    pass


# =============================================================================
# DATA VALIDATION EXCEPTIONS
# =============================================================================


class DataValidationError(ChoiceBiasError):
    """Raised when input data fails validation checks."""

    pass


class DomainViolationError(DataValidationError):
    """Raised when a selection record breaks its own invariant.

    A record is valid only when ``0 <= position < len(presentation_order)``
    and ``presentation_order[position] == selected_category``. Invalid
    records are a caller bug: they are rejected at ingestion and never
    corrected.
    """

    pass


class PositionRangeError(DomainViolationError):
    """Raised when a position lies outside the presentation order or the
    analysed slot domain.

    Example:
        >>> SelectionRecord("red", 3, ("red", "blue", "green"))
        PositionRangeError: Position 3 is out of range for a presentation
        order of length 3...
    """

    pass


class CategoryMismatchError(DomainViolationError):
    """Raised when the selected category is not the option shown at the
    recorded position.

    Example:
        >>> SelectionRecord("red", 1, ("red", "blue"))
        CategoryMismatchError: Selected category 'red' does not match
        'blue' shown at position 1...
    """

    pass


class DimensionError(DataValidationError):
    """Raised when paired inputs have incompatible lengths.

    Example:
        >>> SelectionLog.from_choices(["a", "b"], [["a", "b"]])
        DimensionError: Number of choices (2) must match number of
        presentation orders (1).
    """

    pass


class ValueRangeError(DataValidationError):
    """Raised when an argument is outside its accepted range.

    Common causes:
        - position_count below 2
        - Non-positive expected probabilities for the chi-square test
        - Unknown attribute names (only 'category' and 'position' exist)
    """

    pass


# =============================================================================
# STATISTICAL EXCEPTIONS
# =============================================================================


class StatisticalError(ChoiceBiasError):
    """Raised when a statistic cannot be computed for the given data."""

    pass


class DegenerateInputError(StatisticalError):
    """Raised when every observation is identical and there is no variation
    to measure.

    Only raised on request, through ``require_computable()``.
    """

    pass


class InsufficientDataError(ChoiceBiasError):
    """Raised when there is not enough data for the requested statistic.

    Minimums:
        - At least 1 observation for frequency-based statistics
        - At least 2 non-zero categories for normalized entropy
        - At least 10 records for the runs test

    Only raised on request, through ``require_computable()``.
    """

    pass


# =============================================================================
# WARNINGS
# =============================================================================


class DataQualityWarning(UserWarning):
    """Warning for data quality issues that don't prevent computation.

    Emitted when:
        - Expected chi-square cell counts fall below 5
        - An explicit total disagrees with the sum of the distribution

    Example:
        >>> import warnings
        >>> warnings.filterwarnings('ignore', category=DataQualityWarning)
    """

    pass


class NumericalInstabilityWarning(UserWarning):
    """Warning for potential numerical issues in computations.

    Emitted when a runs-test standard deviation is too small to give a
    meaningful z-score.
    """

    pass
