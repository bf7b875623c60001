"""Tests for custom exceptions and warnings in pychoicebias."""

import warnings

import pytest

from pychoicebias import (
    # Data containers
    SelectionLog,
    SelectionRecord,
    # Exceptions
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
    # Warnings
    DataQualityWarning,
    NumericalInstabilityWarning,
    # Functions
    compute_chi_square,
    compute_entropy,
    detect_position_bias,
    runs_test,
)


class TestExceptionHierarchy:
    """Test that exception hierarchy is correct."""

    def test_base_error_is_value_error(self):
        """ChoiceBiasError should inherit from ValueError."""
        assert issubclass(ChoiceBiasError, ValueError)

    def test_data_validation_error_hierarchy(self):
        """Validation errors should all be DataValidationError."""
        assert issubclass(DataValidationError, ChoiceBiasError)
        assert issubclass(DomainViolationError, DataValidationError)
        assert issubclass(PositionRangeError, DomainViolationError)
        assert issubclass(CategoryMismatchError, DomainViolationError)
        assert issubclass(DimensionError, DataValidationError)
        assert issubclass(ValueRangeError, DataValidationError)

    def test_statistical_exceptions_hierarchy(self):
        """Statistical errors should inherit from ChoiceBiasError."""
        assert issubclass(StatisticalError, ChoiceBiasError)
        assert issubclass(DegenerateInputError, StatisticalError)
        assert issubclass(InsufficientDataError, ChoiceBiasError)

    def test_warnings_hierarchy(self):
        """Warning classes should inherit from UserWarning."""
        assert issubclass(DataQualityWarning, UserWarning)
        assert issubclass(NumericalInstabilityWarning, UserWarning)

    def test_catch_all_library_errors(self):
        """Record validation errors are catchable with ChoiceBiasError."""
        with pytest.raises(ChoiceBiasError):
            SelectionRecord("a", 5, ("a", "b"))

    def test_catch_all_value_errors(self):
        """Library errors are catchable with ValueError."""
        with pytest.raises(ValueError):
            SelectionRecord("b", 0, ("a", "b"))


class TestRequireComputable:
    """Test raising on results that are flagged as not computable."""

    def test_computable_returns_self(self):
        """require_computable returns the result for chaining."""
        result = compute_entropy({"a": 5, "b": 5})
        assert result.require_computable() is result

    def test_entropy_not_computable_raises(self):
        """A single-category distribution raises InsufficientDataError."""
        result = compute_entropy({"a": 10})
        with pytest.raises(InsufficientDataError, match="single category|only 1"):
            result.require_computable()

    def test_runs_insufficient_raises(self, ab_log):
        """Too few records raises InsufficientDataError."""
        result = runs_test(ab_log("ABAB"), "category")
        with pytest.raises(InsufficientDataError, match="at least 10"):
            result.require_computable()

    def test_runs_all_identical_raises_degenerate(self, ab_log):
        """A constant sequence raises DegenerateInputError."""
        result = runs_test(ab_log("A" * 12), "category")
        with pytest.raises(DegenerateInputError, match="identical"):
            result.require_computable()

    def test_empty_position_bias_raises(self):
        """Position bias over no records raises InsufficientDataError."""
        result = detect_position_bias(SelectionLog())
        with pytest.raises(InsufficientDataError):
            result.require_computable()


class TestWarnings:
    """Test data-quality and numerical warnings."""

    def test_sparse_chi_square_warns(self):
        """Expected counts below 5 emit DataQualityWarning."""
        with pytest.warns(DataQualityWarning, match="expected counts below"):
            compute_chi_square({"a": 2, "b": 2})

    def test_total_mismatch_warns(self):
        """An explicit total that differs from the counts emits a warning."""
        with pytest.warns(DataQualityWarning, match="differs"):
            compute_entropy({"a": 10, "b": 10}, total=30)

    def test_no_warning_on_clean_input(self):
        """Adequate counts and a matching total emit no warning."""
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            compute_chi_square({"a": 10, "b": 10}, total=20)

    def test_zero_variance_runs_warns(self, ab_log):
        """One record of each value gives zero variance and a warning."""
        with pytest.warns(NumericalInstabilityWarning, match="zero variance"):
            result = runs_test(ab_log("AB"), "category", min_records=2)
        assert result.interpretation == "insufficient_data"
        assert result.z_score is None
        with pytest.raises(InsufficientDataError, match="zero variance"):
            result.require_computable()
