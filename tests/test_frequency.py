"""Tests for frequency distributions of selection attributes."""

import pytest

from pychoicebias import (
    SelectionLog,
    ValueRangeError,
    compute_category_frequency,
    compute_frequency_distribution,
    compute_position_frequency,
    zero_fill_distribution,
)


class TestFrequencyDistribution:
    """Tests for counting categories and positions."""

    def test_category_counts(self):
        """Categories are counted and returned sorted."""
        log = SelectionLog.from_tuples([
            ("b", 0, ["b", "a"]),
            ("a", 1, ["b", "a"]),
            ("a", 0, ["a", "b"]),
        ])

        assert compute_frequency_distribution(log, "category") == {"a": 2, "b": 1}
        assert list(compute_category_frequency(log)) == ["a", "b"]

    def test_position_counts(self):
        """Positions are counted over observed slots only."""
        log = SelectionLog.from_tuples([
            ("c", 2, ["a", "b", "c"]),
            ("a", 0, ["a", "b", "c"]),
            ("b", 2, ["a", "c", "b"]),
        ])

        assert compute_position_frequency(log) == {0: 1, 2: 2}

    def test_counts_sum_to_records(self, random_log):
        """Counts add up to the number of records for both attributes."""
        for attribute in ("category", "position"):
            distribution = compute_frequency_distribution(random_log, attribute)
            assert sum(distribution.values()) == random_log.num_records

    def test_balanced_log(self, random_log):
        """Every category and slot of the balanced fixture is picked 8 times."""
        assert compute_category_frequency(random_log) == {"A": 8, "B": 8, "C": 8, "D": 8}
        assert compute_position_frequency(random_log) == {0: 8, 1: 8, 2: 8, 3: 8}

    def test_empty_input(self):
        """No records gives an empty distribution."""
        assert compute_category_frequency(SelectionLog()) == {}
        assert compute_position_frequency([]) == {}

    def test_unknown_attribute_raises(self, random_log):
        """Only "category" and "position" are supported."""
        with pytest.raises(ValueRangeError, match="Unknown attribute"):
            compute_frequency_distribution(random_log, "color")


class TestZeroFill:
    """Tests for extending distributions over a fixed domain."""

    def test_fills_missing_slots(self):
        """Unobserved domain values get zero counts in domain order."""
        assert zero_fill_distribution({1: 3}, range(4)) == {0: 0, 1: 3, 2: 0, 3: 0}
        assert list(zero_fill_distribution({1: 3}, range(4))) == [0, 1, 2, 3]

    def test_keeps_values_outside_domain(self):
        """Observed values missing from the domain are kept at the end."""
        filled = zero_fill_distribution({"x": 2, "a": 1}, ["a", "b"])
        assert list(filled.items()) == [("a", 1), ("b", 0), ("x", 2)]

    def test_does_not_mutate_input(self):
        """The input distribution is left unchanged."""
        distribution = {"a": 1}
        zero_fill_distribution(distribution, ["a", "b"])
        assert distribution == {"a": 1}
