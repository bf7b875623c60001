"""Tests for entropy and dispersion of frequency distributions."""

import math

import pytest

from pychoicebias import ValueRangeError, compute_dispersion, compute_entropy


# =============================================================================
# ENTROPY
# =============================================================================


class TestEntropy:
    """Tests for Shannon entropy and normalized entropy."""

    def test_uniform_four_categories(self):
        """Uniform over four categories gives 2 bits and normalized 1."""
        result = compute_entropy({"a": 25, "b": 25, "c": 25, "d": 25})

        assert result.is_computable
        assert result.entropy == pytest.approx(2.0)
        assert result.normalized_entropy == pytest.approx(1.0)
        assert result.max_entropy == pytest.approx(2.0)
        assert result.score() == pytest.approx(1.0)
        assert "near-uniformly" in result.interpretation

    def test_two_categories_even(self):
        """Even split over two categories gives 1 bit."""
        result = compute_entropy({"a": 50, "b": 50})
        assert result.entropy == pytest.approx(1.0)
        assert result.normalized_entropy == pytest.approx(1.0)

    def test_skewed_distribution(self):
        """A 90/10 split is concentrated."""
        result = compute_entropy({"a": 90, "b": 10})

        expected = -(0.9 * math.log2(0.9) + 0.1 * math.log2(0.1))
        assert result.entropy == pytest.approx(expected)
        assert result.normalized_entropy == pytest.approx(expected)
        assert "concentrated" in result.interpretation

    def test_zero_filled_categories_lower_normalized(self):
        """Unselected categories count in k and lower normalized entropy."""
        result = compute_entropy({"a": 50, "b": 50, "c": 0, "d": 0})

        assert result.entropy == pytest.approx(1.0)
        assert result.normalized_entropy == pytest.approx(0.5)
        assert result.num_categories == 4
        assert result.num_nonzero_categories == 2

    def test_normalized_within_bounds(self):
        """Normalized entropy always lies in [0, 1]."""
        for distribution in ({"a": 1, "b": 99}, {"a": 3, "b": 3, "c": 4}, {"a": 7, "b": 0, "c": 1}):
            result = compute_entropy(distribution)
            assert 0.0 <= result.normalized_entropy <= 1.0

    def test_single_category_not_computable(self):
        """One category gives entropy 0 and is flagged, not NaN."""
        result = compute_entropy({"a": 100})

        assert not result.is_computable
        assert result.entropy == 0.0
        assert result.normalized_entropy == 0.0
        assert not math.isnan(result.normalized_entropy)

    def test_all_in_one_of_several_not_computable(self):
        """All observations in one category of several is flagged."""
        result = compute_entropy({"a": 100, "b": 0, "c": 0})

        assert not result.is_computable
        assert result.normalized_entropy == 0.0
        assert "single category" in result.interpretation

    def test_empty_not_computable(self):
        """No observations is flagged."""
        result = compute_entropy({})
        assert not result.is_computable
        assert result.total == 0
        assert "no observations" in result.interpretation

    def test_negative_count_raises(self):
        """Negative counts are rejected."""
        with pytest.raises(ValueRangeError, match="negative"):
            compute_entropy({"a": 5, "b": -1})

    def test_to_dict_and_repr(self):
        """to_dict carries every field and repr is compact."""
        result = compute_entropy({"a": 1, "b": 1})
        d = result.to_dict()

        assert d["entropy"] == pytest.approx(1.0)
        assert d["is_computable"] is True
        assert repr(result).startswith("EntropyResult(H=1.0000")
        assert "not computable" in repr(compute_entropy({}))


# =============================================================================
# DISPERSION
# =============================================================================


class TestDispersion:
    """Tests for mean, standard deviation and coefficient of variation."""

    def test_uneven_counts(self):
        """Population standard deviation over every category."""
        result = compute_dispersion({0: 35, 1: 25, 2: 20, 3: 20})

        assert result.mean == pytest.approx(25.0)
        assert result.std_dev == pytest.approx(math.sqrt(37.5))
        assert result.coefficient_of_variation == pytest.approx(math.sqrt(37.5) / 25)
        assert "moderate" in result.interpretation

    def test_uniform_counts(self):
        """Equal counts have zero spread."""
        result = compute_dispersion({"a": 10, "b": 10, "c": 10})

        assert result.std_dev == pytest.approx(0.0)
        assert result.coefficient_of_variation == pytest.approx(0.0)
        assert "tightly" in result.interpretation

    def test_zero_filled_counts_widen_spread(self):
        """Unselected categories in the domain increase the spread."""
        result = compute_dispersion({"a": 20, "b": 0})

        assert result.mean == pytest.approx(10.0)
        assert result.std_dev == pytest.approx(10.0)
        assert result.coefficient_of_variation == pytest.approx(1.0)
        assert "widely" in result.interpretation

    def test_empty_not_computable(self):
        """An empty distribution has no coefficient of variation."""
        result = compute_dispersion({})

        assert not result.is_computable
        assert result.coefficient_of_variation is None

    def test_zero_total_not_computable(self):
        """All-zero counts have zero mean and are flagged."""
        result = compute_dispersion({"a": 0, "b": 0})

        assert not result.is_computable
        assert result.num_categories == 2
        assert result.to_dict()["coefficient_of_variation"] is None
