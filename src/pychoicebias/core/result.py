"""Result dataclasses for randomness and bias analysis.

Every result is a frozen value computed fresh from the supplied records.
Results carry no timing or other run-dependent fields, so analysing the
same records twice gives equal results.

    - EntropyResult: Shannon entropy of a frequency distribution
    - DispersionResult: Mean, standard deviation and coefficient of variation
    - GoodnessOfFitResult: Chi-square statistic against an expected distribution
    - RunsTestResult: Wald-Wolfowitz runs test for sequential independence
    - PositionBiasResult: Per-slot deviation and aggregate bias index
    - EdgeBiasResult: Deviation at the first and last slots
    - CorrelationResult: Category x position contingency analysis
    - RandomnessAssessment: Composite verdict over categories and positions
"""

from __future__ import annotations

import math
from collections.abc import Hashable
from dataclasses import dataclass
from typing import Any

from pychoicebias.core.exceptions import DegenerateInputError
from pychoicebias.core.mixins import ResultMixin
from pychoicebias.core.types import (
    Attribute,
    BiasDirection,
    BiasStrength,
    ChiSquareInterpretation,
    RandomnessVerdict,
    RunsInterpretation,
)


@dataclass(frozen=True)
class EntropyResult(ResultMixin):
    """
    Result of Shannon entropy analysis of a frequency distribution.

    Entropy is maximal (log2 k) for a uniform distribution over k categories
    and zero when a single category takes every observation.

    Attributes:
        entropy: Shannon entropy in bits, H = -sum(p_i * log2(p_i))
        normalized_entropy: H / log2(k), in [0, 1]. Reported as 0.0 when not
            computable.
        num_categories: Number of categories k in the distribution,
            including zero-count categories
        num_nonzero_categories: Categories with a positive count
        total: Number of observations
        is_computable: False when total is 0 or fewer than 2 categories
            have a positive count
        interpretation: Human-readable interpretation
    """

    entropy: float
    normalized_entropy: float
    num_categories: int
    num_nonzero_categories: int
    total: int
    is_computable: bool
    interpretation: str

    @property
    def max_entropy(self) -> float:
        """Maximum possible entropy for the number of categories, log2(k)."""
        return math.log2(self.num_categories) if self.num_categories > 0 else 0.0

    def score(self) -> float:
        """Return score in [0, 1]. Higher is more uniform."""
        return self.normalized_entropy

    def to_dict(self) -> dict[str, Any]:
        """Return dictionary representation for serialization."""
        return {
            "entropy": self.entropy,
            "normalized_entropy": self.normalized_entropy,
            "num_categories": self.num_categories,
            "num_nonzero_categories": self.num_nonzero_categories,
            "total": self.total,
            "is_computable": self.is_computable,
            "interpretation": self.interpretation,
        }

    def __repr__(self) -> str:
        """Compact string representation."""
        if not self.is_computable:
            return f"EntropyResult(not computable, k={self.num_categories}, n={self.total})"
        return (
            f"EntropyResult(H={self.entropy:.4f}, "
            f"normalized={self.normalized_entropy:.4f}, k={self.num_categories})"
        )


@dataclass(frozen=True)
class DispersionResult(ResultMixin):
    """
    Result of dispersion analysis of a frequency distribution.

    Uses the population standard deviation of the counts, taken over every
    category in the distribution. Callers zero-fill categories that were
    never selected so they count toward the spread.

    Attributes:
        mean: Mean count per category, total / k
        std_dev: Population standard deviation of the counts
        coefficient_of_variation: std_dev / mean, or None when mean is 0
        num_categories: Number of categories k
        total: Number of observations
        is_computable: False when mean is 0
        interpretation: Human-readable interpretation
    """

    mean: float
    std_dev: float
    coefficient_of_variation: float | None
    num_categories: int
    total: int
    is_computable: bool
    interpretation: str

    def to_dict(self) -> dict[str, Any]:
        """Return dictionary representation for serialization."""
        return {
            "mean": self.mean,
            "std_dev": self.std_dev,
            "coefficient_of_variation": self.coefficient_of_variation,
            "num_categories": self.num_categories,
            "total": self.total,
            "is_computable": self.is_computable,
            "interpretation": self.interpretation,
        }

    def __repr__(self) -> str:
        """Compact string representation."""
        if not self.is_computable:
            return f"DispersionResult(not computable, k={self.num_categories})"
        return (
            f"DispersionResult(mean={self.mean:.4f}, sd={self.std_dev:.4f}, "
            f"cv={self.coefficient_of_variation:.4f})"
        )


@dataclass(frozen=True)
class GoodnessOfFitResult(ResultMixin):
    """
    Result of a chi-square goodness-of-fit test.

    The interpretation uses coarse bands relative to the degrees of freedom
    rather than a critical-value table:
        statistic < df        -> "random"
        statistic < 2 * df    -> "mild"
        statistic < 3 * df    -> "moderate"
        otherwise             -> "strong"

    Attributes:
        statistic: Pearson chi-square, sum((o_i - e_i)^2 / e_i)
        degrees_of_freedom: k - 1
        interpretation: Band label, or "insufficient_data"
        p_value: Upper-tail probability of the chi-square distribution.
            Informational only; the band label does not depend on it.
            None when not computable.
        observed: Observed counts per category
        expected: Expected counts per category
        total: Number of observations
        is_computable: False when total is 0 or k < 2
        description: Human-readable interpretation
    """

    statistic: float
    degrees_of_freedom: int
    interpretation: ChiSquareInterpretation
    p_value: float | None
    observed: dict[Hashable, int]
    expected: dict[Hashable, float]
    total: int
    is_computable: bool
    description: str

    @property
    def is_random(self) -> bool:
        """True if the statistic falls in the "random" band."""
        return self.interpretation == "random"

    def _reason(self) -> str:
        return self.description

    def to_dict(self) -> dict[str, Any]:
        """Return dictionary representation for serialization."""
        return {
            "statistic": self.statistic,
            "degrees_of_freedom": self.degrees_of_freedom,
            "interpretation": self.interpretation,
            "p_value": self.p_value,
            "observed": {str(k): v for k, v in self.observed.items()},
            "expected": {str(k): v for k, v in self.expected.items()},
            "total": self.total,
            "is_computable": self.is_computable,
            "description": self.description,
        }

    def __repr__(self) -> str:
        """Compact string representation."""
        return (
            f"GoodnessOfFitResult({self.interpretation}, "
            f"chi2={self.statistic:.4f}, df={self.degrees_of_freedom})"
        )


@dataclass(frozen=True)
class RunsTestResult(ResultMixin):
    """
    Result of the Wald-Wolfowitz runs test on one attribute.

    The sequence is binarized against its first observed value. Too few
    runs means clustering (streaks); too many means excessive alternation.

    Attributes:
        attribute: "category" or "position"
        observed_runs: Number of maximal runs R in the binary sequence
        expected_runs: 1 + 2 n1 n2 / (n1 + n2)
        z_score: (R - expected) / sd, or None when not computable
        is_random: True if |z| is below the threshold
        interpretation: "random", "clustering", "alternating",
            "all_identical" or "insufficient_data"
        n1: Count of records equal to the reference value
        n2: Count of records different from the reference value
        reference_value: First observed value, used for binarization
        p_value: Two-sided normal p-value of z_score (informational)
        num_records: Number of records tested
        z_threshold: Critical |z| used for both is_random and interpretation
        description: Human-readable interpretation
    """

    attribute: Attribute
    observed_runs: int
    expected_runs: float
    z_score: float | None
    is_random: bool
    interpretation: RunsInterpretation
    n1: int
    n2: int
    reference_value: Hashable | None
    p_value: float | None
    num_records: int
    z_threshold: float
    description: str

    @property
    def is_computable(self) -> bool:
        """True if a z-score was computed."""
        return self.z_score is not None

    def _not_computable_error(self) -> Exception:
        if self.interpretation == "all_identical":
            return DegenerateInputError(
                f"Runs test on {self.attribute} is degenerate: {self.description}"
            )
        return super()._not_computable_error()

    def _reason(self) -> str:
        return self.description

    def to_dict(self) -> dict[str, Any]:
        """Return dictionary representation for serialization."""
        ref = self.reference_value
        return {
            "attribute": self.attribute,
            "observed_runs": self.observed_runs,
            "expected_runs": self.expected_runs,
            "z_score": self.z_score,
            "is_random": self.is_random,
            "interpretation": self.interpretation,
            "n1": self.n1,
            "n2": self.n2,
            "reference_value": ref if ref is None or isinstance(ref, (int, str)) else str(ref),
            "p_value": self.p_value,
            "num_records": self.num_records,
            "z_threshold": self.z_threshold,
            "description": self.description,
        }

    def __repr__(self) -> str:
        """Compact string representation."""
        if self.z_score is None:
            return f"RunsTestResult({self.attribute}, {self.interpretation})"
        return (
            f"RunsTestResult({self.attribute}, {self.interpretation}, "
            f"runs={self.observed_runs}, z={self.z_score:.4f})"
        )


@dataclass(frozen=True)
class PositionBiasResult(ResultMixin):
    """
    Result of position bias detection over a fixed slot domain.

    Attributes:
        frequency_by_position: Selections per slot, zero-filled over
            0..position_count-1
        deviation_by_position: (observed - expected) / expected per slot
        expected_frequency: total / position_count
        max_deviation: Signed deviation with the largest magnitude
        max_deviation_position: Slot of max_deviation
        average_deviation: Mean absolute deviation across slots
        bias_index: min(1, sum|dev| / (2 (position_count - 1))), in [0, 1]
        has_bias: True if bias_index or max |dev| exceeds the threshold
        strength: "none", "moderate" or "strong"
        direction: "preference", "avoidance" or "none"
        strongest_bias_position: max_deviation_position when biased, else None
        position_count: Size of the slot domain
        total: Number of records
        is_computable: False for an empty record set
        interpretation: Human-readable interpretation
    """

    frequency_by_position: dict[int, int]
    deviation_by_position: dict[int, float]
    expected_frequency: float
    max_deviation: float
    max_deviation_position: int
    average_deviation: float
    bias_index: float
    has_bias: bool
    strength: BiasStrength
    direction: BiasDirection
    strongest_bias_position: int | None
    position_count: int
    total: int
    is_computable: bool
    interpretation: str

    def score(self) -> float:
        """Return score in [0, 1]. Higher means less position bias."""
        return 1.0 - self.bias_index

    def to_dict(self) -> dict[str, Any]:
        """Return dictionary representation for serialization."""
        return {
            "frequency_by_position": dict(self.frequency_by_position),
            "deviation_by_position": dict(self.deviation_by_position),
            "expected_frequency": self.expected_frequency,
            "max_deviation": self.max_deviation,
            "max_deviation_position": self.max_deviation_position,
            "average_deviation": self.average_deviation,
            "bias_index": self.bias_index,
            "has_bias": self.has_bias,
            "strength": self.strength,
            "direction": self.direction,
            "strongest_bias_position": self.strongest_bias_position,
            "position_count": self.position_count,
            "total": self.total,
            "is_computable": self.is_computable,
            "interpretation": self.interpretation,
        }

    def __repr__(self) -> str:
        """Compact string representation."""
        if not self.has_bias:
            return f"PositionBiasResult(no bias, index={self.bias_index:.4f})"
        return (
            f"PositionBiasResult({self.strength} {self.direction} at "
            f"{self.max_deviation_position}, index={self.bias_index:.4f})"
        )


@dataclass(frozen=True)
class EdgeBiasResult(ResultMixin):
    """
    Result of edge (first/last slot) bias detection.

    Attributes:
        first_position_frequency: Selections at slot 0
        last_position_frequency: Selections at slot position_count - 1
        expected_frequency: total / position_count
        first_position_bias: Relative deviation at slot 0
        last_position_bias: Relative deviation at the last slot
        has_first_position_bias: |first_position_bias| above threshold
        has_last_position_bias: |last_position_bias| above threshold
        has_edge_bias: Either edge is biased
        position_count: Size of the slot domain
        total: Number of records
        is_computable: False for an empty record set
        interpretation: Names the biased edge(s) and direction
    """

    first_position_frequency: int
    last_position_frequency: int
    expected_frequency: float
    first_position_bias: float
    last_position_bias: float
    has_first_position_bias: bool
    has_last_position_bias: bool
    has_edge_bias: bool
    position_count: int
    total: int
    is_computable: bool
    interpretation: str

    def to_dict(self) -> dict[str, Any]:
        """Return dictionary representation for serialization."""
        return {
            "first_position_frequency": self.first_position_frequency,
            "last_position_frequency": self.last_position_frequency,
            "expected_frequency": self.expected_frequency,
            "first_position_bias": self.first_position_bias,
            "last_position_bias": self.last_position_bias,
            "has_first_position_bias": self.has_first_position_bias,
            "has_last_position_bias": self.has_last_position_bias,
            "has_edge_bias": self.has_edge_bias,
            "position_count": self.position_count,
            "total": self.total,
            "is_computable": self.is_computable,
            "interpretation": self.interpretation,
        }

    def __repr__(self) -> str:
        """Compact string representation."""
        return (
            f"EdgeBiasResult(first={self.first_position_bias:+.4f}, "
            f"last={self.last_position_bias:+.4f}, edge_bias={self.has_edge_bias})"
        )


@dataclass(frozen=True)
class SignificantPair:
    """A (category, position) cell that departs from independence.

    Attributes:
        category: Selected category
        position: Slot index
        observed: Joint count of the cell
        expected: row_total * col_total / grand_total
        deviation: (observed - expected) / expected
    """

    category: str
    position: int
    observed: int
    expected: float
    deviation: float

    def to_dict(self) -> dict[str, Any]:
        """Return dictionary representation for serialization."""
        return {
            "category": self.category,
            "position": self.position,
            "observed": self.observed,
            "expected": self.expected,
            "deviation": self.deviation,
        }


@dataclass(frozen=True)
class CorrelationResult(ResultMixin):
    """
    Result of category-position correlation analysis.

    Attributes:
        matrix: category -> position -> joint count over observed categories
            and observed positions, zero cells included
        category_totals: Row totals
        position_totals: Column totals
        significant_pairs: Cells whose |deviation| exceeds the threshold,
            sorted by |deviation| descending
        has_significant_correlation: True if any pair is significant
        threshold: Relative deviation threshold used
        total: Number of records
        is_computable: False for an empty record set
        interpretation: Human-readable interpretation
    """

    matrix: dict[str, dict[int, int]]
    category_totals: dict[str, int]
    position_totals: dict[int, int]
    significant_pairs: tuple[SignificantPair, ...]
    has_significant_correlation: bool
    threshold: float
    total: int
    is_computable: bool
    interpretation: str

    @property
    def num_significant_pairs(self) -> int:
        """Number of significant (category, position) cells."""
        return len(self.significant_pairs)

    def to_dict(self) -> dict[str, Any]:
        """Return dictionary representation for serialization."""
        return {
            "matrix": {cat: dict(row) for cat, row in self.matrix.items()},
            "category_totals": dict(self.category_totals),
            "position_totals": dict(self.position_totals),
            "significant_pairs": [p.to_dict() for p in self.significant_pairs],
            "has_significant_correlation": self.has_significant_correlation,
            "threshold": self.threshold,
            "total": self.total,
            "is_computable": self.is_computable,
            "interpretation": self.interpretation,
        }

    def __repr__(self) -> str:
        """Compact string representation."""
        return (
            f"CorrelationResult({self.num_significant_pairs} significant pairs, "
            f"{len(self.matrix)}x{len(self.position_totals)})"
        )


@dataclass(frozen=True)
class AttributeAnalysis:
    """Frequency, entropy, dispersion, chi-square and runs results for one
    attribute of the selections.

    frequency is zero-filled over the analysis domain and feeds dispersion.
    Entropy and chi-square are computed over the observed values only.
    """

    attribute: Attribute
    frequency: dict[Hashable, int]
    entropy: EntropyResult
    dispersion: DispersionResult
    chi_square: GoodnessOfFitResult
    runs: RunsTestResult

    def to_dict(self) -> dict[str, Any]:
        """Return dictionary representation for serialization."""
        return {
            "attribute": self.attribute,
            "frequency": {str(k): v for k, v in self.frequency.items()},
            "entropy": self.entropy.to_dict(),
            "dispersion": self.dispersion.to_dict(),
            "chi_square": self.chi_square.to_dict(),
            "runs": self.runs.to_dict(),
        }


@dataclass(frozen=True)
class RandomnessAssessment:
    """
    Composite randomness verdict over categories and positions.

    Attributes:
        category: Analyses of the selected-category attribute
        position: Analyses of the selected-position attribute
        is_uniform_distribution: Both normalized entropies exceed the
            uniformity threshold
        is_sequentially_independent: Both runs tests report is_random
        verdict: One of "random", "uniform_but_patterned",
            "biased_but_independent", "biased_and_patterned"
        interpretation: Canned interpretation for the verdict
        num_records: Number of records analysed
    """

    category: AttributeAnalysis
    position: AttributeAnalysis
    is_uniform_distribution: bool
    is_sequentially_independent: bool
    verdict: RandomnessVerdict
    interpretation: str
    num_records: int

    @property
    def is_random(self) -> bool:
        """True if selections are both uniform and sequentially independent."""
        return self.is_uniform_distribution and self.is_sequentially_independent

    def to_dict(self) -> dict[str, Any]:
        """Return dictionary representation for serialization."""
        return {
            "category": self.category.to_dict(),
            "position": self.position.to_dict(),
            "is_uniform_distribution": self.is_uniform_distribution,
            "is_sequentially_independent": self.is_sequentially_independent,
            "verdict": self.verdict,
            "interpretation": self.interpretation,
            "num_records": self.num_records,
        }

    def __repr__(self) -> str:
        """Compact string representation."""
        return f"RandomnessAssessment({self.verdict}, n={self.num_records})"
