"""Chi-square goodness-of-fit test for selection distributions.

The verdict uses coarse bands relative to the degrees of freedom, not a
critical-value table. The upper-tail p-value is reported alongside for
reference but does not change the band.
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Hashable, Mapping

from scipy import stats

from pychoicebias.algorithms.frequency import resolve_total
from pychoicebias.config import MIN_EXPECTED_COUNT
from pychoicebias.core.exceptions import DataQualityWarning, ValueRangeError
from pychoicebias.core.result import GoodnessOfFitResult
from pychoicebias.core.types import ChiSquareInterpretation, FrequencyDistribution

logger = logging.getLogger(__name__)

_DESCRIPTIONS: dict[str, str] = {
    "random": "Distribution appears random (chi-square < df)",
    "mild": "Distribution shows mild deviation from randomness",
    "moderate": "Distribution shows moderate deviation from randomness",
    "strong": "Distribution shows strong deviation from randomness",
}


def interpret_chi_square(statistic: float, degrees_of_freedom: int) -> ChiSquareInterpretation:
    """
    Map a chi-square statistic to a heuristic band.

    Args:
        statistic: Chi-square statistic
        degrees_of_freedom: Degrees of freedom, at least 1

    Returns:
        "random" if statistic < df, "mild" if < 2 df, "moderate" if < 3 df,
        otherwise "strong"
    """
    df = degrees_of_freedom
    if statistic < df:
        return "random"
    if statistic < 2 * df:
        return "mild"
    if statistic < 3 * df:
        return "moderate"
    return "strong"


def compute_chi_square(
    observed: FrequencyDistribution,
    total: int | None = None,
    expected_probabilities: Mapping[Hashable, float] | None = None,
    min_expected_count: float = MIN_EXPECTED_COUNT,
) -> GoodnessOfFitResult:
    """
    Pearson chi-square statistic of observed counts against expected ones.

    expected_i = total * p_i, with p_i = 1/k unless given in
    expected_probabilities (categories missing from the map also fall back
    to 1/k). statistic = sum((observed_i - expected_i)^2 / expected_i) and
    df = k - 1.

    Args:
        observed: Category -> observed count
        total: Number of observations. Defaults to the sum of counts.
        expected_probabilities: Optional category -> expected probability
        min_expected_count: Expected counts below this emit a
            DataQualityWarning

    Returns:
        GoodnessOfFitResult. When total is 0 or there are fewer than 2
        categories, interpretation is "insufficient_data".

    Raises:
        ValueRangeError: If an expected probability is not positive

    Example:
        >>> result = compute_chi_square({"A": 40, "B": 30, "C": 20, "D": 10})
        >>> result.statistic
        20.0
        >>> result.interpretation
        'strong'
    """
    total = resolve_total(observed, total)
    categories = list(observed)
    k = len(categories)
    df = max(k - 1, 0)

    if total <= 0 or k < 2:
        reason = "no observations" if total <= 0 else f"only {k} category"
        logger.debug("Chi-square not computable: %s", reason)
        return GoodnessOfFitResult(
            statistic=0.0,
            degrees_of_freedom=df,
            interpretation="insufficient_data",
            p_value=None,
            observed=dict(observed),
            expected={},
            total=total,
            is_computable=False,
            description=f"Insufficient data for chi-square test ({reason})",
        )

    uniform = 1.0 / k
    expected: dict[Hashable, float] = {}
    for category in categories:
        p = uniform
        if expected_probabilities is not None:
            p = expected_probabilities.get(category, uniform)
        if p <= 0:
            raise ValueRangeError(
                f"Expected probability for {category!r} is {p}. "
                f"Expected probabilities must be positive."
            )
        expected[category] = total * p

    statistic = float(
        sum((observed[c] - expected[c]) ** 2 / expected[c] for c in categories)
    )

    sparse = [c for c in categories if expected[c] < min_expected_count]
    if sparse:
        warnings.warn(
            f"{len(sparse)} of {k} categories have expected counts below "
            f"{min_expected_count}; the chi-square approximation is unreliable.",
            DataQualityWarning,
            stacklevel=2,
        )

    interpretation = interpret_chi_square(statistic, df)
    p_value = float(stats.chi2.sf(statistic, df))

    logger.debug(
        "Chi-square=%.4f df=%d p=%.4g (%s)", statistic, df, p_value, interpretation
    )
    return GoodnessOfFitResult(
        statistic=statistic,
        degrees_of_freedom=df,
        interpretation=interpretation,
        p_value=p_value,
        observed=dict(observed),
        expected=expected,
        total=total,
        is_computable=True,
        description=_DESCRIPTIONS[interpretation],
    )
