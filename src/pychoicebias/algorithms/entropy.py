"""Shannon entropy of selection frequency distributions.

Higher entropy means selections are spread more evenly across categories.
Normalized entropy divides by log2(k), the entropy of a uniform
distribution over the k categories present in the distribution.
"""

from __future__ import annotations

import logging
import math

import numpy as np

from pychoicebias.algorithms.frequency import resolve_total
from pychoicebias.config import UNIFORM_ENTROPY_THRESHOLD
from pychoicebias.core.result import EntropyResult
from pychoicebias.core.types import FrequencyDistribution

logger = logging.getLogger(__name__)


def compute_entropy(
    distribution: FrequencyDistribution,
    total: int | None = None,
) -> EntropyResult:
    """
    Compute Shannon entropy and normalized entropy of a distribution.

    H = -sum(p_i * log2(p_i)) with p_i = count_i / total, skipping
    zero-count categories. normalized = H / log2(k) where k is the number
    of categories in the distribution (zero-count ones included).

    Args:
        distribution: Category -> count. Zero-fill it over the analysis
            domain if unselected categories should lower the normalized
            entropy.
        total: Number of observations. Defaults to the sum of counts.

    Returns:
        EntropyResult. When total is 0 or fewer than 2 categories have a
        positive count, is_computable is False and both entropy values are
        reported as 0.0.

    Example:
        >>> result = compute_entropy({"a": 25, "b": 25, "c": 25, "d": 25})
        >>> result.entropy
        2.0
        >>> result.normalized_entropy
        1.0
    """
    total = resolve_total(distribution, total)
    counts = np.asarray(list(distribution.values()), dtype=np.float64)
    k = int(counts.size)
    nonzero = counts[counts > 0]
    num_nonzero = int(nonzero.size)

    if total <= 0 or num_nonzero < 2:
        if total <= 0:
            reason = "no observations"
        elif k < 2:
            reason = f"only {k} category in the distribution"
        else:
            reason = "all observations fall in a single category"
        logger.debug("Entropy not computable: %s", reason)
        return EntropyResult(
            entropy=0.0,
            normalized_entropy=0.0,
            num_categories=k,
            num_nonzero_categories=num_nonzero,
            total=total,
            is_computable=False,
            interpretation=f"Insufficient data for normalized entropy ({reason})",
        )

    probs = nonzero / total
    entropy = float(-np.sum(probs * np.log2(probs)))
    normalized = min(1.0, max(0.0, entropy / math.log2(k)))

    if normalized > UNIFORM_ENTROPY_THRESHOLD:
        interpretation = "Selections are spread near-uniformly across categories"
    elif normalized > 0.8:
        interpretation = "Selections are moderately uneven across categories"
    else:
        interpretation = "Selections are concentrated on a few categories"

    logger.debug("Entropy H=%.6f normalized=%.6f over k=%d", entropy, normalized, k)
    return EntropyResult(
        entropy=entropy,
        normalized_entropy=normalized,
        num_categories=k,
        num_nonzero_categories=num_nonzero,
        total=total,
        is_computable=True,
        interpretation=interpretation,
    )
