"""Dispersion of selection counts across categories."""

from __future__ import annotations

import logging

import numpy as np

from pychoicebias.algorithms.frequency import resolve_total
from pychoicebias.core.result import DispersionResult
from pychoicebias.core.types import FrequencyDistribution

logger = logging.getLogger(__name__)


def compute_dispersion(
    distribution: FrequencyDistribution,
    total: int | None = None,
) -> DispersionResult:
    """
    Compute mean, standard deviation and coefficient of variation of counts.

    mean = total / k, std_dev = sqrt(sum((count_i - mean)^2) / k) and
    cv = std_dev / mean, where k counts every category in the distribution.
    The caller must zero-fill categories or positions that belong to the
    analysis domain but were never selected.

    Args:
        distribution: Category -> count over the analysis domain
        total: Number of observations. Defaults to the sum of counts.

    Returns:
        DispersionResult. When the mean is 0 (no observations or an empty
        distribution) is_computable is False and the coefficient of
        variation is None.

    Example:
        >>> result = compute_dispersion({0: 35, 1: 25, 2: 20, 3: 20})
        >>> result.mean
        25.0
    """
    total = resolve_total(distribution, total)
    counts = np.asarray(list(distribution.values()), dtype=np.float64)
    k = int(counts.size)

    if k == 0 or total <= 0:
        logger.debug("Dispersion not computable: k=%d total=%d", k, total)
        return DispersionResult(
            mean=0.0,
            std_dev=0.0,
            coefficient_of_variation=None,
            num_categories=k,
            total=total,
            is_computable=False,
            interpretation="Insufficient data for dispersion (mean count is zero)",
        )

    mean = total / k
    std_dev = float(np.sqrt(np.sum((counts - mean) ** 2) / k))
    cv = std_dev / mean

    if cv < 0.1:
        interpretation = "Counts are tightly clustered around the mean"
    elif cv < 0.3:
        interpretation = "Counts show moderate spread around the mean"
    else:
        interpretation = "Counts are widely spread around the mean"

    logger.debug("Dispersion mean=%.4f sd=%.4f cv=%.4f", mean, std_dev, cv)
    return DispersionResult(
        mean=float(mean),
        std_dev=std_dev,
        coefficient_of_variation=float(cv),
        num_categories=k,
        total=total,
        is_computable=True,
        interpretation=interpretation,
    )
