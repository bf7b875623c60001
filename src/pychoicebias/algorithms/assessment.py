"""Composite randomness assessment of a selection history.

Combines entropy, dispersion, chi-square and runs tests over both the
selected categories and the selected positions into one verdict:

    uniform & independent       -> "random"
    uniform, not independent    -> "uniform_but_patterned"
    not uniform, independent    -> "biased_but_independent"
    neither                     -> "biased_and_patterned"
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterable

from pychoicebias.algorithms.dispersion import compute_dispersion
from pychoicebias.algorithms.entropy import compute_entropy
from pychoicebias.algorithms.frequency import (
    compute_frequency_distribution,
    zero_fill_distribution,
)
from pychoicebias.algorithms.goodness_of_fit import compute_chi_square
from pychoicebias.algorithms.runs import runs_test
from pychoicebias.config import (
    RUNS_MIN_RECORDS,
    RUNS_Z_THRESHOLD,
    UNIFORM_ENTROPY_THRESHOLD,
)
from pychoicebias.core.result import AttributeAnalysis, RandomnessAssessment
from pychoicebias.core.session import (
    RecordsLike,
    SelectionLog,
    SelectionRecord,
    as_records,
)
from pychoicebias.core.types import Attribute, RandomnessVerdict

logger = logging.getLogger(__name__)

_INTERPRETATIONS: dict[str, str] = {
    "random": "Distribution appears highly random and unbiased",
    "uniform_but_patterned": "Distribution is uniform but shows sequential patterns",
    "biased_but_independent": (
        "Distribution shows some bias but selections are sequentially independent"
    ),
    "biased_and_patterned": "Distribution is biased and shows sequential patterns",
}


def _analyze_attribute(
    records: tuple[SelectionRecord, ...],
    attribute: Attribute,
    domain: Iterable[Hashable],
    min_records: int,
    z_threshold: float,
) -> AttributeAnalysis:
    observed = compute_frequency_distribution(records, attribute)
    # Entropy and chi-square run over observed values; dispersion over the
    # whole domain so unpicked values widen the spread.
    frequency = zero_fill_distribution(observed, domain)
    total = len(records)
    return AttributeAnalysis(
        attribute=attribute,
        frequency=frequency,
        entropy=compute_entropy(observed, total),
        dispersion=compute_dispersion(frequency, total),
        chi_square=compute_chi_square(observed, total),
        runs=runs_test(records, attribute, min_records=min_records, z_threshold=z_threshold),
    )


def assess_randomness(
    data: RecordsLike,
    position_count: int | None = None,
    uniform_threshold: float = UNIFORM_ENTROPY_THRESHOLD,
    min_records: int = RUNS_MIN_RECORDS,
    z_threshold: float = RUNS_Z_THRESHOLD,
) -> RandomnessAssessment:
    """
    Assess whether selections look uniform and sequentially independent.

    Entropy and chi-square use the observed frequencies, so k is the number
    of distinct categories (or slots) actually selected. Dispersion uses
    frequencies zero-filled over every category that appeared in any
    presentation order, and over slots 0..position_count-1, so options or
    slots that were never picked widen the spread. The reported frequency
    maps are the zero-filled ones.

    The selections are uniform when the normalized entropy of both
    attributes exceeds uniform_threshold, and sequentially independent when
    both runs tests report is_random.

    Args:
        data: SelectionLog or record sequence in temporal order
        position_count: Number of slots for dispersion. Defaults to the
            longest presentation order in the data.
        uniform_threshold: Normalized entropy threshold (default 0.95)
        min_records: Minimum records for the runs tests (default 10)
        z_threshold: Critical |z| for the runs tests (default 1.96)

    Returns:
        RandomnessAssessment with the per-attribute analyses and the verdict

    Example:
        >>> assessment = assess_randomness(log)
        >>> assessment.verdict
        'random'
        >>> assessment.position.entropy.normalized_entropy
        1.0
    """
    log = SelectionLog(records=as_records(data))
    records = log.records
    if position_count is None:
        position_count = log.num_positions

    category = _analyze_attribute(
        records, "category", log.presented_categories, min_records, z_threshold
    )
    position = _analyze_attribute(
        records, "position", range(position_count), min_records, z_threshold
    )

    is_uniform = (
        category.entropy.normalized_entropy > uniform_threshold
        and position.entropy.normalized_entropy > uniform_threshold
    )
    is_independent = category.runs.is_random and position.runs.is_random

    verdict: RandomnessVerdict
    if is_uniform and is_independent:
        verdict = "random"
    elif is_uniform:
        verdict = "uniform_but_patterned"
    elif is_independent:
        verdict = "biased_but_independent"
    else:
        verdict = "biased_and_patterned"

    logger.info(
        "Randomness assessment over %d records: %s (uniform=%s, independent=%s)",
        len(records), verdict, is_uniform, is_independent,
    )
    return RandomnessAssessment(
        category=category,
        position=position,
        is_uniform_distribution=is_uniform,
        is_sequentially_independent=is_independent,
        verdict=verdict,
        interpretation=_INTERPRETATIONS[verdict],
        num_records=len(records),
    )
