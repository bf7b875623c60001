"""Position bias in selections from shuffled option lists.

When options are shuffled before every trial, an unbiased selector picks
each slot equally often and no option is tied to any slot. This module
measures departures from both:

    - detect_position_bias(): Over- or under-selection of slots
    - detect_edge_bias(): Over- or under-selection of the first/last slot
    - detect_category_position_correlation(): Options picked unusually
      often (or rarely) when shown at a particular slot
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from pychoicebias._kernels import contingency_table_numba
from pychoicebias.config import (
    CORRELATION_DEVIATION_THRESHOLD,
    DEFAULT_POSITION_COUNT,
    EDGE_BIAS_THRESHOLD,
    POSITION_BIAS_THRESHOLD,
    STRONG_POSITION_BIAS_THRESHOLD,
)
from pychoicebias.core.exceptions import PositionRangeError, ValueRangeError
from pychoicebias.core.mixins import ResultMixin
from pychoicebias.core.result import (
    CorrelationResult,
    EdgeBiasResult,
    PositionBiasResult,
    SignificantPair,
)
from pychoicebias.core.session import RecordsLike, SelectionRecord, as_records
from pychoicebias.core.types import BiasDirection, BiasStrength

logger = logging.getLogger(__name__)


def _position_counts(
    records: Sequence[SelectionRecord], position_count: int
) -> dict[int, int]:
    """Zero-filled selection counts over slots 0..position_count-1."""
    if position_count < 2:
        raise ValueRangeError(
            f"position_count must be at least 2, got {position_count}."
        )
    counts = {i: 0 for i in range(position_count)}
    for t, record in enumerate(records):
        if record.position >= position_count:
            raise PositionRangeError(
                f"Record {t} was selected at position {record.position}, outside "
                f"the analysed slots 0..{position_count - 1}. "
                f"Hint: Pass the number of options shown as position_count."
            )
        counts[record.position] += 1
    return counts


# =============================================================================
# POSITION BIAS
# =============================================================================


def detect_position_bias(
    data: RecordsLike,
    position_count: int = DEFAULT_POSITION_COUNT,
    threshold: float = POSITION_BIAS_THRESHOLD,
    strong_threshold: float = STRONG_POSITION_BIAS_THRESHOLD,
) -> PositionBiasResult:
    """
    Detect systematic over- or under-selection of slots.

    For each slot i, deviation_i = (observed_i - expected) / expected with
    expected = total / position_count. The bias index aggregates them:

        bias_index = min(1, sum|deviation_i| / (2 (position_count - 1)))

    which is 0 for perfectly even selection and 1 when every selection
    lands on one slot.

    Args:
        data: SelectionLog or sequence of SelectionRecord
        position_count: Number of slots in the presentation (default 4)
        threshold: Bias is reported when bias_index or the largest |deviation|
            exceeds this (default 0.15)
        strong_threshold: bias_index above this is reported as "strong"
            (default 0.30)

    Returns:
        PositionBiasResult with zero-filled frequencies and per-slot
        deviations. An empty record set is flagged as not computable and
        reports no bias.

    Raises:
        ValueRangeError: If position_count is below 2
        PositionRangeError: If a record position is >= position_count

    Example:
        >>> result = detect_position_bias(log, position_count=4)
        >>> if result.has_bias:
        ...     print(f"{result.direction} for slot {result.max_deviation_position}")
    """
    records = as_records(data)
    frequency = _position_counts(records, position_count)
    total = len(records)

    if total == 0:
        return PositionBiasResult(
            frequency_by_position=frequency,
            deviation_by_position={i: 0.0 for i in frequency},
            expected_frequency=0.0,
            max_deviation=0.0,
            max_deviation_position=0,
            average_deviation=0.0,
            bias_index=0.0,
            has_bias=False,
            strength="none",
            direction="none",
            strongest_bias_position=None,
            position_count=position_count,
            total=0,
            is_computable=False,
            interpretation="Insufficient data for position bias (no selections)",
        )

    expected = total / position_count
    deviation: dict[int, float] = {}
    total_deviation = 0.0
    max_deviation = 0.0
    max_deviation_position = 0

    for i in range(position_count):
        deviation[i] = (frequency[i] - expected) / expected
        total_deviation += abs(deviation[i])
        if abs(deviation[i]) > abs(max_deviation):
            max_deviation = deviation[i]
            max_deviation_position = i

    average_deviation = total_deviation / position_count
    bias_index = min(1.0, total_deviation / (2 * (position_count - 1)))

    has_bias = bias_index > threshold or abs(max_deviation) > threshold
    direction: BiasDirection = ResultMixin._direction_word(max_deviation)

    strength: BiasStrength
    if not has_bias:
        strength = "none"
        interpretation = "No significant position bias detected."
    else:
        strength = "strong" if bias_index > strong_threshold else "moderate"
        interpretation = (
            f"{strength.capitalize()} position bias detected. "
            f"Position {max_deviation_position} shows a {direction} bias of "
            f"{ResultMixin._format_percent(max_deviation)}."
        )

    logger.debug(
        "Position bias over %d slots: index=%.4f max=%.4f at %d",
        position_count, bias_index, max_deviation, max_deviation_position,
    )
    return PositionBiasResult(
        frequency_by_position=frequency,
        deviation_by_position=deviation,
        expected_frequency=expected,
        max_deviation=max_deviation,
        max_deviation_position=max_deviation_position,
        average_deviation=average_deviation,
        bias_index=bias_index,
        has_bias=has_bias,
        strength=strength,
        direction=direction,
        strongest_bias_position=max_deviation_position if has_bias else None,
        position_count=position_count,
        total=total,
        is_computable=True,
        interpretation=interpretation,
    )


# =============================================================================
# EDGE BIAS
# =============================================================================


def detect_edge_bias(
    data: RecordsLike,
    position_count: int = DEFAULT_POSITION_COUNT,
    threshold: float = EDGE_BIAS_THRESHOLD,
) -> EdgeBiasResult:
    """
    Detect bias toward or against the first and last slots.

    Primacy and recency effects show up as the first or last option being
    picked more (or less) often than total / position_count.

    Args:
        data: SelectionLog or sequence of SelectionRecord
        position_count: Number of slots in the presentation (default 4)
        threshold: An edge is biased when its |deviation| exceeds this
            (default 0.15)

    Returns:
        EdgeBiasResult. The interpretation names the biased edge(s) and the
        direction of each.

    Raises:
        ValueRangeError: If position_count is below 2
        PositionRangeError: If a record position is >= position_count
    """
    records = as_records(data)
    frequency = _position_counts(records, position_count)
    total = len(records)
    last = position_count - 1

    if total == 0:
        return EdgeBiasResult(
            first_position_frequency=0,
            last_position_frequency=0,
            expected_frequency=0.0,
            first_position_bias=0.0,
            last_position_bias=0.0,
            has_first_position_bias=False,
            has_last_position_bias=False,
            has_edge_bias=False,
            position_count=position_count,
            total=0,
            is_computable=False,
            interpretation="Insufficient data for edge bias (no selections)",
        )

    expected = total / position_count
    first_bias = (frequency[0] - expected) / expected
    last_bias = (frequency[last] - expected) / expected

    has_first = abs(first_bias) > threshold
    has_last = abs(last_bias) > threshold
    m = ResultMixin

    if not (has_first or has_last):
        interpretation = "No significant edge position bias detected."
    elif has_first and has_last:
        interpretation = (
            f"Edge position bias detected. "
            f"{m._direction_word(first_bias).capitalize()} for first position "
            f"({m._format_signed_percent(first_bias)}) and "
            f"{m._direction_word(last_bias)} for last position "
            f"({m._format_signed_percent(last_bias)})."
        )
    elif has_first:
        interpretation = (
            f"First position bias detected: {m._direction_word(first_bias)} "
            f"bias of {m._format_percent(first_bias)}."
        )
    else:
        interpretation = (
            f"Last position bias detected: {m._direction_word(last_bias)} "
            f"bias of {m._format_percent(last_bias)}."
        )

    return EdgeBiasResult(
        first_position_frequency=frequency[0],
        last_position_frequency=frequency[last],
        expected_frequency=expected,
        first_position_bias=first_bias,
        last_position_bias=last_bias,
        has_first_position_bias=has_first,
        has_last_position_bias=has_last,
        has_edge_bias=has_first or has_last,
        position_count=position_count,
        total=total,
        is_computable=True,
        interpretation=interpretation,
    )


# =============================================================================
# CATEGORY-POSITION CORRELATION
# =============================================================================


def detect_category_position_correlation(
    data: RecordsLike,
    threshold: float = CORRELATION_DEVIATION_THRESHOLD,
) -> CorrelationResult:
    """
    Find (category, position) cells that depart from independence.

    Builds the contingency table of selected category x selected position
    over the observed categories and positions. Under independence each cell
    expects row_total * col_total / grand_total selections; cells whose
    relative deviation (observed - expected) / expected exceeds the
    threshold in magnitude are reported.

    Args:
        data: SelectionLog or sequence of SelectionRecord
        threshold: Minimum |deviation| for a significant cell (default 0.30)

    Returns:
        CorrelationResult with the full matrix (zero cells included) and the
        significant pairs sorted by |deviation| descending, ties broken by
        category then position.

    Example:
        >>> result = detect_category_position_correlation(log)
        >>> for pair in result.significant_pairs[:3]:
        ...     print(pair.category, pair.position, f"{pair.deviation:+.0%}")
    """
    records = as_records(data)
    total = len(records)

    if total == 0:
        return CorrelationResult(
            matrix={},
            category_totals={},
            position_totals={},
            significant_pairs=(),
            has_significant_correlation=False,
            threshold=threshold,
            total=0,
            is_computable=False,
            interpretation="Insufficient data for correlation analysis (no selections)",
        )

    categories = sorted({r.selected_category for r in records})
    positions = sorted({r.position for r in records})
    row_index = {c: i for i, c in enumerate(categories)}
    col_index = {p: j for j, p in enumerate(positions)}

    table = contingency_table_numba(
        np.array([row_index[r.selected_category] for r in records], dtype=np.int64),
        np.array([col_index[r.position] for r in records], dtype=np.int64),
        len(categories),
        len(positions),
    )
    row_totals = table.sum(axis=1)
    col_totals = table.sum(axis=0)

    matrix = {
        c: {p: int(table[i, j]) for j, p in enumerate(positions)}
        for i, c in enumerate(categories)
    }

    pairs: list[SignificantPair] = []
    for i, category in enumerate(categories):
        for j, position in enumerate(positions):
            observed = int(table[i, j])
            expected = float(row_totals[i] * col_totals[j]) / total
            deviation = (observed - expected) / expected
            if abs(deviation) > threshold:
                pairs.append(
                    SignificantPair(
                        category=category,
                        position=position,
                        observed=observed,
                        expected=expected,
                        deviation=deviation,
                    )
                )
    pairs.sort(key=lambda p: (-abs(p.deviation), p.category, p.position))

    m = ResultMixin
    if not pairs:
        interpretation = "No significant category-position correlations detected."
    elif len(pairs) == 1:
        top = pairs[0]
        frequency_word = "more" if top.deviation > 0 else "less"
        interpretation = (
            f"Category-position correlation detected: {top.category!r} appears "
            f"{frequency_word} frequently at position {top.position} than expected "
            f"(deviation: {m._format_signed_percent(top.deviation)})."
        )
    else:
        top = pairs[0]
        interpretation = (
            f"Multiple category-position correlations detected. Most significant: "
            f"{top.category!r} at position {top.position} "
            f"(deviation: {m._format_signed_percent(top.deviation)})."
        )

    logger.debug(
        "Correlation table %dx%d: %d significant cells",
        len(categories), len(positions), len(pairs),
    )
    return CorrelationResult(
        matrix=matrix,
        category_totals={c: int(row_totals[i]) for i, c in enumerate(categories)},
        position_totals={p: int(col_totals[j]) for j, p in enumerate(positions)},
        significant_pairs=tuple(pairs),
        has_significant_correlation=bool(pairs),
        threshold=threshold,
        total=total,
        is_computable=True,
        interpretation=interpretation,
    )
