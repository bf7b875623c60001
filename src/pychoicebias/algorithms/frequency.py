"""Frequency distributions of selection attributes.

Counts how often each category or position was selected. Distributions
cover observed values only; callers that need a fixed domain (all slots,
all presented categories) use zero_fill_distribution().
"""

from __future__ import annotations

import warnings
from collections import Counter
from collections.abc import Hashable, Iterable

from pychoicebias.core.exceptions import DataQualityWarning, ValueRangeError
from pychoicebias.core.session import RecordsLike, SelectionRecord, as_records
from pychoicebias.core.types import Attribute, FrequencyDistribution

ATTRIBUTES: tuple[str, ...] = ("category", "position")


def attribute_sequence(
    records: Iterable[SelectionRecord], attribute: Attribute
) -> list[Hashable]:
    """
    Extract one attribute from each record, preserving record order.

    Args:
        records: Selection records
        attribute: "category" or "position"

    Returns:
        List of selected categories or positions

    Raises:
        ValueRangeError: If attribute is not "category" or "position"
    """
    if attribute == "category":
        return [r.selected_category for r in records]
    if attribute == "position":
        return [r.position for r in records]
    raise ValueRangeError(
        f"Unknown attribute {attribute!r}. Expected one of {list(ATTRIBUTES)}."
    )


def compute_frequency_distribution(
    data: RecordsLike, attribute: Attribute
) -> FrequencyDistribution:
    """
    Count occurrences of each observed value of an attribute.

    Args:
        data: SelectionLog or sequence of SelectionRecord
        attribute: "category" or "position"

    Returns:
        Dict of value -> count, sorted by value. Only observed values are
        present; an empty input gives an empty dict. Counts sum to the
        number of records.

    Example:
        >>> log = SelectionLog.from_tuples([
        ...     ("a", 0, ["a", "b"]), ("b", 0, ["b", "a"]), ("a", 1, ["b", "a"]),
        ... ])
        >>> compute_frequency_distribution(log, "category")
        {'a': 2, 'b': 1}
        >>> compute_frequency_distribution(log, "position")
        {0: 2, 1: 1}
    """
    counts = Counter(attribute_sequence(as_records(data), attribute))
    return {value: counts[value] for value in sorted(counts)}


def compute_category_frequency(data: RecordsLike) -> FrequencyDistribution:
    """Count selections per category."""
    return compute_frequency_distribution(data, "category")


def compute_position_frequency(data: RecordsLike) -> FrequencyDistribution:
    """Count selections per position."""
    return compute_frequency_distribution(data, "position")


def zero_fill_distribution(
    distribution: FrequencyDistribution, domain: Iterable[Hashable]
) -> FrequencyDistribution:
    """
    Extend a distribution with zero counts over a fixed domain.

    Values already in the distribution keep their counts, including values
    outside the domain. Domain values come first in domain order, followed
    by any extra observed values.

    Args:
        distribution: Observed value -> count
        domain: Every value that should be represented

    Returns:
        New dict with zero counts for unobserved domain values

    Example:
        >>> zero_fill_distribution({1: 3}, range(4))
        {0: 0, 1: 3, 2: 0, 3: 0}
    """
    filled = {value: distribution.get(value, 0) for value in domain}
    for value, count in distribution.items():
        if value not in filled:
            filled[value] = count
    return filled


def resolve_total(distribution: FrequencyDistribution, total: int | None = None) -> int:
    """
    Return the observation count for a distribution.

    Args:
        distribution: Value -> count
        total: Explicit total, or None to use the sum of counts

    Returns:
        The total to normalize by

    Raises:
        ValueRangeError: If any count is negative
    """
    negative = [value for value, count in distribution.items() if count < 0]
    if negative:
        raise ValueRangeError(
            f"Found negative counts for {negative[:5]}. Counts must be non-negative."
        )
    counted = int(sum(distribution.values()))
    if total is None:
        return counted
    if total != counted:
        warnings.warn(
            f"Explicit total {total} differs from the sum of counts {counted}.",
            DataQualityWarning,
            stacklevel=3,
        )
    return int(total)
