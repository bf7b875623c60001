"""Runs test for sequential independence of selections.

Implements the Wald-Wolfowitz runs test on a binarized sequence. The
sequence of selected categories (or positions) is mapped to 1 where it
equals the first observed value and 0 elsewhere, and the number of maximal
runs is compared with its expectation under independence.

Too few runs indicates clustering (the same value repeats in streaks).
Too many runs indicates excessive alternation.

References:
    Wald, A., & Wolfowitz, J. (1940). On a test whether two samples are
    from the same population. Annals of Mathematical Statistics, 11(2).
"""

from __future__ import annotations

import logging
import math
import warnings
from collections.abc import Hashable, Sequence

import numpy as np
from scipy import stats

from pychoicebias._kernels import binarize_numba, count_runs_numba
from pychoicebias.algorithms.frequency import attribute_sequence
from pychoicebias.config import RUNS_MIN_RECORDS, RUNS_Z_THRESHOLD
from pychoicebias.core.exceptions import NumericalInstabilityWarning
from pychoicebias.core.result import RunsTestResult
from pychoicebias.core.session import RecordsLike, as_records
from pychoicebias.core.types import Attribute, RunsInterpretation

logger = logging.getLogger(__name__)

_DESCRIPTIONS: dict[str, str] = {
    "random": "Sequence appears random (no significant clustering or alternating patterns)",
    "clustering": "Sequence shows clustering (too few runs)",
    "alternating": "Sequence shows excessive alternating (too many runs)",
    "all_identical": "All values are identical, no randomness to test",
}


def count_runs(sequence: Sequence[Hashable]) -> int:
    """
    Count maximal runs of equal consecutive values.

    Args:
        sequence: Values in order

    Returns:
        Number of runs, 0 for an empty sequence

    Example:
        >>> count_runs(["a", "a", "b", "a"])
        3
    """
    codes: dict[Hashable, int] = {}
    coded = np.array([codes.setdefault(v, len(codes)) for v in sequence], dtype=np.int64)
    return int(count_runs_numba(coded))


def runs_test(
    data: RecordsLike,
    attribute: Attribute,
    min_records: int = RUNS_MIN_RECORDS,
    z_threshold: float = RUNS_Z_THRESHOLD,
) -> RunsTestResult:
    """
    Test whether an attribute of the selections is sequentially independent.

    With n1 records equal to the first observed value, n2 others and R runs:
        expected = 1 + 2 n1 n2 / (n1 + n2)
        sd = sqrt(2 n1 n2 (2 n1 n2 - n1 - n2) / ((n1 + n2)^2 (n1 + n2 - 1)))
        z = (R - expected) / sd

    A single threshold decides both is_random and the interpretation:
    |z| < z_threshold is "random", z <= -z_threshold is "clustering" and
    z >= z_threshold is "alternating".

    Args:
        data: SelectionLog or record sequence in temporal order
        attribute: "category" or "position"
        min_records: Fewer records than this gives "insufficient_data"
        z_threshold: Critical |z|, 1.96 for a two-sided 5% level

    Returns:
        RunsTestResult. Fewer than min_records records gives
        "insufficient_data" and a single distinct value gives
        "all_identical"; both have z_score None and is_random False.
        Zero variance (one record of each value) is also reported as
        "insufficient_data", with a NumericalInstabilityWarning.

    Example:
        >>> log = SelectionLog.from_tuples(
        ...     [("a", 0, ["a", "b"]), ("b", 1, ["a", "b"])] * 10
        ... )
        >>> result = runs_test(log, "category")
        >>> result.interpretation
        'alternating'
    """
    sequence = attribute_sequence(as_records(data), attribute)
    n = len(sequence)

    if n < min_records:
        logger.debug("Runs test on %s skipped: %d < %d records", attribute, n, min_records)
        return RunsTestResult(
            attribute=attribute,
            observed_runs=0,
            expected_runs=0.0,
            z_score=None,
            is_random=False,
            interpretation="insufficient_data",
            n1=0,
            n2=0,
            reference_value=None,
            p_value=None,
            num_records=n,
            z_threshold=z_threshold,
            description=(
                f"Insufficient data for runs test "
                f"(need at least {min_records} observations)"
            ),
        )

    codes: dict[Hashable, int] = {}
    coded = np.array([codes.setdefault(v, len(codes)) for v in sequence], dtype=np.int64)
    reference = sequence[0]

    if len(codes) < 2:
        return RunsTestResult(
            attribute=attribute,
            observed_runs=1,
            expected_runs=1.0,
            z_score=None,
            is_random=False,
            interpretation="all_identical",
            n1=n,
            n2=0,
            reference_value=reference,
            p_value=None,
            num_records=n,
            z_threshold=z_threshold,
            description=_DESCRIPTIONS["all_identical"],
        )

    binary = binarize_numba(coded, 0)
    runs = int(count_runs_numba(binary))
    n1 = int(binary.sum())
    n2 = n - n1

    expected = 1.0 + (2.0 * n1 * n2) / (n1 + n2)
    variance = (2.0 * n1 * n2 * (2.0 * n1 * n2 - n1 - n2)) / (
        (n1 + n2) ** 2 * (n1 + n2 - 1)
    )

    if variance <= 0:
        warnings.warn(
            f"Runs test on {attribute} has zero variance (n1={n1}, n2={n2}); "
            f"no z-score computed.",
            NumericalInstabilityWarning,
            stacklevel=2,
        )
        return RunsTestResult(
            attribute=attribute,
            observed_runs=runs,
            expected_runs=expected,
            z_score=None,
            is_random=False,
            interpretation="insufficient_data",
            n1=n1,
            n2=n2,
            reference_value=reference,
            p_value=None,
            num_records=n,
            z_threshold=z_threshold,
            description="Insufficient variation for runs test (zero variance)",
        )

    z = (runs - expected) / math.sqrt(variance)
    interpretation: RunsInterpretation
    if abs(z) < z_threshold:
        interpretation = "random"
    elif z <= -z_threshold:
        interpretation = "clustering"
    else:
        interpretation = "alternating"
    p_value = float(2.0 * stats.norm.sf(abs(z)))

    logger.debug(
        "Runs test on %s: R=%d expected=%.4f z=%.4f (%s)",
        attribute, runs, expected, z, interpretation,
    )
    return RunsTestResult(
        attribute=attribute,
        observed_runs=runs,
        expected_runs=expected,
        z_score=float(z),
        is_random=interpretation == "random",
        interpretation=interpretation,
        n1=n1,
        n2=n2,
        reference_value=reference,
        p_value=p_value,
        num_records=n,
        z_threshold=z_threshold,
        description=_DESCRIPTIONS[interpretation],
    )
