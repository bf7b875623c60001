"""Numba JIT-compiled kernels for pychoicebias algorithms.

This module contains the loops over record sequences, compiled with Numba.
All functions use `@njit(cache=True)` to cache compiled code to disk,
avoiding recompilation overhead.
"""

from __future__ import annotations

import numpy as np
from numba import njit


# =============================================================================
# RUNS
# =============================================================================


@njit(cache=True)
def count_runs_numba(binary: np.ndarray) -> int:
    """
    Count maximal runs of equal values in a 1-D integer array.

    Args:
        binary: 1-D int8 array (any integer values are accepted)

    Returns:
        Number of runs, 0 for an empty array
    """
    n = binary.shape[0]
    if n == 0:
        return 0
    runs = 1
    for i in range(1, n):
        if binary[i] != binary[i - 1]:
            runs += 1
    return runs


@njit(cache=True)
def binarize_numba(codes: np.ndarray, reference: int) -> np.ndarray:
    """
    Map integer codes to 1 where equal to reference, 0 elsewhere.

    Args:
        codes: 1-D int64 array of value codes in sequence order
        reference: Code of the reference value

    Returns:
        1-D int8 array of the same length
    """
    n = codes.shape[0]
    out = np.zeros(n, dtype=np.int8)
    for i in range(n):
        if codes[i] == reference:
            out[i] = 1
    return out


# =============================================================================
# CONTINGENCY TABLE
# =============================================================================


@njit(cache=True)
def contingency_table_numba(
    row_codes: np.ndarray,
    col_codes: np.ndarray,
    n_rows: int,
    n_cols: int,
) -> np.ndarray:
    """
    Build an n_rows x n_cols table of joint counts.

    Args:
        row_codes: 1-D int64 array of row indices, one per record
        col_codes: 1-D int64 array of column indices, one per record
        n_rows: Number of rows
        n_cols: Number of columns

    Returns:
        2-D int64 array where table[i, j] counts records with
        row_codes == i and col_codes == j
    """
    table = np.zeros((n_rows, n_cols), dtype=np.int64)
    for k in range(row_codes.shape[0]):
        table[row_codes[k], col_codes[k]] += 1
    return table
