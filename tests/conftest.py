"""Pytest fixtures for pychoicebias tests."""

import pytest

from pychoicebias import SelectionLog, SelectionRecord

OPTIONS = ("A", "B", "C", "D")


def make_record(category, position, options=OPTIONS) -> SelectionRecord:
    """Record for `category` picked at `position`, other options filling the rest."""
    order = [o for o in options if o != category]
    order.insert(position, category)
    return SelectionRecord(
        selected_category=category, position=position, presentation_order=tuple(order)
    )


def make_log(categories, positions, options=OPTIONS) -> SelectionLog:
    """SelectionLog from parallel category and position sequences."""
    return SelectionLog(
        records=[make_record(c, p, options) for c, p in zip(categories, positions)]
    )


def log_from_position_counts(counts, options=OPTIONS) -> SelectionLog:
    """
    SelectionLog with counts[i] selections at slot i.

    Options are shown in a fixed order, so slot i always holds options[i].
    """
    records = []
    for position, count in enumerate(counts):
        records.extend(
            SelectionRecord(
                selected_category=options[position],
                position=position,
                presentation_order=options,
            )
            for _ in range(count)
        )
    return SelectionLog(records=records)


def two_option_log(sequence) -> SelectionLog:
    """SelectionLog over options ("A", "B") shown in that order."""
    return make_log(sequence, ["AB".index(c) for c in sequence], options=("A", "B"))


# Every category and every slot picked 8 times. The first value recurs every
# fifth trial, which puts the runs count exactly at its expectation.
_BALANCED_CATEGORIES = list("ABCDBADCCDABDCBA") * 2
_BALANCED_POSITIONS = [0, 1, 2, 3, 1, 0, 3, 2, 2, 3, 0, 1, 3, 2, 1, 0] * 2

# 20 A, 4 each of B/C/D, arranged in 8 A-runs and 8 non-A runs (R = 16,
# expected 16)
_SKEWED_CATEGORIES = list("AAABCAAADBAAACDAAABCAADAABAACAAD")


@pytest.fixture
def random_log() -> SelectionLog:
    """32 trials, uniform over categories and slots, no sequential pattern."""
    return make_log(_BALANCED_CATEGORIES, _BALANCED_POSITIONS)


@pytest.fixture
def clustered_log() -> SelectionLog:
    """32 trials, uniform overall but selected in streaks of four."""
    categories = list("AAAABBBBCCCCDDDD") * 2
    positions = [0] * 4 + [1] * 4 + [2] * 4 + [3] * 4
    return make_log(categories, positions * 2)


@pytest.fixture
def skewed_independent_log() -> SelectionLog:
    """32 trials dominated by A, with no sequential pattern."""
    return make_log(_SKEWED_CATEGORIES, _BALANCED_POSITIONS)


@pytest.fixture
def constant_log() -> SelectionLog:
    """32 trials that all pick A at the first slot."""
    return make_log(["A"] * 32, [0] * 32)


@pytest.fixture
def correlated_log() -> SelectionLog:
    """
    200 trials where A is strongly tied to slot 0.

    A: 35 at slot 0, 5 at each of slots 1-3.
    B, C, D: 5 at slot 0, 15 at each of slots 1-3.
    Every category and every slot totals 50, so each cell expects 12.5.
    """
    categories = []
    positions = []
    plan = {"A": [35, 5, 5, 5], "B": [5, 15, 15, 15], "C": [5, 15, 15, 15], "D": [5, 15, 15, 15]}
    for category, counts in plan.items():
        for position, count in enumerate(counts):
            categories.extend([category] * count)
            positions.extend([position] * count)
    return make_log(categories, positions)


@pytest.fixture
def build_log():
    """Factory for SelectionLog from parallel category and position sequences."""
    return make_log


@pytest.fixture
def position_count_log():
    """Factory for SelectionLog with a given number of selections per slot."""
    return log_from_position_counts


@pytest.fixture
def ab_log():
    """Factory for SelectionLog over two options from a string like "ABBA"."""
    return two_option_log
