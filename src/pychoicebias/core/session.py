"""Core data structures for selection history analysis.

This module provides the containers for observed trials: which option a
decision-maker selected, at which slot it was shown, and the shuffled
option list it was shown in.

    - SelectionRecord: One observed trial
    - SelectionLog: Ordered history of trials, oldest first
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any, Union

from pychoicebias.core.exceptions import (
    CategoryMismatchError,
    DataValidationError,
    DimensionError,
    PositionRangeError,
    ValueRangeError,
)


@dataclass(frozen=True)
class SelectionRecord:
    """
    One observed trial: the option picked and where it was shown.

    Attributes:
        selected_category: The option that was selected.
        position: Zero-based slot of the selected option in presentation_order.
        presentation_order: The shuffled option list shown for this trial.
            Stored as a tuple so the record stays immutable.

    Raises:
        PositionRangeError: If position is negative or past the end of
            presentation_order.
        CategoryMismatchError: If presentation_order[position] is not
            selected_category.

    Example:
        >>> record = SelectionRecord(
        ...     selected_category="hearts",
        ...     position=2,
        ...     presentation_order=("spades", "clubs", "hearts", "diamonds"),
        ... )
        >>> record.num_options
        4
    """

    selected_category: str
    position: int
    presentation_order: tuple[str, ...]

    def __post_init__(self) -> None:
        """Freeze the presentation order and validate the record invariant."""
        object.__setattr__(self, "presentation_order", tuple(self.presentation_order))
        self._validate()

    def _validate(self) -> None:
        if isinstance(self.position, bool) or not isinstance(self.position, int):
            raise PositionRangeError(
                f"Position must be an integer, got {type(self.position).__name__} "
                f"({self.position!r})."
            )
        n = len(self.presentation_order)
        if not 0 <= self.position < n:
            raise PositionRangeError(
                f"Position {self.position} is out of range for a presentation "
                f"order of length {n}. Positions are zero-based."
            )
        shown = self.presentation_order[self.position]
        if shown != self.selected_category:
            raise CategoryMismatchError(
                f"Selected category {self.selected_category!r} does not match "
                f"{shown!r} shown at position {self.position} of "
                f"{list(self.presentation_order)}."
            )

    @property
    def num_options(self) -> int:
        """Number of options shown in this trial."""
        return len(self.presentation_order)

    @property
    def is_first(self) -> bool:
        """True if the selection was the first option shown."""
        return self.position == 0

    @property
    def is_last(self) -> bool:
        """True if the selection was the last option shown."""
        return self.position == len(self.presentation_order) - 1

    def to_dict(self) -> dict[str, Any]:
        """Return dictionary representation for serialization."""
        return {
            "selected_category": self.selected_category,
            "position": self.position,
            "presentation_order": list(self.presentation_order),
        }


@dataclass
class SelectionLog:
    """
    Ordered history of selection trials, oldest first.

    The order of records is the temporal order of the trials and is
    preserved for sequential tests such as the runs test.

    Attributes:
        records: Sequence of SelectionRecord values. Stored as a tuple.
        user_id: Optional identifier for the decision-maker or run.
        metadata: Optional dictionary for additional attributes.

    Properties:
        num_records: Number of trials
        category_sequence: Selected categories in trial order
        position_sequence: Selected positions in trial order
        categories: Sorted distinct selected categories
        presented_categories: Sorted distinct categories shown in any trial
        num_positions: Longest presentation order seen

    Example:
        >>> log = SelectionLog.from_tuples([
        ...     ("red", 0, ["red", "blue"]),
        ...     ("red", 1, ["blue", "red"]),
        ... ])
        >>> log.num_records
        2
        >>> log.position_sequence
        (0, 1)
    """

    records: Sequence[SelectionRecord] = ()
    user_id: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.records = tuple(self.records)
        for t, record in enumerate(self.records):
            if not isinstance(record, SelectionRecord):
                raise DataValidationError(
                    f"Record {t} is a {type(record).__name__}, expected SelectionRecord. "
                    f"Hint: Use SelectionLog.from_tuples() for raw tuples."
                )

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[SelectionRecord]:
        return iter(self.records)

    @property
    def num_records(self) -> int:
        """Number of trials T."""
        return len(self.records)

    @property
    def category_sequence(self) -> tuple[str, ...]:
        """Selected categories in trial order."""
        return tuple(r.selected_category for r in self.records)

    @property
    def position_sequence(self) -> tuple[int, ...]:
        """Selected positions in trial order."""
        return tuple(r.position for r in self.records)

    @property
    def categories(self) -> list[str]:
        """Sorted distinct categories that were selected at least once."""
        return sorted({r.selected_category for r in self.records})

    @property
    def presented_categories(self) -> list[str]:
        """Sorted distinct categories shown in any presentation order."""
        shown: set[str] = set()
        for r in self.records:
            shown.update(r.presentation_order)
        return sorted(shown)

    @property
    def num_positions(self) -> int:
        """Longest presentation order seen, 0 for an empty log."""
        return max((r.num_options for r in self.records), default=0)

    @classmethod
    def from_tuples(
        cls,
        rows: Iterable[tuple[str, int, Sequence[str]]],
        user_id: str | None = None,
    ) -> SelectionLog:
        """
        Create SelectionLog from (category, position, presentation_order) tuples.

        Args:
            rows: Iterable of 3-tuples in trial order
            user_id: Optional identifier

        Returns:
            SelectionLog instance
        """
        records = [
            SelectionRecord(
                selected_category=category,
                position=position,
                presentation_order=tuple(order),
            )
            for category, position, order in rows
        ]
        return cls(records=records, user_id=user_id)

    @classmethod
    def from_choices(
        cls,
        choices: Sequence[str],
        presentation_orders: Sequence[Sequence[str]],
        user_id: str | None = None,
    ) -> SelectionLog:
        """
        Create SelectionLog from chosen categories and the orders they were
        chosen from, deriving each position.

        Args:
            choices: T selected categories
            presentation_orders: T presentation orders, one per choice
            user_id: Optional identifier

        Returns:
            SelectionLog instance

        Raises:
            DimensionError: If the two sequences differ in length
            CategoryMismatchError: If a choice does not appear in its order

        Example:
            >>> log = SelectionLog.from_choices(
            ...     ["b", "a"], [["a", "b", "c"], ["c", "a", "b"]]
            ... )
            >>> log.position_sequence
            (1, 1)
        """
        if len(choices) != len(presentation_orders):
            raise DimensionError(
                f"Number of choices ({len(choices)}) must match number of "
                f"presentation orders ({len(presentation_orders)})."
            )

        records = []
        for t, (choice, order) in enumerate(zip(choices, presentation_orders)):
            order = tuple(order)
            if choice not in order:
                raise CategoryMismatchError(
                    f"Choice {choice!r} at trial {t} was not among the options "
                    f"shown: {list(order)}."
                )
            records.append(
                SelectionRecord(
                    selected_category=choice,
                    position=order.index(choice),
                    presentation_order=order,
                )
            )
        return cls(records=records, user_id=user_id)

    @classmethod
    def from_dataframe(
        cls,
        df: Any,  # pandas.DataFrame
        category_col: str = "selected_category",
        position_col: str = "position",
        order_col: str = "presentation_order",
        user_id: str | None = None,
    ) -> SelectionLog:
        """
        Create SelectionLog from a pandas DataFrame, one row per trial.

        Args:
            df: DataFrame (or any column mapping) with category, position
                and presentation-order columns, rows in trial order
            category_col: Column name for the selected category
            position_col: Column name for the zero-based position
            order_col: Column name for the presentation order (list-like)
            user_id: Optional identifier

        Returns:
            SelectionLog instance

        Example:
            >>> import pandas as pd
            >>> df = pd.DataFrame({
            ...     'selected_category': ['a', 'b'],
            ...     'position': [0, 0],
            ...     'presentation_order': [['a', 'b'], ['b', 'a']],
            ... })
            >>> log = SelectionLog.from_dataframe(df)
        """
        rows = zip(
            list(df[category_col]),
            [int(p) for p in df[position_col]],
            list(df[order_col]),
        )
        return cls.from_tuples(rows, user_id=user_id)

    def split_by_window(self, window_size: int) -> list[SelectionLog]:
        """
        Split the history into consecutive windows of window_size trials.

        The last window may be shorter. Useful for checking whether bias
        drifts over the course of an evaluation.
        """
        if window_size < 1:
            raise ValueRangeError(f"window_size must be positive, got {window_size}.")
        return [
            SelectionLog(
                records=self.records[i : i + window_size],
                user_id=self.user_id,
                metadata=dict(self.metadata),
            )
            for i in range(0, len(self.records), window_size)
        ]


RecordsLike = Union[SelectionLog, Sequence[SelectionRecord]]


def as_records(data: RecordsLike) -> tuple[SelectionRecord, ...]:
    """Return the records of a SelectionLog or a plain record sequence."""
    if isinstance(data, SelectionLog):
        return data.records
    return SelectionLog(records=data).records
