"""Mixin classes for result dataclasses.

This module provides the shared helpers used by every result type: the
computability check and the small formatting pieces that go into
interpretation strings.
"""

from __future__ import annotations

from pychoicebias.core.exceptions import InsufficientDataError


class ResultMixin:
    """Common behaviour for analysis results.

    Results flag statistics that are undefined for their input with
    ``is_computable = False`` instead of carrying NaN.
    """

    is_computable: bool

    def require_computable(self):
        """Return self, or raise if the statistic was not computable.

        Returns:
            The result itself, for chaining

        Raises:
            InsufficientDataError: If the result is flagged as not computable
        """
        if not self.is_computable:
            raise self._not_computable_error()
        return self

    def _not_computable_error(self) -> Exception:
        return InsufficientDataError(
            f"{type(self).__name__} is not computable: {self._reason()}"
        )

    def _reason(self) -> str:
        return getattr(self, "interpretation", "insufficient data")

    @staticmethod
    def _format_percent(value: float) -> str:
        """Format a relative deviation as an unsigned percentage.

        Args:
            value: Relative deviation, e.g. 0.4 for +40%

        Returns:
            Percentage string with one decimal, e.g. "40.0%"
        """
        return f"{abs(value) * 100:.1f}%"

    @staticmethod
    def _format_signed_percent(value: float) -> str:
        """Format a relative deviation as a signed percentage, e.g. "-20.0%"."""
        return f"{value * 100:.1f}%"

    @staticmethod
    def _direction_word(deviation: float) -> str:
        """Name the direction of a deviation from the expected frequency."""
        if deviation > 0:
            return "preference"
        if deviation < 0:
            return "avoidance"
        return "none"
