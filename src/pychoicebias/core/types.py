"""Type aliases for pychoicebias."""

from collections.abc import Hashable
from typing import Literal, TypeAlias

# Value -> count mapping (category strings or integer positions)
FrequencyDistribution: TypeAlias = dict[Hashable, int]

Attribute: TypeAlias = Literal["category", "position"]

ChiSquareInterpretation: TypeAlias = Literal[
    "random", "mild", "moderate", "strong", "insufficient_data"
]
RunsInterpretation: TypeAlias = Literal[
    "insufficient_data", "all_identical", "random", "clustering", "alternating"
]
BiasDirection: TypeAlias = Literal["preference", "avoidance", "none"]
BiasStrength: TypeAlias = Literal["none", "moderate", "strong"]
RandomnessVerdict: TypeAlias = Literal[
    "random", "uniform_but_patterned", "biased_but_independent", "biased_and_patterned"
]
