"""Heuristic response length estimation for token-priced services."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Final

from query_footprint.estimation.complexity import terms_pattern
from query_footprint.estimation.defaults import (
    ASSISTANT_TOKENS_PER_QUERY_REFERENCE,
    WORDS_PER_TOKEN,
)

__all__ = [
    "TOKEN_ADJUSTMENTS",
    "TokenAdjustment",
    "estimate_response_tokens",
    "expected_words",
    "round_half_up",
]


@dataclass(frozen=True, slots=True)
class TokenAdjustment:
    """Multiplicative adjustment applied when the query mentions a term."""

    name: str
    terms: tuple[str, ...]
    factor: float

    def applies_to(self, query: str) -> bool:
        return terms_pattern(self.terms).search(query) is not None


# Applied in order; several may compound.
TOKEN_ADJUSTMENTS: Final[tuple[TokenAdjustment, ...]] = (
    TokenAdjustment(name="code", terms=("code", "program", "script"), factor=1.5),
    TokenAdjustment(name="structured", terms=("list", "steps", "tutorial"), factor=1.2),
    TokenAdjustment(name="brief", terms=("yes", "no", "simple", "quick"), factor=0.3),
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded towards +inf."""

    return int(math.floor(value + 0.5))


def estimate_response_tokens(
    query: str,
    complexity: float,
    *,
    base_tokens: int = ASSISTANT_TOKENS_PER_QUERY_REFERENCE,
    adjustments: tuple[TokenAdjustment, ...] = TOKEN_ADJUSTMENTS,
) -> int:
    """Estimate the number of tokens an assistant would generate.

    Args:
        query: Raw query text.
        complexity: Complexity score from
            :func:`~query_footprint.estimation.complexity.analyze_complexity`.
        base_tokens: Reference response length for a complexity of one.
        adjustments: Ordered multiplicative adjustments.

    Returns:
        Non-negative integer token estimate.
    """

    tokens = base_tokens * complexity
    for adjustment in adjustments:
        if adjustment.applies_to(query):
            tokens *= adjustment.factor
    return max(round_half_up(tokens), 0)


def expected_words(estimated_tokens: int) -> int:
    """Approximate word count of a response of ``estimated_tokens`` tokens."""

    return round_half_up(max(estimated_tokens, 0) * WORDS_PER_TOKEN)
