"""Keyword-weighted complexity scoring for raw query text."""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Final

from query_footprint.estimation.defaults import MAX_COMPLEXITY, MIN_COMPLEXITY

__all__ = [
    "KEYWORD_FAMILIES",
    "KeywordFamily",
    "analyze_complexity",
    "count_words",
    "matched_families",
    "terms_pattern",
]

_WHITESPACE = re.compile(r"\s+")


@lru_cache(maxsize=64)
def terms_pattern(terms: tuple[str, ...]) -> re.Pattern[str]:
    """Compile ``terms`` into one case-insensitive substring pattern."""

    return re.compile("|".join(re.escape(term) for term in terms), re.I)


@dataclass(frozen=True, slots=True)
class KeywordFamily:
    """A group of request terms sharing one complexity weight.

    Attributes:
        name: Stable identifier for the family (e.g. ``"code"``).
        terms: Terms matched case-insensitively anywhere in the query.
        weight: Amount added to the complexity score when any term matches.
    """

    name: str
    terms: tuple[str, ...]
    weight: float

    @property
    def pattern(self) -> re.Pattern[str]:
        return terms_pattern(self.terms)

    def matches(self, query: str) -> bool:
        """Return ``True`` when any family term occurs in ``query``."""

        return self.pattern.search(query) is not None


KEYWORD_FAMILIES: Final[tuple[KeywordFamily, ...]] = (
    KeywordFamily(
        name="code",
        terms=("code", "program", "script", "function", "debug", "fix", "algorithm"),
        weight=1.5,
    ),
    KeywordFamily(
        name="creative",
        terms=("write", "create", "story", "poem", "essay", "draft", "design"),
        weight=1.0,
    ),
    KeywordFamily(
        name="analytical",
        terms=("analyze", "explain", "compare", "summarize", "breakdown", "research"),
        weight=0.5,
    ),
    KeywordFamily(
        name="depth",
        terms=("complex", "detailed", "comprehensive", "thorough", "in-depth"),
        weight=0.5,
    ),
)

# (word count threshold, increment); cumulative
_LENGTH_STEPS: Final[tuple[tuple[int, float], ...]] = ((50, 0.5), (100, 1.0))


def count_words(query: str) -> int:
    """Count whitespace-separated pieces of the trimmed query.

    An empty or whitespace-only query yields a single empty piece and
    therefore a count of one.
    """

    return len(_WHITESPACE.split(query.strip()))


def matched_families(
    query: str, families: tuple[KeywordFamily, ...] = KEYWORD_FAMILIES
) -> tuple[KeywordFamily, ...]:
    """Return the keyword families whose terms appear in ``query``."""

    return tuple(family for family in families if family.matches(query))


def analyze_complexity(
    query: str, families: tuple[KeywordFamily, ...] = KEYWORD_FAMILIES
) -> float:
    """Score how computationally demanding ``query`` is likely to be.

    Args:
        query: Raw query text, possibly empty.
        families: Keyword family table to apply. Weights are additive and
            families are not mutually exclusive.

    Returns:
        Complexity in ``[1.0, 4.0]``.
    """

    complexity = MIN_COMPLEXITY
    word_count = count_words(query)
    for threshold, increment in _LENGTH_STEPS:
        if word_count > threshold:
            complexity += increment
    for family in matched_families(query, families):
        complexity += family.weight
    return min(complexity, MAX_COMPLEXITY)
