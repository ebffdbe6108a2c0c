"""Logarithmic mapping of energy onto the shared 1-6 comparison scale."""

from __future__ import annotations

import math

from query_footprint.estimation.defaults import (
    MAX_SCORE,
    MIN_SCORE,
    SEARCH_BASE_ENERGY_WH,
)

__all__ = ["energy_score", "raw_score"]


def raw_score(energy_wh: float, reference_wh: float = SEARCH_BASE_ENERGY_WH) -> float:
    """Return the unclamped score ``1 + 2 * log10(energy / reference)``.

    Raises:
        ValueError: If either value is not strictly positive.
    """

    if energy_wh <= 0 or reference_wh <= 0:
        raise ValueError("energy_wh and reference_wh must be > 0")
    return 1.0 + math.log10(energy_wh / reference_wh) * 2.0


def energy_score(
    energy_wh: float, reference_wh: float = SEARCH_BASE_ENERGY_WH
) -> int:
    """Map an energy estimate onto the integer ``[1, 6]`` scale.

    Every service is scored against the same reference (the search
    service's base energy) so scores are comparable side by side. Each step
    on the scale is roughly a factor of ``sqrt(10)`` in energy.

    Args:
        energy_wh: Energy estimate in Wh. Non-positive values map to the
            minimum score.
        reference_wh: Anchor energy that scores 1.

    Returns:
        Integer score clamped to ``[1, 6]``.
    """

    if energy_wh <= 0:
        return MIN_SCORE
    score = math.ceil(raw_score(energy_wh, reference_wh))
    return max(MIN_SCORE, min(MAX_SCORE, score))
