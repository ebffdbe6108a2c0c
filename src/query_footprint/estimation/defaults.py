"""Default energy and grid constants for query footprint estimation.

Figures follow 2025 research estimates: a standard search costs roughly
0.04 Wh, while an assistant response averages about 2.5 Wh for a reference
response of 500 tokens (0.5 Wh base inference plus 0.004 Wh per token).
"""

from __future__ import annotations

from typing import Final

SEARCH_BASE_ENERGY_WH: Final[float] = 0.04
SEARCH_COMPLEXITY_FACTOR: Final[float] = 0.5

ASSISTANT_BASE_ENERGY_WH: Final[float] = 0.5
ASSISTANT_ENERGY_PER_TOKEN_WH: Final[float] = 0.004
ASSISTANT_TOKENS_PER_QUERY_REFERENCE: Final[int] = 500
WORDS_PER_TOKEN: Final[float] = 0.75

# US average, 2025
GRID_INTENSITY_GCO2_KWH: Final[float] = 367.0

MIN_COMPLEXITY: Final[float] = 1.0
MAX_COMPLEXITY: Final[float] = 4.0

MIN_SCORE: Final[int] = 1
MAX_SCORE: Final[int] = 6

SOLAR_PEAK_HOURS: Final[tuple[int, int]] = (10, 16)
SOLAR_PEAK_MULTIPLIER: Final[float] = 0.8
PEAK_DEMAND_HOURS: Final[tuple[int, int]] = (18, 22)
PEAK_DEMAND_MULTIPLIER: Final[float] = 1.3
DEFAULT_MULTIPLIER: Final[float] = 1.0
