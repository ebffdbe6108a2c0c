"""Per-service energy models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Literal

from query_footprint.estimation import defaults

__all__ = [
    "ASSISTANT_CONFIG",
    "SEARCH_CONFIG",
    "ServiceEnergyConfig",
    "ServiceId",
    "assistant_energy_wh",
    "search_complexity_factor",
    "search_energy_wh",
]

ServiceId = Literal["search", "assistant"]


@dataclass(frozen=True, slots=True)
class ServiceEnergyConfig:
    """Fixed energy constants describing one service.

    Attributes:
        service_id: Identifier of the service (``"search"`` or ``"assistant"``).
        base_energy_wh: Energy consumed by a baseline request in Wh.
        energy_per_token_wh: Marginal energy per generated token. Zero for
            services that are not token-priced.
        tokens_per_query_reference: Reference response length in tokens.
        description: Short human-readable label.
    """

    service_id: ServiceId
    base_energy_wh: float
    energy_per_token_wh: float = 0.0
    tokens_per_query_reference: int = 0
    description: str = ""


SEARCH_CONFIG: Final[ServiceEnergyConfig] = ServiceEnergyConfig(
    service_id="search",
    base_energy_wh=defaults.SEARCH_BASE_ENERGY_WH,
    description="Traditional search",
)

ASSISTANT_CONFIG: Final[ServiceEnergyConfig] = ServiceEnergyConfig(
    service_id="assistant",
    base_energy_wh=defaults.ASSISTANT_BASE_ENERGY_WH,
    energy_per_token_wh=defaults.ASSISTANT_ENERGY_PER_TOKEN_WH,
    tokens_per_query_reference=defaults.ASSISTANT_TOKENS_PER_QUERY_REFERENCE,
    description="Large language model inference",
)


def search_complexity_factor(complexity: float) -> float:
    """Return the multiplier applied to a search's base energy."""

    return max(1.0, complexity * defaults.SEARCH_COMPLEXITY_FACTOR)


def search_energy_wh(
    complexity: float, config: ServiceEnergyConfig = SEARCH_CONFIG
) -> float:
    """Energy for answering a query through the search service."""

    return config.base_energy_wh * search_complexity_factor(complexity)


def assistant_energy_wh(
    estimated_tokens: int, config: ServiceEnergyConfig = ASSISTANT_CONFIG
) -> float:
    """Energy for answering a query through the assistant service.

    Base inference energy plus a linear per-token cost.
    """

    return config.base_energy_wh + max(estimated_tokens, 0) * config.energy_per_token_wh
