"""Typed configuration dataclasses for :mod:`query_footprint.config_loader`."""

from __future__ import annotations

from dataclasses import dataclass, field

from query_footprint.estimation import defaults

__all__ = [
    "AssistantSettings",
    "ConfigurationError",
    "FootprintConfig",
    "GridSettings",
    "SearchSettings",
    "TimeWindowSettings",
]


class ConfigurationError(ValueError):
    """Raised when configured constants would break the estimation engine."""


@dataclass(slots=True)
class SearchSettings:
    """Energy constants for the search service."""

    base_energy_wh: float = defaults.SEARCH_BASE_ENERGY_WH


@dataclass(slots=True)
class AssistantSettings:
    """Energy constants for the token-priced assistant service.

    Attributes:
        base_energy_wh: Base inference energy before token generation.
        energy_per_token_wh: Marginal energy per generated token.
        tokens_per_query_reference: Average response length used to scale
            token estimates.
    """

    base_energy_wh: float = defaults.ASSISTANT_BASE_ENERGY_WH
    energy_per_token_wh: float = defaults.ASSISTANT_ENERGY_PER_TOKEN_WH
    tokens_per_query_reference: int = defaults.ASSISTANT_TOKENS_PER_QUERY_REFERENCE


@dataclass(slots=True)
class GridSettings:
    """Grid carbon intensity shared by both services."""

    intensity_gco2_kwh: float = defaults.GRID_INTENSITY_GCO2_KWH


@dataclass(slots=True)
class TimeWindowSettings:
    """Hour ranges (inclusive) and multipliers for time-of-day adjustment."""

    solar_peak_start: int = defaults.SOLAR_PEAK_HOURS[0]
    solar_peak_end: int = defaults.SOLAR_PEAK_HOURS[1]
    solar_peak_multiplier: float = defaults.SOLAR_PEAK_MULTIPLIER
    peak_demand_start: int = defaults.PEAK_DEMAND_HOURS[0]
    peak_demand_end: int = defaults.PEAK_DEMAND_HOURS[1]
    peak_demand_multiplier: float = defaults.PEAK_DEMAND_MULTIPLIER


@dataclass(slots=True)
class FootprintConfig:
    """Strongly typed configuration container for query footprint estimation."""

    search: SearchSettings = field(default_factory=SearchSettings)
    assistant: AssistantSettings = field(default_factory=AssistantSettings)
    grid: GridSettings = field(default_factory=GridSettings)
    time_windows: TimeWindowSettings = field(default_factory=TimeWindowSettings)

    def validate(self) -> FootprintConfig:
        """Check the constants keep the engine total over its inputs.

        Returns:
            The configuration itself, to allow chaining.

        Raises:
            ConfigurationError: If a base energy, the per-token energy, the
                grid intensity or a multiplier is out of range, or the two
                time windows are inverted or overlap.
        """

        if self.search.base_energy_wh <= 0:
            raise ConfigurationError("search.base_energy_wh must be > 0")
        if self.assistant.base_energy_wh <= 0:
            raise ConfigurationError("assistant.base_energy_wh must be > 0")
        if self.assistant.energy_per_token_wh < 0:
            raise ConfigurationError("assistant.energy_per_token_wh must be >= 0")
        if self.assistant.tokens_per_query_reference < 0:
            raise ConfigurationError(
                "assistant.tokens_per_query_reference must be >= 0"
            )
        if self.grid.intensity_gco2_kwh <= 0:
            raise ConfigurationError("grid.intensity_gco2_kwh must be > 0")

        windows = self.time_windows
        if windows.solar_peak_multiplier <= 0 or windows.peak_demand_multiplier <= 0:
            raise ConfigurationError("time window multipliers must be > 0")
        if windows.solar_peak_start > windows.solar_peak_end:
            raise ConfigurationError("solar peak window is inverted")
        if windows.peak_demand_start > windows.peak_demand_end:
            raise ConfigurationError("peak demand window is inverted")
        if (
            windows.solar_peak_start <= windows.peak_demand_end
            and windows.peak_demand_start <= windows.solar_peak_end
        ):
            raise ConfigurationError("solar peak and peak demand windows overlap")
        return self
