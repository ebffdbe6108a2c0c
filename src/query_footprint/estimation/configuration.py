"""Runtime configuration utilities for :mod:`query_footprint.estimation`.

This module reconciles the typed file configuration, environment settings and
static defaults into the frozen structure consumed by
:class:`~query_footprint.estimation.engine.EstimationEngine`.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from query_footprint.estimation.context import DEFAULT_TIME_WINDOWS, TimeWindow
from query_footprint.estimation.energy import (
    ASSISTANT_CONFIG,
    SEARCH_CONFIG,
    ServiceEnergyConfig,
)
from query_footprint.estimation.defaults import GRID_INTENSITY_GCO2_KWH

if TYPE_CHECKING:
    from query_footprint.config_loader import FootprintConfig

__all__ = ["EngineRuntimeConfig", "build_runtime_config"]


@dataclass(slots=True, frozen=True)
class EngineRuntimeConfig:
    """Aggregated, read-only settings for the estimation engine.

    Attributes:
        search: Energy constants for the search service. Its base energy is
            also the shared scoring anchor for both services.
        assistant: Energy constants for the assistant service.
        grid_intensity_gco2_kwh: Grid carbon intensity in gCO2/kWh.
        time_windows: Hour windows driving the environmental context.
    """

    search: ServiceEnergyConfig = SEARCH_CONFIG
    assistant: ServiceEnergyConfig = ASSISTANT_CONFIG
    grid_intensity_gco2_kwh: float = GRID_INTENSITY_GCO2_KWH
    time_windows: tuple[TimeWindow, ...] = DEFAULT_TIME_WINDOWS

    @property
    def score_reference_wh(self) -> float:
        return self.search.base_energy_wh


def _time_windows_from(config: FootprintConfig) -> tuple[TimeWindow, ...]:
    settings = config.time_windows
    solar, demand = DEFAULT_TIME_WINDOWS
    return (
        TimeWindow(
            start_hour=settings.solar_peak_start,
            end_hour=settings.solar_peak_end,
            label=solar.label,
            multiplier=settings.solar_peak_multiplier,
            description=solar.description,
        ),
        TimeWindow(
            start_hour=settings.peak_demand_start,
            end_hour=settings.peak_demand_end,
            label=demand.label,
            multiplier=settings.peak_demand_multiplier,
            description=demand.description,
        ),
    )


def build_runtime_config(
    config: FootprintConfig | None = None,
    *,
    custom_grid_intensity: float | None = None,
) -> EngineRuntimeConfig:
    """Resolve the effective runtime configuration for the engine.

    Args:
        config: Optional typed configuration sourced via
            :func:`query_footprint.config_loader.load_config`. When omitted
            the built-in constants are used.
        custom_grid_intensity: Explicit grid intensity override in gCO2/kWh.

    Returns:
        A frozen :class:`EngineRuntimeConfig` instance.

    Raises:
        ConfigurationError: If the resolved constants fail validation.
    """

    if config is None:
        from query_footprint.config_loader import FootprintConfig

        config = FootprintConfig()
    if custom_grid_intensity is not None:
        config = replace(
            config,
            grid=replace(config.grid, intensity_gco2_kwh=custom_grid_intensity),
        )
    config.validate()

    return EngineRuntimeConfig(
        search=ServiceEnergyConfig(
            service_id="search",
            base_energy_wh=float(config.search.base_energy_wh),
            description=SEARCH_CONFIG.description,
        ),
        assistant=ServiceEnergyConfig(
            service_id="assistant",
            base_energy_wh=float(config.assistant.base_energy_wh),
            energy_per_token_wh=float(config.assistant.energy_per_token_wh),
            tokens_per_query_reference=int(
                config.assistant.tokens_per_query_reference
            ),
            description=ASSISTANT_CONFIG.description,
        ),
        grid_intensity_gco2_kwh=float(config.grid.intensity_gco2_kwh),
        time_windows=_time_windows_from(config),
    )
