"""Parsing and transformation helpers for :mod:`query_footprint.config_loader`."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace

from query_footprint.config_loader.models import FootprintConfig
from query_footprint.settings import QueryFootprintSettings


def apply_environment_overrides(
    config: FootprintConfig, settings: QueryFootprintSettings
) -> FootprintConfig:
    """Apply environment-derived overrides to the configuration.

    Args:
        config: Base configuration instance.
        settings: Environment-derived settings.

    Returns:
        Configuration with environment overrides applied.
    """

    if settings.grid_intensity_gco2_kwh is None:
        return config
    return replace(
        config,
        grid=replace(config.grid, intensity_gco2_kwh=settings.grid_intensity_gco2_kwh),
    )


def apply_structured_overrides(
    config: FootprintConfig, data: Mapping[str, object]
) -> FootprintConfig:
    """Apply overrides sourced from structured configuration data.

    Args:
        config: Base configuration instance.
        data: Mapping parsed from configuration file.

    Returns:
        Configuration updated according to the provided mapping.
    """

    updated = config

    search_section = _expect_mapping(data.get("search"))
    if search_section is not None:
        updated = _apply_search_section(updated, search_section)

    assistant_section = _expect_mapping(data.get("assistant"))
    if assistant_section is not None:
        updated = _apply_assistant_section(updated, assistant_section)

    grid_section = _expect_mapping(data.get("grid"))
    if grid_section is not None:
        updated = _apply_grid_section(updated, grid_section)

    windows_section = _expect_mapping(data.get("time_windows"))
    if windows_section is not None:
        updated = _apply_time_windows_section(updated, windows_section)

    return updated


def _apply_search_section(
    config: FootprintConfig, section: Mapping[str, object]
) -> FootprintConfig:
    base_value = _coerce_float(section.get("base_energy_wh"))
    if base_value is None:
        return config
    return replace(config, search=replace(config.search, base_energy_wh=base_value))


def _apply_assistant_section(
    config: FootprintConfig, section: Mapping[str, object]
) -> FootprintConfig:
    """Apply assistant energy overrides from a structured section.

    Args:
        config: Current configuration instance.
        section: Mapping describing the assistant section from the file.

    Returns:
        Updated configuration instance.
    """

    assistant = config.assistant

    base_value = _coerce_float(section.get("base_energy_wh"))
    if base_value is not None:
        assistant = replace(assistant, base_energy_wh=base_value)

    per_token = _coerce_float(section.get("energy_per_token_wh"))
    if per_token is not None:
        assistant = replace(assistant, energy_per_token_wh=per_token)

    reference = _coerce_int(section.get("tokens_per_query_reference"))
    if reference is not None:
        assistant = replace(assistant, tokens_per_query_reference=reference)

    return replace(config, assistant=assistant)


def _apply_grid_section(
    config: FootprintConfig, section: Mapping[str, object]
) -> FootprintConfig:
    intensity = _coerce_float(section.get("intensity_gco2_kwh"))
    if intensity is None:
        return config
    return replace(config, grid=replace(config.grid, intensity_gco2_kwh=intensity))


def _apply_time_windows_section(
    config: FootprintConfig, section: Mapping[str, object]
) -> FootprintConfig:
    """Apply time window overrides from a structured section.

    Hour ranges are given as two-element ``[start, end]`` lists under
    ``solar_peak_hours`` and ``peak_demand_hours``.

    Args:
        config: Current configuration instance.
        section: Mapping describing the time window section from the file.

    Returns:
        Updated configuration instance.
    """

    windows = config.time_windows

    solar_hours = _coerce_hour_range(section.get("solar_peak_hours"))
    if solar_hours is not None:
        windows = replace(
            windows, solar_peak_start=solar_hours[0], solar_peak_end=solar_hours[1]
        )
    solar_multiplier = _coerce_float(section.get("solar_peak_multiplier"))
    if solar_multiplier is not None:
        windows = replace(windows, solar_peak_multiplier=solar_multiplier)

    demand_hours = _coerce_hour_range(section.get("peak_demand_hours"))
    if demand_hours is not None:
        windows = replace(
            windows, peak_demand_start=demand_hours[0], peak_demand_end=demand_hours[1]
        )
    demand_multiplier = _coerce_float(section.get("peak_demand_multiplier"))
    if demand_multiplier is not None:
        windows = replace(windows, peak_demand_multiplier=demand_multiplier)

    return replace(config, time_windows=windows)


def _coerce_float(value: object) -> float | None:
    """Parse a float from arbitrary input.

    Args:
        value: Raw value.

    Returns:
        Parsed float when conversion succeeds, otherwise ``None``.
    """

    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def _coerce_int(value: object) -> int | None:
    """Parse an integer from arbitrary input.

    Args:
        value: Raw value.

    Returns:
        Parsed integer when conversion succeeds, otherwise ``None``.
    """

    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _coerce_hour_range(value: object) -> tuple[int, int] | None:
    """Parse an inclusive ``[start, end]`` hour range.

    Args:
        value: Raw two-element sequence.

    Returns:
        Tuple of hours when both bounds are valid hours, otherwise ``None``.
    """

    if not isinstance(value, (list, tuple)) or len(value) != 2:
        return None
    start = _coerce_int(value[0])
    end = _coerce_int(value[1])
    if start is None or end is None:
        return None
    if not (0 <= start <= 23 and 0 <= end <= 23):
        return None
    return (start, end)


def _expect_mapping(value: object) -> Mapping[str, object] | None:
    """Return the value when it is a mapping with string keys.

    Args:
        value: Raw configuration value.

    Returns:
        Mapping with string keys suitable for further parsing, or ``None``.
    """

    if not isinstance(value, Mapping):
        return None
    if not all(isinstance(key, str) for key in value.keys()):
        return None
    return value
