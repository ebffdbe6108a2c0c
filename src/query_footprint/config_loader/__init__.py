"""Public entry points for the :mod:`query_footprint` configuration loader."""

from __future__ import annotations

from query_footprint.config_loader.models import (
    AssistantSettings,
    ConfigurationError,
    FootprintConfig,
    GridSettings,
    SearchSettings,
    TimeWindowSettings,
)
from query_footprint.config_loader.parsing import (
    apply_environment_overrides,
    apply_structured_overrides,
)
from query_footprint.config_loader.sources import load_structured_config
from query_footprint.settings import QueryFootprintSettings, get_settings

__all__ = [
    "AssistantSettings",
    "ConfigurationError",
    "FootprintConfig",
    "GridSettings",
    "SearchSettings",
    "TimeWindowSettings",
    "load_config",
]


def load_config(
    path: str | None = None, *, settings: QueryFootprintSettings | None = None
) -> FootprintConfig:
    """Load configuration from environment and optional file sources.

    File values are applied first and environment overrides last, so an
    exported ``QUERY_FOOTPRINT_GRID_INTENSITY`` wins over the file.

    Args:
        path: Optional explicit path to a configuration file. When omitted the
            loader inspects the environment and default search locations.
        settings: Optional pre-instantiated environment settings. When omitted
            :func:`query_footprint.settings.get_settings` is used.

    Returns:
        Fully populated :class:`FootprintConfig` instance.
    """

    env_settings = settings or get_settings()
    config = FootprintConfig()
    structured = load_structured_config(path, env_settings)
    if structured is not None:
        config = apply_structured_overrides(config, structured)
    return apply_environment_overrides(config, env_settings)
