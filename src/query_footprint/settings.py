"""Environment-backed settings primitives for :mod:`query_footprint`."""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["DEFAULT_SEARCH_URL", "QueryFootprintSettings", "get_settings"]

DEFAULT_SEARCH_URL = "https://www.google.com/search"


class QueryFootprintSettings(BaseSettings):
    """Expose environment-derived configuration knobs.

    All environment lookups go through this class. Attributes default to
    ``None`` (or an inline default) when the variable is not present.

    Attributes:
        config_path: Explicit path to a JSON or TOML configuration file.
        grid_intensity_gco2_kwh: Override for the grid carbon intensity.
        search_url: Base URL of the search page opened for the search choice.
        assistant_input_id: Identifier of the host input receiving queries.
        log_level: Logging level name used by the command-line interface.
        log_json: Emit structured JSON logs from the command-line interface.
    """

    config_path: str | None = Field(default=None, alias="QUERY_FOOTPRINT_CONFIG")
    grid_intensity_gco2_kwh: float | None = Field(
        default=None, alias="QUERY_FOOTPRINT_GRID_INTENSITY"
    )
    search_url: str = Field(
        default=DEFAULT_SEARCH_URL, alias="QUERY_FOOTPRINT_SEARCH_URL"
    )
    assistant_input_id: str = Field(
        default="prompt-textarea", alias="QUERY_FOOTPRINT_INPUT_ID"
    )
    log_level: str = Field(default="WARNING", alias="QUERY_FOOTPRINT_LOG_LEVEL")
    log_json: bool = Field(default=False, alias="QUERY_FOOTPRINT_LOG_JSON")

    model_config = SettingsConfigDict(env_file=None, extra="ignore")

    @field_validator("grid_intensity_gco2_kwh", mode="before")
    @classmethod
    def _parse_optional_float(cls, value: object) -> float | None:
        """Parse optional float fields while tolerating malformed input.

        Args:
            value: Raw environment value.

        Returns:
            Parsed float when conversion succeeds, otherwise ``None``.
        """

        if value is None:
            return None
        if isinstance(value, (int, float)):
            return float(value)
        if isinstance(value, str):
            try:
                return float(value.strip())
            except ValueError:
                return None
        return None

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_level(cls, value: object) -> str:
        if isinstance(value, str) and value.strip():
            return value.strip().upper()
        return "WARNING"


def get_settings() -> QueryFootprintSettings:
    """Return a :class:`QueryFootprintSettings` instance.

    Returns:
        Settings parsed from environment variables.
    """

    return QueryFootprintSettings()
