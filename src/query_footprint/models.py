"""Pydantic models describing estimation results."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field

__all__ = [
    "EnergyEstimate",
    "EnvironmentalContext",
    "EstimationResult",
    "GridLabel",
]

GridLabel = Literal["Lower (Solar Peak)", "Higher (Peak Demand)", "Medium"]


class EnvironmentalContext(BaseModel):
    """Time-of-day grid conditions applied to displayed carbon figures."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    label: GridLabel = Field(
        default="Medium",
        description="Qualitative grid carbon intensity for the hour.",
    )
    multiplier: float = Field(
        default=1.0,
        gt=0.0,
        description="Factor applied to unadjusted carbon for display.",
    )
    description: str = Field(
        default="Standard grid mix",
        description="Human-readable explanation of the grid conditions.",
    )
    hour: int | None = Field(
        default=None,
        description="Hour of day the context was derived from.",
    )


class EnergyEstimate(BaseModel):
    """Energy, carbon and score estimate for one service and one query."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    service_id: Literal["search", "assistant"] = Field(
        ...,
        description="Service the estimate applies to.",
    )
    energy_wh: float = Field(
        ...,
        ge=0.0,
        description="Estimated energy consumption in watt-hours.",
    )
    carbon_grams: float = Field(
        ...,
        ge=0.0,
        description="Unadjusted carbon emissions in grams of CO2.",
    )
    score: int = Field(
        ...,
        ge=1,
        le=6,
        description="Comparative score on the shared 1-6 scale.",
    )
    estimated_tokens: int = Field(
        default=0,
        ge=0,
        description="Predicted response length; zero for non token-priced services.",
    )
    complexity: float = Field(
        ...,
        ge=1.0,
        le=4.0,
        description="Complexity assessment of the query.",
    )
    multiplier: float = Field(
        default=1.0,
        gt=0.0,
        description="Time-of-day multiplier used for the display carbon figure.",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def adjusted_carbon_grams(self) -> float:
        """Carbon figure for display, scaled by the time-of-day multiplier."""

        return self.carbon_grams * self.multiplier


class EstimationResult(BaseModel):
    """Both service estimates for a query plus the shared grid context."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    query: str
    search: EnergyEstimate
    assistant: EnergyEstimate
    context: EnvironmentalContext

    def for_service(self, service_id: str) -> EnergyEstimate:
        """Return the estimate for ``service_id``.

        Raises:
            KeyError: If the service is unknown.
        """

        if service_id == "search":
            return self.search
        if service_id == "assistant":
            return self.assistant
        raise KeyError(service_id)

    def model_dump_json_ready(self) -> dict[str, object]:
        """Return a JSON-serialisable payload with ``None`` values removed."""

        return self.model_dump(mode="json", exclude_none=True)
