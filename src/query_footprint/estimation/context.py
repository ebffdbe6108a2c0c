"""Time-of-day grid context derived from the local hour."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from query_footprint.estimation import defaults
from query_footprint.models import EnvironmentalContext, GridLabel

__all__ = [
    "DEFAULT_CONTEXT",
    "DEFAULT_TIME_WINDOWS",
    "TimeWindow",
    "environmental_context",
]


@dataclass(frozen=True, slots=True)
class TimeWindow:
    """An inclusive range of hours sharing one grid multiplier."""

    start_hour: int
    end_hour: int
    label: GridLabel
    multiplier: float
    description: str

    def contains(self, hour: int) -> bool:
        return self.start_hour <= hour <= self.end_hour

    def overlaps(self, other: TimeWindow) -> bool:
        return self.start_hour <= other.end_hour and other.start_hour <= self.end_hour


DEFAULT_TIME_WINDOWS: Final[tuple[TimeWindow, ...]] = (
    TimeWindow(
        start_hour=defaults.SOLAR_PEAK_HOURS[0],
        end_hour=defaults.SOLAR_PEAK_HOURS[1],
        label="Lower (Solar Peak)",
        multiplier=defaults.SOLAR_PEAK_MULTIPLIER,
        description="Solar energy is more available now",
    ),
    TimeWindow(
        start_hour=defaults.PEAK_DEMAND_HOURS[0],
        end_hour=defaults.PEAK_DEMAND_HOURS[1],
        label="Higher (Peak Demand)",
        multiplier=defaults.PEAK_DEMAND_MULTIPLIER,
        description="Peak energy demand period",
    ),
)

DEFAULT_CONTEXT: Final[EnvironmentalContext] = EnvironmentalContext(
    label="Medium",
    multiplier=defaults.DEFAULT_MULTIPLIER,
    description="Standard grid mix",
)


def environmental_context(
    hour: int, windows: tuple[TimeWindow, ...] = DEFAULT_TIME_WINDOWS
) -> EnvironmentalContext:
    """Return the grid context for ``hour``.

    Hours outside every window, including values outside ``0-23``, fall back
    to the ``"Medium"`` context with a multiplier of ``1.0``.
    """

    for window in windows:
        if window.contains(hour):
            return EnvironmentalContext(
                label=window.label,
                multiplier=window.multiplier,
                description=window.description,
                hour=hour,
            )
    return DEFAULT_CONTEXT.model_copy(update={"hour": hour})
