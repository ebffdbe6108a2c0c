"""Energy to carbon conversion."""

from __future__ import annotations

from query_footprint.estimation.defaults import GRID_INTENSITY_GCO2_KWH

__all__ = ["adjusted_carbon_grams", "carbon_grams"]


def carbon_grams(
    energy_wh: float, grid_intensity_gco2_kwh: float = GRID_INTENSITY_GCO2_KWH
) -> float:
    """Convert energy in Wh to grams of CO2 using a fixed grid intensity."""

    return (energy_wh / 1000.0) * grid_intensity_gco2_kwh


def adjusted_carbon_grams(unadjusted_grams: float, multiplier: float) -> float:
    """Apply the time-of-day multiplier to an unadjusted carbon figure.

    The result is for display only. Scores are derived from the unadjusted
    energy so they stay independent of the hour.
    """

    return unadjusted_grams * multiplier
