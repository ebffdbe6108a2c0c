"""Query Footprint - energy and carbon comparison of search versus assistant."""

from __future__ import annotations

from importlib import import_module
from typing import Any, TYPE_CHECKING

__all__ = [
    "EstimationEngine",
    "EstimationResult",
    "EnergyEstimate",
    "EnvironmentalContext",
    "FootprintConfig",
    "load_config",
]

if TYPE_CHECKING:
    from .config_loader import FootprintConfig, load_config
    from .estimation import EstimationEngine
    from .models import EnergyEstimate, EnvironmentalContext, EstimationResult


def __getattr__(name: str) -> Any:
    """Lazily import submodules so ``import query_footprint`` stays light."""

    module_map = {
        "EstimationEngine": "estimation",
        "EstimationResult": "models",
        "EnergyEstimate": "models",
        "EnvironmentalContext": "models",
        "FootprintConfig": "config_loader",
        "load_config": "config_loader",
    }

    if name not in module_map:
        raise AttributeError(name)

    module = import_module(f".{module_map[name]}", __name__)
    return getattr(module, name)
