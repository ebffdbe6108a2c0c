"""Query footprint estimation package.

Provides the :class:`EstimationEngine` along with the per-stage models it
composes and the runtime configuration it consumes.
"""

from __future__ import annotations

from .configuration import EngineRuntimeConfig, build_runtime_config
from .engine import EstimationEngine

__all__ = ["EngineRuntimeConfig", "EstimationEngine", "build_runtime_config"]
