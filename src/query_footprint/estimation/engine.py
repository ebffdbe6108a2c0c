"""Core estimation engine composing the per-service models."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime

from query_footprint.estimation.carbon import carbon_grams
from query_footprint.estimation.complexity import analyze_complexity
from query_footprint.estimation.configuration import (
    EngineRuntimeConfig,
    build_runtime_config,
)
from query_footprint.estimation.context import environmental_context
from query_footprint.estimation.energy import assistant_energy_wh, search_energy_wh
from query_footprint.estimation.response_length import estimate_response_tokens
from query_footprint.estimation.scoring import energy_score
from query_footprint.models import (
    EnergyEstimate,
    EnvironmentalContext,
    EstimationResult,
)

_LOGGER = logging.getLogger("query_footprint.estimation.engine")


@dataclass(slots=True)
class EstimationEngine:
    """Turn a raw query and the hour of day into per-service estimates.

    The engine holds only read-only configuration; every call to
    :meth:`estimate` is independent and deterministic.
    """

    runtime: EngineRuntimeConfig = field(default_factory=build_runtime_config)
    logger: logging.Logger = _LOGGER

    def _search_estimate(
        self, complexity: float, context: EnvironmentalContext
    ) -> EnergyEstimate:
        energy_wh = search_energy_wh(complexity, self.runtime.search)
        return EnergyEstimate(
            service_id="search",
            energy_wh=energy_wh,
            carbon_grams=carbon_grams(energy_wh, self.runtime.grid_intensity_gco2_kwh),
            score=energy_score(energy_wh, self.runtime.score_reference_wh),
            estimated_tokens=0,
            complexity=complexity,
            multiplier=context.multiplier,
        )

    def _assistant_estimate(
        self, query: str, complexity: float, context: EnvironmentalContext
    ) -> EnergyEstimate:
        tokens = estimate_response_tokens(
            query,
            complexity,
            base_tokens=self.runtime.assistant.tokens_per_query_reference,
        )
        energy_wh = assistant_energy_wh(tokens, self.runtime.assistant)
        return EnergyEstimate(
            service_id="assistant",
            energy_wh=energy_wh,
            carbon_grams=carbon_grams(energy_wh, self.runtime.grid_intensity_gco2_kwh),
            score=energy_score(energy_wh, self.runtime.score_reference_wh),
            estimated_tokens=tokens,
            complexity=complexity,
            multiplier=context.multiplier,
        )

    def estimate(self, query: str, hour: int) -> EstimationResult:
        """Estimate energy, carbon and score for both services.

        Args:
            query: Raw query text. Empty input yields the minimum complexity.
            hour: Local hour of day. Values outside ``0-23`` fall back to the
                default grid context.

        Returns:
            Estimates for the search and assistant services sharing one
            complexity assessment and one environmental context.
        """

        complexity = analyze_complexity(query)
        context = environmental_context(hour, self.runtime.time_windows)
        search = self._search_estimate(complexity, context)
        assistant = self._assistant_estimate(query, complexity, context)

        self.logger.debug(
            "Query footprint estimated",
            extra={
                "complexity": complexity,
                "estimated_tokens": assistant.estimated_tokens,
                "search_score": search.score,
                "assistant_score": assistant.score,
                "grid_label": context.label,
            },
        )
        return EstimationResult(
            query=query, search=search, assistant=assistant, context=context
        )

    def estimate_at(
        self, query: str, moment: datetime | None = None
    ) -> EstimationResult:
        """Estimate using the hour of ``moment`` (local time when omitted)."""

        moment = moment or datetime.now()
        return self.estimate(query, moment.hour)
