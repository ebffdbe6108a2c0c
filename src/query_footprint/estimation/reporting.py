"""Reporting helpers separate from core estimation.

These build the human-facing views of an :class:`EstimationResult`: a 1-10
complexity scale, the per-service calculation breakdown and the JSON payload
printed by the command-line interface.
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass

from query_footprint.estimation.carbon import adjusted_carbon_grams, carbon_grams
from query_footprint.estimation.complexity import matched_families
from query_footprint.estimation.configuration import EngineRuntimeConfig
from query_footprint.estimation.energy import search_complexity_factor
from query_footprint.estimation.response_length import expected_words, round_half_up
from query_footprint.estimation.scoring import energy_score
from query_footprint.models import (
    EnergyEstimate,
    EnvironmentalContext,
    EstimationResult,
)

LOGGER = logging.getLogger(__name__)

__all__ = [
    "ScoreBreakdown",
    "build_breakdown",
    "build_comparison_payload",
    "complexity_display_score",
    "describe_complexity",
    "format_carbon",
    "format_energy",
]


def complexity_display_score(complexity: float) -> int:
    """Map a ``[1, 4]`` complexity onto a ``1-10`` display scale."""

    return max(1, min(10, round_half_up((complexity - 1.0) * 2.5 + 1.0)))


def describe_complexity(score: int) -> str:
    """Describe a display complexity score in plain words."""

    if score <= 3:
        return "Simple query, minimal processing"
    if score <= 5:
        return "Moderate complexity, standard response"
    if score <= 7:
        return "Complex query, detailed response needed"
    return "High complexity, extensive processing required"


def format_energy(energy_wh: float) -> str:
    """Render Wh with one decimal, or two below 1 Wh so search stays visible."""

    if abs(energy_wh) < 1.0:
        return f"{energy_wh:.2f} Wh"
    return f"{energy_wh:.1f} Wh"


def format_carbon(grams: float) -> str:
    return f"{grams:.2f}g CO₂"


@dataclass(frozen=True, slots=True)
class ScoreBreakdown:
    """Step-by-step derivation of one service's score and carbon figures.

    Attributes:
        service_id: Service the breakdown describes.
        base_energy_wh: Service base energy.
        scaling_energy_wh: Energy added on top of the base. For search this is
            the complexity-factor share, for the assistant the token energy.
        complexity_factor: Search multiplier, ``None`` for the assistant.
        estimated_tokens: Token estimate, zero for search.
        total_energy_wh: Total energy estimate.
        base_carbon_grams: Carbon before the time-of-day adjustment.
        multiplier: Time-of-day multiplier.
        final_carbon_grams: Carbon shown to the user.
        reference_wh: Shared scoring anchor.
        energy_ratio: ``total_energy_wh / reference_wh``.
        log_ratio: ``log10(energy_ratio)``.
        score: Score against the shared anchor; equals the badge score.
        self_anchored_score: Score against the service's own base energy.
            Diagnostic only; it is not comparable across services.
        anchor_divergence: ``True`` when the two scores differ.
        matched_families: Keyword families found in the query, in table
            order.
    """

    service_id: str
    base_energy_wh: float
    scaling_energy_wh: float
    complexity_factor: float | None
    estimated_tokens: int
    total_energy_wh: float
    base_carbon_grams: float
    multiplier: float
    final_carbon_grams: float
    reference_wh: float
    energy_ratio: float
    log_ratio: float
    score: int
    self_anchored_score: int
    anchor_divergence: bool
    matched_families: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, object]:
        return asdict(self)


def build_breakdown(
    estimate: EnergyEstimate,
    context: EnvironmentalContext,
    runtime: EngineRuntimeConfig,
    *,
    query: str | None = None,
) -> ScoreBreakdown:
    """Explain how ``estimate`` was derived.

    Args:
        estimate: Service estimate produced by the engine.
        context: Environmental context the estimate was produced under.
        runtime: Runtime configuration the engine used.
        query: Query the estimate was made for. When given, the keyword
            families that drove the complexity are listed.

    Returns:
        Frozen :class:`ScoreBreakdown` instance.
    """

    if estimate.service_id == "search":
        service = runtime.search
        factor: float | None = search_complexity_factor(estimate.complexity)
    else:
        service = runtime.assistant
        factor = None

    total = estimate.energy_wh
    base_carbon = carbon_grams(total, runtime.grid_intensity_gco2_kwh)
    reference = runtime.score_reference_wh
    ratio = total / reference
    score = energy_score(total, reference)
    self_anchored = energy_score(total, service.base_energy_wh)
    if self_anchored != score:
        LOGGER.debug(
            "Self-anchored score differs from shared-anchor score",
            extra={
                "service_id": estimate.service_id,
                "score": score,
                "self_anchored_score": self_anchored,
            },
        )

    return ScoreBreakdown(
        service_id=estimate.service_id,
        base_energy_wh=service.base_energy_wh,
        scaling_energy_wh=max(total - service.base_energy_wh, 0.0),
        complexity_factor=factor,
        estimated_tokens=estimate.estimated_tokens,
        total_energy_wh=total,
        base_carbon_grams=base_carbon,
        multiplier=context.multiplier,
        final_carbon_grams=adjusted_carbon_grams(base_carbon, context.multiplier),
        reference_wh=reference,
        energy_ratio=ratio,
        log_ratio=math.log10(ratio) if ratio > 0 else float("-inf"),
        score=score,
        self_anchored_score=self_anchored,
        anchor_divergence=self_anchored != score,
        matched_families=tuple(
            family.name for family in matched_families(query or "")
        ),
    )


def build_comparison_payload(
    result: EstimationResult,
    *,
    runtime: EngineRuntimeConfig | None = None,
) -> dict[str, object]:
    """Construct the JSON-ready comparison payload for a result.

    Args:
        result: Engine output for one query.
        runtime: When provided, per-service breakdowns are included.

    Returns:
        Nested dictionary with both estimates, the grid context and the
        display complexity.
    """

    display_complexity = complexity_display_score(result.assistant.complexity)
    payload: dict[str, object] = {
        "comparison": {
            "query": result.query,
            "search": result.search.model_dump(mode="json"),
            "assistant": result.assistant.model_dump(mode="json"),
            "context": result.context.model_dump(mode="json", exclude_none=True),
            "complexity_score": display_complexity,
            "complexity_description": describe_complexity(display_complexity),
            "matched_families": [
                family.name for family in matched_families(result.query)
            ],
            "expected_words": expected_words(result.assistant.estimated_tokens),
        }
    }
    if runtime is not None:
        payload["breakdown"] = {
            estimate.service_id: build_breakdown(
                estimate, result.context, runtime, query=result.query
            ).to_dict()
            for estimate in (result.search, result.assistant)
        }
    return payload
