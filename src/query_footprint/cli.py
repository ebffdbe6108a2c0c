"""Command-line utilities for query_footprint."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime

from .config_loader import load_config
from .estimation import EngineRuntimeConfig, EstimationEngine, build_runtime_config
from .estimation.reporting import (
    ScoreBreakdown,
    build_breakdown,
    build_comparison_payload,
    complexity_display_score,
    describe_complexity,
    format_carbon,
    format_energy,
)
from .estimation.response_length import expected_words
from .logging_pipeline import (
    StructuredLogging,
    configure_structured_logging,
    shutdown_pipelines,
)
from .models import EstimationResult
from .settings import get_settings


def _read_stdin() -> str | None:
    """Read the query from stdin if available."""
    try:
        if sys.stdin and not sys.stdin.isatty():
            return sys.stdin.read()
    except OSError as e:
        print(f"Error reading stdin: {e}", file=sys.stderr)
    return None


def _resolve_query(argument: str | None, stdin_payload: str | None) -> str:
    if argument is not None:
        return argument
    if stdin_payload is not None:
        return stdin_payload.strip()
    raise ValueError("No query provided. Pass it as an argument or pipe it via stdin.")


def _render_breakdown(breakdown: ScoreBreakdown) -> str:
    families = ", ".join(breakdown.matched_families) or "none"
    return (
        f"{breakdown.service_id} breakdown: "
        f"{format_energy(breakdown.base_energy_wh)} base + "
        f"{format_energy(breakdown.scaling_energy_wh)} scaling = "
        f"{format_energy(breakdown.total_energy_wh)}; "
        f"{breakdown.energy_ratio:.1f}x reference, "
        f"log10 {breakdown.log_ratio:.2f}, score {breakdown.score}/6; "
        f"keywords: {families}"
    )


def _render_text(
    result: EstimationResult, runtime: EngineRuntimeConfig | None = None
) -> str:
    display_complexity = complexity_display_score(result.assistant.complexity)
    tokens = result.assistant.estimated_tokens
    lines = [
        f"Grid: {result.context.label} ({result.context.description})",
        f"Complexity: {display_complexity}/10 - "
        f"{describe_complexity(display_complexity)}",
    ]
    for estimate in (result.search, result.assistant):
        lines.append(
            f"{estimate.service_id}: score {estimate.score}/6, "
            f"{format_energy(estimate.energy_wh)}, "
            f"{format_carbon(estimate.adjusted_carbon_grams)}"
        )
    lines.append(
        f"Expected response: ~{tokens} tokens, ~{expected_words(tokens)} words"
    )
    if runtime is not None:
        for estimate in (result.search, result.assistant):
            lines.append(
                _render_breakdown(
                    build_breakdown(
                        estimate, result.context, runtime, query=result.query
                    )
                )
            )
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    """Estimate the footprint of answering a query via search or assistant."""
    parser = argparse.ArgumentParser(
        description="Compare the energy footprint of a query via search and assistant."
    )
    parser.add_argument(
        "query",
        nargs="?",
        help="Query text. If omitted, reads from stdin.",
    )
    parser.add_argument(
        "--hour",
        type=int,
        help="Local hour of day (0-23). Defaults to the current hour.",
    )
    parser.add_argument(
        "--config",
        "-c",
        help="Path to a JSON, TOML or YAML configuration file.",
    )
    parser.add_argument(
        "--breakdown",
        action="store_true",
        help="Include the per-service calculation breakdown (JSON or text).",
    )
    parser.add_argument(
        "--text",
        action="store_true",
        help="Print a human-readable summary instead of JSON.",
    )
    parser.add_argument(
        "--log-json",
        action="store_true",
        help="Emit structured JSON logs on stderr.",
    )

    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        exit_code = int(exc.code) if isinstance(exc.code, int) else 1
        return 0 if exit_code == 0 else 1

    settings = get_settings()
    package_logger = logging.getLogger("query_footprint")
    pipelines: list[StructuredLogging] = []
    if args.log_json or settings.log_json:
        level = logging.getLevelName(settings.log_level)
        pipelines.append(
            configure_structured_logging(
                package_logger,
                level=level if isinstance(level, int) else logging.WARNING,
            )
        )

    try:
        stdin_payload = _read_stdin() if args.query is None else None
        query = _resolve_query(args.query, stdin_payload)
        runtime = build_runtime_config(load_config(args.config, settings=settings))
        engine = EstimationEngine(runtime=runtime)
        hour = args.hour if args.hour is not None else datetime.now().hour
        result = engine.estimate(query, hour)

        if args.text:
            print(_render_text(result, runtime if args.breakdown else None))
        else:
            payload = build_comparison_payload(
                result, runtime=runtime if args.breakdown else None
            )
            print(json.dumps(payload, separators=(",", ":")))
        return 0

    except ValueError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    finally:
        shutdown_pipelines(pipelines)


if __name__ == "__main__":
    raise SystemExit(main())
