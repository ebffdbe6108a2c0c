"""Integration tests for the estimation engine."""

import logging
from datetime import datetime

import pytest
from pydantic import ValidationError

from query_footprint.config_loader import FootprintConfig, GridSettings
from query_footprint.estimation import EstimationEngine, build_runtime_config

SCENARIO_B_QUERY = "write a detailed comprehensive analysis of code performance"


def test_short_query_off_peak(engine):
    result = engine.estimate("hi", 9)

    assert result.search.complexity == 1.0
    assert result.assistant.complexity == 1.0
    assert result.assistant.estimated_tokens == 500
    assert result.assistant.energy_wh == pytest.approx(2.5)
    assert result.search.energy_wh == pytest.approx(0.04)
    assert result.context.label == "Medium"
    assert result.context.multiplier == 1.0
    assert result.search.score == 1
    assert result.assistant.score == 5


def test_demanding_query_at_solar_peak(engine):
    result = engine.estimate(SCENARIO_B_QUERY, 13)

    assert result.assistant.complexity == 4.0
    assert result.assistant.estimated_tokens == 3000
    assert result.assistant.energy_wh == pytest.approx(12.5)
    assert result.assistant.score == 6
    assert result.search.energy_wh == pytest.approx(0.08)
    assert result.search.score == 2
    assert result.context.label == "Lower (Solar Peak)"
    assert result.context.multiplier == 0.8


@pytest.mark.parametrize(
    "hour, label, multiplier",
    [
        (20, "Higher (Peak Demand)", 1.3),
        (5, "Medium", 1.0),
        (16, "Lower (Solar Peak)", 0.8),
        (17, "Medium", 1.0),
        (22, "Higher (Peak Demand)", 1.3),
        (23, "Medium", 1.0),
    ],
)
def test_context_follows_hour(engine, hour, label, multiplier):
    result = engine.estimate("hi", hour)
    assert result.context.label == label
    assert result.context.multiplier == multiplier
    assert result.assistant.multiplier == multiplier


def test_search_reports_no_tokens(engine):
    result = engine.estimate("write me a long story", 12)
    assert result.search.estimated_tokens == 0
    assert result.assistant.estimated_tokens > 0


def test_carbon_is_unadjusted_and_display_figure_is_scaled(engine):
    result = engine.estimate("hi", 20)

    assert result.assistant.carbon_grams == pytest.approx(2.5 / 1000 * 367)
    assert (
        result.assistant.adjusted_carbon_grams
        == result.assistant.carbon_grams * result.context.multiplier
    )


def test_score_is_independent_of_hour(engine):
    solar = engine.estimate(SCENARIO_B_QUERY, 13)
    demand = engine.estimate(SCENARIO_B_QUERY, 20)

    assert solar.assistant.score == demand.assistant.score
    assert solar.assistant.carbon_grams == demand.assistant.carbon_grams
    assert (
        solar.assistant.adjusted_carbon_grams
        < demand.assistant.adjusted_carbon_grams
    )


def test_estimate_is_idempotent(engine):
    assert engine.estimate("explain recursion", 11) == engine.estimate(
        "explain recursion", 11
    )


@pytest.mark.parametrize("query", ["", "   "])
def test_empty_query_yields_minimum_estimates(engine, query):
    result = engine.estimate(query, 3)
    assert result.assistant.complexity == 1.0
    assert result.assistant.estimated_tokens == 500
    assert result.search.score == 1


@pytest.mark.parametrize("hour", [-3, 24, 1000])
def test_out_of_range_hour_does_not_fail(engine, hour):
    result = engine.estimate("hi", hour)
    assert result.context.label == "Medium"


def test_estimate_at_uses_hour_of_moment(engine):
    result = engine.estimate_at("hi", datetime(2025, 6, 1, 19, 45))
    assert result.context.label == "Higher (Peak Demand)"


def test_result_lookup_by_service(engine):
    result = engine.estimate("hi", 9)
    assert result.for_service("search") is result.search
    assert result.for_service("assistant") is result.assistant
    with pytest.raises(KeyError):
        result.for_service("email")


def test_result_is_frozen(engine):
    result = engine.estimate("hi", 9)
    with pytest.raises(ValidationError):
        result.search.score = 3  # type: ignore[misc]


def test_custom_grid_intensity():
    config = FootprintConfig(grid=GridSettings(intensity_gco2_kwh=100.0))
    engine = EstimationEngine(runtime=build_runtime_config(config))

    result = engine.estimate("hi", 9)
    assert result.assistant.carbon_grams == pytest.approx(0.25)
    # Scores depend on energy only
    assert result.assistant.score == 5


def test_engine_logs_each_evaluation(engine, caplog):
    with caplog.at_level(logging.DEBUG, logger="query_footprint.estimation.engine"):
        engine.estimate("fix my code", 14)

    records = [r for r in caplog.records if r.message == "Query footprint estimated"]
    assert len(records) == 1
    assert records[0].complexity == 2.5
    assert records[0].grid_label == "Lower (Solar Peak)"


def test_package_exposes_lazy_exports():
    import query_footprint

    assert query_footprint.EstimationEngine is EstimationEngine
    assert query_footprint.FootprintConfig is FootprintConfig
    with pytest.raises(AttributeError):
        query_footprint.NotAThing  # noqa: B018
