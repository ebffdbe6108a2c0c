"""Property-based tests for the estimation engine using hypothesis."""

import math

from hypothesis import given, settings, strategies as st

from query_footprint.estimation import EstimationEngine
from query_footprint.estimation.complexity import analyze_complexity
from query_footprint.estimation.energy import assistant_energy_wh
from query_footprint.estimation.response_length import estimate_response_tokens
from query_footprint.estimation.scoring import energy_score

_ENGINE = EstimationEngine()

_KEYWORDS = st.sampled_from(
    ["code", "write", "explain", "detailed", "list", "quick", "no", "hello", "sky"]
)
_QUERIES = st.one_of(
    st.text(max_size=400),
    st.lists(_KEYWORDS, max_size=150).map(" ".join),
)


@given(query=_QUERIES)
def test_complexity_is_bounded(query):
    complexity = analyze_complexity(query)
    assert 1.0 <= complexity <= 4.0


@given(query=_QUERIES, complexity=st.floats(min_value=1.0, max_value=4.0))
def test_token_estimate_is_non_negative_integer(query, complexity):
    tokens = estimate_response_tokens(query, complexity)
    assert isinstance(tokens, int)
    assert tokens >= 0


@given(
    low=st.integers(min_value=0, max_value=10**6),
    delta=st.integers(min_value=0, max_value=10**6),
)
def test_assistant_energy_non_decreasing_in_tokens(low, delta):
    assert assistant_energy_wh(low) <= assistant_energy_wh(low + delta)


@given(
    a=st.floats(min_value=0.0, max_value=1e9, allow_nan=False, allow_infinity=False),
    b=st.floats(min_value=0.0, max_value=1e9, allow_nan=False, allow_infinity=False),
)
def test_score_is_bounded_and_monotonic(a, b):
    low, high = sorted((a, b))
    low_score = energy_score(low)
    high_score = energy_score(high)
    assert 1 <= low_score <= 6
    assert 1 <= high_score <= 6
    assert low_score <= high_score


@settings(max_examples=200)
@given(query=_QUERIES, hour=st.integers(min_value=-48, max_value=72))
def test_estimate_invariants(query, hour):
    result = _ENGINE.estimate(query, hour)

    assert result.context.multiplier in (0.8, 1.0, 1.3)
    for estimate in (result.search, result.assistant):
        assert 1 <= estimate.score <= 6
        assert estimate.energy_wh >= 0.0
        assert estimate.carbon_grams >= 0.0
        assert not math.isnan(estimate.carbon_grams)
        assert (
            estimate.adjusted_carbon_grams
            == estimate.carbon_grams * result.context.multiplier
        )
    assert result.search.estimated_tokens == 0
    assert result.search.complexity == result.assistant.complexity


@given(query=_QUERIES, hour=st.integers(min_value=0, max_value=23))
def test_estimate_is_pure(query, hour):
    first = _ENGINE.estimate(query, hour)
    second = _ENGINE.estimate(query, hour)
    assert first == second


@given(query=_QUERIES, a=st.integers(0, 23), b=st.integers(0, 23))
def test_scores_do_not_depend_on_hour(query, a, b):
    first = _ENGINE.estimate(query, a)
    second = _ENGINE.estimate(query, b)
    assert first.search.score == second.search.score
    assert first.assistant.score == second.assistant.score
    assert first.assistant.carbon_grams == second.assistant.carbon_grams
