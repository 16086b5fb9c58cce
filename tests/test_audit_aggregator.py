"""Tests for revenue-at-risk aggregation."""

import pytest

from risk_audit.core.audit_aggregator import (
    CATEGORY_WEIGHTS,
    aggregate,
    category_rar,
    round_half_up,
    volatility_index,
)
from risk_audit.core.schemas_audit import (
    CATEGORY_ORDER,
    GENERAL_VOLATILITY,
    RiskCategory,
    RiskInput,
)


def _inputs(scores: dict[RiskCategory, tuple[int, int]]) -> list[RiskInput]:
    return [RiskInput(category=c, severity=s, latency=l) for c, (s, l) in scores.items()]


def test_worked_example(worked_example_inputs):
    """Supply chain 8/8 and the rest at 5/5 on $5M revenue."""
    mechanics = aggregate(5_000_000, worked_example_inputs)

    rar_by_category = {e.category: e.rar for e in mechanics.category_rar}
    assert rar_by_category == {
        RiskCategory.SUPPLY_CHAIN: 3_200_000,
        RiskCategory.CASH_FLOW: 1_250_000,
        RiskCategory.WORKFORCE: 1_000_000,
        RiskCategory.INFRASTRUCTURE_TOOLS: 1_000_000,
        RiskCategory.WEATHER_PHYSICAL: 750_000,
    }
    assert mechanics.primary_rar == 3_200_000
    assert mechanics.primary_risk_category == "Supply Chain"
    assert mechanics.primary_input is worked_example_inputs[0]
    assert mechanics.volatility_index == 56


def test_heatmap_follows_input_order_and_skip_status():
    inputs = [
        RiskInput(category=RiskCategory.WORKFORCE, severity=3, latency=9),
        RiskInput(category=RiskCategory.CASH_FLOW, severity=7, latency=7, skipped=True),
    ]
    mechanics = aggregate(1_000_000, inputs)

    points = [(p.label, p.x, p.y, p.status) for p in mechanics.heatmap_coordinates]
    assert points == [
        ("Workforce", 3, 9, "Verified"),
        ("Cash Flow", 7, 7, "Unknown"),
    ]


def test_tie_keeps_first_category_in_input_order():
    inputs = _inputs(
        {
            RiskCategory.CASH_FLOW: (6, 6),
            RiskCategory.SUPPLY_CHAIN: (6, 6),
        }
    )
    assert aggregate(2_000_000, inputs).primary_risk_category == "Cash Flow"

    assert aggregate(2_000_000, list(reversed(inputs))).primary_risk_category == "Supply Chain"


def test_weight_breaks_equal_scores():
    inputs = _inputs(
        {
            RiskCategory.WEATHER_PHYSICAL: (9, 9),
            RiskCategory.WORKFORCE: (9, 9),
        }
    )
    mechanics = aggregate(1_000_000, inputs)
    assert mechanics.primary_risk_category == "Workforce"
    assert mechanics.primary_rar == 648_000


def test_empty_inputs_fall_back_to_general_volatility():
    mechanics = aggregate(5_000_000, [])

    assert mechanics.primary_rar == 0
    assert mechanics.primary_risk_category == GENERAL_VOLATILITY
    assert mechanics.primary_input is None
    assert mechanics.volatility_index == 0
    assert mechanics.heatmap_coordinates == []


def test_zero_revenue_has_no_primary_but_keeps_volatility(worked_example_inputs):
    mechanics = aggregate(0, worked_example_inputs)

    assert mechanics.primary_rar == 0
    assert mechanics.primary_risk_category == GENERAL_VOLATILITY
    assert mechanics.volatility_index == 56
    assert all(e.rar == 0 for e in mechanics.category_rar)


def test_volatility_index_bounds():
    worst = _inputs({c: (10, 10) for c in CATEGORY_ORDER})
    best = _inputs({c: (1, 1) for c in CATEGORY_ORDER})

    assert volatility_index(worst) == 100
    assert volatility_index(best) == 10

    almost = _inputs({c: (10, 10) for c in CATEGORY_ORDER[:4]})
    almost.append(RiskInput(category=RiskCategory.WEATHER_PHYSICAL, severity=10, latency=9))
    assert volatility_index(almost) == 99


def test_volatility_index_scales_with_category_count():
    single = [RiskInput(category=RiskCategory.CASH_FLOW, severity=10, latency=10)]
    pair = _inputs({RiskCategory.CASH_FLOW: (10, 10), RiskCategory.WORKFORCE: (5, 5)})

    assert volatility_index(single) == 100
    assert volatility_index(pair) == 75


def test_rar_is_monotonic_in_severity_and_latency():
    revenue = 3_333_333
    for category in CATEGORY_ORDER:
        previous = -1
        for severity in range(1, 11):
            rar = category_rar(revenue, RiskInput(category=category, severity=severity, latency=6))
            assert rar >= previous
            previous = rar
        previous = -1
        for latency in range(1, 11):
            rar = category_rar(revenue, RiskInput(category=category, severity=6, latency=latency))
            assert rar >= previous
            previous = rar


def test_primary_rar_never_decreases_when_one_category_worsens():
    """Raising any one category's severity or latency never lowers the primary RAR."""
    revenue = 2_500_000
    base = {c: (4, 4) for c in CATEGORY_ORDER}
    for category in CATEGORY_ORDER:
        for axis in (0, 1):
            previous = aggregate(revenue, _inputs(base)).primary_rar
            for value in range(5, 11):
                scores = dict(base)
                pair = list(scores[category])
                pair[axis] = value
                scores[category] = (pair[0], pair[1])
                current = aggregate(revenue, _inputs(scores)).primary_rar
                assert current >= previous, (category, axis, value)
                previous = current


@pytest.mark.parametrize("revenue", [float("inf"), float("nan")])
def test_non_finite_revenue_yields_zero_exposure(revenue, worked_example_inputs):
    mechanics = aggregate(revenue, worked_example_inputs)

    assert mechanics.primary_rar == 0
    assert mechanics.primary_risk_category == GENERAL_VOLATILITY
    assert all(e.rar == 0 for e in mechanics.category_rar)
    assert mechanics.volatility_index == 56
    assert category_rar(revenue, worked_example_inputs[0]) == 0


def test_primary_rar_never_exceeds_revenue_times_weight():
    inputs = _inputs({c: (10, 10) for c in CATEGORY_ORDER})
    mechanics = aggregate(1_234_567, inputs)
    for exposure in mechanics.category_rar:
        assert exposure.rar <= round_half_up(1_234_567 * CATEGORY_WEIGHTS[exposure.category])


def test_category_rar_rounds_half_up():
    risk_input = RiskInput(category=RiskCategory.CASH_FLOW, severity=1, latency=1)
    assert category_rar(149, risk_input) == 1
    assert category_rar(150, risk_input) == 2


@pytest.mark.parametrize(("value", "expected"), [(2.5, 3), (0.5, 1), (2.49, 2), (3.5, 4), (0, 0)])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected
