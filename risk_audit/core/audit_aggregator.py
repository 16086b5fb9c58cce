"""Audit aggregation: revenue-at-risk, primary risk, volatility index and heatmap.

This module is the only source of the numbers shown in an audit report.
"""

import math
from typing import Mapping, Sequence

from risk_audit.core.logging import get_logger
from risk_audit.core.schemas_audit import (
    GENERAL_VOLATILITY,
    AuditMechanics,
    CategoryExposure,
    HeatmapPoint,
    RiskCategory,
    RiskInput,
)

logger = get_logger(__name__)

# Share of the revenue exposure that each category can realistically put at risk.
CATEGORY_WEIGHTS: Mapping[RiskCategory, float] = {
    RiskCategory.SUPPLY_CHAIN: 1.0,
    RiskCategory.CASH_FLOW: 1.0,
    RiskCategory.WORKFORCE: 0.8,
    RiskCategory.INFRASTRUCTURE_TOOLS: 0.8,
    RiskCategory.WEATHER_PHYSICAL: 0.6,
}

# severity + latency at 10/10
MAX_MAGNITUDE_PER_CATEGORY = 20

VOLATILITY_CAP = 100


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def risk_factor(risk_input: RiskInput) -> float:
    """Severity x latency on a 0.01..1.0 scale."""
    return (risk_input.severity * risk_input.latency) / 100


def category_rar(revenue: float, risk_input: RiskInput) -> int:
    """Revenue-at-risk for one category, rounded to whole currency units.

    Non-finite exposures (infinite or NaN revenue) count as 0.
    """
    weight = CATEGORY_WEIGHTS[risk_input.category]
    exposure = revenue * risk_factor(risk_input) * weight
    if not math.isfinite(exposure):
        return 0
    return round_half_up(exposure)


def volatility_index(inputs: Sequence[RiskInput]) -> int:
    """
    Average category magnitude mapped onto 0-100.

    Uses count * 20 as the denominator so the index stays correct for any
    number of categories. Returns 0 when there are no inputs.
    """
    if not inputs:
        return 0
    total_magnitude = sum(i.severity + i.latency for i in inputs)
    ratio = total_magnitude / (len(inputs) * MAX_MAGNITUDE_PER_CATEGORY)
    return round_half_up(min(VOLATILITY_CAP, ratio * 100))


def heatmap_point(risk_input: RiskInput) -> HeatmapPoint:
    return HeatmapPoint(
        label=risk_input.category.value,
        x=risk_input.severity,
        y=risk_input.latency,
        status="Unknown" if risk_input.skipped else "Verified",
    )


def aggregate(revenue: float, inputs: Sequence[RiskInput]) -> AuditMechanics:
    """
    Compute the audit mechanics for a set of category inputs.

    Args:
        revenue: Annual revenue (same currency unit as the RAR figures)
        inputs: One RiskInput per category, in traversal order

    Returns:
        AuditMechanics. The primary risk is the highest RAR; ties keep the
        first category in input order. With no inputs (or zero revenue) the
        primary category is "General Volatility".
    """
    primary_rar = 0
    primary_category = GENERAL_VOLATILITY
    primary_input: RiskInput | None = None
    exposures: list[CategoryExposure] = []

    for risk_input in inputs:
        rar = category_rar(revenue, risk_input)
        exposures.append(
            CategoryExposure(
                category=risk_input.category,
                weight=CATEGORY_WEIGHTS[risk_input.category],
                rar=rar,
            )
        )
        if rar > primary_rar:
            primary_rar = rar
            primary_category = risk_input.category.value
            primary_input = risk_input

    if not math.isfinite(revenue):
        logger.warning(f"Non-finite revenue {revenue!r}; all exposures are 0")
    elif not inputs:
        logger.warning("Aggregating an audit with no risk inputs")
    elif revenue == 0:
        logger.info("Aggregating an audit with zero revenue; all exposures are 0")

    return AuditMechanics(
        primary_rar=primary_rar,
        primary_risk_category=primary_category,
        primary_input=primary_input,
        volatility_index=volatility_index(inputs),
        heatmap_coordinates=[heatmap_point(i) for i in inputs],
        category_rar=exposures,
    )
