"""Rule-based narrative selection for the audit teaser.

Picks a headline and finding for the primary risk category, in a critical or
elevated tone depending on the primary input's magnitude, then ties the
finding back to the owner's own answers.
"""

from typing import Literal, Mapping

from risk_audit.core.schemas_audit import (
    AuditMechanics,
    RiskCategory,
    RiskInputMetadata,
    TeaserSummary,
)

SeverityBucket = Literal["A", "B"]

# Magnitudes above this (60% of the 20-point maximum) get the critical tone.
CRITICAL_MAGNITUDE_THRESHOLD = 12

NARRATIVES: Mapping[RiskCategory, Mapping[SeverityBucket, TeaserSummary]] = {
    RiskCategory.SUPPLY_CHAIN: {
        "A": TeaserSummary(
            headline="CRITICAL UPSTREAM DEPENDENCY",
            critical_finding=(
                "Your value chain has a single point of failure. A disruption at one key external "
                "provider creates a 'cascade failure,' halting your ability to deliver value within "
                "the calculated latency window."
            ),
        ),
        "B": TeaserSummary(
            headline="VOLATILE INPUT STABILITY",
            critical_finding=(
                "External inputs, whether physical goods, digital services, or talent, are exhibiting "
                "instability. Without a larger operational buffer, this volatility will force "
                "unforced revenue pauses."
            ),
        ),
    },
    RiskCategory.CASH_FLOW: {
        "A": TeaserSummary(
            headline="SOLVENCY RUNWAY COMPROMISED",
            critical_finding=(
                "Operational reserves are insufficient to absorb a 30-day revenue shock. The divergence "
                "between your fixed obligations and revenue timing creates a mathematically inevitable "
                "liquidity gap."
            ),
        ),
        "B": TeaserSummary(
            headline="CASH CONVERSION CYCLE IMBALANCE",
            critical_finding=(
                "Your outflow velocity exceeds your inflow velocity. This structural misalignment "
                "drains working capital and reduces your capacity to weather market contractions."
            ),
        ),
    },
    RiskCategory.WORKFORCE: {
        "A": TeaserSummary(
            headline="KEY PERSON DEPENDENCY",
            critical_finding=(
                "Institutional knowledge is dangerously concentrated. The loss of specific individuals "
                "would result in an immediate capability regression, as critical execution processes "
                "are not transferable."
            ),
        ),
        "B": TeaserSummary(
            headline="KNOWLEDGE SILO RISK",
            critical_finding=(
                "Critical operations rely on tribal knowledge rather than documented systems. This "
                "prevents 'surging' capacity during high-demand periods and creates fragility during "
                "turnover."
            ),
        ),
    },
    RiskCategory.INFRASTRUCTURE_TOOLS: {
        "A": TeaserSummary(
            headline="PLATFORM & DATA LOCK-IN",
            critical_finding=(
                "Operational continuity is fully dependent on proprietary external systems. You lack "
                "an autonomous recovery protocol, meaning a vendor outage results in total operational "
                "paralysis."
            ),
        ),
        "B": TeaserSummary(
            headline="FRAGMENTED OPERATIONAL TRUTH",
            critical_finding=(
                "Critical data is siloed across disconnected tools or manual trackers. The lack of a "
                "unified 'single source of truth' creates dangerous blind spots during rapid "
                "decision-making."
            ),
        ),
    },
    RiskCategory.WEATHER_PHYSICAL: {
        "A": TeaserSummary(
            headline="GEOGRAPHIC CONCENTRATION EXPOSURE",
            critical_finding=(
                "Asset density in a high-risk zone exceeds safe diversification limits. A single "
                "localized event (natural or infrastructure) has the probability of disabling 100% of "
                "revenue generation."
            ),
        ),
        "B": TeaserSummary(
            headline="ACCESS & RECOVERY FRAGILITY",
            critical_finding=(
                "Your operations lack location independence. While assets may be insured, the "
                "inability to physically access or utilize them during a disruption creates an "
                "unrecoverable revenue loss."
            ),
        ),
    },
}

FALLBACK_NARRATIVE = NARRATIVES[RiskCategory.CASH_FLOW]["A"]


def severity_bucket(
    primary_magnitude: int, threshold: int = CRITICAL_MAGNITUDE_THRESHOLD
) -> SeverityBucket:
    return "A" if primary_magnitude > threshold else "B"


def _has_answer(value: object) -> bool:
    return value is not None and value != ""


def build_tie_back(metadata: RiskInputMetadata | None) -> str:
    """Sentence linking the finding to the owner's own answers ("" when unanswered)."""
    if metadata is None or not _has_answer(metadata.answer1_value):
        return ""

    tie_back = (
        f" This exposure is driven by your input for "
        f"{metadata.question1_label} ({metadata.answer1_value})"
    )
    if _has_answer(metadata.answer2_value):
        tie_back += f" combined with {metadata.question2_label} ({metadata.answer2_value})."
    else:
        tie_back += "."
    return tie_back


def select_narrative(
    mechanics: AuditMechanics, threshold: int = CRITICAL_MAGNITUDE_THRESHOLD
) -> TeaserSummary:
    """
    Choose the teaser headline and finding for an audit.

    Args:
        mechanics: Aggregated audit mechanics
        threshold: Magnitude above which the critical tone is used

    Returns:
        TeaserSummary with the tie-back appended to the finding
    """
    primary = mechanics.primary_input
    primary_magnitude = primary.magnitude if primary is not None else 0
    bucket = severity_bucket(primary_magnitude, threshold)

    try:
        templates = NARRATIVES.get(RiskCategory(mechanics.primary_risk_category))
    except ValueError:
        templates = None
    base = templates[bucket] if templates else FALLBACK_NARRATIVE

    tie_back = build_tie_back(primary.metadata if primary is not None else None)
    return TeaserSummary(
        headline=base.headline,
        critical_finding=base.critical_finding + tie_back,
    )
