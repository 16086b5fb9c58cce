"""Audit report assembly.

``assemble`` is the engine's entry point: it aggregates the risk inputs and
composes the report from the aggregation, the narrative selector and the fix
selector. Numeric fields and heatmap coordinates are always built from its own
``aggregate`` call. An augmentation result can replace the prose, never the
numbers.
"""

import asyncio
import logging
from typing import Any, Mapping, Sequence
from uuid import uuid4

from risk_audit.core.audit_aggregator import aggregate
from risk_audit.core.augmentation import AugmentationResult, request_augmentation
from risk_audit.core.config import get_settings
from risk_audit.core.errors import AugmentationUnavailable
from risk_audit.core.logging import get_logger, log_with_context
from risk_audit.core.narrative import select_narrative
from risk_audit.core.priority_fixes import select_fixes
from risk_audit.core.schemas_audit import (
    AuditReport,
    AuditResults,
    Foundation,
    RiskInput,
    TeaserSummary,
)

logger = get_logger(__name__)


def unknown_vulnerabilities(risk_inputs: Sequence[RiskInput]) -> list[str]:
    return [f"{i.category.value} Protocol Unverified" for i in risk_inputs if i.skipped]


def _as_foundation(foundation: Foundation | Mapping[str, Any]) -> Foundation:
    if isinstance(foundation, Foundation):
        return foundation
    return Foundation.model_validate(foundation)


def assemble(
    foundation: Foundation | Mapping[str, Any],
    risk_inputs: Sequence[RiskInput],
    augmentation: AugmentationResult | None = None,
) -> AuditReport:
    """
    Build the audit report for a completed questionnaire.

    Args:
        foundation: Industry and annual revenue
        risk_inputs: One RiskInput per category, in traversal order
        augmentation: Optional generated prose to use instead of the templates

    Returns:
        AuditReport whose numbers always match aggregate(revenue, risk_inputs)
    """
    foundation = _as_foundation(foundation)
    mechanics = aggregate(foundation.revenue, risk_inputs)

    teaser = select_narrative(mechanics)
    fixes = select_fixes(mechanics.primary_risk_category)

    if augmentation is not None:
        if augmentation.headline and augmentation.critical_finding:
            teaser = TeaserSummary(
                headline=augmentation.headline,
                critical_finding=augmentation.critical_finding,
            )
        if augmentation.priority_fix_list:
            fixes = list(augmentation.priority_fix_list)

    return AuditReport(
        audit_results=AuditResults(
            primary_rar=mechanics.primary_rar,
            primary_risk_category=mechanics.primary_risk_category,
            volatility_index=mechanics.volatility_index,
            unknown_vulnerabilities=unknown_vulnerabilities(risk_inputs),
        ),
        heatmap_coordinates=list(mechanics.heatmap_coordinates),
        teaser_summary=teaser,
        priority_fix_list=fixes,
    )


async def generate_audit_report(
    foundation: Foundation | Mapping[str, Any],
    risk_inputs: Sequence[RiskInput],
    use_augmentation: bool = True,
    timeout_seconds: float | None = None,
    audit_id: str | None = None,
) -> AuditReport:
    """
    Assemble a report, optionally racing a time-boxed narrative augmentation.

    The deterministic report is always available: on timeout or any failure of
    the augmentation the templated narrative is used. Cancelling this
    coroutine cancels the in-flight augmentation call.

    Args:
        foundation: Industry and annual revenue
        risk_inputs: Scored category inputs
        use_augmentation: Set False to skip the generative service entirely
        timeout_seconds: Override for AUGMENTATION_TIMEOUT_SECONDS
        audit_id: Reference used in log lines (generated when omitted)

    Returns:
        AuditReport
    """
    foundation = _as_foundation(foundation)
    settings = get_settings()
    audit_id = audit_id or str(uuid4())

    augmentation: AugmentationResult | None = None
    if use_augmentation and settings.augmentation_configured:
        timeout = (
            settings.AUGMENTATION_TIMEOUT_SECONDS if timeout_seconds is None else timeout_seconds
        )
        mechanics = aggregate(foundation.revenue, risk_inputs)
        try:
            augmentation = await asyncio.wait_for(
                request_augmentation(foundation, risk_inputs, mechanics),
                timeout=timeout,
            )
        except asyncio.TimeoutError:
            log_with_context(
                logger,
                logging.WARNING,
                "Augmentation timed out; using deterministic narrative",
                audit_id=audit_id,
                timeout_seconds=timeout,
            )
        except AugmentationUnavailable as e:
            log_with_context(
                logger,
                logging.WARNING,
                f"Augmentation unavailable; using deterministic narrative: {e}",
                audit_id=audit_id,
            )

    report = assemble(foundation, risk_inputs, augmentation=augmentation)
    log_with_context(
        logger,
        logging.INFO,
        "Audit report generated",
        audit_id=audit_id,
        industry=foundation.industry,
        primary_risk_category=report.audit_results.primary_risk_category,
        volatility_index=report.audit_results.volatility_index,
        augmented=augmentation is not None,
    )
    return report
