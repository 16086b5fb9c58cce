"""Lead capture for completed audits.

A draft lead is written anonymously when the report is generated; the
identity gate later fills in company name and email on the same row. Draft
writes must never hold up or fail report generation.
"""

from typing import Any, Sequence

from risk_audit.core.config import get_settings
from risk_audit.core.logging import get_logger
from risk_audit.core.risk_zones import classify_magnitude
from risk_audit.core.schemas_audit import (
    AuditReport,
    Foundation,
    IdentityData,
    RiskCategory,
    RiskInput,
)
from risk_audit.db.supabase_client import get_supabase

logger = get_logger(__name__)

# Column prefix for the flattened per-category scores.
SCORE_COLUMN_PREFIXES: dict[RiskCategory, str] = {
    RiskCategory.SUPPLY_CHAIN: "score_supply_chain",
    RiskCategory.CASH_FLOW: "score_cash_flow",
    RiskCategory.WEATHER_PHYSICAL: "score_weather",
    RiskCategory.INFRASTRUCTURE_TOOLS: "score_infrastructure",
    RiskCategory.WORKFORCE: "score_workforce",
}


def _risk_vector(risk_input: RiskInput) -> dict[str, Any]:
    metadata = risk_input.metadata
    return {
        "category": risk_input.category.value,
        "scores": {
            "severity": risk_input.severity,
            "latency": risk_input.latency,
            "magnitude": risk_input.magnitude,
            "zone": classify_magnitude(risk_input.severity, risk_input.latency).value,
        },
        "telemetry": {
            "q1_label": metadata.question1_label if metadata else None,
            "q1_value": metadata.answer1_value if metadata else None,
            "q2_label": metadata.question2_label if metadata else None,
            "q2_value": metadata.answer2_value if metadata else None,
            "skipped": risk_input.skipped,
        },
    }


def build_lead_payload(
    audit_id: str,
    foundation: Foundation,
    risk_inputs: Sequence[RiskInput],
    report: AuditReport | None,
) -> dict[str, Any]:
    """
    Build the row written for a draft lead. Identity fields are left out.

    Args:
        audit_id: Reference handed to the client for the identity gate
        foundation: Industry and revenue
        risk_inputs: Scored category inputs
        report: Generated report (numbers default to 0 when absent)

    Returns:
        Dict ready for insertion
    """
    payload: dict[str, Any] = {
        "audit_ref": audit_id,
        "industry": foundation.industry,
        "revenue": foundation.revenue,
        "primary_rar": report.audit_results.primary_rar if report else 0,
        "volatility_index": report.audit_results.volatility_index if report else 0,
        "risk_vectors": [_risk_vector(i) for i in risk_inputs],
    }

    by_category = {i.category: i for i in risk_inputs}
    for category, prefix in SCORE_COLUMN_PREFIXES.items():
        risk_input = by_category.get(category)
        payload[f"{prefix}_severity"] = risk_input.severity if risk_input else 0
        payload[f"{prefix}_latency"] = risk_input.latency if risk_input else 0

    return payload


def draft_lead(
    audit_id: str,
    foundation: Foundation,
    risk_inputs: Sequence[RiskInput],
    report: AuditReport | None,
) -> int | None:
    """
    Insert an anonymous draft lead.

    Returns:
        The new lead id, or None if the store is unavailable or rejects the write
    """
    settings = get_settings()
    if not settings.persistence_configured:
        logger.warning("Supabase not configured. Skipping draft lead save.")
        return None

    try:
        supabase = get_supabase()
        response = (
            supabase.table(settings.LEADS_TABLE)
            .insert(build_lead_payload(audit_id, foundation, risk_inputs, report))
            .execute()
        )
    except Exception as e:
        logger.warning(f"Draft lead save failed: {e}", exc_info=True)
        return None

    rows = response.data or []
    if not rows:
        logger.warning("Draft lead save returned no rows")
        return None

    lead_id = rows[0].get("id")
    logger.info(f"Saved draft lead {lead_id} for audit {audit_id}")
    return lead_id


def finalize_lead(audit_id: str, identity: IdentityData) -> dict[str, Any]:
    """
    Attach identity details to the draft lead of an audit.

    Args:
        audit_id: Reference returned with the audit report
        identity: Company name and email from the report gate

    Returns:
        Updated lead row

    Raises:
        PersistenceUnavailable: If Supabase is not configured
        LookupError: If no draft lead exists for this audit
        Exception: If the store rejects the update
    """
    settings = get_settings()
    supabase = get_supabase()

    response = (
        supabase.table(settings.LEADS_TABLE)
        .update({"company_name": identity.company_name, "email": identity.email})
        .eq("audit_ref", audit_id)
        .execute()
    )

    if not response.data:
        raise LookupError(f"No draft lead for audit {audit_id}")

    logger.info(f"Finalized lead for audit {audit_id}")
    return response.data[0]
