"""30/60/90-day remediation plans keyed by primary risk category."""

from typing import Mapping

from risk_audit.core.schemas_audit import PriorityFix, RiskCategory

PRIORITY_FIXES: Mapping[RiskCategory, tuple[PriorityFix, ...]] = {
    RiskCategory.SUPPLY_CHAIN: (
        PriorityFix(timeline="30 Days", task="Audit Tier-1 critical vendors for financial solvency", target="Identification"),
        PriorityFix(timeline="60 Days", task="Qualify one alternative provider for primary inputs", target="Redundancy"),
        PriorityFix(timeline="90 Days", task="Negotiate 'Force Majeure' clauses in vendor contracts", target="Legal Shield"),
    ),
    RiskCategory.CASH_FLOW: (
        PriorityFix(timeline="30 Days", task="Aggressively collect overdue Accounts Receivable", target="Cash Injection"),
        PriorityFix(timeline="60 Days", task="Establish a rolling 13-week cash flow forecast", target="Visibility"),
        PriorityFix(timeline="90 Days", task="Secure a standby Line of Credit (LOC) or bridge facility", target="Safety Net"),
    ),
    RiskCategory.WORKFORCE: (
        PriorityFix(timeline="30 Days", task="Identify 'Bus Factor' personnel for immediate triage", target="Assessment"),
        PriorityFix(timeline="60 Days", task="Document top 5 critical execution processes (SOPs)", target="Knowledge Capture"),
        PriorityFix(timeline="90 Days", task="Cross-train junior staff on one critical function", target="Continuity"),
    ),
    RiskCategory.INFRASTRUCTURE_TOOLS: (
        PriorityFix(timeline="30 Days", task="Test offline/manual operating procedures", target="Resilience"),
        PriorityFix(timeline="60 Days", task="Audit SaaS contracts for data ownership/export clauses", target="Sovereignty"),
        PriorityFix(timeline="90 Days", task="Implement a secondary communication channel (out-of-band)", target="Redundancy"),
    ),
    RiskCategory.WEATHER_PHYSICAL: (
        PriorityFix(timeline="30 Days", task="Review insurance policy for Business Interruption gaps", target="Financial Shield"),
        PriorityFix(timeline="60 Days", task="Digitize physical records to redundant cloud storage", target="Asset Protection"),
        PriorityFix(timeline="90 Days", task="Establish a remote-work protocol for HQ staff", target="Agility"),
    ),
}


def select_fixes(primary_risk_category: RiskCategory | str) -> list[PriorityFix]:
    """Remediation plan for the primary category; empty for unrecognized categories."""
    try:
        category = RiskCategory(primary_risk_category)
    except ValueError:
        return []
    return list(PRIORITY_FIXES.get(category, ()))
