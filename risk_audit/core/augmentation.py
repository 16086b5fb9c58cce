"""Optional generative rewrite of the audit narrative.

The model only ever supplies prose (headline, finding, fix list). Any numbers it
returns are dropped on parse and the assembler rebuilds every numeric field
from the local aggregation.
"""

import json
from typing import Sequence

from pydantic import BaseModel, ConfigDict, Field

from risk_audit.core.config import get_settings
from risk_audit.core.errors import AugmentationUnavailable
from risk_audit.core.llm import get_async_client, parse_llm_json
from risk_audit.core.logging import get_logger
from risk_audit.core.revenue import format_currency
from risk_audit.core.schemas_audit import AuditMechanics, Foundation, PriorityFix, RiskInput

logger = get_logger(__name__)


class AugmentationResult(BaseModel):
    """Narrative fields accepted from the generative service."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    headline: str | None = Field(None, max_length=120)
    critical_finding: str | None = None
    priority_fix_list: list[PriorityFix] = Field(default_factory=list)


AUGMENTATION_PROMPT = """You are a business continuity analyst writing a short risk audit teaser.

**Company:**
Industry: {industry}
Annual revenue: {revenue}

**Computed audit (authoritative, do not change or restate different numbers):**
Primary risk category: {primary_risk_category}
Revenue at risk: {primary_rar}
Volatility index: {volatility_index}/100

**Category answers:**
{category_lines}

**Task:**
Write a punchy uppercase headline (max 8 words), a 2-3 sentence critical finding that
references the owner's own answers, and exactly three remediation steps at 30, 60 and 90 days.

Return JSON:
{{
  "headline": string,
  "critical_finding": string,
  "priority_fix_list": [{{"timeline": string, "task": string, "target": string}}]
}}

Return ONLY valid JSON."""


def _category_lines(risk_inputs: Sequence[RiskInput]) -> str:
    lines = []
    for risk_input in risk_inputs:
        if risk_input.skipped:
            lines.append(f"- {risk_input.category.value}: skipped (unverified)")
            continue
        detail = {
            "severity": risk_input.severity,
            "latency": risk_input.latency,
        }
        if risk_input.metadata is not None:
            detail["answers"] = {
                risk_input.metadata.question1_label: risk_input.metadata.answer1_value,
                risk_input.metadata.question2_label: risk_input.metadata.answer2_value,
            }
        lines.append(f"- {risk_input.category.value}: {json.dumps(detail, default=str)}")
    return "\n".join(lines)


def build_prompt(
    foundation: Foundation,
    risk_inputs: Sequence[RiskInput],
    mechanics: AuditMechanics,
) -> str:
    return AUGMENTATION_PROMPT.format(
        industry=foundation.industry,
        revenue=format_currency(foundation.revenue),
        primary_risk_category=mechanics.primary_risk_category,
        primary_rar=format_currency(mechanics.primary_rar),
        volatility_index=mechanics.volatility_index,
        category_lines=_category_lines(risk_inputs),
    )


async def request_augmentation(
    foundation: Foundation,
    risk_inputs: Sequence[RiskInput],
    mechanics: AuditMechanics,
) -> AugmentationResult:
    """
    Ask the generative service for a richer narrative.

    Args:
        foundation: Industry and revenue
        risk_inputs: Scored category inputs
        mechanics: Locally computed audit mechanics

    Returns:
        AugmentationResult with prose fields only

    Raises:
        AugmentationUnavailable: If the service is not configured, fails, or
            returns something unparseable
    """
    settings = get_settings()
    if not settings.augmentation_configured:
        raise AugmentationUnavailable("Narrative augmentation is not configured")

    prompt = build_prompt(foundation, risk_inputs, mechanics)

    try:
        client = get_async_client()
        response = await client.messages.create(
            model=settings.AUGMENTATION_MODEL,
            max_tokens=settings.AUGMENTATION_MAX_TOKENS,
            temperature=0.4,
            messages=[{"role": "user", "content": prompt}],
        )
        raw = response.content[0].text
        result = parse_llm_json(raw, AugmentationResult)
    except Exception as e:
        raise AugmentationUnavailable(f"Augmentation request failed: {e}") from e

    logger.debug(f"Augmentation returned headline={result.headline!r}")
    return result
