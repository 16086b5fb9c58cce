"""Category scoring: reduce raw answers to a clamped (severity, latency) pair.

A skipped category gets the fixed shadow score instead of being scored, so an
unanswered risk still shows up as elevated-but-unverified.
"""

import math
from typing import Any, Iterable

from risk_audit.core.errors import ScoreComputationError
from risk_audit.core.logging import get_logger
from risk_audit.core.scenario_catalog import lookup
from risk_audit.core.schemas_audit import RiskCategory, RiskInput, RiskInputMetadata

logger = get_logger(__name__)

SCORE_MIN = 1
SCORE_MAX = 10

# Substituted for any axis a scoring function fails to produce.
SCORE_MIDPOINT = 5

# Tunable policy value with no derivation behind it: high enough not to hide
# an unanswered category, below the maximum so ignorance is not overstated.
SHADOW_SCORE = 7


def clamp_score(value: float) -> int:
    """Round half-up and clamp to the 1..10 scoring domain."""
    rounded = math.floor(value + 0.5)
    return max(SCORE_MIN, min(SCORE_MAX, rounded))


def _usable_axis(category: RiskCategory, axis: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        error = ScoreComputationError(category.value, axis, value)
        logger.warning(f"Substituting midpoint score: {error}")
        return SCORE_MIDPOINT
    return clamp_score(value)


def _unpack(raw: Any) -> tuple[Any, Any]:
    if isinstance(raw, dict):
        return raw.get("severity"), raw.get("latency")
    if isinstance(raw, (tuple, list)) and len(raw) == 2:
        return raw[0], raw[1]
    return None, None


def skipped_input(category: RiskCategory) -> RiskInput:
    """Shadow-scored input for a category the owner chose not to answer."""
    return RiskInput(
        category=category,
        severity=SHADOW_SCORE,
        latency=SHADOW_SCORE,
        skipped=True,
        metadata=None,
    )


def score(
    industry: str,
    category: RiskCategory,
    answer1: Any = None,
    answer2: Any = None,
    skipped: bool = False,
    selected_tags: Iterable[str] | None = None,
) -> RiskInput:
    """
    Score one category from the owner's answers.

    Args:
        industry: Industry label (unknown industries use the default scenarios)
        category: Risk category being scored
        answer1: Answer to the first question (slider 0-100 or picker option)
        answer2: Answer to the follow-up question, ignored when none is asked
        skipped: True when the owner skipped the category
        selected_tags: Context tags the owner ticked; unknown tags are dropped

    Returns:
        RiskInput with severity and latency in 1..10

    Raises:
        ScenarioResolutionError: If the catalog has no scenario for the category
    """
    category = RiskCategory(category)
    if skipped:
        return skipped_input(category)

    scenario = lookup(industry, category)
    question2 = scenario.q2(answer1)
    if question2 is None:
        answer2 = None

    try:
        raw = scenario.calculate_score(answer1, answer2)
    except Exception as e:
        logger.warning(
            f"Scoring function failed for {category.value} ({industry}): {e}; using midpoint"
        )
        raw = None

    raw_severity, raw_latency = _unpack(raw)
    severity = _usable_axis(category, "severity", raw_severity)
    latency = _usable_axis(category, "latency", raw_latency)

    tags = [t for t in (selected_tags or []) if t in scenario.context_tags]

    return RiskInput(
        category=category,
        severity=severity,
        latency=latency,
        skipped=False,
        metadata=RiskInputMetadata(
            question1_label=scenario.q1.label,
            answer1_value=answer1,
            question2_label=question2.label if question2 is not None else "",
            answer2_value=answer2,
            selected_tags=tags,
        ),
    )
