"""API endpoints backing the questionnaire: industries, questions and scoring."""

from typing import Any

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, Field

from risk_audit.core.category_scorer import score
from risk_audit.core.errors import RevenueParseError
from risk_audit.core.logging import get_logger
from risk_audit.core.revenue import REVENUE_PRESETS, parse_revenue
from risk_audit.core.scenario_catalog import (
    DEFAULT_INDUSTRY,
    has_industry,
    list_industries,
    lookup,
    resolve_second_question,
)
from risk_audit.core.schemas_audit import CATEGORY_ORDER, RiskCategory, RiskInput
from risk_audit.core.schemas_scenarios import ScenarioQuestion

logger = get_logger(__name__)

router = APIRouter()


# ============================================================================
# Pydantic Models
# ============================================================================


class RevenuePreset(BaseModel):
    label: str
    value: int


class IndustriesResponse(BaseModel):
    industries: list[str]
    revenue_presets: list[RevenuePreset]


class CategoryScenarioOut(BaseModel):
    """First question for one category."""

    category: RiskCategory
    context_tags: list[str]
    q1: ScenarioQuestion


class ScenarioSetResponse(BaseModel):
    industry: str
    resolved_industry: str = Field(..., description="Catalog entry actually used")
    categories: list[CategoryScenarioOut]


class SecondQuestionRequest(BaseModel):
    industry: str
    category: RiskCategory
    answer1: Any = None


class SecondQuestionResponse(BaseModel):
    question: ScenarioQuestion | None


class ScoreRequest(BaseModel):
    """Answers for one category, or a skip."""

    industry: str
    category: RiskCategory
    answer1: str | int | float | None = None
    answer2: str | int | float | None = None
    skipped: bool = False
    selected_tags: list[str] = Field(default_factory=list)


class RevenueParseRequest(BaseModel):
    value: str = Field(..., description='Revenue entry, e.g. "10m" or "$5,000,000"')


class RevenueParseResponse(BaseModel):
    revenue: int


# ============================================================================
# Endpoints
# ============================================================================


@router.get("/industries", response_model=IndustriesResponse)
async def get_industries() -> IndustriesResponse:
    """List selectable industries and revenue presets."""
    return IndustriesResponse(
        industries=list_industries(),
        revenue_presets=[RevenuePreset(label=label, value=value) for label, value in REVENUE_PRESETS],
    )


@router.get("/scenarios", response_model=ScenarioSetResponse)
async def get_scenarios(
    industry: str = Query(..., description="Industry label"),
) -> ScenarioSetResponse:
    """
    Get the first question for every category, in questionnaire order.

    Unknown industries get the default scenario set.
    """
    try:
        categories = []
        for category in CATEGORY_ORDER:
            scenario = lookup(industry, category)
            categories.append(
                CategoryScenarioOut(
                    category=category,
                    context_tags=list(scenario.context_tags),
                    q1=scenario.q1,
                )
            )
        return ScenarioSetResponse(
            industry=industry,
            resolved_industry=industry if has_industry(industry) else DEFAULT_INDUSTRY,
            categories=categories,
        )
    except Exception as e:
        logger.error(f"Error loading scenarios for '{industry}': {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e


@router.post("/scenarios/second-question", response_model=SecondQuestionResponse)
async def get_second_question(body: SecondQuestionRequest) -> SecondQuestionResponse:
    """Resolve the follow-up question for a first answer (null when there is none)."""
    try:
        question = resolve_second_question(body.industry, body.category, body.answer1)
        return SecondQuestionResponse(question=question)
    except Exception as e:
        logger.error(f"Error resolving second question: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e


@router.post("/scenarios/score", response_model=RiskInput)
async def score_category(body: ScoreRequest) -> RiskInput:
    """Score one category's answers into a RiskInput."""
    try:
        return score(
            body.industry,
            body.category,
            answer1=body.answer1,
            answer2=body.answer2,
            skipped=body.skipped,
            selected_tags=body.selected_tags,
        )
    except Exception as e:
        logger.error(f"Error scoring {body.category.value}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e


@router.post("/revenue/parse", response_model=RevenueParseResponse)
async def parse_revenue_entry(body: RevenueParseRequest) -> RevenueParseResponse:
    """Turn a free-form revenue entry into a number."""
    try:
        return RevenueParseResponse(revenue=parse_revenue(body.value))
    except RevenueParseError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
