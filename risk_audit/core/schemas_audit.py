"""Pydantic schemas for audit inputs, intermediate mechanics and the final report."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

AnswerValue = str | int | float

GENERAL_VOLATILITY = "General Volatility"


# =============================================================================
# Enums
# =============================================================================


class RiskCategory(str, Enum):
    """The five fixed risk categories audited for every business."""

    SUPPLY_CHAIN = "Supply Chain"
    CASH_FLOW = "Cash Flow"
    WORKFORCE = "Workforce"
    INFRASTRUCTURE_TOOLS = "Infrastructure & Tools"
    WEATHER_PHYSICAL = "Weather & Physical"


# Wizard traversal order. Drives question sequencing, never scoring.
CATEGORY_ORDER: tuple[RiskCategory, ...] = (
    RiskCategory.SUPPLY_CHAIN,
    RiskCategory.CASH_FLOW,
    RiskCategory.WORKFORCE,
    RiskCategory.INFRASTRUCTURE_TOOLS,
    RiskCategory.WEATHER_PHYSICAL,
)


HeatmapStatus = Literal["Verified", "Unknown"]


# =============================================================================
# Inputs
# =============================================================================


class Foundation(BaseModel):
    """Company baseline captured before the risk questions."""

    model_config = ConfigDict(frozen=True)

    industry: str = Field(..., description="Industry label, matched against the scenario catalog")
    revenue: float = Field(
        ..., ge=0, allow_inf_nan=False, description="Annual revenue in whole currency units"
    )

    @field_validator("industry")
    @classmethod
    def strip_industry(cls, v: str) -> str:
        return v.strip()


class RiskInputMetadata(BaseModel):
    """Provenance of an answered category, used for the narrative tie-back."""

    model_config = ConfigDict(frozen=True)

    question1_label: str = ""
    answer1_value: AnswerValue | None = None
    question2_label: str = ""
    answer2_value: AnswerValue | None = None
    selected_tags: list[str] = Field(default_factory=list)


class RiskInput(BaseModel):
    """Normalized result of one answered (or skipped) category."""

    model_config = ConfigDict(frozen=True)

    category: RiskCategory
    severity: int = Field(..., ge=1, le=10, description="How damaging the event would be")
    latency: int = Field(..., ge=1, le=10, description="How slowly the business would recover")
    skipped: bool = False
    metadata: RiskInputMetadata | None = None

    @property
    def magnitude(self) -> int:
        return self.severity + self.latency


class IdentityData(BaseModel):
    """Contact details captured at the report gate."""

    company_name: str = Field(..., min_length=1)
    email: EmailStr

    @field_validator("company_name", "email", mode="before")
    @classmethod
    def strip_whitespace(cls, v):
        return v.strip() if isinstance(v, str) else v


# =============================================================================
# Mechanics
# =============================================================================


class HeatmapPoint(BaseModel):
    """One category plotted as severity (x) against latency (y)."""

    model_config = ConfigDict(frozen=True)

    label: str
    x: int
    y: int
    status: HeatmapStatus


class CategoryExposure(BaseModel):
    """Revenue-at-risk computed for a single category."""

    model_config = ConfigDict(frozen=True)

    category: RiskCategory
    weight: float
    rar: int


class AuditMechanics(BaseModel):
    """Numbers derived from the risk inputs and revenue. Recomputed on every run."""

    model_config = ConfigDict(frozen=True)

    primary_rar: int = 0
    primary_risk_category: str = GENERAL_VOLATILITY
    primary_input: RiskInput | None = None
    volatility_index: int = Field(0, ge=0, le=100)
    heatmap_coordinates: list[HeatmapPoint] = Field(default_factory=list)
    category_rar: list[CategoryExposure] = Field(default_factory=list)


# =============================================================================
# Report
# =============================================================================


class AuditResults(BaseModel):
    model_config = ConfigDict(frozen=True)

    primary_rar: int
    primary_risk_category: str
    volatility_index: int
    unknown_vulnerabilities: list[str] = Field(default_factory=list)


class TeaserSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    headline: str
    critical_finding: str


class PriorityFix(BaseModel):
    model_config = ConfigDict(frozen=True)

    timeline: str
    task: str
    target: str


class AuditReport(BaseModel):
    """The final audit artifact handed to renderers and the lead store."""

    model_config = ConfigDict(frozen=True)

    audit_results: AuditResults
    heatmap_coordinates: list[HeatmapPoint]
    teaser_summary: TeaserSummary
    priority_fix_list: list[PriorityFix]


# Name used by the front end for the report payload.
GeminiAuditResponse = AuditReport
