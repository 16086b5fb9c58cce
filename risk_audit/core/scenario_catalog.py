"""Industry scenario catalog.

Maps (industry, risk category) to the questions asked and the function that
turns the answers into a raw (severity, latency) pair. Each industry starts
from the generic scenario set and overrides the categories where its risks
look different. Sliders report 0-100; pickers report one of their options.

The catalog is built once at import and is read-only afterwards.
"""

import math
from types import MappingProxyType
from typing import Any, Mapping

from risk_audit.core.errors import ScenarioResolutionError
from risk_audit.core.schemas_audit import CATEGORY_ORDER, RiskCategory
from risk_audit.core.schemas_scenarios import (
    IndustryScenario,
    ScenarioQuestion,
    no_second_question,
)

DEFAULT_INDUSTRY = "default"

# Display order for the foundation step.
INDUSTRIES: tuple[str, ...] = (
    "Manufacturing & Industrial",
    "SaaS / Software",
    "Professional Services",
    "Retail / E-commerce",
    "Construction & Real Estate",
    "Skilled Trades",
    "Logistics & Transportation",
    "Healthcare / MedTech",
    "Financial Services / Fintech",
    "Energy & Utilities",
    "Other",
)


def normalize(value: Any) -> int:
    """Map a 0-100 slider value onto the 0-10 scoring scale (rounding up)."""
    return math.ceil(float(value) / 10)


def _pick(answer: Any, scores: Mapping[str, int], default: int) -> int:
    """Look up the score for a picker answer, falling back for unlisted answers."""
    return scores.get(answer, default) if isinstance(answer, str) else default


def _fixed(question: ScenarioQuestion):
    """Second question that does not depend on the first answer."""

    def _second(_answer1: Any) -> ScenarioQuestion:
        return question

    return _second


# =============================================================================
# Generic scenarios (used as-is for "default" and as the base for every industry)
# =============================================================================

_GENERIC_RECOVERY_PLAN = ScenarioQuestion(
    id="gen_rec",
    type="picker",
    label="Recovery Plan Status",
    options=("Full Backup Active", "Plan Exists (Untested)", "No Plan"),
    tooltip="Do you have a written, tested plan to switch vendors immediately if your primary source fails?",
)


def _score_generic_supply(concentration: Any, plan: Any) -> tuple[int, int]:
    latency = _pick(plan, {"Full Backup Active": 3, "No Plan": 9}, 6)
    return normalize(100 - float(concentration)), latency


def _score_inverse_slider(value: Any, _answer2: Any = None) -> tuple[int, int]:
    return normalize(100 - float(value)), 5


def _score_direct_slider(value: Any, _answer2: Any = None) -> tuple[int, int]:
    return normalize(value), 5


GENERIC_SCENARIOS: Mapping[RiskCategory, IndustryScenario] = MappingProxyType({
    RiskCategory.SUPPLY_CHAIN: IndustryScenario(
        context_tags=("Single Source", "Logistics", "Quality Fade"),
        q1=ScenarioQuestion(
            id="gen_supply",
            type="slider",
            label="Supplier Concentration",
            min_label="Single Source",
            max_label="Distributed",
            tooltip=(
                "Risk increases when a large % of revenue relies on a single vendor. "
                '"Safe" usually means no vendor controls >20% of your input.'
            ),
        ),
        q2=_fixed(_GENERIC_RECOVERY_PLAN),
        calculate_score=_score_generic_supply,
    ),
    RiskCategory.CASH_FLOW: IndustryScenario(
        context_tags=("Late Payments", "Payroll"),
        q1=ScenarioQuestion(
            id="gen_cash",
            type="slider",
            label="Cash Runway",
            min_label="< 30 Days",
            max_label="6+ Months",
        ),
        calculate_score=_score_inverse_slider,
    ),
    RiskCategory.WORKFORCE: IndustryScenario(
        context_tags=("Key Person", "Burnout"),
        q1=ScenarioQuestion(
            id="gen_wf",
            type="slider",
            label="Key Person Dependency",
            min_label="Redundant Teams",
            max_label="Single Points of Failure",
        ),
        calculate_score=_score_direct_slider,
    ),
    RiskCategory.INFRASTRUCTURE_TOOLS: IndustryScenario(
        context_tags=("SaaS Outage", "Data Loss"),
        q1=ScenarioQuestion(
            id="gen_tool",
            type="slider",
            label="Platform Dependency",
            min_label="Open Standard",
            max_label="Vendor Locked",
        ),
        calculate_score=_score_direct_slider,
    ),
    RiskCategory.WEATHER_PHYSICAL: IndustryScenario(
        context_tags=("Access", "Power"),
        q1=ScenarioQuestion(
            id="gen_wea",
            type="slider",
            label="Physical Vulnerability",
            min_label="Safe Zone",
            max_label="High Risk Zone",
        ),
        calculate_score=_score_direct_slider,
    ),
})


# =============================================================================
# Construction & Real Estate
# =============================================================================

# Above this "Guaranteed" reading the buffer question is not asked.
CONSTRUCTION_GUARANTEED_DELIVERY = 80

_CONSTRUCTION_BUFFER = ScenarioQuestion(
    id="inventory_buffer",
    type="picker",
    label="On-Site Inventory Buffer",
    options=("< 3 Days (JIT)", "1-2 Weeks", "Massive Stockpile (>1 Mo)"),
    tooltip=(
        "Just-in-Time (JIT) is efficient for cash flow but fatal for continuity. "
        "A buffer allows you to keep working even if the supply chain breaks."
    ),
)


def _construction_buffer_question(resilience: Any) -> ScenarioQuestion | None:
    try:
        if float(resilience) >= CONSTRUCTION_GUARANTEED_DELIVERY:
            return None
    except (TypeError, ValueError):
        pass
    return _CONSTRUCTION_BUFFER


def _score_construction_supply(resilience: Any, buffer: Any) -> tuple[int, int]:
    risk = normalize(100 - float(resilience))
    if buffer == "< 3 Days (JIT)":
        risk += 3
    elif buffer == "Massive Stockpile (>1 Mo)":
        risk -= 2
    severity = min(10, max(1, risk))
    return severity, 8 if risk > 7 else 4


_CONSTRUCTION = {
    RiskCategory.SUPPLY_CHAIN: IndustryScenario(
        context_tags=("Lumber Shortage", "Steel Tariffs", "Vendor Insolvency", "Shipping Delays"),
        q1=ScenarioQuestion(
            id="supply_resilience",
            type="slider",
            label="Material Lead Time Volatility",
            helper_text="Predictability of critical path delivery dates.",
            min_label="Unpredictable",
            max_label="Guaranteed",
            tooltip=(
                'In construction, "Volatility" is the enemy. Even if you have a supplier, '
                "if their delivery dates fluctuate by >20%, your project schedule (and margin) is at risk."
            ),
        ),
        q2=_construction_buffer_question,
        calculate_score=_score_construction_supply,
    ),
}


# =============================================================================
# Skilled Trades
# =============================================================================


def _score_trades_workforce(time_to_hire: Any, pipeline: Any) -> tuple[int, int]:
    latency = _pick(pipeline, {"None / Rely on Senior Hires": 9, "Robust (1:1 Ratio)": 3}, 5)
    return normalize(time_to_hire), latency


def _score_trades_supply(availability: Any, distributors: Any) -> tuple[int, int]:
    return normalize(availability), 8 if distributors == "Single Source Loyalty" else 4


_SKILLED_TRADES = {
    RiskCategory.WORKFORCE: IndustryScenario(
        context_tags=("Labor Shortage", "Aging Workforce", "Training Gaps"),
        q1=ScenarioQuestion(
            id="hiring_difficulty",
            type="slider",
            label="Time-to-Hire for Lead Technicians",
            min_label="< 2 Weeks",
            max_label="> 3 Months",
            tooltip=(
                "If your lead electrician or plumber quits today, how long until a fully "
                "qualified replacement is in the van generating revenue?"
            ),
        ),
        q2=_fixed(ScenarioQuestion(
            id="apprentice_ratio",
            type="picker",
            label="Apprentice Pipeline",
            options=("Robust (1:1 Ratio)", "Thin Pipeline", "None / Rely on Senior Hires"),
            tooltip=(
                "Buying talent is expensive and slow. Building talent (Apprenticeships) "
                "lowers latency but requires upfront investment."
            ),
        )),
        calculate_score=_score_trades_workforce,
    ),
    RiskCategory.SUPPLY_CHAIN: IndustryScenario(
        context_tags=("Parts Availability", "Distributor Lock-in", "Price Inflation"),
        q1=ScenarioQuestion(
            id="parts_availability",
            type="slider",
            label="Parts Availability Risk",
            min_label="Always in Stock",
            max_label="Backorder Hell",
            tooltip=(
                "Are you constantly waiting on HVAC units, breakers, or specialized fittings? "
                "Waiting = No Revenue."
            ),
        ),
        q2=_fixed(ScenarioQuestion(
            id="distributor_count",
            type="picker",
            label="Distributor Redundancy",
            options=("3+ Active Accounts", "Single Primary + Backup", "Single Source Loyalty"),
            tooltip=(
                "Loyalty to one supply house is great for pricing until they run out of stock. "
                "Do you have active credit lines elsewhere?"
            ),
        )),
        calculate_score=_score_trades_supply,
    ),
}


# =============================================================================
# SaaS / Software
# =============================================================================


def _score_saas_supply(dependency: Any, fallback: Any) -> tuple[int, int]:
    latency = _pick(fallback, {"Auto-Failover": 2, "Hard-Coded / No Backup": 9}, 5)
    return normalize(dependency), latency


def _score_saas_workforce(bus_factor: Any, docs: Any) -> tuple[int, int]:
    return normalize(bus_factor), 9 if docs == 'None / "Ask Dave"' else 4


_SAAS = {
    RiskCategory.SUPPLY_CHAIN: IndustryScenario(
        context_tags=("API Dependency", "Vendor Insolvency", "Price Hikes"),
        q1=ScenarioQuestion(
            id="api_dependency",
            type="slider",
            label="Critical API Dependency",
            helper_text="Reliance on 3rd party APIs (e.g. OpenAI, Stripe, Twilio).",
            min_label="Independent",
            max_label="Totally Dependent",
            tooltip=(
                'Your "Supply Chain" is code. If a critical API (like an AI model or SMS gateway) '
                "goes down or triples its price, does your product stop working?"
            ),
        ),
        q2=_fixed(ScenarioQuestion(
            id="fallback_code",
            type="picker",
            label="API Fallback Capability",
            options=("Auto-Failover", "Manual Switch", "Hard-Coded / No Backup"),
            tooltip=(
                "Can you switch providers (e.g. from Twilio to Plivo) instantly via a code switch, "
                "or would it require a full rewrite?"
            ),
        )),
        calculate_score=_score_saas_supply,
    ),
    RiskCategory.WORKFORCE: IndustryScenario(
        context_tags=("Bus Factor", "Burnout", "IP Retention"),
        q1=ScenarioQuestion(
            id="bus_factor",
            type="slider",
            label='Technical "Bus Factor"',
            min_label="Documented / Distributed",
            max_label="Tribal Knowledge",
            tooltip=(
                "If your Lead Engineer gets hit by a bus (or poached by Google), does development halt? "
                "0% = Full Documentation, 100% = Only in their head."
            ),
        ),
        q2=_fixed(ScenarioQuestion(
            id="documentation",
            type="picker",
            label="Codebase Documentation",
            options=("Live/Auto-Generated", "Outdated Wiki", 'None / "Ask Dave"'),
            tooltip=(
                "Code without documentation is a liability. It increases the time required "
                "for a new hire to become productive (Latency)."
            ),
        )),
        calculate_score=_score_saas_workforce,
    ),
}


# =============================================================================
# Professional Services
# =============================================================================

# At or below this share from the top clients the contract question is skipped.
SERVICES_DIVERSIFIED_CONCENTRATION = 20

_CONTRACT_CONSISTENCY = ScenarioQuestion(
    id="contract_structure",
    type="picker",
    label="Contract Consistency",
    options=("Long-term Retainers", "Mix of Both", "One-off Projects"),
    tooltip=(
        "Retainers provide predictable cash flow (Low Latency). "
        '"Eat what you kill" projects create feast/famine cycles (High Latency).'
    ),
)


def _services_contract_question(concentration: Any) -> ScenarioQuestion | None:
    try:
        if float(concentration) <= SERVICES_DIVERSIFIED_CONCENTRATION:
            return None
    except (TypeError, ValueError):
        pass
    return _CONTRACT_CONSISTENCY


def _score_services_cash(concentration: Any, contracts: Any) -> tuple[int, int]:
    severity = normalize(concentration)
    if contracts == "One-off Projects":
        severity += 2
    return min(10, severity), 5


def _score_services_workforce(dependency: Any, delegation: Any) -> tuple[int, int]:
    return normalize(dependency), 9 if delegation == "Founder Does Work" else 4


_PROFESSIONAL_SERVICES = {
    RiskCategory.CASH_FLOW: IndustryScenario(
        context_tags=("Client Concentration", "WIP", "Retainers"),
        q1=ScenarioQuestion(
            id="client_conc",
            type="slider",
            label="Revenue Concentration",
            helper_text="% of revenue from top 3 clients.",
            min_label="Diversified (<20%)",
            max_label="Concentrated (>60%)",
            tooltip=(
                "If your biggest client fires you tomorrow, do you lose >20% of your revenue? "
                "That is a solvency risk."
            ),
        ),
        q2=_services_contract_question,
        calculate_score=_score_services_cash,
    ),
    RiskCategory.WORKFORCE: IndustryScenario(
        context_tags=("Partner Burnout", "Non-Competes", "Succession"),
        q1=ScenarioQuestion(
            id="partner_dependence",
            type="slider",
            label="Rainmaker Dependency",
            min_label="Sales System",
            max_label="Founder Led Sales",
            tooltip=(
                "Does new business depend entirely on the Founder's network? If so, the business "
                "has very little enterprise value without you."
            ),
        ),
        q2=_fixed(ScenarioQuestion(
            id="mid_level_management",
            type="picker",
            label="Delivery Delegation",
            options=("Team Delivers 100%", "Founder Reviews Final", "Founder Does Work"),
            tooltip=(
                "Can you take a 2-week vacation without the quality of work suffering? "
                "If not, you have a delivery bottleneck."
            ),
        )),
        calculate_score=_score_services_workforce,
    ),
}


# =============================================================================
# Logistics & Transportation
# =============================================================================


def _score_fleet(age: Any, plan: Any) -> tuple[int, int]:
    return normalize(age), 9 if plan == "Run to Failure" else 4


def _score_drivers(turnover: Any, pipeline: Any) -> tuple[int, int]:
    latency = _pick(pipeline, {"Trucks Sitting Empty": 10, "Waitlist of Drivers": 2}, 5)
    return normalize(turnover), latency


_LOGISTICS = {
    RiskCategory.WEATHER_PHYSICAL: IndustryScenario(
        context_tags=("Route Disruption", "Fuel Costs", "Vehicle Maintenance"),
        q1=ScenarioQuestion(
            id="fleet_age",
            type="slider",
            label="Fleet Reliability (Avg Age)",
            min_label="Modern (< 3 Yrs)",
            max_label="Aging (> 7 Yrs)",
            tooltip=(
                "Old trucks break down. Breakdown = missed delivery + repair cost + reputational damage. "
                "It is a compounding risk."
            ),
        ),
        q2=_fixed(ScenarioQuestion(
            id="maintenance_plan",
            type="picker",
            label="Maintenance Protocol",
            options=("Predictive / PM", "Scheduled Intervals", "Run to Failure"),
            tooltip=(
                'Reactive maintenance ("Run to Failure") has 10x the latency of Predictive maintenance. '
                "You cannot schedule a breakdown."
            ),
        )),
        calculate_score=_score_fleet,
    ),
    RiskCategory.WORKFORCE: IndustryScenario(
        context_tags=("Driver Shortage", "Safety Compliance", "Turnover"),
        q1=ScenarioQuestion(
            id="driver_turnover",
            type="slider",
            label="Driver Turnover Rate",
            min_label="Stable (< 20%)",
            max_label="High (> 80%)",
            tooltip=(
                "The industry average is high, but if you are constantly recruiting, your safety "
                "rating and delivery reliability will suffer."
            ),
        ),
        q2=_fixed(ScenarioQuestion(
            id="driver_pipeline",
            type="picker",
            label="Recruiting Pipeline",
            options=("Waitlist of Drivers", "Always Hiring", "Trucks Sitting Empty"),
            tooltip="A parked truck costs money. Do you have a bench of qualified drivers ready to step in?",
        )),
        calculate_score=_score_drivers,
    ),
}


# =============================================================================
# Healthcare / MedTech
# =============================================================================


def _score_ehr(dependency: Any, insurance: Any) -> tuple[int, int]:
    return normalize(dependency), 3 if insurance == "Comprehensive Policy" else 8


def _score_consumables(dependency: Any, stock: Any) -> tuple[int, int]:
    return normalize(dependency), 3 if stock == "> 1 Month On-Hand" else 8


_HEALTHCARE = {
    RiskCategory.INFRASTRUCTURE_TOOLS: IndustryScenario(
        context_tags=("EHR", "HIPAA", "Ransomware"),
        q1=ScenarioQuestion(
            id="ehr_downtime",
            type="slider",
            label="Operational Dependency on EHR",
            min_label="Can operate on Paper",
            max_label="Total Paralysis",
            tooltip=(
                "If the internet cuts or ransomware hits, can you legally and safely treat patients "
                "using paper charts?"
            ),
        ),
        q2=_fixed(ScenarioQuestion(
            id="cyber_insurance",
            type="picker",
            label="Cyber Insurance Coverage",
            options=("Comprehensive Policy", "Basic Coverage", "Self-Insured / None"),
            tooltip=(
                "Ransomware payments average $1M+. Do you have a policy that covers business "
                "interruption and data recovery?"
            ),
        )),
        calculate_score=_score_ehr,
    ),
    RiskCategory.SUPPLY_CHAIN: IndustryScenario(
        context_tags=("PPE", "Reagents", "Implants"),
        q1=ScenarioQuestion(
            id="single_source",
            type="slider",
            label="Consumable Dependency",
            min_label="Generics Available",
            max_label="Proprietary / Single",
            tooltip=(
                'In healthcare, "Single Source" is a compliance risk. If a specific catheter is '
                "unavailable, can you legally use a substitute?"
            ),
        ),
        q2=_fixed(ScenarioQuestion(
            id="emergency_stock",
            type="picker",
            label="Emergency Stockpile Status",
            options=("> 1 Month On-Hand", "1-2 Weeks", "Just-in-Time"),
            tooltip="JIT is dangerous in MedTech. A 2-week buffer is often the minimum standard for resilience.",
        )),
        calculate_score=_score_consumables,
    ),
}


# =============================================================================
# Retail / E-commerce
# =============================================================================


def _score_retail_supply(volatility: Any, backup: Any) -> tuple[int, int]:
    return normalize(volatility), 9 if backup == "Single Point of Failure" else 4


_RETAIL = {
    RiskCategory.SUPPLY_CHAIN: IndustryScenario(
        context_tags=("Inventory", "Shipping Costs", "Seasonality", "Port Strikes"),
        q1=ScenarioQuestion(
            id="inventory_depth",
            type="slider",
            label="Inventory Turnover Risk",
            min_label="Optimized",
            max_label="Volatile",
            tooltip="High volatility = stockouts or dead stock. Ideally, you want a stable flow matching demand.",
        ),
        q2=_fixed(ScenarioQuestion(
            id="3pl_backup",
            type="picker",
            label="Logistics / 3PL Redundancy",
            options=("Multiple Active Carriers", "Single Partner + Backup", "Single Point of Failure"),
            tooltip="If your main shipper raises rates or strikes, do you have an active account with a competitor?",
        )),
        calculate_score=_score_retail_supply,
    ),
}


# =============================================================================
# Manufacturing & Industrial
# =============================================================================


def _score_manufacturing_supply(dependency: Any, recovery: Any) -> tuple[int, int]:
    latency = _pick(recovery, {"Rapid Repair (< 1 Wk)": 3, "Months (Custom Import)": 10}, 6)
    return normalize(dependency), latency


_MANUFACTURING = {
    RiskCategory.SUPPLY_CHAIN: IndustryScenario(
        context_tags=("Raw Materials", "Shipping", "Quality Control", "Custom Tooling"),
        q1=ScenarioQuestion(
            id="single_source_components",
            type="slider",
            label="Single-Source Components",
            helper_text="Percentage of BOM (Bill of Materials) that comes from exactly 1 factory.",
            min_label="Multi-Sourced",
            max_label="Single-Sourced",
            tooltip=(
                "If a specific part (e.g., a custom chipset or molded plastic) comes from only one "
                "factory, your production line is fragile."
            ),
        ),
        q2=_fixed(ScenarioQuestion(
            id="equipment_failure",
            type="picker",
            label="Critical Equipment Recovery",
            options=("Rapid Repair (< 1 Wk)", "Weeks (Parts Delay)", "Months (Custom Import)"),
            tooltip=(
                "Focus on your single most critical machine. If it fails today and parts are "
                "unavailable, how long until you are back online?"
            ),
        )),
        calculate_score=_score_manufacturing_supply,
    ),
}


INDUSTRY_OVERRIDES: Mapping[str, Mapping[RiskCategory, IndustryScenario]] = {
    "Construction & Real Estate": _CONSTRUCTION,
    "Skilled Trades": _SKILLED_TRADES,
    "SaaS / Software": _SAAS,
    "Professional Services": _PROFESSIONAL_SERVICES,
    "Logistics & Transportation": _LOGISTICS,
    "Healthcare / MedTech": _HEALTHCARE,
    "Retail / E-commerce": _RETAIL,
    "Manufacturing & Industrial": _MANUFACTURING,
    "Financial Services / Fintech": {},
    "Energy & Utilities": {},
    "Other": {},
}


def _build_catalog() -> Mapping[str, Mapping[RiskCategory, IndustryScenario]]:
    missing = [c.value for c in CATEGORY_ORDER if c not in GENERIC_SCENARIOS]
    if missing:
        raise ScenarioResolutionError(f"Default scenario set is missing: {', '.join(missing)}")

    catalog: dict[str, Mapping[RiskCategory, IndustryScenario]] = {
        DEFAULT_INDUSTRY: MappingProxyType(dict(GENERIC_SCENARIOS)),
    }
    for industry, overrides in INDUSTRY_OVERRIDES.items():
        catalog[industry] = MappingProxyType({**GENERIC_SCENARIOS, **overrides})
    return MappingProxyType(catalog)


SCENARIO_CATALOG = _build_catalog()


# =============================================================================
# Lookups
# =============================================================================


def lookup(industry: str, category: RiskCategory) -> IndustryScenario:
    """
    Resolve the scenario for an industry and category.

    Args:
        industry: Industry label; unknown industries use the default set
        category: Risk category

    Returns:
        The matching IndustryScenario

    Raises:
        ScenarioResolutionError: If the category is missing even from the default set
    """
    category = RiskCategory(category)
    scenarios = SCENARIO_CATALOG.get(industry)
    if scenarios is not None and category in scenarios:
        return scenarios[category]

    scenario = SCENARIO_CATALOG[DEFAULT_INDUSTRY].get(category)
    if scenario is None:
        raise ScenarioResolutionError(f"No scenario for {category.value} in '{industry}' or default")
    return scenario


def resolve_second_question(
    industry: str, category: RiskCategory, answer1: Any
) -> ScenarioQuestion | None:
    """Return the follow-up question for a first answer, or None when there is none."""
    return lookup(industry, category).q2(answer1)


def has_industry(industry: str) -> bool:
    return industry in SCENARIO_CATALOG and industry != DEFAULT_INDUSTRY


def list_industries() -> list[str]:
    return list(INDUSTRIES)


__all__ = [
    "DEFAULT_INDUSTRY",
    "GENERIC_SCENARIOS",
    "INDUSTRIES",
    "SCENARIO_CATALOG",
    "has_industry",
    "list_industries",
    "lookup",
    "no_second_question",
    "normalize",
    "resolve_second_question",
]
