"""Pytest configuration and fixtures."""

import os

import pytest

# Collaborators stay unconfigured unless a test patches settings explicitly.
os.environ["AUDIT_ENGINE_ENV"] = "test"
for _name in ("SUPABASE_URL", "SUPABASE_SERVICE_ROLE_KEY", "ANTHROPIC_API_KEY"):
    os.environ.pop(_name, None)

from risk_audit.core.config import get_settings  # noqa: E402
from risk_audit.core.schemas_audit import (  # noqa: E402
    Foundation,
    RiskCategory,
    RiskInput,
    RiskInputMetadata,
)
from risk_audit.db.supabase_client import get_supabase  # noqa: E402


@pytest.fixture(autouse=True)
def clear_cached_clients():
    """Reset cached settings and clients around every test."""
    get_settings.cache_clear()
    get_supabase.cache_clear()
    yield
    get_settings.cache_clear()
    get_supabase.cache_clear()


@pytest.fixture
def construction_foundation() -> Foundation:
    return Foundation(industry="Construction & Real Estate", revenue=5_000_000)


@pytest.fixture
def worked_example_inputs() -> list[RiskInput]:
    """Supply chain at 8/8, every other category at 5/5."""
    return [
        RiskInput(
            category=RiskCategory.SUPPLY_CHAIN,
            severity=8,
            latency=8,
            metadata=RiskInputMetadata(
                question1_label="Material Lead Time Volatility",
                answer1_value=25,
                question2_label="On-Site Inventory Buffer",
                answer2_value="< 3 Days (JIT)",
            ),
        ),
        RiskInput(category=RiskCategory.CASH_FLOW, severity=5, latency=5),
        RiskInput(category=RiskCategory.WORKFORCE, severity=5, latency=5),
        RiskInput(category=RiskCategory.INFRASTRUCTURE_TOOLS, severity=5, latency=5),
        RiskInput(category=RiskCategory.WEATHER_PHYSICAL, severity=5, latency=5),
    ]
