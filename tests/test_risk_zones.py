"""Tests for magnitude zone classification."""

import pytest

from risk_audit.core.risk_zones import RiskZone, classify_magnitude


@pytest.mark.parametrize(
    ("severity", "latency", "zone"),
    [
        (10, 10, RiskZone.CRITICAL),
        (8, 7, RiskZone.CRITICAL),
        (7, 7, RiskZone.HIGH),
        (6, 6, RiskZone.HIGH),
        (6, 5, RiskZone.MODERATE),
        (5, 4, RiskZone.MODERATE),
        (4, 4, RiskZone.MANAGED),
        (1, 1, RiskZone.MANAGED),
    ],
)
def test_classify_magnitude(severity, latency, zone):
    assert classify_magnitude(severity, latency) == zone


def test_zone_values_are_lowercase_strings():
    assert classify_magnitude(10, 10).value == "critical"
