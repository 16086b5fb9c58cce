"""Magnitude zones used to label heatmap points and stored risk vectors."""

from enum import Enum


class RiskZone(str, Enum):
    """Criticality band for a category's severity + latency (2..20)."""

    CRITICAL = "critical"
    HIGH = "high"
    MODERATE = "moderate"
    MANAGED = "managed"


# Lower bound (inclusive) of each band, checked from the top.
ZONE_THRESHOLDS: tuple[tuple[int, RiskZone], ...] = (
    (15, RiskZone.CRITICAL),
    (12, RiskZone.HIGH),
    (9, RiskZone.MODERATE),
)


def classify_magnitude(severity: int, latency: int) -> RiskZone:
    magnitude = severity + latency
    for floor, zone in ZONE_THRESHOLDS:
        if magnitude >= floor:
            return zone
    return RiskZone.MANAGED
