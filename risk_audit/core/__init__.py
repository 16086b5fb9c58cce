"""Deterministic risk-audit core."""
