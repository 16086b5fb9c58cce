"""API router for v1 endpoints."""

from fastapi import APIRouter

from risk_audit.api import audits, scenarios

router = APIRouter()

# Questionnaire: industries, questions, per-category scoring
router.include_router(scenarios.router, tags=["scenarios"])

# Report generation and identity gate
router.include_router(audits.router, tags=["audits"])
