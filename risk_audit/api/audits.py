"""API endpoints for generating audit reports and unlocking them."""

from uuid import uuid4

from fastapi import APIRouter, BackgroundTasks, HTTPException, Path
from pydantic import BaseModel, Field

from risk_audit.core.audit_report import generate_audit_report
from risk_audit.core.errors import PersistenceUnavailable
from risk_audit.core.logging import get_logger
from risk_audit.core.schemas_audit import AuditReport, Foundation, IdentityData, RiskInput
from risk_audit.db import leads as leads_db

logger = get_logger(__name__)

router = APIRouter(prefix="/audits")


# ============================================================================
# Pydantic Models
# ============================================================================


class AuditRequest(BaseModel):
    """Completed questionnaire."""

    foundation: Foundation
    risk_inputs: list[RiskInput] = Field(..., min_length=1, description="One input per category")
    augment: bool = Field(True, description="Allow the generative narrative when configured")


class AuditResponse(BaseModel):
    audit_id: str
    report: AuditReport


class FinalizeResponse(BaseModel):
    audit_id: str
    status: str


# ============================================================================
# Endpoints
# ============================================================================


@router.post("", response_model=AuditResponse)
async def create_audit(body: AuditRequest, background_tasks: BackgroundTasks) -> AuditResponse:
    """
    Generate the audit report and save an anonymous draft lead in the background.

    Returns:
        The report plus an audit_id used to unlock it at the identity gate
    """
    categories = [i.category for i in body.risk_inputs]
    if len(set(categories)) != len(categories):
        raise HTTPException(status_code=422, detail="Each risk category may appear only once")

    audit_id = str(uuid4())
    try:
        report = await generate_audit_report(
            body.foundation,
            body.risk_inputs,
            use_augmentation=body.augment,
            audit_id=audit_id,
        )
    except Exception as e:
        logger.error(f"Error generating audit report: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e

    background_tasks.add_task(
        leads_db.draft_lead, audit_id, body.foundation, body.risk_inputs, report
    )
    return AuditResponse(audit_id=audit_id, report=report)


@router.post("/{audit_id}/finalize", response_model=FinalizeResponse)
async def finalize_audit(
    body: IdentityData,
    audit_id: str = Path(..., description="Audit reference returned by POST /audits"),
) -> FinalizeResponse:
    """Attach company name and email to the audit's draft lead."""
    try:
        leads_db.finalize_lead(audit_id, body)
        return FinalizeResponse(audit_id=audit_id, status="finalized")
    except PersistenceUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e)) from e
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Error finalizing lead for audit {audit_id}: {e}", exc_info=True)
        raise HTTPException(status_code=502, detail="Lead store rejected the update") from e
