from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from folio.auth import require_admin
from folio.database import get_db
from folio.observability.metrics import CONTACT_SUBMISSIONS
from folio.schemas.common import DeletedRecord, DeleteResponse
from folio.schemas.contact import (
    ContactListResponse,
    ContactOut,
    ContactPagination,
    ContactReceipt,
    ContactReceiptResponse,
    ContactResponse,
    ContactStats,
    ContactStatsResponse,
    ContactSubmission,
    ContactSummary,
    ContactTriage,
)
from folio.security import client_ip, limiter
from folio.services.auth_service import Identity
from folio.services.contact_service import ContactService

router = APIRouter(prefix="/api/contact", tags=["contact"])


def get_contact_service(db: Session = Depends(get_db)) -> ContactService:
    return ContactService(db)


@router.post("", response_model=ContactReceiptResponse, status_code=201)
@limiter.limit("5/minute")
def submit_contact(
    request: Request,
    payload: ContactSubmission,
    service: ContactService = Depends(get_contact_service),
):
    """Public contact form endpoint; echoes back only a receipt."""
    contact = service.submit(
        payload.model_dump(),
        ip_address=client_ip(request),
        user_agent=request.headers.get("user-agent"),
    )
    CONTACT_SUBMISSIONS.inc()
    return ContactReceiptResponse(
        message="Thank you for your message! I'll get back to you soon.",
        data=ContactReceipt(
            id=contact.id,
            name=contact.name,
            email=contact.email,
            submitted_at=contact.created_at,
        ),
    )


@router.get("", response_model=ContactListResponse)
def list_contacts(
    status: str | None = Query(None),
    priority: str | None = Query(None),
    sort: str = Query("newest"),
    limit: int = Query(20, ge=1, le=100),
    page: int = Query(1, ge=1),
    _=Depends(require_admin),
    service: ContactService = Depends(get_contact_service),
):
    result = service.list(
        status=status, priority=priority, sort=sort, page=page, limit=limit
    )
    return ContactListResponse(
        data=[ContactSummary.model_validate(c) for c in result.items],
        pagination=ContactPagination(
            **result.pagination(), total_contacts=result.total
        ),
        unread_count=service.unread_count(),
    )


@router.get("/stats", response_model=ContactStatsResponse)
def contact_stats(
    _=Depends(require_admin),
    service: ContactService = Depends(get_contact_service),
):
    return ContactStatsResponse(data=ContactStats(**service.stats()))


@router.get("/{contact_id}", response_model=ContactResponse)
def get_contact(
    contact_id: str,
    _=Depends(require_admin),
    service: ContactService = Depends(get_contact_service),
):
    return ContactResponse(data=ContactOut.model_validate(service.get(contact_id)))


@router.put("/{contact_id}", response_model=ContactResponse)
def update_contact(
    contact_id: str,
    payload: ContactTriage,
    identity: Identity = Depends(require_admin),
    service: ContactService = Depends(get_contact_service),
):
    contact = service.update_status(
        contact_id,
        payload.model_dump(exclude_unset=True),
        responded_by=identity.username,
    )
    return ContactResponse(
        message="Contact updated successfully",
        data=ContactOut.model_validate(contact),
    )


@router.delete(
    "/{contact_id}", response_model=DeleteResponse, response_model_exclude_none=True
)
def delete_contact(
    contact_id: str,
    _=Depends(require_admin),
    service: ContactService = Depends(get_contact_service),
):
    deleted = service.delete(contact_id)
    return DeleteResponse(
        message="Contact deleted successfully", data=DeletedRecord(**deleted)
    )
