from __future__ import annotations

from datetime import datetime
from enum import Enum

from folio.schemas.common import CamelModel, Pagination


class ContactStatus(str, Enum):
    NEW = "new"
    READ = "read"
    REPLIED = "replied"
    ARCHIVED = "archived"


class ContactPriority(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


class ContactSubmission(CamelModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    subject: str | None = None
    message: str | None = None


class ContactTriage(CamelModel):
    """Admin-editable fields; only the ones sent are applied."""

    status: str | None = None
    priority: str | None = None
    notes: str | None = None


class ContactReceipt(CamelModel):
    id: str
    name: str
    email: str
    submitted_at: datetime


class ContactReceiptResponse(CamelModel):
    success: bool = True
    message: str
    data: ContactReceipt


class ContactSummary(CamelModel):
    """Admin list view; request metadata is withheld."""

    id: str
    name: str
    email: str
    phone: str | None = None
    subject: str | None = None
    message: str
    status: ContactStatus
    priority: ContactPriority
    source: str
    notes: str | None = None
    responded_at: datetime | None = None
    responded_by: str | None = None
    created_at: datetime
    updated_at: datetime


class ContactOut(ContactSummary):
    ip_address: str | None = None
    user_agent: str | None = None


class ContactPagination(Pagination):
    total_contacts: int


class ContactListResponse(CamelModel):
    success: bool = True
    data: list[ContactSummary]
    pagination: ContactPagination
    unread_count: int


class ContactResponse(CamelModel):
    success: bool = True
    message: str | None = None
    data: ContactOut


class ContactStats(CamelModel):
    total: int = 0
    new: int = 0
    read: int = 0
    replied: int = 0
    archived: int = 0
    recent_contacts: int = 0


class ContactStatsResponse(CamelModel):
    success: bool = True
    data: ContactStats
