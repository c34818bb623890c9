"""Contact form submissions and their admin triage."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Any

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session

from folio.database import utcnow
from folio.errors import InvalidEmail, InvalidInput, NotFound, ValidationError
from folio.models.contact import Contact
from folio.schemas.contact import ContactPriority, ContactStatus
from folio.services.pagination import Page, page_offset
from folio.validation import (
    is_valid_email,
    require_object_id,
    validate_contact,
    validate_contact_triage,
)

logger = logging.getLogger(__name__)

RECENT_WINDOW = timedelta(days=7)
DEFAULT_RESPONDER = "admin"
MAX_USER_AGENT = 500

_SORTS = {
    "newest": (Contact.created_at.desc(), Contact.id.desc()),
    "oldest": (Contact.created_at.asc(), Contact.id.asc()),
    "name": (Contact.name.asc(), Contact.id.asc()),
    "email": (Contact.email.asc(), Contact.id.asc()),
}


def stamp_responded(
    contact: Contact, responded_by: str | None, now: datetime | None = None
) -> bool:
    """Record who replied and when, the first time status becomes replied.

    Returns True when the fields were written.
    """
    if contact.status != ContactStatus.REPLIED.value or contact.responded_at:
        return False
    contact.responded_at = now or utcnow()
    contact.responded_by = responded_by or DEFAULT_RESPONDER
    return True


def _optional(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


class ContactService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def submit(
        self,
        data: dict[str, Any],
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> Contact:
        """Store a public contact form submission.

        Raises:
            InvalidInput: name, email or message missing
            InvalidEmail: email fails the address pattern
            ValidationError: one or more field rules failed
        """
        if not all((data.get(k) or "").strip() for k in ("name", "email", "message")):
            raise InvalidInput("Name, email, and message are required")

        email = data["email"].strip().lower()
        if not is_valid_email(email):
            raise InvalidEmail()

        record = {
            "name": data["name"].strip(),
            "email": email,
            "phone": _optional(data.get("phone")),
            "subject": _optional(data.get("subject")),
            "message": data["message"].strip(),
        }
        errors = validate_contact(record)
        if errors:
            raise ValidationError(errors)

        contact = Contact(
            **record,
            status=ContactStatus.NEW.value,
            priority=ContactPriority.NORMAL.value,
            source="website",
            ip_address=ip_address,
            user_agent=(user_agent or "")[:MAX_USER_AGENT] or None,
        )
        self.db.add(contact)
        self.db.commit()
        self.db.refresh(contact)
        logger.info("New contact message from %s (%s)", contact.name, contact.id)
        return contact

    def list(
        self,
        status: str | None = None,
        priority: str | None = None,
        sort: str = "newest",
        page: int = 1,
        limit: int = 20,
    ) -> Page[Contact]:
        conditions = []
        if status:
            conditions.append(Contact.status == status)
        if priority:
            conditions.append(Contact.priority == priority)

        stmt = (
            select(Contact)
            .where(*conditions)
            .order_by(*_SORTS.get(sort, _SORTS["newest"]))
            .offset(page_offset(page, limit))
            .limit(limit)
        )
        items = list(self.db.scalars(stmt))
        total = self.db.scalar(select(func.count(Contact.id)).where(*conditions)) or 0
        return Page(items=items, total=total, page=page, limit=limit)

    def unread_count(self) -> int:
        return (
            self.db.scalar(
                select(func.count(Contact.id)).where(
                    Contact.status == ContactStatus.NEW.value
                )
            )
            or 0
        )

    def _load(self, contact_id: str) -> Contact:
        require_object_id(contact_id, "contact")
        contact = self.db.get(Contact, contact_id)
        if contact is None:
            raise NotFound("Contact message not found")
        return contact

    def get(self, contact_id: str) -> Contact:
        """Fetch a message; a ``new`` one is marked ``read`` on the way out."""
        contact = self._load(contact_id)
        if contact.status == ContactStatus.NEW.value:
            contact.status = ContactStatus.READ.value
            self.db.commit()
            self.db.refresh(contact)
        return contact

    def update_status(
        self,
        contact_id: str,
        data: dict[str, Any],
        responded_by: str | None = None,
    ) -> Contact:
        contact = self._load(contact_id)
        changes = {
            key: value
            for key, value in data.items()
            if key in ("status", "priority", "notes")
            and (value is not None or key == "notes")
        }
        errors = validate_contact_triage(changes)
        if errors:
            raise ValidationError(errors)

        for key, value in changes.items():
            setattr(contact, key, value)
        stamp_responded(contact, responded_by)

        self.db.commit()
        self.db.refresh(contact)
        logger.info("Contact %s updated: status=%s", contact.id, contact.status)
        return contact

    def delete(self, contact_id: str) -> dict[str, str]:
        contact = self._load(contact_id)
        summary = {"id": contact.id, "name": contact.name, "email": contact.email}
        self.db.delete(contact)
        self.db.commit()
        logger.info("Contact deleted: %s (%s)", summary["email"], summary["id"])
        return summary

    def stats(self, now: datetime | None = None) -> dict[str, int]:
        since = (now or utcnow()) - RECENT_WINDOW

        def per_status(value: str):
            return func.sum(case((Contact.status == value, 1), else_=0))

        row = self.db.execute(
            select(
                func.count(Contact.id).label("total"),
                per_status(ContactStatus.NEW.value).label("new"),
                per_status(ContactStatus.READ.value).label("read"),
                per_status(ContactStatus.REPLIED.value).label("replied"),
                per_status(ContactStatus.ARCHIVED.value).label("archived"),
                func.sum(case((Contact.created_at >= since, 1), else_=0)).label(
                    "recent_contacts"
                ),
            )
        ).one()
        return {
            "total": row.total or 0,
            "new": row.new or 0,
            "read": row.read or 0,
            "replied": row.replied or 0,
            "archived": row.archived or 0,
            "recent_contacts": row.recent_contacts or 0,
        }
