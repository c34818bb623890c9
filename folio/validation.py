"""Field rules for each entity.

Each ``validate_*`` function takes the full candidate record (after defaults
and normalization) and returns a list of human-readable messages, one per
failed field. An empty list means the record may be persisted.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from folio.database import is_object_id
from folio.errors import InvalidId

PROJECT_CATEGORIES = (
    "Web Development",
    "Mobile Development",
    "Desktop Application",
    "Data Analysis",
    "Machine Learning",
    "UI/UX Design",
    "Other",
)
BLOG_STATUSES = ("draft", "published", "archived")
CONTACT_STATUSES = ("new", "read", "replied", "archived")
CONTACT_PRIORITIES = ("low", "normal", "high", "urgent")

MIN_PASSWORD_LENGTH = 6
MIN_USERNAME_LENGTH = 3

MAX_PROJECT_TITLE = 100
MAX_PROJECT_DESCRIPTION = 500
MAX_BLOG_TITLE = 200
MIN_BLOG_CONTENT = 10
MAX_BLOG_EXCERPT = 300
MIN_CONTACT_NAME = 2
MAX_CONTACT_NAME = 100
MAX_CONTACT_SUBJECT = 200
MIN_CONTACT_MESSAGE = 10
MAX_CONTACT_MESSAGE = 2000
MAX_CONTACT_NOTES = 1000

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
IMAGE_URL_RE = re.compile(r"^https?://.+\.(jpg|jpeg|png|gif|webp)$", re.IGNORECASE)
HTTP_URL_RE = re.compile(r"^https?://.+")
GITHUB_URL_RE = re.compile(r"^https?://github\.com/.+")
PHONE_RE = re.compile(r"^\+?[1-9]\d{0,15}$")
_PHONE_STRIP_RE = re.compile(r"[\s\-()]")


def is_valid_email(value: str | None) -> bool:
    return bool(value) and EMAIL_RE.match(value) is not None


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_admin(data: Mapping[str, Any]) -> list[str]:
    errors: list[str] = []
    username = data.get("username")
    if _blank(username):
        errors.append("Username is required")
    elif len(username) < MIN_USERNAME_LENGTH:
        errors.append(
            f"Username must be at least {MIN_USERNAME_LENGTH} characters long"
        )
    if not is_valid_email(data.get("email")):
        errors.append("Please provide a valid email address")
    return errors


def validate_project(data: Mapping[str, Any]) -> list[str]:
    errors: list[str] = []

    title = data.get("title")
    if _blank(title):
        errors.append("Project title is required")
    elif len(title) > MAX_PROJECT_TITLE:
        errors.append(f"Project title cannot exceed {MAX_PROJECT_TITLE} characters")

    category = data.get("category")
    if _blank(category):
        errors.append("Project category is required")
    elif category not in PROJECT_CATEGORIES:
        errors.append("Invalid project category")

    image = data.get("image")
    if _blank(image):
        errors.append("Project image URL is required")
    elif not IMAGE_URL_RE.match(image):
        errors.append("Please provide a valid image URL")

    description = data.get("description") or ""
    if len(description) > MAX_PROJECT_DESCRIPTION:
        errors.append(
            f"Description cannot exceed {MAX_PROJECT_DESCRIPTION} characters"
        )

    project_url = data.get("project_url")
    if project_url and not HTTP_URL_RE.match(project_url):
        errors.append("Please provide a valid project URL")

    github_url = data.get("github_url")
    if github_url and not GITHUB_URL_RE.match(github_url):
        errors.append("Please provide a valid GitHub URL")

    return errors


def validate_blog(data: Mapping[str, Any]) -> list[str]:
    errors: list[str] = []

    title = data.get("title")
    if _blank(title):
        errors.append("Blog title is required")
    elif len(title) > MAX_BLOG_TITLE:
        errors.append(f"Blog title cannot exceed {MAX_BLOG_TITLE} characters")

    content = data.get("content")
    if _blank(content):
        errors.append("Blog content is required")
    elif len(content) < MIN_BLOG_CONTENT:
        errors.append(
            f"Blog content must be at least {MIN_BLOG_CONTENT} characters long"
        )

    excerpt = data.get("excerpt") or ""
    if len(excerpt) > MAX_BLOG_EXCERPT:
        errors.append(f"Excerpt cannot exceed {MAX_BLOG_EXCERPT} characters")

    if data.get("status") not in BLOG_STATUSES:
        errors.append("Status must be either draft, published, or archived")

    return errors


def validate_contact(data: Mapping[str, Any]) -> list[str]:
    errors: list[str] = []

    name = data.get("name")
    if _blank(name):
        errors.append("Name is required")
    elif len(name) < MIN_CONTACT_NAME:
        errors.append(f"Name must be at least {MIN_CONTACT_NAME} characters long")
    elif len(name) > MAX_CONTACT_NAME:
        errors.append(f"Name cannot exceed {MAX_CONTACT_NAME} characters")

    if not is_valid_email(data.get("email")):
        errors.append("Please provide a valid email address")

    phone = data.get("phone")
    if phone and not PHONE_RE.match(_PHONE_STRIP_RE.sub("", phone)):
        errors.append("Please provide a valid phone number")

    subject = data.get("subject") or ""
    if len(subject) > MAX_CONTACT_SUBJECT:
        errors.append(f"Subject cannot exceed {MAX_CONTACT_SUBJECT} characters")

    message = data.get("message")
    if _blank(message):
        errors.append("Message is required")
    elif len(message) < MIN_CONTACT_MESSAGE:
        errors.append(
            f"Message must be at least {MIN_CONTACT_MESSAGE} characters long"
        )
    elif len(message) > MAX_CONTACT_MESSAGE:
        errors.append(f"Message cannot exceed {MAX_CONTACT_MESSAGE} characters")

    errors.extend(validate_contact_triage(data))
    return errors


def validate_contact_triage(data: Mapping[str, Any]) -> list[str]:
    """Rules for the admin-editable fields of a contact message."""
    errors: list[str] = []
    if "status" in data and data["status"] not in CONTACT_STATUSES:
        errors.append("Status must be new, read, replied, or archived")
    if "priority" in data and data["priority"] not in CONTACT_PRIORITIES:
        errors.append("Priority must be low, normal, high, or urgent")
    notes = data.get("notes") or ""
    if len(notes) > MAX_CONTACT_NOTES:
        errors.append(f"Notes cannot exceed {MAX_CONTACT_NOTES} characters")
    return errors


def require_object_id(value: str, noun: str) -> str:
    """Reject anything that is not a 24-hex-character id before querying."""
    if not is_object_id(value):
        raise InvalidId(f"Invalid {noun} ID format")
    return value
