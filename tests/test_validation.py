"""Tests for field validators."""

from __future__ import annotations

import pytest

from folio.errors import InvalidId
from folio.validation import (
    is_valid_email,
    require_object_id,
    validate_blog,
    validate_contact,
    validate_contact_triage,
    validate_project,
)

VALID_PROJECT = {
    "title": "Portfolio",
    "category": "Other",
    "image": "http://img.example.com/a.webp",
    "description": "",
}


@pytest.mark.parametrize(
    "email,expected",
    [
        ("a@b.co", True),
        ("first.last@sub.example.org", True),
        ("no-at-sign", False),
        ("two@@example.com", False),
        ("spaces in@example.com", False),
        ("", False),
        (None, False),
    ],
)
def test_is_valid_email(email, expected):
    assert is_valid_email(email) is expected


def test_valid_project_passes():
    assert validate_project(VALID_PROJECT) == []


def test_project_length_limits():
    errors = validate_project(
        {**VALID_PROJECT, "title": "x" * 101, "description": "d" * 501}
    )
    assert errors == [
        "Project title cannot exceed 100 characters",
        "Description cannot exceed 500 characters",
    ]


def test_project_urls():
    errors = validate_project(
        {
            **VALID_PROJECT,
            "project_url": "ftp://x",
            "github_url": "https://github.com/",
        }
    )
    assert errors == [
        "Please provide a valid project URL",
        "Please provide a valid GitHub URL",
    ]


def test_blog_rules():
    valid = {"title": "T", "content": "0123456789", "status": "draft"}
    assert validate_blog(valid) == []
    errors = validate_blog(
        {"title": "", "content": "short", "excerpt": "e" * 301, "status": "gone"}
    )
    assert errors == [
        "Blog title is required",
        "Blog content must be at least 10 characters long",
        "Excerpt cannot exceed 300 characters",
        "Status must be either draft, published, or archived",
    ]


def test_contact_phone_formats():
    base = {"name": "Jo", "email": "jo@example.com", "message": "m" * 10}
    assert validate_contact({**base, "phone": "+44 (20) 7946-0958"}) == []
    assert validate_contact({**base, "phone": "+0123"}) == [
        "Please provide a valid phone number"
    ]


def test_contact_message_bounds():
    base = {"name": "Jo", "email": "jo@example.com"}
    assert validate_contact({**base, "message": "m" * 2001}) == [
        "Message cannot exceed 2000 characters"
    ]


def test_triage_only_checks_present_keys():
    assert validate_contact_triage({}) == []
    assert validate_contact_triage({"notes": "n" * 1001}) == [
        "Notes cannot exceed 1000 characters"
    ]


def test_require_object_id():
    assert require_object_id("a" * 24, "blog") == "a" * 24
    with pytest.raises(InvalidId, match="Invalid blog ID format"):
        require_object_id("g" * 24, "blog")
    with pytest.raises(InvalidId):
        require_object_id("a" * 23, "blog")
