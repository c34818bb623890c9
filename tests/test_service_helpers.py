"""Pure helpers of the blog and contact services."""

from __future__ import annotations

from datetime import datetime, timezone

from folio.models.blog import BlogPost
from folio.models.contact import Contact
from folio.services.blog_service import (
    compute_read_time,
    derive_excerpt,
    normalize_tags,
    stamp_published,
)
from folio.services.contact_service import stamp_responded

T0 = datetime(2025, 1, 1, tzinfo=timezone.utc)
T1 = datetime(2025, 6, 1, tzinfo=timezone.utc)


def test_compute_read_time():
    assert compute_read_time("") == 1
    assert compute_read_time(" ".join(["w"] * 200)) == 1
    assert compute_read_time(" ".join(["w"] * 201)) == 2


def test_derive_excerpt():
    assert derive_excerpt("x" * 150) == "x" * 150
    assert derive_excerpt("x" * 151) == "x" * 150 + "..."


def test_normalize_tags():
    assert normalize_tags([" Python", "python", "", "  ", "Web"]) == ["python", "web"]
    assert normalize_tags(None) == []


def test_stamp_published_once():
    post = BlogPost(status="draft", published_at=None)
    assert stamp_published(post, T0) is False
    post.status = "published"
    assert stamp_published(post, T0) is True
    assert stamp_published(post, T1) is False
    assert post.published_at == T0


def test_stamp_responded_once():
    contact = Contact(status="read")
    assert stamp_responded(contact, "captain", T0) is False
    contact.status = "replied"
    assert stamp_responded(contact, None, T0) is True
    assert contact.responded_by == "admin"
    assert stamp_responded(contact, "captain", T1) is False
    assert contact.responded_at == T0
