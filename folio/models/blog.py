"""Blog post model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from folio.database import Base, generate_object_id, utcnow


class BlogPost(Base):
    """Blog post.

    Status values:
    - draft: Not yet published
    - published: Live and visible
    - archived: No longer active but kept for records

    ``published_at`` is written once, on the first transition to published.
    """

    __tablename__ = "blog_posts"

    id: Mapped[str] = mapped_column(
        String(24), primary_key=True, default=generate_object_id
    )
    title: Mapped[str] = mapped_column(String(200))
    content: Mapped[str] = mapped_column(Text)
    excerpt: Mapped[str] = mapped_column(String(300), default="")
    tags: Mapped[str] = mapped_column(Text, default="[]")  # JSON array as text
    status: Mapped[str] = mapped_column(
        String(20), default="published", server_default="published", index=True
    )
    author: Mapped[str] = mapped_column(String(100))
    read_time: Mapped[int] = mapped_column(Integer, default=1)
    views: Mapped[int] = mapped_column(Integer, default=0, server_default="0")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )
    published_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, index=True
    )
