"""Blog service layer."""

from __future__ import annotations

import json
import logging
import math
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, case, cast, func, or_, select, true, update
from sqlalchemy.orm import Session

from folio.config import settings
from folio.database import utcnow
from folio.errors import InvalidInput, NotFound, ValidationError
from folio.models.blog import BlogPost
from folio.schemas.blog import BlogStatus
from folio.services.pagination import Page, page_offset
from folio.validation import require_object_id, validate_blog

logger = logging.getLogger(__name__)

WORDS_PER_MINUTE = 200
EXCERPT_LENGTH = 150
POPULAR_TAG_LIMIT = 10

_SORTS = {
    "newest": (
        BlogPost.published_at.desc(),
        BlogPost.created_at.desc(),
        BlogPost.id.desc(),
    ),
    "oldest": (
        BlogPost.published_at.asc(),
        BlogPost.created_at.asc(),
        BlogPost.id.asc(),
    ),
    "title": (BlogPost.title.asc(), BlogPost.id.asc()),
    "views": (BlogPost.views.desc(), BlogPost.id.asc()),
}


def compute_read_time(content: str) -> int:
    """Estimated reading time in minutes (minimum 1)."""
    word_count = len(content.split())
    return max(1, math.ceil(word_count / WORDS_PER_MINUTE))


def derive_excerpt(content: str) -> str:
    if len(content) <= EXCERPT_LENGTH:
        return content
    return content[:EXCERPT_LENGTH] + "..."


def normalize_tags(tags: list[str] | None) -> list[str]:
    """Lowercase, trim, drop empties and duplicates (first occurrence wins)."""
    seen: dict[str, None] = {}
    for tag in tags or []:
        cleaned = (tag or "").strip().lower()
        if cleaned:
            seen.setdefault(cleaned, None)
    return list(seen)


def stamp_published(post: BlogPost, now: datetime | None = None) -> bool:
    """Set ``published_at`` on the first transition to published.

    Returns True when the timestamp was written.
    """
    if post.status != BlogStatus.PUBLISHED.value or post.published_at is not None:
        return False
    post.published_at = now or utcnow()
    return True


def dump_tags(tags: list[str]) -> str:
    return json.dumps(tags, ensure_ascii=False)


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _normalize(data: dict[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key, value in data.items():
        if key == "tags":
            value = normalize_tags(value)
        elif isinstance(value, str):
            value = value.strip()
        out[key] = value
    return out


class BlogService:
    """Service for blog operations."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def _dialect(self) -> str:
        return self.db.get_bind().dialect.name

    def _tag_elements(self):
        """Each element of ``BlogPost.tags`` as a one-column ``tag.value`` table."""
        if self._dialect() == "postgresql":
            fn = func.json_array_elements_text(cast(BlogPost.tags, JSON))
        else:
            fn = func.json_each(BlogPost.tags)
        return fn.table_valued("value", name="tag")

    def _fold(self, expr):
        # SQLite's lower() leaves non-ASCII letters alone
        if self._dialect() == "sqlite":
            return func.casefold(expr)
        return func.lower(expr)

    def list(
        self,
        status: str = BlogStatus.PUBLISHED.value,
        tag: str | None = None,
        search: str | None = None,
        sort: str = "newest",
        page: int = 1,
        limit: int = 10,
    ) -> Page[BlogPost]:
        """Filter by status, exact tag and a case-insensitive search term.

        The search matches a substring of the title, the content or any single
        tag; tags are matched per element, never against their stored JSON.
        """
        conditions = [BlogPost.status == status]
        if tag:
            element = self._tag_elements()
            conditions.append(
                select(element.c.value)
                .where(element.c.value == tag.strip().lower())
                .exists()
            )
        if search:
            pattern = _like_pattern(search.strip().casefold())
            element = self._tag_elements()
            conditions.append(
                or_(
                    self._fold(BlogPost.title).like(pattern, escape="\\"),
                    self._fold(BlogPost.content).like(pattern, escape="\\"),
                    select(element.c.value)
                    .where(self._fold(element.c.value).like(pattern, escape="\\"))
                    .exists(),
                )
            )

        stmt = (
            select(BlogPost)
            .where(*conditions)
            .order_by(*_SORTS.get(sort, _SORTS["newest"]))
            .offset(page_offset(page, limit))
            .limit(limit)
        )
        items = list(self.db.scalars(stmt))
        total = self.db.scalar(select(func.count(BlogPost.id)).where(*conditions)) or 0
        logger.debug("Retrieved %d blogs", len(items))
        return Page(items=items, total=total, page=page, limit=limit)

    def popular_tags(self, limit: int = POPULAR_TAG_LIMIT) -> list[dict[str, Any]]:
        """Tag usage across published posts, most used first, ties by name."""
        element = self._tag_elements()
        uses = func.count().label("uses")
        stmt = (
            select(element.c.value.label("name"), uses)
            .select_from(BlogPost)
            .join(element, true())
            .where(BlogPost.status == BlogStatus.PUBLISHED.value)
            .group_by(element.c.value)
            .order_by(uses.desc(), element.c.value.asc())
            .limit(limit)
        )
        return [{"name": row.name, "count": row.uses} for row in self.db.execute(stmt)]

    def get(self, post_id: str) -> BlogPost:
        """Fetch a published post, counting the view.

        The counter is bumped before the status check, so probing an
        unpublished post still advances its views even though the caller
        gets a 404.
        """
        require_object_id(post_id, "blog")
        result = self.db.execute(
            update(BlogPost)
            .where(BlogPost.id == post_id)
            .values(views=BlogPost.views + 1, updated_at=BlogPost.updated_at)
        )
        self.db.commit()
        if result.rowcount == 0:
            raise NotFound("Blog not found")

        post = self.db.get(BlogPost, post_id)
        if post is None or post.status != BlogStatus.PUBLISHED.value:
            raise NotFound("Blog not found")
        logger.info("Blog retrieved: %s (views: %d)", post.title, post.views)
        return post

    def _load(self, post_id: str) -> BlogPost:
        require_object_id(post_id, "blog")
        post = self.db.get(BlogPost, post_id)
        if post is None:
            raise NotFound("Blog not found")
        return post

    def create(self, data: dict[str, Any], author: str | None = None) -> BlogPost:
        """Persist a new post.

        Raises:
            InvalidInput: title or content missing
            ValidationError: one or more field rules failed
        """
        if not (data.get("title") or "").strip() or not (
            data.get("content") or ""
        ).strip():
            raise InvalidInput("Title and content are required")

        fields = _normalize(data)
        record = {
            "title": fields["title"],
            "content": fields["content"],
            "excerpt": fields.get("excerpt") or derive_excerpt(fields["content"]),
            "tags": fields.get("tags", []),
            "status": fields.get("status") or BlogStatus.PUBLISHED.value,
            "author": fields.get("author") or author or settings.default_author,
        }
        errors = validate_blog(record)
        if errors:
            raise ValidationError(errors)

        post = BlogPost(
            **{**record, "tags": dump_tags(record["tags"])},
            read_time=compute_read_time(record["content"]),
            views=0,
        )
        stamp_published(post)
        self.db.add(post)
        self.db.commit()
        self.db.refresh(post)
        logger.info("New blog created: %s (%s)", post.title, post.id)
        return post

    def update(self, post_id: str, data: dict[str, Any]) -> BlogPost:
        post = self._load(post_id)
        changes = _normalize(data)
        if not changes.get("author", True):
            changes.pop("author")
        if "excerpt" in changes and not changes["excerpt"]:
            content = changes.get("content") or post.content
            changes["excerpt"] = derive_excerpt(content)

        current = {
            "title": post.title,
            "content": post.content,
            "excerpt": post.excerpt,
            "status": post.status,
            "author": post.author,
        }
        errors = validate_blog({**current, **changes})
        if errors:
            raise ValidationError(errors)

        for key, value in changes.items():
            if key == "tags":
                value = dump_tags(value)
            setattr(post, key, value)
        if "content" in changes:
            post.read_time = compute_read_time(post.content)
        stamp_published(post)

        self.db.commit()
        self.db.refresh(post)
        logger.info("Blog updated: %s (%s)", post.title, post.id)
        return post

    def delete(self, post_id: str) -> dict[str, str]:
        post = self._load(post_id)
        summary = {"id": post.id, "title": post.title}
        self.db.delete(post)
        self.db.commit()
        logger.info("Blog deleted: %s (%s)", summary["title"], summary["id"])
        return summary

    def stats(self) -> dict[str, Any]:
        row = self.db.execute(
            select(
                func.count(BlogPost.id).label("total_blogs"),
                func.sum(
                    case((BlogPost.status == BlogStatus.PUBLISHED.value, 1), else_=0)
                ).label("published_blogs"),
                func.sum(
                    case((BlogPost.status == BlogStatus.DRAFT.value, 1), else_=0)
                ).label("draft_blogs"),
                func.sum(BlogPost.views).label("total_views"),
                func.avg(BlogPost.read_time).label("average_read_time"),
            )
        ).one()
        return {
            "total_blogs": row.total_blogs or 0,
            "published_blogs": row.published_blogs or 0,
            "draft_blogs": row.draft_blogs or 0,
            "total_views": row.total_views or 0,
            "average_read_time": float(row.average_read_time or 0),
        }
