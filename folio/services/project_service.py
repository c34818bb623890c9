"""Project catalogue operations."""

from __future__ import annotations

import json
import logging
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from folio.errors import InvalidInput, NotFound, ValidationError
from folio.models.project import Project
from folio.services.pagination import Page, page_offset
from folio.validation import require_object_id, validate_project

logger = logging.getLogger(__name__)

_SORTS = {
    "newest": (Project.created_at.desc(), Project.id.desc()),
    "oldest": (Project.created_at.asc(), Project.id.asc()),
    "title": (Project.title.asc(), Project.id.asc()),
}
_TEXT_FIELDS = ("title", "category", "image", "description", "project_url", "github_url")


def _normalize(data: dict[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key, value in data.items():
        if key in _TEXT_FIELDS and isinstance(value, str):
            value = value.strip()
            if key in ("project_url", "github_url") and not value:
                value = None
        elif key == "technologies":
            value = [t.strip() for t in value or [] if t and t.strip()]
        out[key] = value
    return out


def _as_record(project: Project) -> dict[str, Any]:
    return {
        "title": project.title,
        "category": project.category,
        "image": project.image,
        "description": project.description,
        "technologies": json.loads(project.technologies or "[]"),
        "project_url": project.project_url,
        "github_url": project.github_url,
    }


def _apply(project: Project, record: dict[str, Any]) -> None:
    for key, value in record.items():
        if key == "technologies":
            value = json.dumps(value, ensure_ascii=False)
        if key == "description" and value is None:
            value = ""
        setattr(project, key, value)


class ProjectService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def list(
        self,
        category: str | None = None,
        sort: str = "newest",
        page: int = 1,
        limit: int = 50,
    ) -> Page[Project]:
        stmt = select(Project)
        count_stmt = select(func.count(Project.id))
        if category:
            stmt = stmt.where(Project.category == category)
            count_stmt = count_stmt.where(Project.category == category)

        stmt = (
            stmt.order_by(*_SORTS.get(sort, _SORTS["newest"]))
            .offset(page_offset(page, limit))
            .limit(limit)
        )
        items = list(self.db.scalars(stmt))
        total = self.db.scalar(count_stmt) or 0
        return Page(items=items, total=total, page=page, limit=limit)

    def get(self, project_id: str) -> Project:
        require_object_id(project_id, "project")
        project = self.db.get(Project, project_id)
        if project is None:
            raise NotFound("Project not found")
        return project

    def create(self, data: dict[str, Any]) -> Project:
        """Persist a new project.

        Raises:
            InvalidInput: title, category or image missing
            ValidationError: one or more field rules failed
        """
        if not all((data.get(k) or "").strip() for k in ("title", "category", "image")):
            raise InvalidInput("Title, category, and image are required")

        record = {
            "description": "",
            "technologies": [],
            "project_url": None,
            "github_url": None,
            **_normalize(data),
        }
        errors = validate_project(record)
        if errors:
            raise ValidationError(errors)

        project = Project()
        _apply(project, record)
        self.db.add(project)
        self.db.commit()
        self.db.refresh(project)
        logger.info("Project created: %s (%s)", project.title, project.id)
        return project

    def update(self, project_id: str, data: dict[str, Any]) -> Project:
        project = self.get(project_id)
        changes = _normalize(data)
        record = {**_as_record(project), **changes}
        errors = validate_project(record)
        if errors:
            raise ValidationError(errors)

        _apply(project, changes)
        self.db.commit()
        self.db.refresh(project)
        logger.info("Project updated: %s (%s)", project.title, project.id)
        return project

    def delete(self, project_id: str) -> dict[str, str]:
        project = self.get(project_id)
        summary = {"id": project.id, "title": project.title}
        self.db.delete(project)
        self.db.commit()
        logger.info("Project deleted: %s (%s)", summary["title"], summary["id"])
        return summary
