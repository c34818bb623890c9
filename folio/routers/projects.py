from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from folio.auth import require_admin
from folio.database import get_db
from folio.schemas.common import DeletedRecord, DeleteResponse
from folio.schemas.project import (
    ProjectInput,
    ProjectListResponse,
    ProjectOut,
    ProjectPagination,
    ProjectResponse,
)
from folio.security import limiter
from folio.services.project_service import ProjectService

router = APIRouter(prefix="/api/projects", tags=["projects"])


def get_project_service(db: Session = Depends(get_db)) -> ProjectService:
    return ProjectService(db)


@router.get("", response_model=ProjectListResponse)
@limiter.limit("60/minute")
def list_projects(
    request: Request,
    category: str | None = Query(None),
    sort: str = Query("newest"),
    limit: int = Query(50, ge=1, le=100),
    page: int = Query(1, ge=1),
    service: ProjectService = Depends(get_project_service),
):
    result = service.list(category=category, sort=sort, page=page, limit=limit)
    return ProjectListResponse(
        data=[ProjectOut.model_validate(p) for p in result.items],
        pagination=ProjectPagination(
            **result.pagination(), total_projects=result.total
        ),
    )


@router.get("/{project_id}", response_model=ProjectResponse)
@limiter.limit("60/minute")
def get_project(
    request: Request,
    project_id: str,
    service: ProjectService = Depends(get_project_service),
):
    return ProjectResponse(data=ProjectOut.model_validate(service.get(project_id)))


@router.post("", response_model=ProjectResponse, status_code=201)
def create_project(
    payload: ProjectInput,
    _=Depends(require_admin),
    service: ProjectService = Depends(get_project_service),
):
    project = service.create(payload.model_dump(exclude_unset=True))
    return ProjectResponse(
        message="Project created successfully",
        data=ProjectOut.model_validate(project),
    )


@router.put("/{project_id}", response_model=ProjectResponse)
def update_project(
    project_id: str,
    payload: ProjectInput,
    _=Depends(require_admin),
    service: ProjectService = Depends(get_project_service),
):
    project = service.update(project_id, payload.model_dump(exclude_unset=True))
    return ProjectResponse(
        message="Project updated successfully",
        data=ProjectOut.model_validate(project),
    )


@router.delete(
    "/{project_id}", response_model=DeleteResponse, response_model_exclude_none=True
)
def delete_project(
    project_id: str,
    _=Depends(require_admin),
    service: ProjectService = Depends(get_project_service),
):
    deleted = service.delete(project_id)
    return DeleteResponse(
        message="Project deleted successfully", data=DeletedRecord(**deleted)
    )
