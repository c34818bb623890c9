"""Blog posts: public reading, admin authoring."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from folio.auth import require_admin
from folio.database import get_db
from folio.schemas.blog import (
    BlogInput,
    BlogListResponse,
    BlogOut,
    BlogPagination,
    BlogResponse,
    BlogStats,
    BlogStatsResponse,
    BlogStatus,
    BlogSummary,
    PopularTag,
)
from folio.schemas.common import DeletedRecord, DeleteResponse
from folio.security import limiter
from folio.services.auth_service import Identity
from folio.services.blog_service import BlogService

router = APIRouter(prefix="/api/blogs", tags=["blogs"])


def get_blog_service(db: Session = Depends(get_db)) -> BlogService:
    return BlogService(db)


@router.get("", response_model=BlogListResponse)
@limiter.limit("60/minute")
def list_blogs(
    request: Request,
    status: str = Query(BlogStatus.PUBLISHED.value),
    tag: str | None = Query(None),
    search: str | None = Query(None),
    sort: str = Query("newest"),
    limit: int = Query(10, ge=1, le=100),
    page: int = Query(1, ge=1),
    service: BlogService = Depends(get_blog_service),
):
    """List posts without their bodies, plus the most used tags."""
    result = service.list(
        status=status, tag=tag, search=search, sort=sort, page=page, limit=limit
    )
    return BlogListResponse(
        data=[BlogSummary.model_validate(post) for post in result.items],
        pagination=BlogPagination(**result.pagination(), total_blogs=result.total),
        popular_tags=[PopularTag(**tag) for tag in service.popular_tags()],
    )


@router.get("/stats", response_model=BlogStatsResponse)
def blog_stats(
    _=Depends(require_admin),
    service: BlogService = Depends(get_blog_service),
):
    return BlogStatsResponse(data=BlogStats(**service.stats()))


@router.get("/{post_id}", response_model=BlogResponse)
@limiter.limit("60/minute")
def get_blog(
    request: Request,
    post_id: str,
    service: BlogService = Depends(get_blog_service),
):
    return BlogResponse(data=BlogOut.model_validate(service.get(post_id)))


@router.post("", response_model=BlogResponse, status_code=201)
def create_blog(
    payload: BlogInput,
    identity: Identity = Depends(require_admin),
    service: BlogService = Depends(get_blog_service),
):
    post = service.create(
        payload.model_dump(exclude_unset=True), author=identity.username
    )
    return BlogResponse(
        message="Blog created successfully", data=BlogOut.model_validate(post)
    )


@router.put("/{post_id}", response_model=BlogResponse)
def update_blog(
    post_id: str,
    payload: BlogInput,
    _=Depends(require_admin),
    service: BlogService = Depends(get_blog_service),
):
    post = service.update(post_id, payload.model_dump(exclude_unset=True))
    return BlogResponse(
        message="Blog updated successfully", data=BlogOut.model_validate(post)
    )


@router.delete(
    "/{post_id}", response_model=DeleteResponse, response_model_exclude_none=True
)
def delete_blog(
    post_id: str,
    _=Depends(require_admin),
    service: BlogService = Depends(get_blog_service),
):
    deleted = service.delete(post_id)
    return DeleteResponse(
        message="Blog deleted successfully", data=DeletedRecord(**deleted)
    )
