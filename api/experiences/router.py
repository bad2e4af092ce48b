"""
FastAPI router for experience endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path, Query, status

from . import schemas, service
from .dependencies import get_repository
from .repository import ExperienceRepository

# ids are bigserial.
MAX_EXPERIENCE_ID = 2**63 - 1

router = APIRouter(prefix="/experiences")


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_experience(
    payload: schemas.ExperienceRequest,
    repository: ExperienceRepository = Depends(get_repository),
) -> schemas.ExperienceResponse:
    return await service.create_experience(repository, payload)


@router.get("")
async def list_experiences(
    # Raw strings on purpose: bad values fall back to defaults instead of 400.
    limit: str | None = Query(default=None),
    offset: str | None = Query(default=None),
    repository: ExperienceRepository = Depends(get_repository),
) -> schemas.ExperienceListResponse:
    """
    Without limit/offset every active experience is returned; with either
    one the response is a single page.
    """
    page = service.parse_page_request(limit, offset)
    return await service.list_experiences(repository, page)


@router.get("/deleted")
async def list_deleted_experiences(
    limit: str | None = Query(default=None),
    offset: str | None = Query(default=None),
    repository: ExperienceRepository = Depends(get_repository),
) -> schemas.ExperienceListResponse:
    page = service.parse_page_request(limit, offset)
    return await service.list_deleted_experiences(repository, page)


@router.get("/{experience_id}")
async def get_experience(
    experience_id: int = Path(ge=1, le=MAX_EXPERIENCE_ID),
    repository: ExperienceRepository = Depends(get_repository),
) -> schemas.ExperienceResponse:
    return await service.get_experience(repository, experience_id)


@router.put("/{experience_id}")
async def update_experience(
    payload: schemas.ExperienceRequest,
    experience_id: int = Path(ge=1, le=MAX_EXPERIENCE_ID),
    repository: ExperienceRepository = Depends(get_repository),
) -> schemas.ExperienceResponse:
    return await service.update_experience(repository, experience_id, payload)


@router.delete("/{experience_id}")
async def delete_experience(
    experience_id: int = Path(ge=1, le=MAX_EXPERIENCE_ID),
    repository: ExperienceRepository = Depends(get_repository),
) -> schemas.MessageResponse:
    """
    Soft-delete. The row stays in storage and can be restored.
    """
    return await service.delete_experience(repository, experience_id)


@router.post("/{experience_id}/restore")
async def restore_experience(
    experience_id: int = Path(ge=1, le=MAX_EXPERIENCE_ID),
    repository: ExperienceRepository = Depends(get_repository),
) -> schemas.MessageResponse:
    return await service.restore_experience(repository, experience_id)


@router.delete("/{experience_id}/permanent")
async def hard_delete_experience(
    experience_id: int = Path(ge=1, le=MAX_EXPERIENCE_ID),
    repository: ExperienceRepository = Depends(get_repository),
) -> schemas.MessageResponse:
    return await service.hard_delete_experience(repository, experience_id)
