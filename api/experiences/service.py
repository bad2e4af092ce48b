"""
Experience business logic.

Turns HTTP inputs into repository calls and repository errors into HTTP
errors:
- NotFoundError -> 404 with a generic message
- StorageError  -> 500 with an opaque message (details go to the log only)
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import HTTPException, status

from core.pagination import ALL, DEFAULT_LIMIT, DEFAULT_OFFSET, Page, PageRequest, build_params

from . import schemas
from .models import Experience, ExperienceFields
from .repository import ExperienceRepository, NotFoundError, StorageError

NOT_FOUND_DETAIL = "resource not found"
INTERNAL_ERROR_DETAIL = "the server encountered a problem and could not process your request"

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

logger = logging.getLogger(__name__)


def _lenient_int(raw: str | None, default: int) -> int:
    try:
        value = int((raw or "").strip())
    except ValueError:
        return default
    # Anything outside int64 cannot be bound as a bigint parameter.
    if not _INT64_MIN <= value <= _INT64_MAX:
        return default
    return value


def parse_page_request(limit: str | None, offset: str | None) -> PageRequest:
    """
    No limit and no offset means "everything". If either one is present the
    caller gets a page; unparsable values fall back to the defaults.
    """
    if not (limit or "").strip() and not (offset or "").strip():
        return ALL
    return build_params(
        _lenient_int(limit, DEFAULT_LIMIT),
        _lenient_int(offset, DEFAULT_OFFSET),
    )


@contextmanager
def _repository_errors(operation: str, experience_id: int | None = None) -> Iterator[None]:
    try:
        yield
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_DETAIL) from exc
    except StorageError as exc:
        logger.exception(
            "experience_storage_failure operation=%s experience_id=%s",
            operation,
            experience_id,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_ERROR_DETAIL,
        ) from exc


def _to_fields(payload: schemas.ExperienceRequest) -> ExperienceFields:
    return ExperienceFields(
        title=payload.title,
        description=list(payload.description),
        company=payload.company,
        start_date=payload.start_date,
        end_date=payload.end_date,
    )


def _to_response(experience: Experience) -> schemas.ExperienceResponse:
    return schemas.ExperienceResponse(
        id=experience.id,
        title=experience.title,
        description=list(experience.description),
        company=experience.company,
        start_date=experience.start_date,
        end_date=experience.end_date,
        created_at=experience.created_at,
        updated_at=experience.updated_at,
        deleted_at=experience.deleted_at,
    )


def _to_list_response(page: Page[Experience]) -> schemas.ExperienceListResponse:
    meta = page.pagination
    return schemas.ExperienceListResponse(
        data=[_to_response(experience) for experience in page.data],
        pagination=schemas.PaginationResponse(
            limit=meta.limit,
            offset=meta.offset,
            total=meta.total,
            total_pages=meta.total_pages,
            has_next=meta.has_next,
            has_prev=meta.has_prev,
        ),
    )


async def create_experience(
    repository: ExperienceRepository,
    payload: schemas.ExperienceRequest,
) -> schemas.ExperienceResponse:
    with _repository_errors("create"):
        experience = await repository.create(_to_fields(payload))
    logger.info("experience_created experience_id=%s", experience.id)
    return _to_response(experience)


async def list_experiences(
    repository: ExperienceRepository,
    page: PageRequest = ALL,
) -> schemas.ExperienceListResponse:
    with _repository_errors("list"):
        result = await repository.list(page)
    return _to_list_response(result)


async def list_deleted_experiences(
    repository: ExperienceRepository,
    page: PageRequest = ALL,
) -> schemas.ExperienceListResponse:
    with _repository_errors("list_deleted"):
        result = await repository.list_deleted(page)
    return _to_list_response(result)


async def get_experience(repository: ExperienceRepository, experience_id: int) -> schemas.ExperienceResponse:
    with _repository_errors("get", experience_id):
        experience = await repository.get(experience_id)
    return _to_response(experience)


async def update_experience(
    repository: ExperienceRepository,
    experience_id: int,
    payload: schemas.ExperienceRequest,
) -> schemas.ExperienceResponse:
    with _repository_errors("update", experience_id):
        experience = await repository.update(experience_id, _to_fields(payload))
    logger.info("experience_updated experience_id=%s", experience_id)
    return _to_response(experience)


async def delete_experience(repository: ExperienceRepository, experience_id: int) -> schemas.MessageResponse:
    with _repository_errors("delete", experience_id):
        await repository.delete(experience_id)
    logger.info("experience_deleted experience_id=%s", experience_id)
    return schemas.MessageResponse(message="experience deleted successfully")


async def restore_experience(repository: ExperienceRepository, experience_id: int) -> schemas.MessageResponse:
    with _repository_errors("restore", experience_id):
        await repository.restore(experience_id)
    logger.info("experience_restored experience_id=%s", experience_id)
    return schemas.MessageResponse(message="experience restored successfully")


async def hard_delete_experience(
    repository: ExperienceRepository,
    experience_id: int,
) -> schemas.MessageResponse:
    with _repository_errors("hard_delete", experience_id):
        await repository.hard_delete(experience_id)
    logger.info("experience_hard_deleted experience_id=%s", experience_id)
    return schemas.MessageResponse(message="experience permanently deleted")
