"""
Experience API schemas (request/response models).
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ExperienceRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str = Field(..., min_length=1, max_length=200)
    description: list[str] = Field(..., min_length=1)
    company: str = Field(..., min_length=1, max_length=200)
    start_date: str = Field(..., min_length=1, max_length=50)
    end_date: str = Field(..., min_length=1, max_length=50)


class ExperienceResponse(BaseModel):
    id: int
    title: str
    description: list[str]
    company: str
    start_date: str
    end_date: str
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None


class PaginationResponse(BaseModel):
    limit: int
    offset: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


class ExperienceListResponse(BaseModel):
    data: list[ExperienceResponse]
    pagination: PaginationResponse


class MessageResponse(BaseModel):
    message: str
