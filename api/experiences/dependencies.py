"""
Repository dependency for experience routes.

Tests swap the implementation through `app.dependency_overrides`.
"""

from __future__ import annotations

from fastapi import Depends

from core import db
from core.config import Settings, get_settings

from .repository import ExperienceRepository, PostgresExperienceRepository


async def get_repository(settings: Settings = Depends(get_settings)) -> ExperienceRepository:
    return PostgresExperienceRepository(db.pool(), query_timeout=settings.db_query_timeout_s)
