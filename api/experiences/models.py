"""
Experience entity as returned by the repository.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ExperienceFields:
    """
    Writable part of an experience (create and update input).
    """

    title: str
    description: list[str]
    company: str
    start_date: str
    end_date: str


@dataclass(frozen=True)
class Experience:
    id: int
    title: str
    description: list[str]
    company: str
    start_date: str
    end_date: str
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None
