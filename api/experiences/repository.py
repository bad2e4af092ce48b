"""
Experience persistence.

`ExperienceRepository` is the contract the service layer talks to. There are
two implementations:
- `PostgresExperienceRepository`: raw SQL over an asyncpg pool.
- `InMemoryExperienceRepository`: dict-backed, for tests and local runs.

Both raise only `NotFoundError` and `StorageError`. Nothing here logs or
retries; callers decide what a failure means.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Iterator
from contextlib import contextmanager
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, TypeVar

import asyncpg

from core.pagination import (
    ALL,
    Page,
    PageRequest,
    PaginationMetadata,
    PaginationParams,
    build_metadata,
)

from .models import Experience, ExperienceFields

DEFAULT_QUERY_TIMEOUT_S = 5.0


class RepositoryError(Exception):
    pass


class NotFoundError(RepositoryError):
    def __init__(self, message: str = "resource not found") -> None:
        super().__init__(message)


class StorageError(RepositoryError):
    pass


class ExperienceRepository(ABC):
    """
    Cancellation contract: a cancelled call never returns a result. Task
    cancellation propagates as `asyncio.CancelledError` (a caller deadline
    such as `asyncio.wait_for` then reports its own `TimeoutError`). The
    repository's own query timeout, which covers acquiring a connection,
    raises `StorageError`.
    """

    @abstractmethod
    async def create(self, fields: ExperienceFields) -> Experience: ...

    @abstractmethod
    async def list(self, page: PageRequest = ALL) -> Page[Experience]:
        """
        Active experiences, newest created first.
        """

    @abstractmethod
    async def get(self, experience_id: int) -> Experience: ...

    @abstractmethod
    async def update(self, experience_id: int, fields: ExperienceFields) -> Experience: ...

    @abstractmethod
    async def delete(self, experience_id: int) -> None:
        """
        Soft-delete an active experience.
        """

    @abstractmethod
    async def restore(self, experience_id: int) -> None:
        """
        Clear `deleted_at` on a soft-deleted experience.
        """

    @abstractmethod
    async def hard_delete(self, experience_id: int) -> None:
        """
        Remove the row permanently, whatever its soft-delete state.
        """

    @abstractmethod
    async def list_deleted(self, page: PageRequest = ALL) -> Page[Experience]:
        """
        Soft-deleted experiences, most recently deleted first.
        """


def _page_metadata(page: PageRequest, total: int) -> PaginationMetadata:
    if isinstance(page, PaginationParams):
        return build_metadata(page.limit, page.offset, total)
    # Unpaginated: the whole set is one window.
    return build_metadata(total, 0, total)


# ---------------------------------------------------------------------------
# PostgreSQL
# ---------------------------------------------------------------------------

_COLUMNS = "id, title, description, company, start_date, end_date, created_at, updated_at, deleted_at"

_ACTIVE = "deleted_at IS NULL"
_DELETED = "deleted_at IS NOT NULL"

_DRIVER_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError)

T = TypeVar("T")


@contextmanager
def _storage_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except _DRIVER_ERRORS as exc:
        raise StorageError(f"experience {operation} failed: {type(exc).__name__}") from exc


def _affected_rows(status: str) -> int:
    """
    asyncpg returns the command tag, e.g. "UPDATE 1" or "DELETE 0".
    """
    tail = (status or "").rsplit(" ", 1)[-1]
    return int(tail) if tail.isdigit() else 0


def _row_to_experience(row: Any) -> Experience:
    return Experience(
        id=int(row["id"]),
        title=str(row["title"]),
        description=list(row["description"] or []),
        company=str(row["company"]),
        start_date=str(row["start_date"]),
        end_date=str(row["end_date"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        deleted_at=row["deleted_at"],
    )


class PostgresExperienceRepository(ExperienceRepository):
    def __init__(self, pool: asyncpg.Pool, *, query_timeout: float = DEFAULT_QUERY_TIMEOUT_S) -> None:
        self._pool = pool
        self._query_timeout = query_timeout

    async def _bounded(self, operation: str, work: Awaitable[T]) -> T:
        """
        One deadline for the whole storage interaction, connection
        acquisition included.
        """
        with _storage_errors(operation):
            return await asyncio.wait_for(work, timeout=self._query_timeout)

    async def create(self, fields: ExperienceFields) -> Experience:
        row = await self._bounded(
            "create",
            self._pool.fetchrow(
                f"""
                INSERT INTO experiences (title, description, company, start_date, end_date)
                VALUES ($1, $2, $3, $4, $5)
                RETURNING {_COLUMNS}
                """,
                fields.title,
                list(fields.description),
                fields.company,
                fields.start_date,
                fields.end_date,
            ),
        )
        if row is None:
            raise StorageError("experience create returned no row")
        return _row_to_experience(row)

    async def list(self, page: PageRequest = ALL) -> Page[Experience]:
        return await self._list(_ACTIVE, "created_at", page)

    async def list_deleted(self, page: PageRequest = ALL) -> Page[Experience]:
        return await self._list(_DELETED, "deleted_at", page)

    async def _list(self, predicate: str, sort_column: str, page: PageRequest) -> Page[Experience]:
        count_sql = f"SELECT count(*) FROM experiences WHERE {predicate}"
        rows_sql = f"""
            SELECT {_COLUMNS}
            FROM experiences
            WHERE {predicate}
            ORDER BY {sort_column} DESC, id DESC
        """
        args: list[int] = []
        if isinstance(page, PaginationParams):
            rows_sql += " LIMIT $1 OFFSET $2"
            args = [page.limit, page.offset]

        async def count_and_fetch() -> tuple[int, list[Any]]:
            async with self._pool.acquire() as conn:
                # Count and rows see the same snapshot.
                async with conn.transaction(isolation="repeatable_read", readonly=True):
                    total = await conn.fetchval(count_sql)
                    rows = await conn.fetch(rows_sql, *args)
            return int(total or 0), rows

        total, rows = await self._bounded("list", count_and_fetch())
        return Page(
            data=[_row_to_experience(row) for row in rows],
            pagination=_page_metadata(page, total),
        )

    async def get(self, experience_id: int) -> Experience:
        row = await self._bounded(
            "get",
            self._pool.fetchrow(
                f"""
                SELECT {_COLUMNS}
                FROM experiences
                WHERE id = $1
                  AND deleted_at IS NULL
                """,
                experience_id,
            ),
        )
        if row is None:
            raise NotFoundError()
        return _row_to_experience(row)

    async def update(self, experience_id: int, fields: ExperienceFields) -> Experience:
        row = await self._bounded(
            "update",
            self._pool.fetchrow(
                f"""
                UPDATE experiences
                SET title = $1,
                    description = $2,
                    company = $3,
                    start_date = $4,
                    end_date = $5,
                    updated_at = now()
                WHERE id = $6
                  AND deleted_at IS NULL
                RETURNING {_COLUMNS}
                """,
                fields.title,
                list(fields.description),
                fields.company,
                fields.start_date,
                fields.end_date,
                experience_id,
            ),
        )
        # No returned row means zero rows matched the update.
        if row is None:
            raise NotFoundError()
        return _row_to_experience(row)

    async def delete(self, experience_id: int) -> None:
        await self._execute_one(
            "delete",
            """
            UPDATE experiences
            SET deleted_at = now(),
                updated_at = now()
            WHERE id = $1
              AND deleted_at IS NULL
            """,
            experience_id,
        )

    async def restore(self, experience_id: int) -> None:
        await self._execute_one(
            "restore",
            """
            UPDATE experiences
            SET deleted_at = NULL,
                updated_at = now()
            WHERE id = $1
              AND deleted_at IS NOT NULL
            """,
            experience_id,
        )

    async def hard_delete(self, experience_id: int) -> None:
        await self._execute_one(
            "hard_delete",
            """
            DELETE FROM experiences
            WHERE id = $1
            """,
            experience_id,
        )

    async def _execute_one(self, operation: str, sql: str, *args: Any) -> None:
        status = await self._bounded(operation, self._pool.execute(sql, *args))
        if _affected_rows(status) == 0:
            raise NotFoundError()


# ---------------------------------------------------------------------------
# In-memory
# ---------------------------------------------------------------------------


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _detached(row: Experience) -> Experience:
    return replace(row, description=list(row.description))


class InMemoryExperienceRepository(ExperienceRepository):
    """
    Same contract as the PostgreSQL repository, backed by a dict.

    Every method finishes without awaiting, so each call is atomic on the
    event loop. Callers get copies; mutating a returned entity never
    touches the stored row.
    """

    def __init__(self, *, clock: Callable[[], datetime] = _utc_now) -> None:
        self._rows: dict[int, Experience] = {}
        self._next_id = 1
        self._clock = clock

    async def create(self, fields: ExperienceFields) -> Experience:
        now = self._clock()
        experience = Experience(
            id=self._next_id,
            title=fields.title,
            description=list(fields.description),
            company=fields.company,
            start_date=fields.start_date,
            end_date=fields.end_date,
            created_at=now,
            updated_at=now,
        )
        self._rows[experience.id] = experience
        self._next_id += 1
        return _detached(experience)

    async def list(self, page: PageRequest = ALL) -> Page[Experience]:
        rows = [row for row in self._rows.values() if not row.is_deleted]
        rows.sort(key=lambda row: (row.created_at, row.id), reverse=True)
        return self._window(rows, page)

    async def list_deleted(self, page: PageRequest = ALL) -> Page[Experience]:
        rows = [row for row in self._rows.values() if row.is_deleted]
        rows.sort(key=lambda row: (row.deleted_at, row.id), reverse=True)
        return self._window(rows, page)

    def _window(self, rows: list[Experience], page: PageRequest) -> Page[Experience]:
        total = len(rows)
        if isinstance(page, PaginationParams):
            rows = rows[page.offset : page.offset + page.limit]
        return Page(
            data=[_detached(row) for row in rows],
            pagination=_page_metadata(page, total),
        )

    def _active(self, experience_id: int) -> Experience:
        row = self._rows.get(experience_id)
        if row is None or row.is_deleted:
            raise NotFoundError()
        return row

    async def get(self, experience_id: int) -> Experience:
        return _detached(self._active(experience_id))

    async def update(self, experience_id: int, fields: ExperienceFields) -> Experience:
        updated = replace(
            self._active(experience_id),
            title=fields.title,
            description=list(fields.description),
            company=fields.company,
            start_date=fields.start_date,
            end_date=fields.end_date,
            updated_at=self._clock(),
        )
        self._rows[experience_id] = updated
        return _detached(updated)

    async def delete(self, experience_id: int) -> None:
        row = self._active(experience_id)
        now = self._clock()
        self._rows[experience_id] = replace(row, deleted_at=now, updated_at=now)

    async def restore(self, experience_id: int) -> None:
        row = self._rows.get(experience_id)
        if row is None or not row.is_deleted:
            raise NotFoundError()
        self._rows[experience_id] = replace(row, deleted_at=None, updated_at=self._clock())

    async def hard_delete(self, experience_id: int) -> None:
        if self._rows.pop(experience_id, None) is None:
            raise NotFoundError()
