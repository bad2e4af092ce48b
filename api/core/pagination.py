"""
Limit/offset pagination helpers.

A list request is either `ALL` (no pagination requested, every matching row
is returned) or a `PaginationParams` window. `PaginationParams` clamps
out-of-range values to the defaults instead of rejecting them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

DEFAULT_LIMIT = 10
MAX_LIMIT = 100
DEFAULT_OFFSET = 0
# Postgres OFFSET is a bigint.
MAX_OFFSET = 2**63 - 1

T = TypeVar("T")


@dataclass(frozen=True)
class Unpaginated:
    pass


ALL = Unpaginated()


@dataclass(frozen=True)
class PaginationParams:
    limit: int = DEFAULT_LIMIT
    offset: int = DEFAULT_OFFSET

    def __post_init__(self) -> None:
        if self.limit <= 0 or self.limit > MAX_LIMIT:
            object.__setattr__(self, "limit", DEFAULT_LIMIT)
        if self.offset < 0 or self.offset > MAX_OFFSET:
            object.__setattr__(self, "offset", DEFAULT_OFFSET)


PageRequest = Union[Unpaginated, PaginationParams]


@dataclass(frozen=True)
class PaginationMetadata:
    limit: int
    offset: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


@dataclass(frozen=True)
class Page(Generic[T]):
    data: list[T]
    pagination: PaginationMetadata


def build_params(limit: int, offset: int) -> PaginationParams:
    return PaginationParams(limit=limit, offset=offset)


def build_metadata(limit: int, offset: int, total: int) -> PaginationMetadata:
    # limit is 0 only for an unpaginated listing of an empty set.
    total_pages = -(-total // limit) if limit > 0 else 1
    return PaginationMetadata(
        limit=limit,
        offset=offset,
        total=total,
        total_pages=max(total_pages, 1),
        has_next=offset + limit < total,
        has_prev=offset > 0,
    )
