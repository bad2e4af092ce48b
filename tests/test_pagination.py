"""
Tests for core/pagination.py - limit/offset params and metadata.
"""

import pytest

from core.pagination import (
    ALL,
    DEFAULT_LIMIT,
    PaginationParams,
    Unpaginated,
    build_metadata,
    build_params,
)


class TestBuildParams:
    """Out-of-range values are clamped, never rejected."""

    def test_valid_values_kept(self):
        assert build_params(25, 50) == PaginationParams(limit=25, offset=50)

    def test_max_limit_is_allowed(self):
        assert build_params(100, 0).limit == 100

    @pytest.mark.parametrize("limit", [-5, 0, 101, 999])
    def test_out_of_range_limit_falls_back_to_default(self, limit):
        assert build_params(limit, 0).limit == DEFAULT_LIMIT

    def test_negative_offset_falls_back_to_zero(self):
        assert build_params(10, -1).offset == 0

    def test_defaults(self):
        params = PaginationParams()
        assert params.limit == 10
        assert params.offset == 0


class TestPaginationParams:
    """The constructor clamps too, so no unclamped window can exist."""

    @pytest.mark.parametrize("limit", [-5, 0, 101, 999])
    def test_out_of_range_limit(self, limit):
        assert PaginationParams(limit=limit, offset=0).limit == DEFAULT_LIMIT

    @pytest.mark.parametrize("offset", [-1, 2**63])
    def test_out_of_range_offset(self, offset):
        assert PaginationParams(limit=10, offset=offset).offset == 0

    def test_largest_bigint_offset_is_kept(self):
        assert PaginationParams(limit=10, offset=2**63 - 1).offset == 2**63 - 1

    @pytest.mark.asyncio
    async def test_repository_never_sees_a_negative_window(self, repository, fields):
        for _ in range(3):
            await repository.create(fields)

        page = await repository.list(PaginationParams(limit=-5, offset=-1))

        assert len(page.data) == 3
        assert page.pagination.limit == 10
        assert page.pagination.offset == 0
        assert page.pagination.has_next is False


class TestBuildMetadata:
    """Derived totals and navigation flags."""

    def test_first_page(self):
        meta = build_metadata(10, 0, 25)
        assert meta.total_pages == 3
        assert meta.has_next is True
        assert meta.has_prev is False

    def test_last_page(self):
        meta = build_metadata(10, 20, 25)
        assert meta.total_pages == 3
        assert meta.has_next is False
        assert meta.has_prev is True

    def test_exact_multiple(self):
        meta = build_metadata(10, 10, 20)
        assert meta.total_pages == 2
        assert meta.has_next is False

    def test_empty_set_has_one_page(self):
        meta = build_metadata(10, 0, 0)
        assert meta.total_pages == 1
        assert meta.has_next is False
        assert meta.has_prev is False

    def test_limit_larger_than_total(self):
        assert build_metadata(100, 0, 3).total_pages == 1

    def test_zero_limit_does_not_divide(self):
        """Unpaginated listing of an empty table reports limit 0."""
        meta = build_metadata(0, 0, 0)
        assert meta.total_pages == 1
        assert meta.limit == 0

    def test_echoes_inputs(self):
        meta = build_metadata(5, 15, 40)
        assert (meta.limit, meta.offset, meta.total) == (5, 15, 40)


def test_all_is_the_unpaginated_variant():
    assert isinstance(ALL, Unpaginated)
    assert not isinstance(ALL, PaginationParams)
