"""
Tests for search query composition.
"""

import datetime

import pytest

from zendeskapi.core.types import ExportSearchOptions, SearchCriteria
from zendeskapi.utils.search.query import (
    build_export_params,
    build_params,
    date_range_query,
    inject_type_filter,
)


class TestBuildParams:
    def test_only_query_by_default(self):
        assert build_params(SearchCriteria(query="status:open")) == {"query": "status:open"}

    def test_all_fields(self):
        criteria = SearchCriteria(
            query="status:open",
            sort_by="updated_at",
            sort_order="asc",
            page=2,
            per_page=50,
            include=("users", "organizations"),
        )
        assert build_params(criteria) == {
            "query": "status:open",
            "sort_by": "updated_at",
            "sort_order": "asc",
            "page": 2,
            "per_page": 50,
            "include": "users,organizations",
        }

    @pytest.mark.parametrize("per_page", [101, 250, 10000])
    def test_per_page_clamped(self, per_page):
        params = build_params(SearchCriteria(query="x", per_page=per_page))
        assert params["per_page"] == 100


class TestExportParams:
    def test_page_size_clamped_to_1000(self):
        params = build_export_params("x", ExportSearchOptions(page_size=1500))
        assert params["page[size]"] == 1000

    def test_filter_and_cursor(self):
        params = build_export_params(
            "x", ExportSearchOptions(filter_type="ticket", page_size=100, cursor="abc")
        )
        assert params == {
            "query": "x",
            "filter[type]": "ticket",
            "page[size]": 100,
            "page[after]": "abc",
        }

    def test_without_options(self):
        assert build_export_params("x") == {"query": "x"}


class TestInjectTypeFilter:
    def test_appends_type(self):
        assert inject_type_filter("status:open", "ticket") == "status:open type:ticket"

    def test_idempotent(self):
        once = inject_type_filter("status:open", "ticket")
        assert inject_type_filter(once, "ticket") == once

    def test_existing_type_kept(self):
        assert inject_type_filter("type:user role:admin", "ticket") == "type:user role:admin"

    def test_substring_match_is_naive(self):
        # any occurrence of "type:" counts, even inside another keyword
        assert inject_type_filter("ticket_type:incident", "ticket") == "ticket_type:incident"


def test_date_range_query():
    query = date_range_query(
        "status:solved", "created", datetime.date(2024, 1, 1), datetime.date(2024, 1, 31)
    )
    assert query == "status:solved created>=2024-01-01 created<2024-01-31"


def test_date_range_query_empty_base():
    query = date_range_query("", "updated", datetime.date(2024, 1, 1), datetime.date(2024, 1, 2))
    assert query == "updated>=2024-01-01 updated<2024-01-02"
