"""
Tests for bizdash.services.filters: the record filter engine.
"""

import itertools
from datetime import date, timedelta

import pytest

from bizdash.services.filters import (
    DateRange,
    FilterSpec,
    FilterState,
    StockFilter,
    apply_filters,
    build_predicates,
)

TODAY = date(2026, 10, 17)

PRODUCT_SPEC = FilterSpec(
    search_fields=("name", "category"),
    quantity_field="quantity",
    min_stock_field="min_stock",
)
SALE_SPEC = FilterSpec(search_fields=("customer_name",), date_field="sale_date")

PRODUCTS = [
    {"id": 1, "name": "Widget", "category": "Tools", "quantity": 5, "min_stock": 10},
    {"id": 2, "name": "Gadget", "category": "Toys", "quantity": 0, "min_stock": 3},
    {"id": 3, "name": "Hammer", "category": "Tools", "quantity": 40, "min_stock": 10},
    {"id": 4, "name": None, "category": "Misc", "quantity": 10, "min_stock": 10},
]


def ids(records):
    return [r["id"] for r in records]


class TestSearch:
    def test_case_insensitive_substring(self):
        state = FilterState.build(search="wid")
        assert ids(apply_filters(PRODUCTS, state, PRODUCT_SPEC)) == [1]

    def test_matches_any_search_field(self):
        state = FilterState.build(search="TOOLS")
        assert ids(apply_filters(PRODUCTS, state, PRODUCT_SPEC)) == [1, 3]

    def test_missing_field_never_matches(self):
        state = FilterState.build(search="none")
        assert apply_filters(PRODUCTS, state, PRODUCT_SPEC) == []

    @pytest.mark.parametrize("term", ["", "   ", None])
    def test_blank_search_is_noop(self, term):
        state = FilterState.build(search=term)
        assert apply_filters(PRODUCTS, state, PRODUCT_SPEC) == PRODUCTS


class TestEquality:
    def test_category(self):
        state = FilterState.build(equals={"category": "Tools"})
        assert ids(apply_filters(PRODUCTS, state, PRODUCT_SPEC)) == [1, 3]

    @pytest.mark.parametrize("value", ["all", "", None, "ALL"])
    def test_all_is_noop(self, value):
        state = FilterState.build(equals={"category": value})
        assert state.equals == ()
        assert apply_filters(PRODUCTS, state, PRODUCT_SPEC) == PRODUCTS

    def test_numeric_values_compare_as_text(self):
        items = [{"sale_id": 1}, {"sale_id": 2}, {"sale_id": None}]
        state = FilterState.build(equals={"sale_id": 2})
        assert apply_filters(items, state, FilterSpec()) == [{"sale_id": 2}]


class TestDateRange:
    SALES = [
        {"id": 1, "customer_name": "Acme", "sale_date": TODAY},
        {"id": 2, "customer_name": "Beta", "sale_date": TODAY - timedelta(days=3)},
        {"id": 3, "customer_name": "Acme", "sale_date": TODAY - timedelta(days=20)},
        {"id": 4, "customer_name": "Gamma", "sale_date": TODAY - timedelta(days=45)},
        {"id": 5, "customer_name": "Delta", "sale_date": None},
    ]

    @pytest.mark.parametrize("date_range, expected", [
        (DateRange.ALL, [1, 2, 3, 4, 5]),
        (DateRange.TODAY, [1]),
        (DateRange.WEEK, [1, 2]),
        (DateRange.MONTH, [1, 2, 3]),
    ])
    def test_ranges(self, date_range, expected):
        state = FilterState.build(date_range=date_range)
        assert ids(apply_filters(self.SALES, state, SALE_SPEC, TODAY)) == expected

    @pytest.mark.parametrize("date_range, oldest_kept", [
        (DateRange.WEEK, 6),
        (DateRange.MONTH, 29),
    ])
    def test_window_includes_today_and_stops_at_n_days(self, date_range, oldest_kept):
        records = [{"id": days, "sale_date": TODAY - timedelta(days=days)} for days in range(0, 35)]
        state = FilterState.build(date_range=date_range)
        kept = ids(apply_filters(records, state, SALE_SPEC, TODAY))
        assert kept == list(range(0, oldest_kept + 1))
        assert len(kept) == {DateRange.WEEK: 7, DateRange.MONTH: 30}[date_range]

    def test_iso_strings(self):
        records = [{"id": 1, "sale_date": "2026-10-17T09:00:00"}]
        state = FilterState.build(date_range="today")
        assert ids(apply_filters(records, state, SALE_SPEC, TODAY)) == [1]

    def test_ignored_without_date_field(self):
        state = FilterState.build(date_range="today")
        assert apply_filters(PRODUCTS, state, PRODUCT_SPEC, TODAY) == PRODUCTS


class TestStock:
    @pytest.mark.parametrize("stock, expected", [
        (StockFilter.LOW, [1, 2, 4]),
        (StockFilter.OUT, [2]),
        (StockFilter.IN_STOCK, [3]),
        (StockFilter.ALL, [1, 2, 3, 4]),
    ])
    def test_stock_filter(self, stock, expected):
        state = FilterState.build(stock=stock)
        assert ids(apply_filters(PRODUCTS, state, PRODUCT_SPEC)) == expected


class TestComposition:
    def test_conjunction(self):
        state = FilterState.build(search="a", equals={"category": "Tools"}, stock="instock")
        assert ids(apply_filters(PRODUCTS, state, PRODUCT_SPEC)) == [3]

    def test_predicate_order_does_not_matter(self):
        state = FilterState.build(search="e", equals={"category": "Tools"}, stock="low")
        predicates = build_predicates(state, PRODUCT_SPEC)
        assert len(predicates) == 3
        results = {
            tuple(r["id"] for r in PRODUCTS if all(p(r) for p in order))
            for order in itertools.permutations(predicates)
        }
        assert results == {(1,)}


class TestFilterState:
    def test_immutable_updates(self):
        base = FilterState()
        searched = base.with_search("acme")
        assert base.search == ""
        assert searched.search == "acme"
        assert searched is not base

    def test_with_equal_replaces_and_removes(self):
        state = FilterState().with_equal("status", "paid").with_equal("status", "pending")
        assert state.equals == (("status", "pending"),)
        assert state.with_equal("status", "all").equals == ()

    def test_is_active_and_reset(self):
        state = FilterState().with_stock("low").with_date_range("week")
        assert state.is_active
        assert not state.reset().is_active
        assert not FilterState().with_search("   ").is_active

    def test_invalid_choice(self):
        with pytest.raises(ValueError):
            FilterState.build(date_range="year")
