"""Tests for filter extraction, sort parsing, query building and page math."""

from __future__ import annotations

import pytest

from motor_market.domain.search import (
    PAGE_SIZE,
    FilterCriteria,
    ListingQuery,
    Operator,
    Ordering,
    PageRequest,
    Predicate,
    SortKey,
    build_listing_query,
    count_pages,
    extract_filter_criteria,
    ordering_for,
    page_request_from_params,
    parse_page_number,
)


# ==============================================================================
# Filter extraction
# ==============================================================================


def test_extract_empty_params_is_unconstrained() -> None:
    assert extract_filter_criteria({}) == FilterCriteria()


def test_extract_all_filters() -> None:
    criteria = extract_filter_criteria(
        {
            "brand": "Toyota",
            "category": "suv",
            "minPrice": "20000",
            "maxPrice": "35000",
            "minYear": "2018",
            "maxYear": "2023",
        }
    )

    assert criteria == FilterCriteria(
        brand="Toyota",
        category="suv",
        min_price=20000,
        max_price=35000,
        min_year=2018,
        max_year=2023,
    )


def test_extract_empty_strings_are_absent() -> None:
    criteria = extract_filter_criteria({"brand": "", "category": "", "minPrice": "", "maxYear": ""})

    assert criteria == FilterCriteria()


@pytest.mark.parametrize("raw", ["abc", "12.5", "-100", "1e3", "20 000", " ", "9" * 5000])
def test_extract_malformed_numbers_are_absent(raw: str) -> None:
    """Malformed numeric filters are the same as not sending them."""
    assert extract_filter_criteria({"minPrice": raw}) == extract_filter_criteria({})


def test_extract_trims_surrounding_whitespace_on_numbers() -> None:
    assert extract_filter_criteria({"minYear": " 2019 "}).min_year == 2019


def test_extract_accepts_eighteen_digits_but_not_nineteen() -> None:
    assert extract_filter_criteria({"maxPrice": "9" * 18}).max_price == 10**18 - 1
    assert extract_filter_criteria({"maxPrice": "9" * 19}).max_price is None


def test_extract_ignores_unknown_keys() -> None:
    assert extract_filter_criteria({"color": "red", "page": "2"}) == FilterCriteria()


def test_extract_keeps_inverted_ranges() -> None:
    """An inverted range is not an error; it simply matches nothing."""
    criteria = extract_filter_criteria({"minPrice": "50000", "maxPrice": "10000"})

    assert criteria.min_price == 50000
    assert criteria.max_price == 10000


def test_extract_is_idempotent_through_query_params() -> None:
    params = {"brand": "Honda", "minPrice": "abc", "maxYear": "2022"}
    criteria = extract_filter_criteria(params)

    assert extract_filter_criteria(criteria.to_query_params()) == criteria


def test_to_query_params_omits_absent_dimensions() -> None:
    criteria = FilterCriteria(category="suv", min_year=2015)

    assert criteria.to_query_params() == {"category": "suv", "minYear": "2015"}


# ==============================================================================
# Sort keys and ordering
# ==============================================================================


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("newest", SortKey.NEWEST),
        ("oldest", SortKey.OLDEST),
        ("price_low", SortKey.PRICE_LOW),
        ("price_high", SortKey.PRICE_HIGH),
        ("year_new", SortKey.YEAR_NEW),
        ("year_old", SortKey.YEAR_OLD),
    ],
)
def test_sort_key_parse_known_values(raw: str, expected: SortKey) -> None:
    assert SortKey.parse(raw) is expected


@pytest.mark.parametrize("raw", [None, "", "cheapest", "PRICE_LOW"])
def test_sort_key_parse_unknown_falls_back_to_newest(raw: str | None) -> None:
    assert SortKey.parse(raw) is SortKey.NEWEST


def test_ordering_table() -> None:
    assert ordering_for(SortKey.NEWEST) == Ordering("created_at", descending=True)
    assert ordering_for(SortKey.OLDEST) == Ordering("created_at", descending=False)
    assert ordering_for(SortKey.PRICE_LOW) == Ordering("price", descending=False)
    assert ordering_for(SortKey.PRICE_HIGH) == Ordering("price", descending=True)
    assert ordering_for(SortKey.YEAR_NEW) == Ordering("year", descending=True)
    assert ordering_for(SortKey.YEAR_OLD) == Ordering("year", descending=False)


# ==============================================================================
# Page numbers
# ==============================================================================


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, 1),
        ("", 1),
        ("1", 1),
        ("3", 3),
        ("0", 1),
        ("-2", 1),
        ("two", 1),
        ("2.5", 1),
        ("9" * 5000, 1),
    ],
)
def test_parse_page_number(raw: str | None, expected: int) -> None:
    assert parse_page_number(raw) == expected


# ==============================================================================
# Query building
# ==============================================================================


def test_build_query_for_unconstrained_first_page() -> None:
    query = build_listing_query(PageRequest(criteria=FilterCriteria()))

    assert query == ListingQuery(
        predicates=(),
        ordering=Ordering("created_at", descending=True),
        offset=0,
        limit=PAGE_SIZE,
    )


def test_build_query_window_for_later_pages() -> None:
    query = build_listing_query(PageRequest(criteria=FilterCriteria(), page=3, page_size=9))

    assert query.offset == 18
    assert query.limit == 9


def test_build_query_predicates_follow_criteria() -> None:
    criteria = FilterCriteria(
        brand="Toyota",
        category="suv",
        min_price=10000,
        max_price=30000,
        min_year=2015,
        max_year=2020,
    )

    query = build_listing_query(PageRequest(criteria=criteria, sort=SortKey.PRICE_LOW))

    assert query.predicates == (
        Predicate("brand", Operator.EQ, "Toyota"),
        Predicate("category", Operator.EQ, "suv"),
        Predicate("price", Operator.GTE, 10000),
        Predicate("price", Operator.LTE, 30000),
        Predicate("year", Operator.GTE, 2015),
        Predicate("year", Operator.LTE, 2020),
    )
    assert query.ordering == Ordering("price", descending=False)


def test_build_query_only_bounds_that_are_present() -> None:
    query = build_listing_query(PageRequest(criteria=FilterCriteria(max_year=2010)))

    assert query.predicates == (Predicate("year", Operator.LTE, 2010),)


# ==============================================================================
# Page count
# ==============================================================================


@pytest.mark.parametrize(
    ("total", "expected"),
    [(0, 0), (1, 1), (9, 1), (10, 2), (11, 2), (18, 2), (19, 3)],
)
def test_count_pages(total: int, expected: int) -> None:
    assert count_pages(total, 9) == expected


def test_count_pages_defaults_to_page_size() -> None:
    assert count_pages(PAGE_SIZE * 4) == 4


# ==============================================================================
# Full page request
# ==============================================================================


def test_page_request_from_params() -> None:
    request = page_request_from_params(
        {"category": "suv", "sort": "price_low", "page": "2", "minYear": "oops"}
    )

    assert request == PageRequest(
        criteria=FilterCriteria(category="suv"),
        sort=SortKey.PRICE_LOW,
        page=2,
        page_size=PAGE_SIZE,
    )


def test_page_request_from_params_defaults() -> None:
    request = page_request_from_params({"sort": "bogus", "page": "zero"})

    assert request.sort is SortKey.NEWEST
    assert request.page == 1
