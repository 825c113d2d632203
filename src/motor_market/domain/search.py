"""Marketplace search: filter extraction, sorting, query building and page math.

Everything here is pure. The repository adapters receive a ``ListingQuery``
and push its predicates, ordering and window down to their datastore.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


PAGE_SIZE = 9
# Up to 18 digits, so values stay in bigint range
# At most 18 digits: fits a bigint, and int() never hits the str-conversion limit
_DIGITS = re.compile(r"[0-9]{1,18}")


class SortKey(str, Enum):
    NEWEST = "newest"
    OLDEST = "oldest"
    PRICE_LOW = "price_low"
    PRICE_HIGH = "price_high"
    YEAR_NEW = "year_new"
    YEAR_OLD = "year_old"

    @classmethod
    def parse(cls, value: str | None) -> SortKey:
        """Unknown or missing sort keys behave like ``newest``."""
        if value is None:
            return cls.NEWEST
        try:
            return cls(value)
        except ValueError:
            logger.debug("Unknown sort key, using newest", extra={"sort": value})
            return cls.NEWEST


class Operator(str, Enum):
    EQ = "eq"
    GTE = "gte"
    LTE = "lte"
    IN = "in"


@dataclass(frozen=True, slots=True)
class Predicate:
    field: str
    operator: Operator
    value: Any


@dataclass(frozen=True, slots=True)
class Ordering:
    field: str
    descending: bool


_ORDERINGS: dict[SortKey, Ordering] = {
    SortKey.NEWEST: Ordering("created_at", descending=True),
    SortKey.OLDEST: Ordering("created_at", descending=False),
    SortKey.PRICE_LOW: Ordering("price", descending=False),
    SortKey.PRICE_HIGH: Ordering("price", descending=True),
    SortKey.YEAR_NEW: Ordering("year", descending=True),
    SortKey.YEAR_OLD: Ordering("year", descending=False),
}


def ordering_for(sort: SortKey) -> Ordering:
    return _ORDERINGS.get(sort, _ORDERINGS[SortKey.NEWEST])


@dataclass(frozen=True, slots=True)
class FilterCriteria:
    """Optional, independent constraints. ``None`` means unconstrained."""

    brand: str | None = None
    category: str | None = None
    min_price: int | None = None
    max_price: int | None = None
    min_year: int | None = None
    max_year: int | None = None

    def to_query_params(self) -> dict[str, str]:
        """Serialize back to the query-string keys the extractor reads."""
        params: dict[str, str] = {}
        for key, value in (
            ("brand", self.brand),
            ("category", self.category),
            ("minPrice", self.min_price),
            ("maxPrice", self.max_price),
            ("minYear", self.min_year),
            ("maxYear", self.max_year),
        ):
            if value is not None:
                params[key] = str(value)
        return params


def _text_param(params: Mapping[str, str | None], key: str) -> str | None:
    value = params.get(key)
    return value if value else None


def _int_param(params: Mapping[str, str | None], key: str) -> int | None:
    # Malformed numbers are treated as absent rather than rejected.
    value = params.get(key)
    if not value:
        return None
    candidate = value.strip()
    if not _DIGITS.fullmatch(candidate):
        logger.debug("Ignoring malformed numeric filter", extra={"param": key, "value": value})
        return None
    return int(candidate)


def extract_filter_criteria(params: Mapping[str, str | None]) -> FilterCriteria:
    """
    Build filter criteria from query-string parameters.

    Never raises: empty values and values that are not plain non-negative
    integers (for ``minPrice``, ``maxPrice``, ``minYear``, ``maxYear``)
    leave the corresponding dimension unconstrained.

    Args:
        params: Query-string mapping (extra keys are ignored)

    Returns:
        FilterCriteria
    """
    return FilterCriteria(
        brand=_text_param(params, "brand"),
        category=_text_param(params, "category"),
        min_price=_int_param(params, "minPrice"),
        max_price=_int_param(params, "maxPrice"),
        min_year=_int_param(params, "minYear"),
        max_year=_int_param(params, "maxYear"),
    )


def parse_page_number(value: str | None) -> int:
    """Page numbers below 1 or not parseable fall back to the first page."""
    if not value or not _DIGITS.fullmatch(value.strip()):
        return 1
    return max(1, int(value.strip()))


@dataclass(frozen=True, slots=True)
class PageRequest:
    criteria: FilterCriteria
    sort: SortKey = SortKey.NEWEST
    page: int = 1
    page_size: int = PAGE_SIZE


@dataclass(frozen=True, slots=True)
class ListingQuery:
    """Datastore-neutral description of one page fetch."""

    predicates: tuple[Predicate, ...] = ()
    ordering: Ordering = _ORDERINGS[SortKey.NEWEST]
    offset: int = 0
    limit: int = PAGE_SIZE


def criteria_predicates(criteria: FilterCriteria) -> tuple[Predicate, ...]:
    predicates: list[Predicate] = []
    if criteria.brand is not None:
        predicates.append(Predicate("brand", Operator.EQ, criteria.brand))
    if criteria.category is not None:
        predicates.append(Predicate("category", Operator.EQ, criteria.category))
    if criteria.min_price is not None:
        predicates.append(Predicate("price", Operator.GTE, criteria.min_price))
    if criteria.max_price is not None:
        predicates.append(Predicate("price", Operator.LTE, criteria.max_price))
    if criteria.min_year is not None:
        predicates.append(Predicate("year", Operator.GTE, criteria.min_year))
    if criteria.max_year is not None:
        predicates.append(Predicate("year", Operator.LTE, criteria.max_year))
    return tuple(predicates)


def build_listing_query(request: PageRequest) -> ListingQuery:
    """
    Translate a page request into predicates, ordering and an offset/limit window.

    ``offset = (page - 1) * page_size`` and ``limit = page_size``.
    """
    return ListingQuery(
        predicates=criteria_predicates(request.criteria),
        ordering=ordering_for(request.sort),
        offset=(request.page - 1) * request.page_size,
        limit=request.page_size,
    )


def count_pages(total_count: int, page_size: int = PAGE_SIZE) -> int:
    """``ceil(total_count / page_size)``; zero matches means zero pages."""
    return math.ceil(total_count / page_size)


def page_request_from_params(
    params: Mapping[str, str | None], page_size: int = PAGE_SIZE
) -> PageRequest:
    """Full page request (filters, ``sort`` and ``page``) from query-string parameters."""
    return PageRequest(
        criteria=extract_filter_criteria(params),
        sort=SortKey.parse(params.get("sort")),
        page=parse_page_number(params.get("page")),
        page_size=page_size,
    )
