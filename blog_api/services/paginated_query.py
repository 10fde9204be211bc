from __future__ import annotations

import math
from collections.abc import Collection, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from blog_api.core.errors import InvalidQuery
from blog_api.schemas.query import QuerySpec

MAX_PAGE_SIZE = 100

_MISSING = object()


@dataclass(frozen=True)
class PageResult:
    items: list[Any]
    total: int
    page: int
    page_size: int
    total_pages: int


def _field_value(record: Any, field: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(field, _MISSING)
    return getattr(record, field, _MISSING)


def _validate_spec(spec: QuerySpec, sortable: Collection[str]) -> None:
    if spec.page < 1:
        raise InvalidQuery("page", "page must be greater than 0")
    if spec.page_size < 1:
        raise InvalidQuery("page_size", "page_size must be greater than 0")
    if spec.page_size > MAX_PAGE_SIZE:
        raise InvalidQuery("page_size", f"page_size must not exceed {MAX_PAGE_SIZE}")
    if spec.sort_field not in sortable:
        raise InvalidQuery("sort_field", f'cannot sort by "{spec.sort_field}"')


def _matches(record: Any, spec: QuerySpec) -> bool:
    for field, expected in spec.equals.items():
        value = _field_value(record, field)
        if value is _MISSING or value != expected:
            return False
    if spec.contains is not None:
        value = _field_value(record, spec.contains.field)
        if not isinstance(value, str) or spec.contains.needle not in value:
            return False
    if spec.flag is not None:
        value = _field_value(record, spec.flag.field)
        if value is _MISSING or value != spec.flag.value:
            return False
    return True


def filter_records(records: Sequence[Any], spec: QuerySpec) -> list[Any]:
    return [r for r in records if _matches(r, spec)]


def sort_records(records: list[Any], field: str, direction: str) -> list[Any]:
    # sorted() is stable for reverse=True as well, so ties keep filter order.
    return sorted(
        records,
        key=lambda r: _field_value(r, field),
        reverse=direction == "DESC",
    )


def run_query(records: Sequence[Any], spec: QuerySpec, sortable: Collection[str]) -> PageResult:
    """Filter, sort and slice ``records`` into one page.

    ``records`` is read as a snapshot and never mutated. Raises
    ``InvalidQuery`` for an out-of-range page window or a sort field outside
    ``sortable``; a page past the end is not an error and comes back empty.
    """
    _validate_spec(spec, sortable)

    matched = sort_records(filter_records(records, spec), spec.sort_field, spec.sort_direction)
    total = len(matched)
    start = (spec.page - 1) * spec.page_size
    items = matched[start : start + spec.page_size]

    return PageResult(
        items=items,
        total=total,
        page=spec.page,
        page_size=spec.page_size,
        total_pages=math.ceil(total / spec.page_size),
    )
