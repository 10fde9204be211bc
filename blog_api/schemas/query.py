from datetime import datetime
from pydantic import BaseModel
from typing import Any, Callable, Dict, Literal, Optional

from blog_api.services.validation import FieldRules, is_string, max_value, min_value, one_of, to_int

SortDirection = Literal["ASC", "DESC"]

class TextFilter(BaseModel):
    field: str
    needle: str

class FlagFilter(BaseModel):
    field: str
    value: bool

class QuerySpec(BaseModel):
    page: int = 1
    page_size: int = 10
    equals: Dict[str, Any] = {}
    contains: Optional[TextFilter] = None
    flag: Optional[FlagFilter] = None
    sort_field: str = "created_at"
    sort_direction: SortDirection = "DESC"


# Query-string rules shared by every paginated listing.
PAGE_WINDOW_FIELDS = {
    "page": FieldRules("page", rules=(
        to_int("page must be an integer"),
        min_value(1, "page must be greater than 0"),
    )),
    "pageSize": FieldRules("page_size", rules=(
        to_int("pageSize must be an integer"),
        min_value(1, "pageSize must be greater than 0"),
        max_value(100, "pageSize must not exceed 100"),
    )),
    "keyword": FieldRules("keyword", rules=(
        is_string("keyword must be a string"),
    )),
    "sortOrder": FieldRules("sort_direction", rules=(
        one_of(("ASC", "DESC"), "sortOrder must be ASC or DESC"),
    )),
}


def iso_or_none(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def page_payload(result, project: Callable[[Any], Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "list": [project(item) for item in result.items],
        "total": result.total,
        "page": result.page,
        "pageSize": result.page_size,
        "totalPages": result.total_pages,
    }
