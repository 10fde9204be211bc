from __future__ import annotations

import logging
from typing import Any, Mapping

from blog_api.core.errors import NotFound
from blog_api.models.common import utcnow
from blog_api.models.post import POST_STATUS_DRAFT, POST_STATUS_PUBLISHED, POST_STATUS_WITHDRAWN, Post
from blog_api.schemas.post import POST_QUERY_FIELDS, POST_SORT_FIELDS, POST_WRITE_FIELDS
from blog_api.schemas.query import FlagFilter, QuerySpec, TextFilter
from blog_api.services.paginated_query import PageResult, run_query
from blog_api.services.record_store import RecordStore
from blog_api.services.validation import validate_payload

_LOG = logging.getLogger(__name__)

SUMMARY_FALLBACK_CHARS = 200
_EQUALITY_FILTERS = ("category_id", "author_id", "status")


class PostService:
    def __init__(self, store: RecordStore[Post] | None = None, *, default_page_size: int = 10):
        self.store: RecordStore[Post] = store if store is not None else RecordStore()
        self.default_page_size = default_page_size

    def create(self, payload: Mapping[str, Any]) -> Post:
        data = validate_payload(payload, POST_WRITE_FIELDS)
        status = data.get("status", POST_STATUS_DRAFT)

        def build(post_id: int) -> Post:
            now = utcnow()
            return Post(
                id=post_id,
                title=data["title"],
                content=data["content"],
                summary=data.get("summary") or data["content"][:SUMMARY_FALLBACK_CHARS],
                author_id=data["author_id"],
                category_id=data["category_id"],
                tags=data.get("tags") or "",
                status=status,
                cover_image=data.get("cover_image") or "",
                is_top=data.get("is_top", False),
                created_at=now,
                updated_at=now,
                published_at=now if status == POST_STATUS_PUBLISHED else None,
            )

        post = self.store.add(build)
        _LOG.info("post created id=%s author_id=%s status=%s", post.id, post.author_id, post.status)
        return post

    def build_query(self, params: Mapping[str, Any]) -> QuerySpec:
        values = validate_payload(params, POST_QUERY_FIELDS)
        keyword = values.get("keyword")
        return QuerySpec(
            page=values.get("page", 1),
            page_size=values.get("page_size", self.default_page_size),
            equals={name: values[name] for name in _EQUALITY_FILTERS if name in values},
            contains=TextFilter(field="title", needle=keyword) if keyword else None,
            flag=FlagFilter(field="is_top", value=values["is_top"]) if "is_top" in values else None,
            sort_field=values.get("sort_field", "created_at"),
            sort_direction=values.get("sort_direction", "DESC"),
        )

    def find_all(self, params: Mapping[str, Any]) -> PageResult:
        spec = self.build_query(params)
        return run_query(self.store.snapshot(), spec, POST_SORT_FIELDS.values())

    def find_one(self, post_id: int) -> Post:
        """Detail read; counts as one view."""

        def count_view(post: Post) -> None:
            post.view_count += 1

        post = self.store.update(post_id, count_view)
        if post is None:
            _LOG.debug("post lookup missed id=%s", post_id)
            raise NotFound(f"Post #{post_id} not found")
        return post

    def update(self, post_id: int, payload: Mapping[str, Any]) -> Post:
        # Unlike a detail read, edits and withdrawals leave view_count alone.
        data = validate_payload(payload, POST_WRITE_FIELDS, partial=True)

        def apply(post: Post) -> None:
            for attr, value in data.items():
                setattr(post, attr, value)
            post.updated_at = utcnow()
            if data.get("status") == POST_STATUS_PUBLISHED and post.published_at is None:
                post.published_at = post.updated_at

        post = self.store.update(post_id, apply)
        if post is None:
            raise NotFound(f"Post #{post_id} not found")
        _LOG.info("post updated id=%s fields=%s", post_id, ",".join(sorted(data)))
        return post

    def remove(self, post_id: int) -> Post:
        def withdraw(post: Post) -> None:
            post.status = POST_STATUS_WITHDRAWN
            post.updated_at = utcnow()

        post = self.store.update(post_id, withdraw)
        if post is None:
            raise NotFound(f"Post #{post_id} not found")
        _LOG.info("post withdrawn id=%s", post_id)
        return post
