from __future__ import annotations

import logging
from typing import Any, Mapping

from blog_api.core.errors import NotFound
from blog_api.core.passwords import hash_user_password
from blog_api.models.common import utcnow
from blog_api.models.user import USER_STATUS_ACTIVE, USER_STATUS_DISABLED, User
from blog_api.schemas.query import QuerySpec, TextFilter
from blog_api.schemas.user import USER_QUERY_FIELDS, USER_SORT_FIELDS, USER_WRITE_FIELDS
from blog_api.services.paginated_query import PageResult, run_query
from blog_api.services.record_store import RecordStore
from blog_api.services.validation import validate_payload

_LOG = logging.getLogger(__name__)


class UserService:
    def __init__(self, store: RecordStore[User] | None = None, *, default_page_size: int = 10):
        self.store: RecordStore[User] = store if store is not None else RecordStore()
        self.default_page_size = default_page_size

    def create(self, payload: Mapping[str, Any]) -> User:
        data = validate_payload(payload, USER_WRITE_FIELDS)
        password_hash = hash_user_password(data.pop("password"))

        def build(user_id: int) -> User:
            now = utcnow()
            return User(
                id=user_id,
                password_hash=password_hash,
                status=USER_STATUS_ACTIVE,
                created_at=now,
                updated_at=now,
                **data,
            )

        user = self.store.add(build)
        _LOG.info("user created id=%s username=%s", user.id, user.username)
        return user

    def build_query(self, params: Mapping[str, Any]) -> QuerySpec:
        values = validate_payload(params, USER_QUERY_FIELDS)
        keyword = values.get("keyword")
        return QuerySpec(
            page=values.get("page", 1),
            page_size=values.get("page_size", self.default_page_size),
            equals={"status": values["status"]} if "status" in values else {},
            contains=TextFilter(field="username", needle=keyword) if keyword else None,
            sort_field=values.get("sort_field", "created_at"),
            sort_direction=values.get("sort_direction", "DESC"),
        )

    def find_all(self, params: Mapping[str, Any]) -> PageResult:
        spec = self.build_query(params)
        return run_query(self.store.snapshot(), spec, USER_SORT_FIELDS.values())

    def find_one(self, user_id: int) -> User:
        user = self.store.get(user_id)
        if user is None:
            _LOG.debug("user lookup missed id=%s", user_id)
            raise NotFound(f"User #{user_id} not found")
        return user

    def update(self, user_id: int, payload: Mapping[str, Any]) -> User:
        data = validate_payload(payload, USER_WRITE_FIELDS, partial=True)
        if "password" in data:
            data["password_hash"] = hash_user_password(data.pop("password"))

        def apply(user: User) -> None:
            for attr, value in data.items():
                setattr(user, attr, value)
            user.updated_at = utcnow()

        user = self.store.update(user_id, apply)
        if user is None:
            raise NotFound(f"User #{user_id} not found")
        _LOG.info("user updated id=%s fields=%s", user_id, ",".join(sorted(data)))
        return user

    def remove(self, user_id: int) -> User:
        def disable(user: User) -> None:
            user.status = USER_STATUS_DISABLED
            user.updated_at = utcnow()

        user = self.store.update(user_id, disable)
        if user is None:
            raise NotFound(f"User #{user_id} not found")
        _LOG.info("user disabled id=%s", user_id)
        return user
