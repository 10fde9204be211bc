from typing import Any, Dict

from blog_api.models.user import User
from blog_api.schemas.query import PAGE_WINDOW_FIELDS, iso_or_none
from blog_api.services.validation import (
    FieldRules,
    is_email,
    is_int,
    is_string,
    max_length,
    max_value,
    min_length,
    min_value,
    to_int,
    one_of,
)

USER_SORT_FIELDS = {
    "id": "id",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}

USER_WRITE_FIELDS = {
    "username": FieldRules("username", required=True, required_message="username must not be empty", rules=(
        is_string("username must be a string"),
        min_length(2, "username must be at least 2 characters"),
        max_length(20, "username must be at most 20 characters"),
    )),
    "email": FieldRules("email", required=True, required_message="email must not be empty", rules=(
        is_string("email is not a valid address"),
        is_email("email is not a valid address"),
    )),
    "password": FieldRules("password", required=True, required_message="password must not be empty", rules=(
        is_string("password must be a string"),
        min_length(6, "password must be at least 6 characters"),
        max_length(50, "password must be at most 50 characters"),
    )),
    "age": FieldRules("age", rules=(
        is_int("age must be an integer"),
        min_value(0, "age must not be less than 0"),
        max_value(150, "age must not be greater than 150"),
    )),
    "avatar": FieldRules("avatar", rules=(
        is_string("avatar must be a string"),
    )),
}

USER_QUERY_FIELDS = {
    **PAGE_WINDOW_FIELDS,
    "status": FieldRules("status", rules=(
        to_int("status must be an integer"),
        one_of((0, 1), "status must be 0 or 1"),
    )),
    "sortBy": FieldRules("sort_field", rules=(
        one_of(USER_SORT_FIELDS, "sortBy must be one of: " + ", ".join(USER_SORT_FIELDS)),
    )),
}


def user_detail(user: User) -> Dict[str, Any]:
    # password_hash never leaves the service
    return {
        "id": user.id,
        "username": user.username,
        "email": user.email,
        "age": user.age,
        "avatar": user.avatar,
        "status": user.status,
        "createdAt": iso_or_none(user.created_at),
        "updatedAt": iso_or_none(user.updated_at),
    }
