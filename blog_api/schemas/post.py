from typing import Any, Dict

from blog_api.models.post import Post
from blog_api.schemas.query import PAGE_WINDOW_FIELDS, iso_or_none
from blog_api.services.validation import (
    FieldRules,
    is_bool,
    is_int,
    is_string,
    is_url,
    max_length,
    max_value,
    min_length,
    min_value,
    one_of,
    to_bool,
    to_int,
)

# API sort key -> Post attribute
POST_SORT_FIELDS = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "viewCount": "view_count",
    "likeCount": "like_count",
}

POST_WRITE_FIELDS = {
    "title": FieldRules("title", required=True, required_message="title must not be empty", rules=(
        is_string("title must be a string"),
        min_length(5, "title must be at least 5 characters"),
        max_length(200, "title must be at most 200 characters"),
    )),
    "content": FieldRules("content", required=True, required_message="content must not be empty", rules=(
        is_string("content must be a string"),
        min_length(50, "content must be at least 50 characters"),
    )),
    "summary": FieldRules("summary", rules=(
        is_string("summary must be a string"),
        max_length(500, "summary must be at most 500 characters"),
    )),
    "authorId": FieldRules("author_id", required=True, required_message="authorId must not be empty", rules=(
        is_int("authorId must be an integer"),
        min_value(1, "authorId must be greater than 0"),
    )),
    "categoryId": FieldRules("category_id", required=True, required_message="categoryId must not be empty", rules=(
        is_int("categoryId must be an integer"),
        min_value(1, "categoryId must be greater than 0"),
    )),
    "tags": FieldRules("tags", rules=(
        is_string("tags must be a string"),
        max_length(200, "tags must be at most 200 characters"),
    )),
    "status": FieldRules("status", rules=(
        is_int("status must be an integer"),
        min_value(0, "status must not be less than 0"),
        max_value(2, "status must not be greater than 2"),
    )),
    "coverImage": FieldRules("cover_image", rules=(
        is_string("coverImage must be a string"),
        is_url("coverImage must be a valid URL"),
    )),
    "isTop": FieldRules("is_top", rules=(
        is_bool("isTop must be a boolean"),
    )),
}

POST_QUERY_FIELDS = {
    **PAGE_WINDOW_FIELDS,
    "categoryId": FieldRules("category_id", rules=(
        to_int("categoryId must be an integer"),
    )),
    "authorId": FieldRules("author_id", rules=(
        to_int("authorId must be an integer"),
    )),
    "status": FieldRules("status", rules=(
        to_int("status must be an integer"),
        min_value(0, "status must not be less than 0"),
        max_value(2, "status must not be greater than 2"),
    )),
    "sortBy": FieldRules("sort_field", rules=(
        one_of(POST_SORT_FIELDS, "sortBy must be one of: " + ", ".join(POST_SORT_FIELDS)),
    )),
    "isTop": FieldRules("is_top", rules=(
        to_bool("isTop must be a boolean"),
    )),
}


def post_detail(post: Post) -> Dict[str, Any]:
    return {
        "id": post.id,
        "title": post.title,
        "summary": post.summary,
        "content": post.content,
        "authorId": post.author_id,
        "categoryId": post.category_id,
        "tags": post.tags,
        "status": post.status,
        "viewCount": post.view_count,
        "likeCount": post.like_count,
        "coverImage": post.cover_image,
        "isTop": post.is_top,
        "createdAt": iso_or_none(post.created_at),
        "updatedAt": iso_or_none(post.updated_at),
        "publishedAt": iso_or_none(post.published_at),
    }


def post_summary(post: Post) -> Dict[str, Any]:
    """List row: the full body and the update time stay out of listings."""
    data = post_detail(post)
    data.pop("content")
    data.pop("updatedAt")
    return data
