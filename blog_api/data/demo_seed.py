from __future__ import annotations

import logging

from blog_api.services.post_service import PostService
from blog_api.services.user_service import UserService

_LOG = logging.getLogger(__name__)

DEMO_USERS = [
    {"username": "zhangsan", "email": "zhangsan@example.com", "password": "123456", "age": 25},
    {"username": "lisi", "email": "lisi@example.com", "password": "654321", "age": 30},
]

_BODY = (
    "This walkthrough covers controllers, services and modules, and shows how "
    "requests flow from routing to business logic and back."
)

DEMO_POSTS = [
    {"title": "Getting started with the blog API", "content": _BODY, "authorId": 1, "categoryId": 1,
     "tags": "intro,api", "status": 1, "isTop": True},
    {"title": "Validating request payloads", "content": _BODY, "authorId": 1, "categoryId": 2,
     "tags": "validation", "status": 1},
    {"title": "Paginating listings", "content": _BODY, "authorId": 2, "categoryId": 2,
     "tags": "pagination", "status": 0},
]


def seed_demo_data(posts: PostService, users: UserService) -> tuple[int, int]:
    """Load the demo users and posts. Returns ``(users_created, posts_created)``."""
    for payload in DEMO_USERS:
        users.create(payload)
    for payload in DEMO_POSTS:
        posts.create(payload)
    _LOG.info("demo data seeded users=%s posts=%s", len(DEMO_USERS), len(DEMO_POSTS))
    return len(DEMO_USERS), len(DEMO_POSTS)
