from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from blog_api.models.common import utcnow

POST_STATUS_DRAFT = 0
POST_STATUS_PUBLISHED = 1
POST_STATUS_WITHDRAWN = 2


@dataclass
class Post:
    id: int
    title: str
    content: str
    summary: str
    author_id: int
    category_id: int
    tags: str = ""
    status: int = POST_STATUS_DRAFT
    view_count: int = 0
    like_count: int = 0
    cover_image: str = ""
    is_top: bool = False
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
    published_at: datetime | None = None
