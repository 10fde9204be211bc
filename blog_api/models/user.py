from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from blog_api.models.common import utcnow

USER_STATUS_DISABLED = 0
USER_STATUS_ACTIVE = 1


@dataclass
class User:
    id: int
    username: str
    email: str
    password_hash: str = field(repr=False)
    age: int | None = None
    avatar: str | None = None
    status: int = USER_STATUS_ACTIVE
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
