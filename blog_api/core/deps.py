from blog_api.core.config import settings
from blog_api.services.post_service import PostService
from blog_api.services.user_service import UserService

_post_service: PostService | None = None
_user_service: UserService | None = None

def get_post_service() -> PostService:
    global _post_service
    if _post_service is None:
        _post_service = PostService(default_page_size=settings.DEFAULT_PAGE_SIZE)
    return _post_service

def get_user_service() -> UserService:
    global _user_service
    if _user_service is None:
        _user_service = UserService(default_page_size=settings.DEFAULT_PAGE_SIZE)
    return _user_service

def reset_services_for_tests() -> None:
    global _post_service, _user_service
    _post_service = None
    _user_service = None
