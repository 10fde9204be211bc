from fastapi import APIRouter
from blog_api.api import posts, users

router = APIRouter()
router.include_router(posts.router, prefix="/post", tags=["Posts"])
router.include_router(users.router, prefix="/user", tags=["Users"])
