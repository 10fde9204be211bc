from typing import Any

from fastapi import APIRouter, Body, Depends, Request

from blog_api.core.deps import get_post_service
from blog_api.schemas.post import post_detail, post_summary
from blog_api.schemas.query import page_payload
from blog_api.services.post_service import PostService

router = APIRouter()

@router.post("", status_code=201)
def create_post(payload: Any = Body(None), service: PostService = Depends(get_post_service)):
    return post_detail(service.create(payload))

@router.get("")
def list_posts(request: Request, service: PostService = Depends(get_post_service)):
    result = service.find_all(dict(request.query_params))
    return page_payload(result, post_summary)

@router.get("/{id}")
def get_post(id: int, service: PostService = Depends(get_post_service)):
    return post_detail(service.find_one(id))

@router.patch("/{id}")
def update_post(id: int, payload: Any = Body(None), service: PostService = Depends(get_post_service)):
    return post_detail(service.update(id, payload))

@router.delete("/{id}")
def delete_post(id: int, service: PostService = Depends(get_post_service)):
    service.remove(id)
    return {"message": "Post deleted"}
