from typing import Any

from fastapi import APIRouter, Body, Depends, Request

from blog_api.core.deps import get_user_service
from blog_api.schemas.query import page_payload
from blog_api.schemas.user import user_detail
from blog_api.services.user_service import UserService

router = APIRouter()

@router.post("", status_code=201)
def create_user(payload: Any = Body(None), service: UserService = Depends(get_user_service)):
    return user_detail(service.create(payload))

@router.get("")
def list_users(request: Request, service: UserService = Depends(get_user_service)):
    result = service.find_all(dict(request.query_params))
    return page_payload(result, user_detail)

@router.get("/{id}")
def get_user(id: int, service: UserService = Depends(get_user_service)):
    return user_detail(service.find_one(id))

@router.patch("/{id}")
def update_user(id: int, payload: Any = Body(None), service: UserService = Depends(get_user_service)):
    return user_detail(service.update(id, payload))

@router.delete("/{id}")
def delete_user(id: int, service: UserService = Depends(get_user_service)):
    service.remove(id)
    return {"message": "User deleted"}
