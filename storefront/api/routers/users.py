# storefront/api/routers/users.py
from typing import List

from fastapi import APIRouter, Depends

from storefront.api.deps import get_user_service, to_http_error
from storefront.domain.errors import StorefrontError
from storefront.domain.schemas import UserCreate, UserOut
from storefront.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserOut, status_code=201)
def register_user(payload: UserCreate, svc: UserService = Depends(get_user_service)):
    try:
        return svc.register(payload)
    except StorefrontError as e:
        raise to_http_error(e)


@router.get("", response_model=List[UserOut])
def list_users(svc: UserService = Depends(get_user_service)):
    try:
        return svc.list_users()
    except StorefrontError as e:
        raise to_http_error(e)


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: str, svc: UserService = Depends(get_user_service)):
    try:
        return svc.get_user(user_id)
    except StorefrontError as e:
        raise to_http_error(e)
