"""User Routes — CRUD endpoints over a UserRepository (UserStore in production).

Invariants:
    - Request bodies validated by UserPayload before reaching the store
    - Missing user -> 404, duplicate email -> 409 (raised by the store, mapped globally)
    - Empty listing -> 204; DELETE always -> 204 on success
    - /search is registered before /{user_id} so it is never parsed as an id
"""

import logging

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from dogproxy.core.domain_types import UserId
from dogproxy.core.repository_protocols import UserRepository
from dogproxy.infrastructure.database import get_db
from dogproxy.schemas.user import UserPayload, UserResponse
from dogproxy.services.user_store import UserStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/users", tags=["users"])


def get_user_store(db: AsyncSession = Depends(get_db)) -> UserRepository:
    return UserStore(db)


@router.get("", response_model=list[UserResponse])
async def list_users(store: UserRepository = Depends(get_user_store)):
    users = await store.list_all()
    if not users:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return users


@router.get("/search", response_model=UserResponse)
async def find_user_by_email(
    email: str = Query(min_length=1, max_length=255),
    store: UserRepository = Depends(get_user_store),
):
    return await store.find_by_email(email)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int, store: UserRepository = Depends(get_user_store),
):
    return await store.get(UserId(user_id))


@router.post(
    "", response_model=UserResponse, status_code=status.HTTP_201_CREATED,
)
async def create_user(
    body: UserPayload, store: UserRepository = Depends(get_user_store),
):
    return await store.create(body.name, body.email, body.address)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    body: UserPayload,
    store: UserRepository = Depends(get_user_store),
):
    return await store.update(
        UserId(user_id), body.name, body.email, body.address,
    )


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: int, store: UserRepository = Depends(get_user_store),
):
    await store.delete(UserId(user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def delete_all_users(store: UserRepository = Depends(get_user_store)):
    await store.delete_all()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
