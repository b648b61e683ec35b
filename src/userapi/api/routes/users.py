"""
User management API routes
"""

import logging
from typing import List

from fastapi import APIRouter, Depends

from userapi.api.dependencies import get_user_store
from userapi.models.user import DeletedUserResponse, User, UserIdParam, UserPayload, UserQuery
from userapi.services.base_store import UserStore
from userapi.utils.error_handling import RequestError
from userapi.utils.validation import ValidationTarget, validate

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=List[User])
async def list_users(
    query: UserQuery = Depends(validate(ValidationTarget.QUERY, UserQuery)),
    store: UserStore = Depends(get_user_store)
):
    """List users, optionally filtered by name"""
    return await store.list(name=query.name)


@router.post("", response_model=User, status_code=201)
async def create_user(
    payload: UserPayload = Depends(validate(ValidationTarget.JSON, UserPayload)),
    store: UserStore = Depends(get_user_store)
):
    """Create a new user"""
    return await store.create(payload.name)


@router.get("/{id}", response_model=User)
async def get_user(
    params: UserIdParam = Depends(validate(ValidationTarget.PARAMS, UserIdParam)),
    store: UserStore = Depends(get_user_store)
):
    """Get user details"""
    user = await store.get(params.id)
    if user is None:
        raise RequestError(404, "User not found.")
    return user


@router.put("/{id}", response_model=User)
async def update_user(
    params: UserIdParam = Depends(validate(ValidationTarget.PARAMS, UserIdParam)),
    payload: UserPayload = Depends(validate(ValidationTarget.JSON, UserPayload)),
    store: UserStore = Depends(get_user_store)
):
    """Replace a user's name"""
    user = await store.update(params.id, payload.model_dump())
    if user is None:
        raise RequestError(404, "User not found.")

    logger.info(f"Updated user: {user.id}")
    return user


@router.delete("/{id}", response_model=DeletedUserResponse)
async def delete_user(
    params: UserIdParam = Depends(validate(ValidationTarget.PARAMS, UserIdParam)),
    store: UserStore = Depends(get_user_store)
):
    """Delete a user"""
    user = await store.delete(params.id)
    if user is None:
        raise RequestError(404, "User not found.")

    logger.info(f"Deleted user: {user.id}")
    return DeletedUserResponse(user=user)
