"""User API routes. A caller can only see and change their own account."""

from fastapi import APIRouter, Depends

from khata.application.services.user_service import delete_user, get_user, update_user
from khata.core.responses import success
from khata.domain.repositories.user_repository import UserRepository
from khata.domain.schemas.auth import CurrentUser
from khata.domain.schemas.user import UserUpdate
from khata.interfaces.api.deps import get_current_user
from khata.interfaces.deps import get_user_repository

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("")
def read_current_user(
    repo: UserRepository = Depends(get_user_repository),
    user: CurrentUser = Depends(get_current_user),
):
    return success(get_user(repo, user))


@router.get("/{user_id}")
def read_user(
    user_id: int,
    repo: UserRepository = Depends(get_user_repository),
    user: CurrentUser = Depends(get_current_user),
):
    return success(get_user(repo, user, user_id))


@router.put("/{user_id}")
def edit_user(
    user_id: int,
    body: UserUpdate,
    repo: UserRepository = Depends(get_user_repository),
    user: CurrentUser = Depends(get_current_user),
):
    return success(update_user(repo, user, user_id, body), "User updated successfully")


@router.delete("/{user_id}")
def remove_user(
    user_id: int,
    repo: UserRepository = Depends(get_user_repository),
    user: CurrentUser = Depends(get_current_user),
):
    delete_user(repo, user, user_id)
    return success(message="User deleted successfully")
