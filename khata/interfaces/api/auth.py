"""Auth API routes — register, login, me."""

from fastapi import APIRouter, Depends, status

from khata.application.services.auth_service import authenticate_user, register_user
from khata.application.services.user_service import get_user
from khata.core.responses import success
from khata.domain.repositories.user_repository import UserRepository
from khata.domain.schemas.auth import CurrentUser, LoginRequest, RegisterRequest
from khata.interfaces.api.deps import get_current_user
from khata.interfaces.deps import get_user_repository

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
@router.post("/signup", status_code=status.HTTP_201_CREATED, include_in_schema=False)
def register(body: RegisterRequest, repo: UserRepository = Depends(get_user_repository)):
    payload = register_user(repo, body)
    return success(payload, "User registered successfully")


@router.post("/login")
def login(body: LoginRequest, repo: UserRepository = Depends(get_user_repository)):
    payload = authenticate_user(repo, body)
    return success(payload, "Login successful")


@router.get("/me")
def get_me(
    repo: UserRepository = Depends(get_user_repository),
    user: CurrentUser = Depends(get_current_user),
):
    return success(get_user(repo, user))
