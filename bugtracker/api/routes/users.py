"""User registration, login and profile endpoints."""

from typing import Any

from fastapi import APIRouter, Body, status

from bugtracker.api.deps import CurrentUserId, Gateway
from bugtracker.core.exceptions import NotFoundError
from bugtracker.schemas.common import MessageResponse
from bugtracker.schemas.user import LoginResponse, UserResponse
from bugtracker.services.user import UserService

router = APIRouter()


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    description="Create a new user account. Username and email must be unique.",
)
async def register(gateway: Gateway, payload: Any = Body(None)) -> UserResponse:
    return await UserService(gateway).register_user(payload)


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Login",
    description="Authenticate with username or email and receive an access token.",
)
async def login(gateway: Gateway, payload: Any = Body(None)) -> LoginResponse:
    return await UserService(gateway).login_user(payload)


@router.get("/profile", response_model=UserResponse, summary="Get own profile")
async def get_profile(user_id: CurrentUserId, gateway: Gateway) -> UserResponse:
    user = await UserService(gateway).get_user_profile(user_id)
    if user is None:
        raise NotFoundError(resource="User")
    return user


@router.put("/profile", response_model=UserResponse, summary="Update own profile")
async def update_profile(
    user_id: CurrentUserId,
    gateway: Gateway,
    payload: Any = Body(None),
) -> UserResponse:
    user = await UserService(gateway).update_user_profile(user_id, payload)
    if user is None:
        raise NotFoundError(resource="User")
    return user


@router.put("/change-password", response_model=MessageResponse, summary="Change own password")
async def change_password(
    user_id: CurrentUserId,
    gateway: Gateway,
    payload: Any = Body(None),
) -> MessageResponse:
    if not await UserService(gateway).change_password(user_id, payload):
        raise NotFoundError(resource="User")
    return MessageResponse(message="Password changed successfully")


@router.get("", response_model=list[UserResponse], summary="List users")
async def list_users(gateway: Gateway) -> list[UserResponse]:
    return await UserService(gateway).get_all_users()


@router.get("/{user_id}", response_model=UserResponse, summary="Get a user")
async def get_user(user_id: str, gateway: Gateway) -> UserResponse:
    user = await UserService(gateway).get_user_by_id(user_id)
    if user is None:
        raise NotFoundError(resource="User")
    return user
