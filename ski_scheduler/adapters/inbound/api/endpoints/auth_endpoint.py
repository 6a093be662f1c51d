# ski_scheduler/adapters/inbound/api/endpoints/auth_endpoint.py

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Security, status
from fastapi.security import HTTPAuthorizationCredentials

from ski_scheduler.adapters.inbound.api.deps import (
    MISSING_HEADER,
    bearer_scheme,
    get_auth_service,
    get_bearer_token,
    get_current_credentials,
)
from ski_scheduler.adapters.inbound.api.errors import ApiError
from ski_scheduler.application.dtos.user_dto import CredentialsOutput, LoginRequest, RegisterRequest
from ski_scheduler.application.use_cases.auth_use_cases import AsyncAuthService
from ski_scheduler.domain.exceptions import DomainException, UnauthorizedException
from ski_scheduler.domain.models.user_domain_model import Credentials

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    summary="Register User - Creates a new user",
    responses={
        201: {"content": {"application/json": {"example": {"message": "alice registered"}}}},
        401: {"content": {"application/json": {"example": {
            "message": "Failed to register user", "error": "User already exists"}}}},
    },
)
async def register_user(
        user_input: RegisterRequest,
        service: AsyncAuthService = Depends(get_auth_service),
):
    try:
        await service.register_user(user_input.username, user_input.password, user_input.admin)
    except DomainException as e:
        raise ApiError(status.HTTP_401_UNAUTHORIZED, "Failed to register user", e)

    return {"message": f"{user_input.username} registered"}


@router.post(
    "/login",
    summary="Login User - Generates a session token",
    description="Checks username and password and returns a JWT valid for one hour.",
)
async def login_user(
        user_input: LoginRequest,
        service: AsyncAuthService = Depends(get_auth_service),
):
    try:
        token = await service.login_user(user_input.username, user_input.password)
    except DomainException as e:
        raise ApiError(status.HTTP_401_UNAUTHORIZED, "Login failed", e)

    return {"message": "Login successful", "token": token}


@router.post(
    "/logout",
    status_code=status.HTTP_200_OK,
    summary="Logout - Revoke current session token",
    description="Adds the current token to the blacklist until it expires.",
)
async def logout_user(
        credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
        service: AsyncAuthService = Depends(get_auth_service),
):
    if credentials is None or not credentials.credentials:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Logout failed", MISSING_HEADER)

    try:
        await service.logout_user(credentials.credentials)
    except DomainException as e:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Logout failed", e)

    return {"message": "Successfully logged out"}


@router.get(
    "/is-admin",
    summary="Decode Token - Returns the caller's credentials",
)
async def decode_user(credentials: Credentials = Depends(get_current_credentials)):
    return {
        "message": f"Retrieved credentials for {credentials.username}",
        "credentials": CredentialsOutput.model_validate(credentials).to_json(),
    }


@router.delete(
    "/self-delete",
    summary="Self Delete - Deletes the caller's account",
    description="Unassigns every lesson of the caller, then deletes the account.",
)
async def self_delete_account(
        token: str = Depends(get_bearer_token),
        _: Credentials = Depends(get_current_credentials),
        service: AsyncAuthService = Depends(get_auth_service),
):
    try:
        username = await service.self_delete(token)
    except UnauthorizedException as e:
        raise ApiError(status.HTTP_401_UNAUTHORIZED, "Unauthorized: Invalid token", e)
    except DomainException as e:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Failed to delete user", e)

    return {"message": f'User "{username}" deleted successfully'}
