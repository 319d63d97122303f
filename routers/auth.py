"""Auth endpoints - current user lookup and signup."""

from typing import Any

from fastapi import APIRouter, Depends, Request, status

import app_state
from config import AppConfig
from core.auth import extract_token, verify_token
from core.exceptions import AuthError
from core.logger import get_logger
from core.rate_limiter import RATE_LIMITS, get_limiter
from core.users import SignupRequest, UserStore

logger = get_logger("auth_router")

router = APIRouter(prefix="/api/auth", tags=["Auth"])

limiter = get_limiter()


def get_user_store() -> UserStore:
    return app_state.get_user_store()


def get_app_config() -> AppConfig:
    return app_state.get_app_config()


@router.get("/me")
async def current_user(
    request: Request,
    store: UserStore = Depends(get_user_store),
    config: AppConfig = Depends(get_app_config),
) -> dict[str, Any]:
    """Resolve the cookie or bearer token to the active user's profile."""
    token = extract_token(request)
    if not token:
        raise AuthError("Not authenticated")

    payload = verify_token(token, config.jwt_secret, config.jwt_algorithm)
    profile = await store.get_active_profile(str(payload["userId"]))
    return {"user": profile.model_dump(by_alias=True)}


@router.post("/signup", status_code=status.HTTP_201_CREATED)
@limiter.limit(RATE_LIMITS["signup"])
async def signup(
    request: Request,
    body: SignupRequest,
    store: UserStore = Depends(get_user_store),
) -> dict[str, Any]:
    """Create an account (role defaults to ``user``)."""
    profile = await store.create_user(body)
    logger.info("Signup completed", role=profile.role)
    return {"message": "User created successfully", "user": profile.model_dump(by_alias=True)}
