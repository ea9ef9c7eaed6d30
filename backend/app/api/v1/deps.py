from fastapi import Depends, Header, HTTPException, Request, status
from app.core.db import get_connection
from app.core.security import decode_access_token
from app.models.user import User
from app.services.common import parse_id
from app.services.product_service import ProductService
from app.services.user_service import UserService

async def get_current_user(
    request: Request,
    authorization: str | None = Header(default=None),
):
    """
    FastAPI dependency to get the current authenticated user.

    This dependency extracts and validates the JWT token from either:
    1. Authorization header (Bearer token) - preferred method
    2. HttpOnly cookie (accessToken) - fallback method

    Returns:
        User: The authenticated, active user object from database

    Raises:
        HTTPException (401): If no token is provided (AUTH_REQUIRED)
        HTTPException (401): If token is invalid or expired (AUTH_INVALID_TOKEN)
        HTTPException (401): If user not found or deactivated (AUTH_USER_NOT_FOUND / AUTH_USER_INACTIVE)
    """
    token = None
    # 1) Prioritize Authorization: Bearer xxx
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization.split(" ", 1)[1].strip()
    # 2) Secondly HttpOnly Cookie: accessToken
    if not token:
        token = request.cookies.get("accessToken")

    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="AUTH_REQUIRED")

    try:
        payload = decode_access_token(token)
        user_id = parse_id(payload.get("sub"))
    except Exception:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="AUTH_INVALID_TOKEN")

    user = await User.get_or_none(id=user_id) if user_id else None
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="AUTH_USER_NOT_FOUND")
    if not user.active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="AUTH_USER_INACTIVE")
    return user

def get_user_service() -> UserService:
    """Build the user service around the default storage connection."""
    return UserService(get_connection())

def get_product_service() -> ProductService:
    """Build the product service around the default storage connection."""
    return ProductService(get_connection())

# Shorthand for routers whose every route needs an authenticated caller
require_user = Depends(get_current_user)
