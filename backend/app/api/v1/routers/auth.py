# app/api/v1/routers/auth.py
from fastapi import APIRouter, Depends, HTTPException, Response, status
from app.core.db import get_connection
from app.core.ratelimit import limit_login
from app.core.security import verify_password, create_access_token
from app.models.user import User
from app.schemas.auth import LoginRequest
from app.services.common import fold_key
from app.services.exceptions import ValidationError
from app.services.user_service import user_to_dict

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("", dependencies=[Depends(limit_login)])
async def login(payload: LoginRequest, response: Response):
    """
    Authenticate user and create access token.

    The username is matched case and accent insensitively. The token is
    returned in the body and also set as an HttpOnly cookie.

    Returns:
        dict: accessToken and the public user record (firstLogin included so
        clients can prompt for a password change)

    Raises:
        ValidationError (400): Missing username or password
        HTTPException (401): Invalid credentials or deactivated account
        TooManyAttemptsError (429): Attempt budget for this address exhausted
    """
    if not payload.username or not payload.password:
        raise ValidationError("All fields are required")

    user = await User.get_or_none(username_key=fold_key(payload.username), using_db=get_connection())
    if not user or not user.active or not verify_password(payload.password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    token = create_access_token(str(user.id), user.roles)
    response.set_cookie("accessToken", token, httponly=True, secure=False, samesite="lax")
    return {"accessToken": token, "user": user_to_dict(user)}

@router.post("/logout")
async def logout(response: Response):
    """
    Clear the access token cookie. Always succeeds; the JWT itself stays
    valid until it expires.
    """
    response.delete_cookie("accessToken")
    return {"message": "Cookie cleared"}
