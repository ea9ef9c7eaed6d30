# app/api/v1/routers/users.py
from fastapi import APIRouter, Depends, status

from app.api.v1.deps import get_user_service, require_user
from app.schemas.user import UserCreateIn, UserDeleteIn, UserUpdateIn
from app.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"], dependencies=[require_user])


@router.get("")
async def list_users(service: UserService = Depends(get_user_service)):
    """
    Get all users, without their credential hash.

    Returns:
        list[dict]: id, username, roles, active, firstLogin, createdAt, updatedAt

    Raises:
        NotFoundError (400): If there are no users
    """
    return await service.list_users()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(body: UserCreateIn, service: UserService = Depends(get_user_service)):
    """
    Create a new user from username and password.

    The account starts active, flagged for first login, with the default role.

    Raises:
        ValidationError (400): Missing username or password
        ConflictError (409): Username taken (case and accent insensitive)
    """
    message = await service.create_user(body.username, body.password)
    return {"message": message}


@router.patch("")
async def update_user(body: UserUpdateIn, service: UserService = Depends(get_user_service)):
    """
    Update username, roles and active flag; password only when provided.

    Raises:
        ValidationError (400): Missing id/username/roles/active
        NotFoundError (400): No user with that id
        ConflictError (409): Username held by another user
    """
    message = await service.update_user(
        body.id,
        body.username,
        body.roles,
        body.active,
        password=body.password,
    )
    return {"message": message}


@router.delete("")
async def delete_user(body: UserDeleteIn, service: UserService = Depends(get_user_service)):
    """
    Delete a user by id.

    Products keep their log entries; those entries resolve to "[deleted-user]".
    """
    message = await service.delete_user(body.id)
    return {"message": message}
