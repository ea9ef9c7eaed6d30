# app/services/user_service.py
"""
Business logic for users.

``UserService`` works against the storage handle it is given; it never
reaches for a global connection. Every method is one request's worth of
work: optional lookups, then at most one write.
"""
import logging

from tortoise.backends.base.client import BaseDBAsyncClient
from tortoise.exceptions import IntegrityError
from tortoise.exceptions import ValidationError as StorageValidationError

from app.core.security import hash_password
from app.models.user import User

from .common import ensure_unique, fold_key, parse_id
from .exceptions import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def user_to_dict(u: User) -> dict:
    """Public representation of a user; the credential hash is never included."""
    return {
        "id": str(u.id),
        "username": u.username,
        "roles": list(u.roles or []),
        "active": u.active,
        "firstLogin": u.first_login,
        "createdAt": u.created_at.isoformat() if u.created_at else None,
        "updatedAt": u.updated_at.isoformat() if u.updated_at else None,
    }


class UserService:
    def __init__(self, db: BaseDBAsyncClient):
        self.db = db

    async def list_users(self) -> list[dict]:
        """
        Raises:
            NotFoundError: No user exists at all
        """
        users = await User.all(using_db=self.db).order_by("created_at")
        if not users:
            raise NotFoundError("No users found")
        return [user_to_dict(u) for u in users]

    async def create_user(self, username: str | None, password: str | None) -> str:
        """
        Create an active, first-login user with the default role.

        Returns:
            Success message naming the user
        """
        if not username or not password:
            raise ValidationError("All fields are required")

        await ensure_unique(User, "username_key", username, self.db, "Username")

        try:
            user = await User.create(
                username=username,
                username_key=fold_key(username),
                password_hash=hash_password(password),
                using_db=self.db,
            )
        except IntegrityError:
            # Lost a race against a concurrent create of the same name
            raise ConflictError(f'Username "{username}" already exist')
        except StorageValidationError:
            raise ValidationError("Invalid user data received")

        logger.info("Created user %s (%s)", user.username, user.id)
        return f"New user {username} created"

    async def update_user(
        self,
        id: str | None,
        username: str | None,
        roles: list[str] | None,
        active: bool | None,
        password: str | None = None,
    ) -> str:
        """
        Replace username, roles and active flag of an existing user.

        A non-empty ``password`` is re-hashed and clears the first-login flag.
        Keeping one's own username is not a conflict.
        """
        if not id or not username or not isinstance(roles, list) or not roles \
                or not isinstance(active, bool):
            raise ValidationError("All fields except password are required")

        user_id = parse_id(id)
        user = await User.get_or_none(id=user_id, using_db=self.db) if user_id else None
        if not user:
            raise NotFoundError("User not found")

        await ensure_unique(User, "username_key", username, self.db, "Username", exclude_id=user.id)

        user.username = username
        user.username_key = fold_key(username)
        user.roles = list(roles)
        user.active = active

        if password:
            user.password_hash = hash_password(password)
            user.first_login = False

        try:
            await user.save(using_db=self.db)
        except IntegrityError:
            raise ConflictError(f'Username "{username}" already exist')
        except StorageValidationError:
            raise ValidationError("Invalid user data received")

        logger.info("Updated user %s (%s)", user.username, user.id)
        return f"{user.username} updated"

    async def delete_user(self, id: str | None) -> str:
        if not id:
            raise ValidationError("User ID required")

        user_id = parse_id(id)
        user = await User.get_or_none(id=user_id, using_db=self.db) if user_id else None
        if not user:
            raise NotFoundError("User not found")

        await user.delete(using_db=self.db)
        logger.info("Deleted user %s (%s)", user.username, user.id)
        return f'Username "{user.username}" with an ID of "{user.id}" deleted'
