# app/models/user.py
"""
Database model for users.
Represents a user account in the system, containing authentication credentials
and role-based access flags.
"""
import uuid
from tortoise import fields, models

from app.config import KEY_MAX_LENGTH, settings

def _default_roles() -> list[str]:
    return [settings.default_role]

class User(models.Model):
    """
    User database model.

    Security:
    - Password is stored as a hash (never store plain text passwords)
    - Username is unique under case/accent-insensitive comparison: the folded
      form lives in ``username_key`` and carries the unique index
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)  # Primary key: unique user identifier
    username = fields.CharField(max_length=256)  # Display/login name as entered
    username_key = fields.CharField(
        max_length=KEY_MAX_LENGTH,
        unique=True,
        index=True
    )  # Folded username (case and accents removed), authoritative uniqueness constraint
    password_hash = fields.CharField(max_length=255)  # Argon2 hash
    roles = fields.JSONField(default=_default_roles)  # Ordered list of role tags
    active = fields.BooleanField(default=True)
    first_login = fields.BooleanField(default=True)  # Cleared once the password is changed by an update
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        """Tortoise ORM metadata configuration."""
        table = "users"  # Database table name
