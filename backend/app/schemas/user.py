"""
Pydantic schemas for user management endpoints.

Request bodies declare every field optional: presence is checked by the
service so that each operation answers with its own message. Types are
strict so that e.g. ``"active": "yes"`` is rejected instead of coerced.
"""
from typing import List, Optional

from pydantic import BaseModel, StrictBool, StrictStr

__all__ = ["UserCreateIn", "UserUpdateIn", "UserDeleteIn"]


class UserCreateIn(BaseModel):
    username: Optional[StrictStr] = None
    password: Optional[StrictStr] = None


class UserUpdateIn(BaseModel):
    id: Optional[StrictStr] = None
    username: Optional[StrictStr] = None
    password: Optional[StrictStr] = None  # Only replaced when non-empty
    roles: Optional[List[StrictStr]] = None
    active: Optional[StrictBool] = None


class UserDeleteIn(BaseModel):
    id: Optional[StrictStr] = None
