"""
Pydantic schemas for authentication endpoints.
"""
from typing import Optional

from pydantic import BaseModel

__all__ = ["LoginRequest"]

class LoginRequest(BaseModel):
    """
    Request model for the login endpoint.
    Fields are optional so that missing credentials reach the handler and
    are answered with 400 instead of a framework validation error.
    """
    username: Optional[str] = None
    password: Optional[str] = None
