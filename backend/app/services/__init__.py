"""
Services Module

Request-scoped business logic on top of the storage models:
- UserService: user accounts, credentials and role flags
- ProductService: inventory items and their quantity-change log
"""

from .exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    ConflictError,
    TooManyAttemptsError,
)
from .user_service import UserService
from .product_service import ProductService

__all__ = [
    # Errors
    "AppError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "TooManyAttemptsError",
    # Services
    "UserService",
    "ProductService",
]
