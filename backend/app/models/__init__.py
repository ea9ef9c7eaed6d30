# app/models/__init__.py
"""
Database models module initialization.
Exports all Tortoise ORM models for convenient imports throughout the application.

Models exported:
- User: User account, credential hash and role flags
- Product: Inventory item with its embedded quantity-change log
- Counter: Named monotonically increasing sequence (product numbers)
"""
from .user import User
from .product import Product
from .counter import Counter
