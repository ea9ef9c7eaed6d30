# app/models/product.py
"""
Database model for products.
A product keeps its quantity-change history inline in ``log``, a JSON list of
``{userId, amount, operationTime}`` records that only ever grows.
"""
import uuid
from tortoise import fields, models

from app.config import KEY_MAX_LENGTH

class Product(models.Model):
    """
    Product database model.

    Relationships:
    - Each log entry references a User by id only (no foreign key): users can be
      deleted independently and readers must tolerate dangling ids
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    no = fields.IntField(unique=True)  # Sequence number from Counter "itemNums", never reused
    title = fields.CharField(max_length=256)
    title_key = fields.CharField(max_length=KEY_MAX_LENGTH, unique=True, index=True)  # Folded title, uniqueness constraint
    description = fields.TextField()
    img_urls = fields.JSONField(default=list)
    available = fields.BooleanField(default=True)
    log = fields.JSONField(default=list)
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "products"
