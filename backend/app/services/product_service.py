# app/services/product_service.py
"""
Business logic for products.

Besides CRUD, the listing path joins every log entry with the name of the
user who made the change. Lookups for the entries of one product run
concurrently; results are merged back by position so the log keeps its
stored order.
"""
import asyncio
import logging
import math

import pydantic
from tortoise.backends.base.client import BaseDBAsyncClient
from tortoise.exceptions import IntegrityError
from tortoise.exceptions import ValidationError as StorageValidationError

from app.models.counter import Counter
from app.models.product import Product
from app.models.user import User
from app.schemas.product import LogEntry

from .common import ensure_unique, fold_key, parse_id, utc_now
from .exceptions import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

DELETED_USER = "[deleted-user]"
PRODUCT_SEQUENCE = "itemNums"


def is_amount(value) -> bool:
    """True for ints and finite floats; bool is excluded even though it subclasses int."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return isinstance(value, int) or math.isfinite(value)


def parse_log(raw_log) -> list[LogEntry]:
    """
    Parse stored log entries, skipping anything that is not a valid record.
    Skipped entries stay in storage untouched.
    """
    entries = []
    for position, raw in enumerate(raw_log or []):
        try:
            entries.append(LogEntry.model_validate(raw))
        except pydantic.ValidationError:
            logger.warning("Skipping malformed log entry #%d: %r", position, raw)
    return entries


def product_to_dict(p: Product, log: list[dict]) -> dict:
    return {
        "id": str(p.id),
        "no": p.no,
        "title": p.title,
        "description": p.description,
        "imgUrls": list(p.img_urls or []),
        "available": p.available,
        "log": log,
        "createdAt": p.created_at.isoformat() if p.created_at else None,
        "updatedAt": p.updated_at.isoformat() if p.updated_at else None,
    }


class ProductService:
    def __init__(self, db: BaseDBAsyncClient):
        self.db = db

    async def _username_of(self, user_id: str) -> str:
        uid = parse_id(user_id)
        user = await User.get_or_none(id=uid, using_db=self.db) if uid else None
        return user.username if user else DELETED_USER

    async def _log_with_usernames(self, raw_log) -> list[dict]:
        entries = parse_log(raw_log)
        # gather() returns results in argument order, not completion order
        usernames = await asyncio.gather(*(self._username_of(e.userId) for e in entries))
        return [
            {**entry.model_dump(mode="json"), "username": username}
            for entry, username in zip(entries, usernames)
        ]

    async def list_products(self) -> list[dict]:
        """
        All products in sequence order, each log entry carrying ``username``.

        Raises:
            NotFoundError: No product exists at all
        """
        products = await Product.all(using_db=self.db).order_by("no")
        if not products:
            raise NotFoundError("No products found")

        result = []
        for product in products:
            log = await self._log_with_usernames(product.log)
            result.append(product_to_dict(product, log))
        return result

    async def create_product(
        self,
        title: str | None,
        description: str | None,
        img_urls: list[str] | None,
        user_id: str | None,
        amount: int | float | None,
    ) -> str:
        """
        Create a product whose log holds exactly one entry: the initial amount.
        The product number is taken from the ``itemNums`` sequence.
        """
        if not title or not description or not isinstance(img_urls, list) \
                or not user_id or not is_amount(amount):
            raise ValidationError("All fields are required")

        await ensure_unique(Product, "title_key", title, self.db, "Title")

        entry = LogEntry(userId=user_id, amount=amount, operationTime=utc_now())
        no = await Counter.next_value(PRODUCT_SEQUENCE, self.db.connection_name)

        try:
            product = await Product.create(
                no=no,
                title=title,
                title_key=fold_key(title),
                description=description,
                img_urls=list(img_urls),
                log=[entry.model_dump(mode="json")],
                using_db=self.db,
            )
        except IntegrityError:
            raise ConflictError(f'Title "{title}" already exist')
        except StorageValidationError:
            raise ValidationError("Invalid product data received")

        logger.info("Created product #%d %s (%s)", product.no, product.title, product.id)
        return "New product created"

    async def update_product(
        self,
        id: str | None,
        title: str | None,
        description: str | None,
        img_urls: list[str] | None,
        available: bool | None,
        user_id: str | None = None,
        amount: int | float | None = None,
    ) -> str:
        """
        Replace title, description, image URLs and availability.

        When ``amount`` is numeric (zero included) one entry is appended to the
        log; earlier entries are never touched.
        """
        if not id or not title or not description or not isinstance(img_urls, list) \
                or not isinstance(available, bool):
            raise ValidationError("All fields are required")
        if amount is not None and not is_amount(amount):
            raise ValidationError("Amount must be a number")
        if is_amount(amount) and not user_id:
            raise ValidationError("User ID is required when amount is given")

        product_id = parse_id(id)
        product = await Product.get_or_none(id=product_id, using_db=self.db) if product_id else None
        if not product:
            raise NotFoundError("Product not found")

        await ensure_unique(Product, "title_key", title, self.db, "Title", exclude_id=product.id)

        product.title = title
        product.title_key = fold_key(title)
        product.description = description
        product.img_urls = list(img_urls)
        product.available = available

        if is_amount(amount):
            entry = LogEntry(userId=user_id, amount=amount, operationTime=utc_now())
            product.log = [*(product.log or []), entry.model_dump(mode="json")]

        try:
            await product.save(using_db=self.db)
        except IntegrityError:
            raise ConflictError(f'Title "{title}" already exist')
        except StorageValidationError:
            raise ValidationError("Invalid product data received")

        logger.info("Updated product #%d %s (%s)", product.no, product.title, product.id)
        return f"{product.title} updated"

    async def delete_product(self, id: str | None) -> str:
        if not id:
            raise ValidationError("ID is required")

        product_id = parse_id(id)
        product = await Product.get_or_none(id=product_id, using_db=self.db) if product_id else None
        if not product:
            raise NotFoundError("Product not found")

        await product.delete(using_db=self.db)
        logger.info("Deleted product #%d %s (%s)", product.no, product.title, product.id)
        return f'Product "{product.title}" with an ID of "{product.id}" deleted'
