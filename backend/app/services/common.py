# app/services/common.py
"""
Helpers shared by the user and product services: unique-key folding,
id parsing and the duplicate pre-check.
"""
import datetime as dt
import unicodedata
import uuid
from typing import Optional, Type

from tortoise.backends.base.client import BaseDBAsyncClient
from tortoise.models import Model

from app.config import KEY_MAX_LENGTH

from .exceptions import ConflictError, ValidationError


def utc_now() -> dt.datetime:
    """Current UTC datetime with timezone information."""
    return dt.datetime.now(dt.timezone.utc)


def fold_key(value: str) -> str:
    """
    Fold a string for case and accent insensitive comparison.

    "Élan", "elan" and "ELAN" all fold to "elan": the string is decomposed
    (NFKD), combining marks are dropped and the result is casefolded.
    """
    decomposed = unicodedata.normalize("NFKD", value)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


def parse_id(value) -> Optional[uuid.UUID]:
    """Return ``value`` as a UUID, or None if it cannot name any record."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        return None


async def ensure_unique(
    model: Type[Model],
    key_field: str,
    value: str,
    db: BaseDBAsyncClient,
    label: str,
    exclude_id: Optional[uuid.UUID] = None,
) -> None:
    """
    Reject ``value`` if another record already holds it under folding.

    A match whose id equals ``exclude_id`` is the record being updated and is
    not a conflict. This is a read-then-write pre-check; the unique index on
    ``key_field`` still decides concurrent writes.

    Raises:
        ValidationError: The folded value does not fit the key column
        ConflictError: e.g. 'Username "ALICE" already exist'
    """
    key = fold_key(value)
    if len(key) > KEY_MAX_LENGTH:
        raise ValidationError(f"{label} is too long")
    duplicate = await model.filter(**{key_field: key}).using_db(db).first()
    if duplicate and duplicate.pk != exclude_id:
        raise ConflictError(f'{label} "{value}" already exist')
