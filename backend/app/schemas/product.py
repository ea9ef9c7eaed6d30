"""
Pydantic schemas for product endpoints and the embedded log record.
"""
import datetime as dt
from typing import Annotated, List, Optional, Union

from pydantic import AllowInfNan, BaseModel, StrictBool, StrictInt, StrictStr, Strict

__all__ = ["Amount", "LogEntry", "ProductCreateIn", "ProductUpdateIn", "ProductDeleteIn"]

# Finite numbers only: booleans, numeric strings, NaN and infinities are rejected
Amount = Union[StrictInt, Annotated[float, Strict(), AllowInfNan(False)]]


class LogEntry(BaseModel):
    """
    One quantity change applied to a product.
    Stored inside ``Product.log`` as ``model_dump(mode="json")``.
    """
    userId: StrictStr  # Weak reference to a User id (may dangle)
    amount: Amount
    operationTime: dt.datetime


class ProductCreateIn(BaseModel):
    title: Optional[StrictStr] = None
    description: Optional[StrictStr] = None
    imgUrls: Optional[List[StrictStr]] = None
    userId: Optional[StrictStr] = None
    amount: Optional[Amount] = None


class ProductUpdateIn(BaseModel):
    id: Optional[StrictStr] = None
    title: Optional[StrictStr] = None
    description: Optional[StrictStr] = None
    imgUrls: Optional[List[StrictStr]] = None
    userId: Optional[StrictStr] = None  # Defaults to the caller when amount is given
    amount: Optional[Amount] = None  # Appends a log entry when present
    available: Optional[StrictBool] = None


class ProductDeleteIn(BaseModel):
    id: Optional[StrictStr] = None
