# app/api/v1/routers/products.py
from fastapi import APIRouter, Depends, status

from app.api.v1.deps import get_current_user, get_product_service, require_user
from app.models.user import User
from app.schemas.product import ProductCreateIn, ProductDeleteIn, ProductUpdateIn
from app.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["products"], dependencies=[require_user])


@router.get("")
async def list_products(
    service: ProductService = Depends(get_product_service),
):
    """
    Get all products ordered by number.

    Every log entry gets a ``username`` field resolved from its ``userId``;
    entries whose user no longer exists show "[deleted-user]".

    Raises:
        NotFoundError (400): If there are no products
    """
    return await service.list_products()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_product(
    body: ProductCreateIn,
    service: ProductService = Depends(get_product_service),
):
    """
    Create a product with its initial quantity as the first log entry.

    Raises:
        ValidationError (400): Missing field, imgUrls not a list or amount not a number
        ConflictError (409): Title taken (case and accent insensitive)
    """
    message = await service.create_product(
        body.title,
        body.description,
        body.imgUrls,
        body.userId,
        body.amount,
    )
    return {"message": message}


@router.patch("")
async def update_product(
    body: ProductUpdateIn,
    service: ProductService = Depends(get_product_service),
    user: User = Depends(get_current_user),
):
    """
    Replace product fields; append a log entry when ``amount`` is given.

    The log entry is attributed to ``userId`` when supplied, otherwise to the
    authenticated caller.
    """
    message = await service.update_product(
        body.id,
        body.title,
        body.description,
        body.imgUrls,
        body.available,
        user_id=body.userId or str(user.id),
        amount=body.amount,
    )
    return {"message": message}


@router.delete("")
async def delete_product(
    body: ProductDeleteIn,
    service: ProductService = Depends(get_product_service),
):
    message = await service.delete_product(body.id)
    return {"message": message}
