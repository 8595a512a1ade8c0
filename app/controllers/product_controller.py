from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_async_session
from app.core.security import require_user_id
from app.services.product_service import product_service
from app.models.product import ProductRead
from app.schemas.product_schemas import ProductCreateRequest, ProductUpdateRequest, MessageResponse, ErrorResponse
from typing import Any, Dict, List

router = APIRouter(
    prefix="/products",
    tags=["Products"],
    responses={code: {"model": ErrorResponse} for code in (400, 401, 403, 404, 500)},
)


def body_fields(body: Any, schema, exclude_unset: bool = False) -> Dict[str, Any]:
    """Read the recognised product fields from a JSON body; non-object bodies carry none."""
    if not isinstance(body, dict):
        body = {}
    return schema.model_validate(body).model_dump(exclude_unset=exclude_unset)


@router.get("", response_model=List[ProductRead])
@router.get("/", response_model=List[ProductRead], include_in_schema=False)
async def get_all_products(db: AsyncSession = Depends(get_async_session)):
    """Get all products (public)"""
    return await product_service.get_all_products(db)


# Registered before /{product_id} so "me" is never read as an id
@router.get("/me", response_model=List[ProductRead])
async def get_my_products(
    user_id: str = Depends(require_user_id),
    db: AsyncSession = Depends(get_async_session)
):
    """Get products owned by the current user"""
    return await product_service.get_user_products(db, user_id)


@router.get("/{product_id}", response_model=ProductRead)
async def get_product_by_id(
    product_id: str,
    db: AsyncSession = Depends(get_async_session)
):
    """Get a single product by id (public)"""
    return await product_service.get_product(db, product_id)


@router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
@router.post("/", response_model=ProductRead, status_code=status.HTTP_201_CREATED, include_in_schema=False)
async def create_product(
    body: Any = Body(default=None),
    user_id: str = Depends(require_user_id),
    db: AsyncSession = Depends(get_async_session)
):
    """Create a product owned by the current user"""
    product_data = body_fields(body, ProductCreateRequest)
    return await product_service.create_product(db, product_data, user_id)


@router.put("/{product_id}", response_model=ProductRead)
@router.patch("/{product_id}", response_model=ProductRead)
async def update_product(
    product_id: str,
    body: Any = Body(default=None),
    user_id: str = Depends(require_user_id),
    db: AsyncSession = Depends(get_async_session)
):
    """Update the supplied fields of a product (owner only)"""
    update_data = body_fields(body, ProductUpdateRequest, exclude_unset=True)
    return await product_service.update_product(db, product_id, update_data, user_id)


@router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(
    product_id: str,
    user_id: str = Depends(require_user_id),
    db: AsyncSession = Depends(get_async_session)
):
    """Delete a product (owner only)"""
    await product_service.delete_product(db, product_id, user_id)
    return MessageResponse(message="Product deleted successfully")
