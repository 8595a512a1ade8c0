from typing import Any, Dict, List
from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.dao.product_dao import product_dao
from app.models.product import Product, ProductCreate
from datetime import datetime, timezone
import structlog

logger = structlog.get_logger()

# Validated in this order; the first invalid field decides the error
PRODUCT_FIELDS = ("title", "description", "imageUrl")


def is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and len(value.strip()) > 0


class ProductService:
    """
    Product resource handlers. Each operation runs its guard checks, makes one
    persistence call and either returns the result or raises an HTTPException
    carrying the client-facing message. Persistence failures are logged and
    surfaced as a generic 500.
    """

    def __init__(self):
        self.product_dao = product_dao

    async def get_all_products(self, db: AsyncSession) -> List[Product]:
        try:
            products = await self.product_dao.get_all(db)
            logger.info("Retrieved products", count=len(products))
            return products
        except Exception as e:
            logger.error("Error getting products", error=str(e))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to get products"
            )

    async def get_user_products(self, db: AsyncSession, user_id: str) -> List[Product]:
        try:
            products = await self.product_dao.get_by_user_id(db, user_id)
            logger.info("Retrieved user products", user_id=user_id, count=len(products))
            return products
        except Exception as e:
            logger.error("Error getting user products", user_id=user_id, error=str(e))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to get user products"
            )

    async def get_product(self, db: AsyncSession, product_id: str) -> Product:
        if not product_id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Product id is required"
            )
        try:
            product = await self.product_dao.get_by_id(db, product_id)
        except Exception as e:
            logger.error("Error getting product", product_id=product_id, error=str(e))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to get product"
            )

        if not product:
            logger.warning("Product not found", product_id=product_id)
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found"
            )
        return product

    async def create_product(self, db: AsyncSession, product_data: Dict[str, Any], user_id: str) -> Product:
        if not all(is_non_empty_string(product_data.get(field)) for field in PRODUCT_FIELDS):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Title, description, and imageUrl are required"
            )

        try:
            # userId always comes from the caller identity, never from the body
            product_create = ProductCreate(
                title=product_data["title"],
                description=product_data["description"],
                imageUrl=product_data["imageUrl"],
                userId=user_id,
            )
            product = await self.product_dao.create(db, obj_in=product_create.model_dump())
            logger.info("Product created successfully", product_id=product.id, user_id=user_id)
            return product
        except Exception as e:
            logger.error("Error creating product", user_id=user_id, error=str(e))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to create product"
            )

    def _collect_updates(self, update_data: Dict[str, Any]) -> Dict[str, str]:
        updates = {}
        for field in PRODUCT_FIELDS:
            if field not in update_data:
                continue
            if not is_non_empty_string(update_data[field]):
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"Invalid {field}"
                )
            updates[field] = update_data[field]

        if not updates:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="At least one field is required"
            )
        return updates

    async def _get_owned_product(self, db: AsyncSession, product_id: str, user_id: str, action: str) -> Product:
        product = await self.product_dao.get_by_id(db, product_id)
        if not product:
            logger.warning("Product not found", product_id=product_id)
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found"
            )

        if product.userId != user_id:
            logger.warning(f"Unauthorized product {action} attempt", product_id=product_id, user_id=user_id)
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"You can only {action} your own products"
            )
        return product

    async def update_product(self, db: AsyncSession, product_id: str, update_data: Dict[str, Any], user_id: str) -> Product:
        updates = self._collect_updates(update_data)

        try:
            product = await self._get_owned_product(db, product_id, user_id, "update")

            updates["updatedAt"] = datetime.now(timezone.utc)
            product = await self.product_dao.update(db, db_obj=product, obj_in=updates)
            logger.info("Product updated successfully", product_id=product_id, user_id=user_id)
            return product

        except HTTPException:
            raise
        except Exception as e:
            logger.error("Error updating product", product_id=product_id, user_id=user_id, error=str(e))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to update product"
            )

    async def delete_product(self, db: AsyncSession, product_id: str, user_id: str) -> None:
        try:
            await self._get_owned_product(db, product_id, user_id, "delete")

            await self.product_dao.delete(db, id=product_id)
            logger.info("Product deleted successfully", product_id=product_id, user_id=user_id)

        except HTTPException:
            raise
        except Exception as e:
            logger.error("Error deleting product", product_id=product_id, user_id=user_id, error=str(e))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to delete product"
            )


product_service = ProductService()
