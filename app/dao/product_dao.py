from typing import Any, Dict, List, Optional
from sqlmodel import select
from sqlalchemy.ext.asyncio import AsyncSession
from app.models.product import Product
import structlog

logger = structlog.get_logger()


class ProductDAO:
    """Async queries over the products table. Errors are logged and re-raised."""

    async def get_all(self, db: AsyncSession) -> List[Product]:
        try:
            result = await db.execute(select(Product))
            return list(result.scalars().all())
        except Exception as e:
            logger.error("Error listing products", error=str(e))
            raise

    async def get_by_user_id(self, db: AsyncSession, user_id: str) -> List[Product]:
        try:
            result = await db.execute(
                select(Product).where(Product.userId == user_id)
            )
            return list(result.scalars().all())
        except Exception as e:
            logger.error("Error getting products by owner", user_id=user_id, error=str(e))
            raise

    async def get_by_id(self, db: AsyncSession, product_id: str) -> Optional[Product]:
        try:
            result = await db.execute(select(Product).where(Product.id == product_id))
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error("Error looking up product", product_id=product_id, error=str(e))
            raise

    async def create(self, db: AsyncSession, *, obj_in: Dict[str, Any]) -> Product:
        product = Product(**obj_in)
        try:
            db.add(product)
            await db.commit()
            await db.refresh(product)
        except Exception as e:
            await db.rollback()
            logger.error("Error inserting product", user_id=obj_in.get("userId"), error=str(e))
            raise
        logger.info("Inserted product", product_id=product.id)
        return product

    async def update(self, db: AsyncSession, *, db_obj: Product, obj_in: Dict[str, Any]) -> Product:
        """Apply a partial update; keys absent from obj_in keep their stored values."""
        for field, value in obj_in.items():
            setattr(db_obj, field, value)
        try:
            db.add(db_obj)
            await db.commit()
            await db.refresh(db_obj)
        except Exception as e:
            await db.rollback()
            logger.error("Error updating product", product_id=db_obj.id, fields=sorted(obj_in), error=str(e))
            raise
        logger.info("Updated product", product_id=db_obj.id, fields=sorted(obj_in))
        return db_obj

    async def delete(self, db: AsyncSession, *, id: str) -> Optional[Product]:
        product = await self.get_by_id(db, id)
        if product is None:
            return None
        try:
            await db.delete(product)
            await db.commit()
        except Exception as e:
            await db.rollback()
            logger.error("Error deleting product", product_id=id, error=str(e))
            raise
        logger.info("Deleted product", product_id=id)
        return product


product_dao = ProductDAO()
