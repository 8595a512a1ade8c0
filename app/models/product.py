from sqlmodel import SQLModel, Field
from sqlalchemy import DateTime
from typing import Optional
from datetime import datetime, timezone
import uuid


def _new_product_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProductBase(SQLModel):
    title: str = Field(nullable=False)
    description: str = Field(nullable=False)
    imageUrl: str = Field(nullable=False)


class Product(ProductBase, table=True):
    __tablename__ = "products"

    id: str = Field(
        default_factory=_new_product_id,
        primary_key=True,
        index=True,
        nullable=False
    )
    # Owner identity from the auth provider; not a foreign key, no user store is consulted
    userId: str = Field(nullable=False, index=True)
    createdAt: datetime = Field(default_factory=_utcnow, sa_type=DateTime(timezone=True), nullable=False)
    updatedAt: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))


class ProductCreate(ProductBase):
    userId: str


class ProductRead(ProductBase):
    id: str
    userId: str
    createdAt: datetime
    updatedAt: Optional[datetime]

