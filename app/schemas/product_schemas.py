from pydantic import BaseModel, ConfigDict
from typing import Any


class ProductCreateRequest(BaseModel):
    """Create body. Field values are checked by the product service."""
    model_config = ConfigDict(extra="ignore")

    title: Any = None
    description: Any = None
    imageUrl: Any = None


class ProductUpdateRequest(BaseModel):
    """Partial update body. Only fields the client actually sent are applied."""
    model_config = ConfigDict(extra="ignore")

    title: Any = None
    description: Any = None
    imageUrl: Any = None


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
