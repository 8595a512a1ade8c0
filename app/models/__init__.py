# Import all models for easy access
from .product import Product, ProductCreate, ProductRead

# Export all models
__all__ = [
    "Product", "ProductCreate", "ProductRead",
]
