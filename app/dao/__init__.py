from .product_dao import ProductDAO, product_dao

__all__ = [
    "ProductDAO",
    "product_dao",
]
