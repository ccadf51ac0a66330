from .store import Store
from .product import Product

__all__ = [
    'Store',
    'Product',
]
