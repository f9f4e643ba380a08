# Central models file so every table is registered on Base.metadata
# before create_all runs.

from .core import Base
from ..entities import User, Product, CartItem, WishlistItem, ViewedProduct

__all__ = [
    "Base",
    "User",
    "Product",
    "CartItem",
    "WishlistItem",
    "ViewedProduct",
]
