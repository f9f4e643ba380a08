# Import order matters: the activity tables reference users and products
from .user import User
from .product import Product
from .cart_item import CartItem
from .wishlist_item import WishlistItem
from .viewed_product import ViewedProduct

__all__ = [
    "User",
    "Product",
    "CartItem",
    "WishlistItem",
    "ViewedProduct",
]
