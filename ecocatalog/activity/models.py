from uuid import UUID
from datetime import datetime
from typing import List, Optional
from pydantic import Field

from ..schemas.base import CamelModel
from ..services.parameter_validator import MAX_INT
from ..products.models import ProductResponse


# --- Requests ---

class AddToCartRequest(CamelModel):
    product_id: UUID
    quantity: int = Field(default=1, ge=1, le=MAX_INT)


class UpdateCartQuantityRequest(CamelModel):
    # zero or less removes the item
    quantity: int = Field(ge=-MAX_INT - 1, le=MAX_INT)


class AddToWishlistRequest(CamelModel):
    product_id: UUID


# --- Entries ---

class ActivityEntry(CamelModel):
    id: UUID
    user_id: UUID
    product_id: UUID


class CartItemResponse(ActivityEntry):
    quantity: int
    added_at: datetime
    product: Optional[ProductResponse] = None


class WishlistItemResponse(ActivityEntry):
    added_at: datetime
    product: Optional[ProductResponse] = None


class ViewedProductResponse(ActivityEntry):
    viewed_at: datetime
    product: Optional[ProductResponse] = None


# --- Envelopes ---

class CartItemEnvelope(CamelModel):
    cart_item: CartItemResponse


class CartItemsResponse(CamelModel):
    cart_items: List[CartItemResponse]


class WishlistItemEnvelope(CamelModel):
    wishlist_item: WishlistItemResponse


class WishlistItemsResponse(CamelModel):
    wishlist_items: List[WishlistItemResponse]


class ViewedProductsResponse(CamelModel):
    viewed_products: List[ViewedProductResponse]


class MessageResponse(CamelModel):
    message: str
