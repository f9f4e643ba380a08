# ecocatalog/activity/controller.py
from uuid import UUID
from fastapi import APIRouter

from . import models
from .service import ActivityService
from ..auth.service import CurrentUser
from ..database.core import DbSession

cart_router = APIRouter(prefix="/cart", tags=["cart"])
wishlist_router = APIRouter(prefix="/wishlist", tags=["wishlist"])
viewed_router = APIRouter(prefix="/viewed", tags=["viewed"])


# --- Cart ---

@cart_router.get("", response_model=models.CartItemsResponse)
def get_cart(current_user: CurrentUser, db: DbSession):
    return {"cart_items": ActivityService.list_cart(db, current_user.get_uuid())}


@cart_router.post("", response_model=models.CartItemEnvelope)
def add_to_cart(request: models.AddToCartRequest, current_user: CurrentUser, db: DbSession):
    """Add a product; adding it again increases the quantity"""
    item = ActivityService.add_to_cart(db, current_user.get_uuid(), request.product_id, request.quantity)
    return {"cart_item": item}


@cart_router.put("/{product_id}", response_model=models.MessageResponse)
def update_cart_quantity(
    product_id: UUID,
    request: models.UpdateCartQuantityRequest,
    current_user: CurrentUser,
    db: DbSession,
):
    ActivityService.update_cart_quantity(db, current_user.get_uuid(), product_id, request.quantity)
    return {"message": "Cart updated"}


@cart_router.delete("/{product_id}", response_model=models.MessageResponse)
def remove_from_cart(product_id: UUID, current_user: CurrentUser, db: DbSession):
    ActivityService.remove_from_cart(db, current_user.get_uuid(), product_id)
    return {"message": "Item removed from cart"}


# --- Wishlist ---

@wishlist_router.get("", response_model=models.WishlistItemsResponse)
def get_wishlist(current_user: CurrentUser, db: DbSession):
    return {"wishlist_items": ActivityService.list_wishlist(db, current_user.get_uuid())}


@wishlist_router.post("", response_model=models.WishlistItemEnvelope)
def add_to_wishlist(request: models.AddToWishlistRequest, current_user: CurrentUser, db: DbSession):
    item = ActivityService.add_to_wishlist(db, current_user.get_uuid(), request.product_id)
    return {"wishlist_item": item}


@wishlist_router.delete("/{product_id}", response_model=models.MessageResponse)
def remove_from_wishlist(product_id: UUID, current_user: CurrentUser, db: DbSession):
    ActivityService.remove_from_wishlist(db, current_user.get_uuid(), product_id)
    return {"message": "Item removed from wishlist"}


# --- View history ---

@viewed_router.get("", response_model=models.ViewedProductsResponse)
def get_view_history(current_user: CurrentUser, db: DbSession):
    return {"viewed_products": ActivityService.list_view_history(db, current_user.get_uuid())}
