# ecocatalog/api/main.py

from fastapi import APIRouter

from ..auth.controller import router as auth_router
from ..products.controller import router as products_router
from ..activity.controller import cart_router, wishlist_router, viewed_router

# Create main API router
api_router = APIRouter()

api_router.include_router(auth_router)
api_router.include_router(products_router)
api_router.include_router(cart_router)
api_router.include_router(wishlist_router)
api_router.include_router(viewed_router)
