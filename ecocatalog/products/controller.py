# ecocatalog/products/controller.py
from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Query

from . import models
from .service import CatalogService
from ..activity.service import ActivityService
from ..auth.service import CurrentUser, OptionalUser
from ..core.config import settings
from ..database.core import DbSession
from ..users.service import UserService

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=models.ProductListResponse)
def list_products(
    db: DbSession,
    limit: int = Query(settings.DEFAULT_PAGE_SIZE),
    offset: int = Query(0),
    search: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
):
    """Catalog page ordered by eco-score; ``search`` switches to text search"""
    if search:
        products = CatalogService.search_products(db, search, limit=limit, offset=offset, category=category)
    else:
        products = CatalogService.list_products(db, limit=limit, offset=offset, category=category)
    return {"products": products}


@router.get("/demographic", response_model=models.ProductListResponse)
def demographic_products(
    db: DbSession,
    age: Optional[int] = Query(None),
    gender: Optional[str] = Query(None),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE),
):
    """Cold-start recommendations for anonymous or brand-new shoppers"""
    products = CatalogService.recommend_by_demographic(db, age, gender, limit=limit)
    return {"products": products}


@router.get("/recommendations", response_model=models.ProductListResponse)
def recommended_products(
    current_user: CurrentUser,
    db: DbSession,
    limit: int = Query(settings.DEFAULT_PAGE_SIZE),
):
    products = CatalogService.recommend_personalized(db, current_user.get_uuid(), limit=limit)
    return {"products": products}


@router.get("/categories", response_model=models.CategoriesResponse)
def list_categories(db: DbSession):
    return {"categories": CatalogService.list_categories(db)}


@router.get("/{product_id}", response_model=models.ProductEnvelope)
def get_product(product_id: UUID, current_user: OptionalUser, db: DbSession):
    """Product detail; signed-in callers also get the view recorded"""
    product = CatalogService.get_product(db, product_id)
    # a token can outlive its account; only a live user gets a history entry
    if current_user and UserService.find_user_by_id(db, current_user.get_uuid()):
        ActivityService.record_view(db, current_user.get_uuid(), product.id)
    return {"product": product}
