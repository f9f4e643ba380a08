from uuid import UUID
from typing import List, Optional

from ..schemas.base import CamelModel


class ProductResponse(CamelModel):
    id: UUID
    product_id: Optional[str] = None
    title: str
    text: Optional[str] = None
    eco_score: Optional[float] = None
    age_target: Optional[str] = None
    gender_target: Optional[str] = None
    category: Optional[str] = None
    price: Optional[float] = None
    image_url: Optional[str] = None


class ProductListResponse(CamelModel):
    products: List[ProductResponse]


class ProductEnvelope(CamelModel):
    product: ProductResponse


class CategoriesResponse(CamelModel):
    categories: List[str]
