# ecocatalog/products/service.py

from typing import List, Optional
from uuid import UUID
from sqlalchemy import or_, and_
from sqlalchemy.orm import Session, Query
from sqlalchemy.exc import SQLAlchemyError
import logging

from ..entities.product import Product
from ..core.config import settings
from ..core.exceptions import NotFoundError, StorageUnavailableError
from ..services.parameter_validator import ParameterValidator
from ..users.service import UserService

logger = logging.getLogger(__name__)

# Upper bounds of the demographic age buckets, checked in order
AGE_BUCKETS = (
    (25, "18-24"),
    (35, "25-34"),
    (45, "35-44"),
    (55, "45-54"),
)
OLDEST_AGE_BUCKET = "55+"


def age_bucket(age: int) -> str:
    """Map an age onto one of the five bucket labels used by product targets."""
    for upper_bound, label in AGE_BUCKETS:
        if age < upper_bound:
            return label
    return OLDEST_AGE_BUCKET


def _eco_score_order(query: Query) -> Query:
    # Highest eco-score first, unscored products last, id keeps pages stable
    return query.order_by(
        Product.eco_score.is_(None),
        Product.eco_score.desc(),
        Product.id,
    )


def _target_matches(column, value: str):
    """Untargeted (NULL), exact match, or the target label contains the value."""
    return or_(
        column == value,
        column.icontains(value, autoescape=True),
        column.is_(None),
    )


class CatalogService:

    @staticmethod
    def list_products(
        db: Session,
        limit: int = settings.DEFAULT_PAGE_SIZE,
        offset: int = 0,
        category: Optional[str] = None,
    ) -> List[Product]:
        """Products ordered by eco-score, optionally restricted to one category."""
        limit = ParameterValidator.validate_limit(limit)
        offset = ParameterValidator.validate_offset(offset)
        category = ParameterValidator.normalize_category(category)

        try:
            query = db.query(Product)
            if category:
                query = query.filter(Product.category == category)
            return _eco_score_order(query).limit(limit).offset(offset).all()
        except SQLAlchemyError as e:
            logger.error(f"Error listing products (category={category}): {e}")
            raise StorageUnavailableError("list products", e) from e

    @staticmethod
    def search_products(
        db: Session,
        query: Optional[str],
        limit: int = settings.DEFAULT_PAGE_SIZE,
        offset: int = 0,
        category: Optional[str] = None,
    ) -> List[Product]:
        """Case-insensitive substring search over title and review text.

        A blank query is the same as ``list_products``.
        """
        text = ParameterValidator.normalize_query(query)
        if text is None:
            return CatalogService.list_products(db, limit=limit, offset=offset, category=category)

        limit = ParameterValidator.validate_limit(limit)
        offset = ParameterValidator.validate_offset(offset)
        category = ParameterValidator.normalize_category(category)

        conditions = [
            or_(
                Product.title.icontains(text, autoescape=True),
                Product.text.icontains(text, autoescape=True),
            )
        ]
        if category:
            conditions.append(Product.category == category)

        try:
            db_query = db.query(Product).filter(and_(*conditions))
            return _eco_score_order(db_query).limit(limit).offset(offset).all()
        except SQLAlchemyError as e:
            logger.error(f"Error searching products for '{text}': {e}")
            raise StorageUnavailableError("search products", e) from e

    @staticmethod
    def recommend_by_demographic(
        db: Session,
        age: int,
        gender: str,
        limit: int = settings.DEFAULT_PAGE_SIZE,
    ) -> List[Product]:
        """Cold-start recommendations from declared age and gender only.

        A product qualifies when both its age target and its gender target
        accept the shopper; a NULL target accepts everyone.
        """
        age = ParameterValidator.validate_age(age)
        gender = ParameterValidator.validate_gender(gender)
        limit = ParameterValidator.validate_limit(limit)
        bucket = age_bucket(age)

        try:
            query = db.query(Product).filter(
                and_(
                    _target_matches(Product.age_target, bucket),
                    _target_matches(Product.gender_target, gender),
                )
            )
            products = _eco_score_order(query).limit(limit).all()
        except SQLAlchemyError as e:
            logger.error(f"Error building recommendations for {bucket}/{gender}: {e}")
            raise StorageUnavailableError("recommend products", e) from e

        logger.debug(f"Demographic recommendations for {bucket}/{gender}: {len(products)} products")
        return products

    @staticmethod
    def recommend_personalized(
        db: Session,
        user_id: UUID,
        limit: int = settings.DEFAULT_PAGE_SIZE,
    ) -> List[Product]:
        """Recommendations for a signed-in user from their stored age and gender.

        Cart, wishlist and view history are tracked by ``ActivityService`` but
        are not weighted here yet.
        """
        limit = ParameterValidator.validate_limit(limit)
        user = UserService.get_user_by_id(db, user_id)
        return CatalogService.recommend_by_demographic(db, user.age, user.gender, limit=limit)

    @staticmethod
    def list_categories(db: Session) -> List[str]:
        """Distinct, non-empty category labels in lexicographic order."""
        try:
            rows = (
                db.query(Product.category)
                .filter(Product.category.isnot(None), Product.category != "")
                .distinct()
                .order_by(Product.category)
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"Error listing categories: {e}")
            raise StorageUnavailableError("list categories", e) from e
        return [category for (category,) in rows if category and category.strip()]

    @staticmethod
    def get_product(db: Session, product_id: UUID) -> Product:
        try:
            product = db.query(Product).filter(Product.id == product_id).first()
        except SQLAlchemyError as e:
            logger.error(f"Error loading product {product_id}: {e}")
            raise StorageUnavailableError("load product", e) from e
        if not product:
            raise NotFoundError("Product", product_id)
        return product

    @staticmethod
    def create_product(db: Session, **fields) -> Product:
        """Insert a single catalog row (used for seeding; imports run elsewhere)."""
        try:
            product = Product(**fields)
            db.add(product)
            db.commit()
            db.refresh(product)
            return product
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error creating product '{fields.get('title')}': {e}")
            raise StorageUnavailableError("create product", e) from e
