# ecocatalog/activity/service.py

from datetime import datetime, timezone
from enum import Enum
from typing import List, Union
from uuid import UUID, uuid4
from sqlalchemy.orm import Session, contains_eager
from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError
import logging

from ..database.core import upsert_insert
from ..entities.product import Product
from ..entities.cart_item import CartItem
from ..entities.wishlist_item import WishlistItem
from ..entities.viewed_product import ViewedProduct
from ..core.exceptions import InvalidArgumentError, NotFoundError, StorageUnavailableError
from ..services.parameter_validator import MAX_INT, ParameterValidator

logger = logging.getLogger(__name__)

ActivityEntity = Union[CartItem, WishlistItem, ViewedProduct]

PAIR_COLUMNS = ["user_id", "product_id"]


class ActivityKind(str, Enum):
    CART = "cart"
    WISHLIST = "wishlist"
    VIEWED = "viewed"


# entity, ordering used when listing a user's entries
ACTIVITY_TABLES = {
    ActivityKind.CART: (CartItem, (CartItem.added_at.asc(), CartItem.id)),
    ActivityKind.WISHLIST: (WishlistItem, (WishlistItem.added_at.asc(), WishlistItem.id)),
    ActivityKind.VIEWED: (ViewedProduct, (ViewedProduct.viewed_at.desc(), ViewedProduct.id)),
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ActivityService:
    """
    Per-user ledger of cart entries, wishlist entries and product views.

    Every write is a single statement so concurrent requests for the same
    (user, product) pair cannot lose an increment or create a second row.
    """

    @staticmethod
    def _raise_missing_reference(db: Session, user_id: UUID, product_id: UUID, error: IntegrityError):
        db.rollback()
        product_exists = db.query(Product.id).filter(Product.id == product_id).first() is not None
        logger.warning(f"Rejected activity write for user {user_id}, product {product_id}: {error.orig}")
        if not product_exists:
            raise NotFoundError("Product", product_id) from error
        raise NotFoundError("User", user_id) from error

    # --- Views ---

    @staticmethod
    def record_view(db: Session, user_id: UUID, product_id: UUID) -> ViewedProduct:
        """Move the product to the front of the user's history.

        The pair keeps exactly one row; a repeat view replaces it with a new
        id and the current timestamp.
        """
        stmt = upsert_insert(db, ViewedProduct).values([{
            "id": uuid4(),
            "user_id": user_id,
            "product_id": product_id,
            "viewed_at": _utcnow(),
        }])
        stmt = stmt.on_conflict_do_update(
            index_elements=PAIR_COLUMNS,
            set_={"id": stmt.excluded.id, "viewed_at": stmt.excluded.viewed_at},
        ).returning(ViewedProduct)

        try:
            view = db.scalars(stmt, execution_options={"populate_existing": True}).one()
            db.commit()
        except IntegrityError as e:
            ActivityService._raise_missing_reference(db, user_id, product_id, e)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error recording view of {product_id} for user {user_id}: {e}")
            raise StorageUnavailableError("record view", e) from e
        return view

    # --- Cart ---

    @staticmethod
    def add_to_cart(db: Session, user_id: UUID, product_id: UUID, quantity: int = 1) -> CartItem:
        """Insert the pair, or add ``quantity`` to the existing row."""
        quantity = ParameterValidator.validate_quantity(quantity)

        cart_table = CartItem.__table__
        stmt = upsert_insert(db, CartItem).values([{
            "id": uuid4(),
            "user_id": user_id,
            "product_id": product_id,
            "quantity": quantity,
            "added_at": _utcnow(),
        }])
        stmt = stmt.on_conflict_do_update(
            index_elements=PAIR_COLUMNS,
            set_={"quantity": cart_table.c.quantity + stmt.excluded.quantity},
        ).returning(CartItem)

        try:
            item = db.scalars(stmt, execution_options={"populate_existing": True}).one()
            db.commit()
        except IntegrityError as e:
            ActivityService._raise_missing_reference(db, user_id, product_id, e)
        except DataError as e:
            # the summed quantity no longer fits the column
            db.rollback()
            raise InvalidArgumentError("quantity", quantity, f"a cart total of at most {MAX_INT}") from e
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error adding {product_id} to cart for user {user_id}: {e}")
            raise StorageUnavailableError("add to cart", e) from e

        logger.info(f"Cart for user {user_id}: product {product_id} now x{item.quantity}")
        return item

    @staticmethod
    def update_cart_quantity(db: Session, user_id: UUID, product_id: UUID, quantity: int) -> None:
        """Set an absolute quantity; zero or less removes the item."""
        quantity = ParameterValidator.require_int("quantity", quantity)
        if quantity <= 0:
            ActivityService.remove_from_cart(db, user_id, product_id)
            return

        try:
            db.query(CartItem).filter(
                CartItem.user_id == user_id,
                CartItem.product_id == product_id,
            ).update({CartItem.quantity: quantity}, synchronize_session=False)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error updating cart quantity of {product_id} for user {user_id}: {e}")
            raise StorageUnavailableError("update cart quantity", e) from e

    @staticmethod
    def remove_from_cart(db: Session, user_id: UUID, product_id: UUID) -> None:
        ActivityService._delete_pair(db, CartItem, user_id, product_id)

    # --- Wishlist ---

    @staticmethod
    def add_to_wishlist(db: Session, user_id: UUID, product_id: UUID) -> WishlistItem:
        """Insert the pair if absent; either way return the stored row."""
        stmt = upsert_insert(db, WishlistItem).values([{
            "id": uuid4(),
            "user_id": user_id,
            "product_id": product_id,
            "added_at": _utcnow(),
        }]).on_conflict_do_nothing(index_elements=PAIR_COLUMNS)

        try:
            db.execute(stmt)
            db.commit()
            item = db.query(WishlistItem).filter(
                WishlistItem.user_id == user_id,
                WishlistItem.product_id == product_id,
            ).one()
        except IntegrityError as e:
            ActivityService._raise_missing_reference(db, user_id, product_id, e)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error adding {product_id} to wishlist for user {user_id}: {e}")
            raise StorageUnavailableError("add to wishlist", e) from e
        return item

    @staticmethod
    def remove_from_wishlist(db: Session, user_id: UUID, product_id: UUID) -> None:
        ActivityService._delete_pair(db, WishlistItem, user_id, product_id)

    # --- Reads ---

    @staticmethod
    def list_entries(db: Session, user_id: UUID, kind: ActivityKind) -> List[ActivityEntity]:
        """A user's entries of one kind, each with its product loaded."""
        kind = ActivityKind(kind)
        entity, ordering = ACTIVITY_TABLES[kind]
        try:
            return (
                db.query(entity)
                .join(entity.product)
                .options(contains_eager(entity.product))
                .filter(entity.user_id == user_id)
                .order_by(*ordering)
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"Error listing {kind.value} entries for user {user_id}: {e}")
            raise StorageUnavailableError(f"list {kind.value}", e) from e

    @staticmethod
    def list_cart(db: Session, user_id: UUID) -> List[CartItem]:
        return ActivityService.list_entries(db, user_id, ActivityKind.CART)

    @staticmethod
    def list_wishlist(db: Session, user_id: UUID) -> List[WishlistItem]:
        return ActivityService.list_entries(db, user_id, ActivityKind.WISHLIST)

    @staticmethod
    def list_view_history(db: Session, user_id: UUID) -> List[ViewedProduct]:
        """Most recently viewed first."""
        return ActivityService.list_entries(db, user_id, ActivityKind.VIEWED)

    # --- Helpers ---

    @staticmethod
    def _delete_pair(db: Session, entity, user_id: UUID, product_id: UUID) -> None:
        # Deleting an absent pair is a no-op
        try:
            deleted = db.query(entity).filter(
                entity.user_id == user_id,
                entity.product_id == product_id,
            ).delete(synchronize_session=False)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error deleting {entity.__tablename__} row for user {user_id}, product {product_id}: {e}")
            raise StorageUnavailableError(f"delete from {entity.__tablename__}", e) from e
        if deleted:
            logger.info(f"Removed product {product_id} from {entity.__tablename__} of user {user_id}")
