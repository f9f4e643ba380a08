# ecocatalog/entities/user.py

from sqlalchemy import Column, String, Integer, DateTime
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import uuid
from datetime import datetime, timezone

from ..database.core import Base


class User(Base):
    """
    SQLAlchemy model representing a shopper account.

    ``age`` and ``gender`` are only used for demographic matching; gender is
    free text and is compared as-is against product targets.
    """
    __tablename__ = 'users'

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    age = Column(Integer, nullable=False)
    gender = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    # --- Relationships ---
    cart_items = relationship("CartItem", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    wishlist_items = relationship("WishlistItem", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    viewed_products = relationship("ViewedProduct", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)

    def __repr__(self):
        return f"<User(email='{self.email}', age={self.age}, gender='{self.gender}')>"
