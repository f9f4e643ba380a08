# ecocatalog/entities/product.py

from sqlalchemy import Column, String, Text, Numeric
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import uuid

from ..database.core import Base


class Product(Base):
    """
    SQLAlchemy model representing a catalog item.

    Rows are loaded by the bulk import and never edited afterwards. A null
    ``age_target`` or ``gender_target`` means the product is aimed at everyone.
    """
    __tablename__ = 'products'

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    product_id = Column(String, nullable=True, index=True)  # external catalogue code (ASIN)
    title = Column(String, nullable=False)
    text = Column(Text, nullable=True)  # review text
    eco_score = Column(Numeric(8, 2), nullable=True, index=True)
    age_target = Column(String, nullable=True)
    gender_target = Column(String, nullable=True)
    category = Column(String, nullable=True, index=True)
    price = Column(Numeric(10, 2), nullable=True)
    image_url = Column(String, nullable=True)

    # --- Relationships ---
    cart_items = relationship("CartItem", back_populates="product", cascade="all, delete-orphan", passive_deletes=True)
    wishlist_items = relationship("WishlistItem", back_populates="product", cascade="all, delete-orphan", passive_deletes=True)
    viewed_products = relationship("ViewedProduct", back_populates="product", cascade="all, delete-orphan", passive_deletes=True)

    def __repr__(self):
        return f"<Product(title='{self.title}', eco_score={self.eco_score})>"
