# ecocatalog/entities/viewed_product.py

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from ..database.core import Base


class ViewedProduct(Base):
    """Most recent view of a product by a user; older views are replaced."""
    __tablename__ = 'viewed_products'
    __table_args__ = (
        UniqueConstraint('user_id', 'product_id', name='uq_viewed_products_user_product'),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    product_id = Column(UUID(as_uuid=True), ForeignKey('products.id', ondelete='CASCADE'), nullable=False)
    viewed_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc), index=True)

    # --- Relationships ---
    user = relationship("User", back_populates="viewed_products")
    product = relationship("Product", back_populates="viewed_products")
