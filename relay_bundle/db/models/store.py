import uuid
from sqlalchemy import Column, String, DateTime, Boolean, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from relay_bundle.db.base import Base

class Store(Base):
    __tablename__ = "stores"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    platform = Column(String(50), nullable=False, default="shopify", index=True)
    currency = Column(String(3), default='USD', nullable=False)
    shop_domain = Column(String(255), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Ordered so repeated connection requests window the same sequence
    products = relationship(
        "Product",
        back_populates="store",
        cascade="all, delete-orphan",
        order_by="Product.created_at",
    )
