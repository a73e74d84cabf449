import uuid
from sqlalchemy import Column, ForeignKey, String, DateTime, Numeric, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime, timezone

from freshcart.data.database import Base

class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(64), ForeignKey("users.id"), nullable=False, index=True)

    status = Column(String, nullable=False, default="pending")  # pending, pending_cod, processing, shipped, delivered, cancelled
    #sumy zamrozone przy skladaniu, nie przeliczamy ich pozniej
    subtotal = Column(Numeric(10, 2), nullable=False)
    shipping = Column(Numeric(10, 2), nullable=False)
    tax = Column(Numeric(10, 2), nullable=False)
    total = Column(Numeric(10, 2), nullable=False)
    shipping_address = Column(String, nullable=False)
    payment_method = Column(String, nullable=False)
    idempotency_key = Column(String(64), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    items = relationship(
        "OrderItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItemModel.position",
        lazy="selectin",
    )

    __table_args__ = (UniqueConstraint("user_id", "idempotency_key", name="u_order_user_idempotency"),)
