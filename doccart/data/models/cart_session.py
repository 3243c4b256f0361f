#doccart/data/models/cart_session.py
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, JSON
from sqlalchemy.orm import relationship

from doccart.data.database import Base


class CartSessionModel(Base):
    __tablename__ = "cart_sessions"

    session_key = Column(String(64), primary_key=True)

    back_url = Column(String, nullable=True)
    receiver_info = Column(JSON, nullable=True)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    items = relationship(
        "CartItemModel",
        back_populates="cart_session",
        cascade="all, delete-orphan",
        order_by="CartItemModel.id",
    )
