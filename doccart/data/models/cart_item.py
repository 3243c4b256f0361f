from sqlalchemy import Column, Integer, String, ForeignKey, JSON, UniqueConstraint
from sqlalchemy.orm import relationship

from doccart.data.database import Base


class CartItemModel(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True)
    session_key = Column(
        String(64),
        ForeignKey("cart_sessions.session_key", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    document_id = Column(Integer, nullable=False)

    quantity = Column(Integer, nullable=False)
    #snapshot dokumentu z chwili dodania (tytul, limity)
    document = Column(JSON, nullable=False)

    cart_session = relationship("CartSessionModel", back_populates="items")

    __table_args__ = (UniqueConstraint("session_key", "document_id", name="u_session_document"),)
