from datetime import datetime, timezone

from sqlalchemy import Column, Integer, ForeignKey, DateTime, JSON
from sqlalchemy.orm import relationship

from doccart.data.database import Base


class SubmissionModel(Base):
    __tablename__ = "submissions"

    id = Column(Integer, primary_key=True)
    receiver_info = Column(JSON, nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    items = relationship(
        "SubmissionItemModel",
        back_populates="submission",
        cascade="all, delete-orphan",
        order_by="SubmissionItemModel.id",
    )


class SubmissionItemModel(Base):
    __tablename__ = "submission_items"

    id = Column(Integer, primary_key=True)
    submission_id = Column(Integer, ForeignKey("submissions.id", ondelete="CASCADE"), nullable=False)

    #kopia pozycji koszyka, bez referencji do koszyka
    document_id = Column(Integer, nullable=False)
    quantity = Column(Integer, nullable=False)

    submission = relationship("SubmissionModel", back_populates="items")
