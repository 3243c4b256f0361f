from sqlalchemy import Boolean, Column, Integer, String

from doccart.data.database import Base


class DocumentModel(Base):
    __tablename__ = "documents"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)

    allowed_in_cart = Column(Boolean, nullable=False, default=True)
    has_quantity_limit = Column(Boolean, nullable=False, default=False)
    maximum_quantity = Column(Integer, nullable=True)

    #ile razy dokument trafil do zlozonego zamowienia
    print_request_count = Column(Integer, nullable=False, default=0)
