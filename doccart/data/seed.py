# doccart/data/seed.py
from doccart.data.database import Base, SessionLocal, engine
from doccart.data.models import DocumentModel
from doccart.utils.logging import get_logger

logger = get_logger(__name__)

SAMPLE_DOCUMENTS = [
    {"title": "Annual Report 2025", "allowed_in_cart": True, "has_quantity_limit": False},
    {"title": "Planning Guidelines", "allowed_in_cart": True, "has_quantity_limit": True, "maximum_quantity": 3},
    {"title": "Internal Memo", "allowed_in_cart": False, "has_quantity_limit": False},
]


def seed():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        # not forcing: only seed if empty
        if db.query(DocumentModel).first():
            return
        db.add_all(DocumentModel(**row) for row in SAMPLE_DOCUMENTS)
        db.commit()
        logger.info(f"Seeded {len(SAMPLE_DOCUMENTS)} documents")
    finally:
        db.close()


if __name__ == "__main__":
    seed()
