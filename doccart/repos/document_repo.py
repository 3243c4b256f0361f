# doccart/repos/document_repo.py
from sqlalchemy import update
from sqlalchemy.orm import Session

from doccart.data.models.document import DocumentModel
from doccart.domain.documents import Document


class DocumentRepo:
    """Katalog dokumentow z bazy (implementacja DocumentCatalog)."""

    def __init__(self, db: Session):
        self.db = db

    def get_document(self, document_id: int) -> Document | None:
        model = self.db.get(DocumentModel, document_id)
        if not model:
            return None
        return Document.model_validate(model)

    def create_document(self, document: DocumentModel) -> DocumentModel:
        self.db.add(document)
        self.db.commit()
        self.db.refresh(document)
        return document

    def increment_print_request(self, document_id: int) -> None:
        #update na poziomie SQL, bez read-modify-write w pythonie
        self.db.execute(
            update(DocumentModel)
            .where(DocumentModel.id == document_id)
            .values(print_request_count=DocumentModel.print_request_count + 1)
        )
        self.db.commit()
