# doccart/services/submission_service.py
from typing import Dict, Iterable, Optional

from sqlalchemy.orm import Session

from doccart.data.models.submission import SubmissionModel, SubmissionItemModel
from doccart.domain.cart_item import CartItem
from doccart.domain.documents import DocumentCatalog
from doccart.repos.submission_repo import SubmissionRepo
from doccart.services.notification_service import NotificationService
from doccart.utils.logging import get_logger

logger = get_logger(__name__)


class SubmissionRecorder:
    """
    Zapis koszyka jako trwalego zgloszenia (submission).

    Dwa przebiegi:
    1. snapshot pozycji -> submission + submission_items, commit
    2. efekty uboczne: licznik zamowien wydruku na kazdym dokumencie (+1)
    Blad w kroku 2 nie psuje zapisanego juz snapshotu.
    """

    def __init__(
        self,
        db: Session,
        catalog: DocumentCatalog,
        notification_service: NotificationService | None = None,
    ):
        self.repo = SubmissionRepo(db)
        self.catalog = catalog
        self.notification_service = notification_service

    def record(
        self,
        items: Iterable[CartItem],
        receiver_info: Optional[Dict[str, str]] = None,
    ) -> int:
        #pass 1 - niezmienny snapshot
        snapshot = tuple((item.document_id, item.quantity) for item in items)

        submission = SubmissionModel(
            receiver_info=dict(receiver_info) if receiver_info is not None else None,
            items=[
                SubmissionItemModel(document_id=document_id, quantity=quantity)
                for document_id, quantity in snapshot
            ],
        )
        created = self.repo.create_submission(submission)

        logger.info(f"Submission {created.id} saved with {len(snapshot)} item(s)")

        #pass 2 - licznik na dokumentach, raz na zgloszenie (nie na sztuke)
        for document_id, _ in snapshot:
            try:
                self.catalog.increment_print_request(document_id)
            except Exception as e:
                logger.error(
                    f"Failed to increment print requests for document {document_id} "
                    f"(submission {created.id}): {e}"
                )
                raise

        if self.notification_service is not None:
            try:
                self.notification_service.send_submission_notification(created.id, len(snapshot))
            except Exception as e:
                #zgloszenie jest zapisane, brak powiadomienia nie cofa zamowienia
                logger.warning(f"Submission {created.id} notification not sent: {e}")

        return created.id

    def get_submission(self, submission_id: int) -> SubmissionModel | None:
        return self.repo.get_submission(submission_id)
