# doccart/services/notification_service.py
from doccart.celery_worker import celery_app
from doccart.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Serwis do wysyłania powiadomień.
    Używa Celery do asynchronicznego przetwarzania.
    """

    @staticmethod
    def send_submission_notification(submission_id: int, item_count: int):
        """
        Wysyła powiadomienie o nowym zamówieniu wydruku dokumentów.
        """
        send_submission_notification_task.delay(submission_id, item_count)


@celery_app.task(name="doccart.services.notification_service.send_submission_notification_task")
def send_submission_notification_task(submission_id: int, item_count: int):
    """
    Celery task - obsluga zamowien dostaje info o nowym zgloszeniu.
    Teraz tylko loguje.
    """
    logger.info(f"[NOTIFICATION] Submission {submission_id} with {item_count} document(s) received")

    return {"submission_id": submission_id, "item_count": item_count, "status": "sent"}
