# doccart/services/document_client.py
import requests

from doccart.domain.documents import Document
from doccart.utils.retry import http_retry
from doccart.utils.settings import DOCUMENT_SERVICE_URL
from doccart.utils.logging import get_logger

logger = get_logger(__name__)


class DocumentClient:
    """Katalog dokumentow z zewnetrznego serwisu (implementacja DocumentCatalog)."""

    def __init__(self, base_url: str | None = None, timeout: int = 2, session: requests.Session | None = None):
        base_url = base_url or DOCUMENT_SERVICE_URL
        if not base_url:
            raise ValueError("DOCUMENT_SERVICE_URL is not configured")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.http = session or requests.Session()

    @http_retry()
    def get_document(self, document_id: int) -> Document | None:
        url = f"{self.base_url}/documents/{document_id}"
        logger.info(f"DocumentClient GET {url}")

        resp = self.http.get(url, timeout=self.timeout)
        if resp.status_code == 404:
            return None
        resp.raise_for_status()
        return Document.model_validate(resp.json())

    #tylko bledy polaczenia, timeout odczytu moglby podwoic licznik
    @http_retry(requests.ConnectionError)
    def increment_print_request(self, document_id: int) -> None:
        url = f"{self.base_url}/documents/{document_id}/print-requests"
        logger.info(f"DocumentClient POST {url}")

        resp = self.http.post(url, timeout=self.timeout)
        resp.raise_for_status()
