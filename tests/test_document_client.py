"""
Tests for the remote document catalogue client
"""

from unittest.mock import Mock

import pytest
import requests

from doccart.services.document_client import DocumentClient


def _response(status_code=200, payload=None):
    resp = Mock()
    resp.status_code = status_code
    resp.json.return_value = payload
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status_code}")
    else:
        resp.raise_for_status.return_value = None
    return resp


@pytest.fixture
def http():
    return Mock(spec=requests.Session)


class TestDocumentClient:
    def test_get_document(self, http):
        http.get.return_value = _response(
            payload={"id": 2, "title": "Guide", "allowed_in_cart": True,
                     "has_quantity_limit": True, "maximum_quantity": 3},
        )
        client = DocumentClient("http://docs:8000/", session=http)

        document = client.get_document(2)

        assert document.title == "Guide"
        assert document.maximum_quantity == 3
        http.get.assert_called_once_with("http://docs:8000/documents/2", timeout=2)

    def test_missing_document(self, http):
        http.get.return_value = _response(status_code=404)
        client = DocumentClient("http://docs:8000", session=http)

        assert client.get_document(99) is None

    def test_increment_print_request(self, http):
        http.post.return_value = _response(payload={"id": 1, "print_request_count": 1})
        client = DocumentClient("http://docs:8000", session=http)

        client.increment_print_request(1)

        http.post.assert_called_once_with("http://docs:8000/documents/1/print-requests", timeout=2)

    def test_increment_not_retried_on_read_timeout(self, http):
        http.post.side_effect = requests.ReadTimeout("slow")
        client = DocumentClient("http://docs:8000", session=http)

        with pytest.raises(requests.ReadTimeout):
            client.increment_print_request(1)

        assert http.post.call_count == 1

    def test_requires_base_url(self, monkeypatch):
        monkeypatch.setattr("doccart.services.document_client.DOCUMENT_SERVICE_URL", None)

        with pytest.raises(ValueError):
            DocumentClient()


class TestDocumentServiceMock:
    """The dev document service speaks the protocol DocumentClient expects."""

    def test_get_and_increment(self):
        from fastapi.testclient import TestClient
        from doccart.document_service.main import app, PRINT_REQUESTS
        from doccart.domain.documents import Document

        PRINT_REQUESTS.clear()
        client = TestClient(app)

        assert client.post("/documents/2/print-requests").json()["print_request_count"] == 1

        document = Document.model_validate(client.get("/documents/2").json())
        assert document.maximum_quantity == 3
        assert document.print_request_count == 1
        assert client.get("/documents/404").status_code == 404
