"""
Tests for the cart HTTP API
"""

import pytest
from fastapi.testclient import TestClient

from conftest import FakeRedis
from doccart.api import create_app
from doccart.backends.session import SessionStore
from doccart.data.database import get_db
from doccart.utils.settings import SESSION_COOKIE_NAME

JSON = {"Accept": "application/json"}
AJAX = {"X-Requested-With": "XMLHttpRequest"}


@pytest.fixture(params=["session", "redis", "database"])
def client(request, db, documents):
    app = create_app(request.param, session_store=SessionStore(), redis_client=FakeRedis())

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


def _view(client):
    resp = client.get("/cart/view")
    assert resp.status_code == 200
    return resp.json()


class TestHealth:
    def test_health(self, client):
        resp = client.get("/health")

        assert resp.status_code == 200
        assert resp.json()["status"] == "healthy"


class TestAddEndpoint:
    def test_add_json(self, client):
        resp = client.post("/cart/add/1?quantity=2", headers=AJAX)

        assert resp.status_code == 200
        assert resp.json() == {"result": True, "message": ""}
        assert SESSION_COOKIE_NAME in resp.cookies

        cart = _view(client)
        assert cart["items"] == [
            {"document_id": 1, "title": "Annual Report", "quantity": 2, "maximum_quantity": None}
        ]
        assert cart["view_only"] is True

    def test_add_merges_quantities(self, client):
        client.post("/cart/add/1", headers=JSON)
        client.post("/cart/add/1?quantity=4", headers=JSON)

        assert _view(client)["items"][0]["quantity"] == 5

    def test_add_over_limit(self, client):
        resp = client.post("/cart/add/2?quantity=4", headers=JSON)

        body = resp.json()
        assert body["result"] is False
        assert "Planning Guidelines" in body["message"]
        assert _view(client)["is_empty"] is True

    def test_add_redirects_to_relative_back_url(self, client):
        resp = client.post("/cart/add/1?BackURL=/documents/1", follow_redirects=False)

        assert resp.status_code == 303
        assert resp.headers["location"] == "/documents/1"
        assert _view(client)["back_url"] == "/documents/1"

    def test_add_ignores_external_back_url(self, client):
        resp = client.post(
            "/cart/add/1?BackURL=https://evil.example.com/",
            headers={"Referer": "/documents"},
            follow_redirects=False,
        )

        assert resp.headers["location"] == "/documents"
        assert _view(client)["back_url"] is None

    def test_failed_add_message_shown_once(self, client):
        client.post("/cart/add/3", follow_redirects=False)

        assert _view(client)["validation_message"] == "* You are not allowed to add this document"
        assert _view(client)["validation_message"] is None

    def test_invalid_quantity(self, client):
        assert client.post("/cart/add/1?quantity=0", headers=JSON).status_code == 422

    def test_quantity_above_maximum(self, client):
        resp = client.post("/cart/add/1?quantity=100000000000000000000", headers=JSON)

        assert resp.status_code == 422
        assert _view(client)["is_empty"] is True

    def test_document_id_out_of_range(self, client):
        assert client.post("/cart/add/100000000000000000000", headers=JSON).status_code == 422


class TestDeductRemove:
    def test_deduct(self, client):
        client.post("/cart/add/1?quantity=3", headers=JSON)

        resp = client.post("/cart/deduct/1?quantity=2", headers=JSON)

        assert resp.json() == {"result": True}
        assert _view(client)["items"][0]["quantity"] == 1

    def test_remove(self, client):
        client.post("/cart/add/1", headers=JSON)
        client.post("/cart/add/2", headers=JSON)

        assert client.post("/cart/remove/1", headers=JSON).json() == {"result": True}
        assert client.post("/cart/remove/2", headers=JSON).json() == {"result": False}
        assert client.post("/cart/remove/2", headers=JSON).json() == {"result": False}

    def test_carts_are_per_session(self, client):
        client.post("/cart/add/1", headers=JSON)

        other = client.get("/cart/view", headers={"X-Cart-Session": "someone-else"})

        assert other.json()["is_empty"] is True


class TestUpdateEndpoint:
    def test_partial_success(self, client):
        client.post("/cart/add/1?quantity=2&BackURL=/documents", headers=JSON)
        client.post("/cart/add/2?quantity=3", headers=JSON)

        resp = client.post("/cart/update", json={"ItemQuantity": {"1": 4, "2": "10"}})

        assert resp.status_code == 400
        assert resp.json()["result"] is False
        assert "Planning Guidelines" in resp.json()["message"]
        quantities = {i["document_id"]: i["quantity"] for i in _view(client)["items"]}
        assert quantities == {1: 4, 2: 3}

    def test_success(self, client):
        client.post("/cart/add/1?quantity=2&BackURL=/documents", headers=JSON)

        resp = client.post("/cart/update", json={"ItemQuantity": {"1": "abc", "2": 1}})

        assert resp.status_code == 200
        assert resp.json() == {"result": True, "message": "", "redirect": "/documents"}

    def test_boolean_value_is_skipped(self, client):
        client.post("/cart/add/1?quantity=2", headers=JSON)

        resp = client.post("/cart/update", json={"ItemQuantity": {"1": True}})

        assert resp.status_code == 200
        assert _view(client)["items"][0]["quantity"] == 2

    def test_structured_values_skipped_rest_applied(self, client):
        client.post("/cart/add/1?quantity=2", headers=JSON)
        client.post("/cart/add/2?quantity=2", headers=JSON)

        resp = client.post("/cart/update", json={"ItemQuantity": {"1": [5], "2": 1, "3": {"q": 1}}})

        assert resp.status_code == 200
        quantities = {i["document_id"]: i["quantity"] for i in _view(client)["items"]}
        assert quantities == {1: 2, 2: 1}


class TestSubmitEndpoint:
    def test_submit_and_fetch(self, client):
        client.post("/cart/add/1?quantity=2", headers=JSON)
        client.post("/cart/add/2", headers=JSON)
        client.put("/cart/receiver", json={"Name": "Joe", "Surname": "Soap"})

        resp = client.post("/cart/submit", json={})
        assert resp.status_code == 201
        submission_id = resp.json()["submission_id"]

        submission = client.get(f"/submissions/{submission_id}").json()
        assert submission["receiver_info"] == {"Name": "Joe", "Surname": "Soap"}
        assert [(i["document_id"], i["quantity"]) for i in submission["items"]] == [(1, 2), (2, 1)]
        assert _view(client)["is_empty"] is False

    def test_submit_and_empty(self, client):
        client.post("/cart/add/1", headers=JSON)

        client.post("/cart/submit", json={"empty_cart": True})

        assert _view(client)["is_empty"] is True

    def test_missing_submission(self, client):
        assert client.get("/submissions/404").status_code == 404


class TestSessionStoreUsage:
    def test_anonymous_views_do_not_create_sessions(self, client):
        for n in range(20):
            client.get("/cart/view", headers={"X-Cart-Session": f"visitor-{n}"})

        assert len(client.app.state.session_store) == 0

    def test_flash_message_lookup_does_not_create_session(self, client):
        client.post("/cart/add/3", headers={"X-Cart-Session": "flash"}, follow_redirects=False)
        store = client.app.state.session_store
        assert "flash" in store

        client.get("/cart/view", headers={"X-Cart-Session": "other"})

        assert "other" not in store


class TestCreateApp:
    def test_injected_empty_session_store_is_kept(self):
        store = SessionStore()

        app = create_app("session", session_store=store)

        assert app.state.session_store is store

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            create_app("memcached")
