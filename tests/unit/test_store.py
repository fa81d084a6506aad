import mongomock
import pytest
from pymongo.errors import ServerSelectionTimeoutError

from errors import StoreUnavailable
from models import MongoStore, db


class CountingClient(mongomock.MongoClient):
    created = 0

    def __init__(self, *args, **kwargs):
        type(self).created += 1
        super().__init__(*args, **kwargs)


class UnreachableClient:
    attempts = 0

    def __init__(self, *args, **kwargs):
        type(self).attempts += 1
        raise ServerSelectionTimeoutError("localhost:27017: connection refused")


def test_client_is_created_once_and_reused(app):
    CountingClient.created = 0
    store = MongoStore(app, client_factory=CountingClient)
    store.ping_on_connect = False

    first = store.connect()
    second = store.connect()
    assert first is second
    assert CountingClient.created == 1


def test_failed_connection_is_remembered(app):
    UnreachableClient.attempts = 0
    store = MongoStore(app, client_factory=UnreachableClient)

    for _ in range(3):
        with pytest.raises(StoreUnavailable):
            store.connect()
    assert UnreachableClient.attempts == 1

    store.reset(client_factory=CountingClient)
    store.ping_on_connect = False
    assert store.connect() is not None


def test_unconfigured_store_is_unavailable():
    store = MongoStore()
    with pytest.raises(StoreUnavailable) as excinfo:
        store.connect()
    assert excinfo.value.error == "Document store is not configured"


def test_requests_fail_with_503_when_store_is_down(client):
    UnreachableClient.attempts = 0
    db.reset(client_factory=UnreachableClient)

    first = client.get("/movies")
    second = client.get("/theaters")
    assert first.status_code == 503
    assert second.status_code == 503
    assert first.get_json()["message"] == "Service Unavailable"
    assert UnreachableClient.attempts == 1


def test_driver_errors_become_500(client, monkeypatch):
    def broken_find(*args, **kwargs):
        raise ServerSelectionTimeoutError("boom")

    collection = db.collection("movies")
    monkeypatch.setattr(type(collection), "find", broken_find)
    response = client.get("/movies")
    assert response.status_code == 500
    body = response.get_json()
    assert body["message"] == "Internal Server Error"
    assert body["error"] == "boom"


def test_driver_error_details_can_be_hidden(app, client, monkeypatch):
    app.config["EXPOSE_ERROR_DETAILS"] = False

    def broken_find(*args, **kwargs):
        raise ServerSelectionTimeoutError("secret driver text")

    monkeypatch.setattr(type(db.collection("movies")), "find", broken_find)
    response = client.get("/movies")
    assert response.status_code == 500
    assert "secret driver text" not in response.get_data(as_text=True)
