"""Malformed identifiers are rejected before the store is touched."""

import pytest
from bson import ObjectId

from models import db

GOOD = str(ObjectId())
BAD = ["123", "not-an-id", "zzzzzzzzzzzzzzzzzzzzzzzz"]


class ExplodingClient:
    def __init__(self, *args, **kwargs):
        raise AssertionError("store should not be contacted")


@pytest.fixture()
def offline(app):
    db.reset(client_factory=ExplodingClient)
    yield
    assert not db.connected


@pytest.mark.parametrize("bad", BAD)
@pytest.mark.parametrize("method", ["get", "put", "delete"])
def test_movie_identifier(client, offline, method, bad):
    response = getattr(client, method)(f"/movies/{bad}", json={"plot": "x"})
    assert response.status_code == 400
    assert response.get_json()["error"] == "ID format is incorrect"


@pytest.mark.parametrize("bad", BAD)
@pytest.mark.parametrize("method", ["get", "put", "delete"])
def test_theater_identifier(client, offline, method, bad):
    response = getattr(client, method)(f"/theaters/{bad}", json={"theaterId": 1, "location": {}})
    assert response.status_code == 400


@pytest.mark.parametrize("bad", BAD)
@pytest.mark.parametrize("method", ["get", "put", "delete"])
def test_comment_identifier(client, offline, method, bad):
    payload = {"name": "a", "email": "b", "text": "c"}
    for path in (f"/movies/{bad}/comments/{GOOD}", f"/movies/{GOOD}/comments/{bad}"):
        response = getattr(client, method)(path, json=payload)
        assert response.status_code == 400


@pytest.mark.parametrize("bad", BAD)
def test_comment_collection_identifier(client, offline, bad):
    assert client.get(f"/movies/{bad}/comments").status_code == 400
    payload = {"name": "a", "email": "b", "text": "c"}
    assert client.post(f"/movies/{bad}/comments", json=payload).status_code == 400
