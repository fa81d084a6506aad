import os
import sys
from pathlib import Path

import mongomock
import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ.setdefault("JWT_SECRET", "test-access-secret-0123456789abcdef")
os.environ.setdefault("REFRESH_SECRET", "test-refresh-secret-0123456789abcdef")
os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017")
os.environ.setdefault("MONGODB_DB", "sample_mflix_test")

from app import app as flask_app  # noqa: E402
from models import db  # noqa: E402


@pytest.fixture()
def app():
    flask_app.config.update(TESTING=True, EXPOSE_ERROR_DETAILS=True)
    db.ping_on_connect = False
    db.reset(client_factory=mongomock.MongoClient)
    yield flask_app
    db.reset(client_factory=mongomock.MongoClient)


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def store(app):
    with app.app_context():
        yield db.database
