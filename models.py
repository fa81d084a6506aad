import logging
import threading
from datetime import datetime, timezone

from bson import ObjectId
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from errors import InvalidIdentifier, StoreUnavailable

logger = logging.getLogger(__name__)

USERS = "users"
MOVIES = "movies"
THEATERS = "theaters"
COMMENTS = "comments"


class MongoStore:
    """Process-wide document store handle.

    The client is created on first use and then shared by every request.
    A failed connection attempt is remembered: later calls raise
    ``StoreUnavailable`` straight away instead of reconnecting, until
    ``reset()`` is called.
    """

    def __init__(self, app=None, client_factory=MongoClient):
        self.client_factory = client_factory
        self.uri = None
        self.database_name = None
        self.timeout_ms = 5000
        self.ping_on_connect = True
        self._client = None
        self._failure = None
        self._lock = threading.Lock()
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        self.uri = app.config["MONGO_URI"]
        self.database_name = app.config["MONGO_DB_NAME"]
        self.timeout_ms = app.config.get("MONGO_TIMEOUT_MS", 5000)
        self.ping_on_connect = app.config.get("MONGO_PING_ON_CONNECT", True)
        app.extensions["mongo_store"] = self

    @property
    def connected(self):
        return self._client is not None

    def connect(self):
        if self._client is not None:
            return self._client
        with self._lock:
            if self._client is not None:
                return self._client
            if self._failure is not None:
                raise StoreUnavailable(error=self._failure)
            if self.uri is None:
                self._failure = "Document store is not configured"
                raise StoreUnavailable(error=self._failure)
            try:
                client = self.client_factory(
                    self.uri, serverSelectionTimeoutMS=self.timeout_ms
                )
                if self.ping_on_connect:
                    client.admin.command("ping")
            except PyMongoError as exc:
                logger.error("Could not connect to document store: %s", exc)
                self._failure = "Could not connect to document store"
                raise StoreUnavailable(error=self._failure) from exc
            logger.info("Connected to document store database %r", self.database_name)
            self._client = client
            return client

    @property
    def database(self):
        return self.connect()[self.database_name]

    def collection(self, name):
        return self.database[name]

    def reset(self, client_factory=None):
        with self._lock:
            if client_factory is not None:
                self.client_factory = client_factory
            self._client = None
            self._failure = None


db = MongoStore()


def to_object_id(value, label="ID"):
    if not ObjectId.is_valid(value):
        raise InvalidIdentifier(f"Invalid {label}", error="ID format is incorrect")
    return ObjectId(value)


def utcnow():
    return datetime.now(timezone.utc)


def new_user(name, email, password_hash):
    return {
        "name": name,
        "email": email,
        "password": password_hash,
        "createdAt": utcnow(),
    }


def public_user(user):
    """Return a copy of a user document without its password hash."""
    if user is None:
        return None
    scrubbed = dict(user)
    scrubbed.pop("password", None)
    return scrubbed


def find_user_by_email(email):
    return db.collection(USERS).find_one({"email": email})


def find_user_by_email_or_name(email, name):
    return db.collection(USERS).find_one({"$or": [{"email": email}, {"name": name}]})


def insert_user(user):
    return db.collection(USERS).insert_one(user).inserted_id
