"""Generic CRUD access to the movie, theater and comment collections.

Each collection is described by a ``Resource``: which collection it lives
in, which schema a new document must satisfy, how updates are applied and,
for comments, which parent field scopes every query. Identifiers are
validated before any query is sent to the store.
"""

import logging

from marshmallow import ValidationError as SchemaError

from errors import NotFoundError, ValidationError
from models import COMMENTS, MOVIES, THEATERS, db, to_object_id, utcnow
from schemas import comment_schema, movie_schema, theater_schema

logger = logging.getLogger(__name__)

MERGE = "merge"
REPLACE = "replace"


def load_payload(schema, payload, message="Missing required fields"):
    try:
        return schema.load(payload or {})
    except SchemaError as exc:
        errors = []
        for field, messages in (exc.messages or {}).items():
            for msg in messages:
                errors.append({"field": field, "msg": msg})
        required = ", ".join(name for name, field in schema.fields.items() if field.required)
        raise ValidationError(message, error=f"Required fields: {required}", errors=errors) from exc


class Resource:
    def __init__(self, name, collection, schema, update_policy=MERGE,
                 scope_field=None, default_limit=None, stamp_field=None):
        self.name = name
        self.collection_name = collection
        self.schema = schema
        self.update_policy = update_policy
        self.scope_field = scope_field
        self.default_limit = default_limit
        self.stamp_field = stamp_field

    @property
    def label(self):
        return self.name.capitalize()

    def not_found(self):
        return NotFoundError(f"{self.label} not found",
                             error=f"No {self.name} found with the given ID")


class Repository:
    def __init__(self, resource):
        self.resource = resource

    @property
    def collection(self):
        return db.collection(self.resource.collection_name)

    def _filter(self, identifier, scope=None):
        query = {"_id": to_object_id(identifier, f"{self.resource.name} ID")}
        query.update(self._scope(scope))
        return query

    def _scope(self, scope):
        if self.resource.scope_field is None:
            return {}
        return {self.resource.scope_field: to_object_id(scope, "movie ID")}

    def list(self, limit=None, scope=None):
        query = self._scope(scope)
        cursor = self.collection.find(query)
        limit = limit or self.resource.default_limit
        if limit:
            cursor = cursor.limit(limit)
        return list(cursor)

    def get(self, identifier, scope=None):
        query = self._filter(identifier, scope)
        document = self.collection.find_one(query)
        if document is None:
            raise self.resource.not_found()
        return document

    def create(self, payload, scope=None):
        scope_filter = self._scope(scope)
        document = load_payload(self.resource.schema, payload)
        document.update(scope_filter)
        if self.resource.stamp_field:
            document[self.resource.stamp_field] = utcnow()
        result = self.collection.insert_one(document)
        document["_id"] = result.inserted_id
        logger.info("Created %s %s", self.resource.name, result.inserted_id)
        return document

    def update(self, identifier, payload, scope=None):
        """Apply an update and return ``(changes, modified_count)``.

        Merge resources take any supplied keys as-is. Replace resources must
        resend their whole mutable field set, which overwrites the stored one.
        """
        query = self._filter(identifier, scope)
        if self.resource.update_policy == MERGE:
            if not isinstance(payload, dict) or not payload:
                raise ValidationError("No data provided",
                                      error="You must provide at least one field to update")
            changes = dict(payload)
        else:
            changes = load_payload(self.resource.schema, payload)
            if self.resource.stamp_field:
                changes[self.resource.stamp_field] = utcnow()
        result = self.collection.update_one(query, {"$set": changes})
        if result.matched_count == 0:
            raise self.resource.not_found()
        return changes, result.modified_count

    def delete(self, identifier, scope=None):
        query = self._filter(identifier, scope)
        result = self.collection.delete_one(query)
        if result.deleted_count == 0:
            raise self.resource.not_found()
        logger.info("Deleted %s %s", self.resource.name, identifier)


movie_resource = Resource("movie", MOVIES, movie_schema, update_policy=MERGE, default_limit=10)
theater_resource = Resource("theater", THEATERS, theater_schema, update_policy=REPLACE,
                            default_limit=10)
comment_resource = Resource("comment", COMMENTS, comment_schema, update_policy=REPLACE,
                            scope_field="movie_id", stamp_field="date")

movies = Repository(movie_resource)
theaters = Repository(theater_resource)
comments = Repository(comment_resource)
