from datetime import datetime, timezone
from typing import Any, Dict

from marshmallow import EXCLUDE, Schema, ValidationError, fields, post_load


def blank(value):
    """Null, empty strings, zero and false. Empty lists and objects are not blank."""
    return value in (None, "") or (isinstance(value, (int, float)) and not value)


def present(value):
    if blank(value):
        raise ValidationError("Field may not be empty.")


def _required():
    return fields.Raw(required=True, allow_none=False, validate=present)


def _optional(default):
    return fields.Raw(load_default=default, allow_none=True)


def _now_iso():
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


def _parse_released(value):
    if not value or not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


class PresenceSchema(Schema):
    """Only checks that required keys are supplied; values are stored as sent."""

    class Meta:
        unknown = EXCLUDE


class LoginSchema(PresenceSchema):
    email = _required()
    password = _required()


class RegisterSchema(PresenceSchema):
    name = _required()
    email = _required()
    password = _required()


class MovieSchema(PresenceSchema):
    title = _required()
    year = _required()
    genres = _required()
    directors = _required()
    plot = _optional("")
    runtime = _optional(None)
    cast = _optional(list)
    num_mflix_comments = _optional(0)
    fullplot = _optional("")
    languages = _optional(list)
    released = _optional(None)
    rated = _optional("")
    awards = _optional(lambda: {"wins": 0, "nominations": 0, "text": ""})
    lastupdated = _optional(_now_iso)
    imdb = _optional(lambda: {"rating": None, "votes": None, "id": None})
    countries = _optional(list)
    type = _optional("movie")
    tomatoes = _optional(
        lambda: {
            "viewer": {"rating": None, "numReviews": None, "meter": None},
            "lastUpdated": _now_iso(),
        }
    )

    @post_load
    def fill_defaults(self, data: Dict[str, Any], **kwargs):
        # A blank optional value takes its default, the same as a missing one.
        for name, field in self.fields.items():
            if field.required or not blank(data.get(name)):
                continue
            default = field.load_default
            data[name] = default() if callable(default) else default
        data["released"] = _parse_released(data.get("released"))
        return data


class TheaterSchema(PresenceSchema):
    theaterId = _required()
    location = _required()


class CommentSchema(PresenceSchema):
    name = _required()
    email = _required()
    text = _required()


login_schema = LoginSchema()
register_schema = RegisterSchema()
movie_schema = MovieSchema()
theater_schema = TheaterSchema()
comment_schema = CommentSchema()
