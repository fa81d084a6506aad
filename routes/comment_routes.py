from flask import Blueprint

from repository import comments
from routes.common import json_body, parse_limit, respond

comment_bp = Blueprint("comments", __name__, url_prefix="/movies/<movie_id>/comments")


@comment_bp.route("", methods=["GET"])
def list_comments(movie_id):
    return respond(data=comments.list(limit=parse_limit(), scope=movie_id))


@comment_bp.route("", methods=["POST"])
def create_comment(movie_id):
    comment = comments.create(json_body(), scope=movie_id)
    return respond(201, message="Comment added successfully", data=comment)


@comment_bp.route("/<comment_id>", methods=["GET"])
def get_comment(movie_id, comment_id):
    # A comment filed under another movie is reported as missing.
    return respond(data={"comment": comments.get(comment_id, scope=movie_id)})


@comment_bp.route("/<comment_id>", methods=["PUT"])
def update_comment(movie_id, comment_id):
    changes, _ = comments.update(comment_id, json_body(), scope=movie_id)
    return respond(message="Comment updated successfully", data=changes)


@comment_bp.route("/<comment_id>", methods=["DELETE"])
def delete_comment(movie_id, comment_id):
    comments.delete(comment_id, scope=movie_id)
    return respond(message="Comment deleted successfully")
