from flask import Blueprint

from repository import movies
from routes.common import json_body, parse_limit, respond

movie_bp = Blueprint("movies", __name__, url_prefix="/movies")


@movie_bp.route("", methods=["GET"])
def list_movies():
    return respond(data=movies.list(limit=parse_limit()))


@movie_bp.route("", methods=["POST"])
def create_movie():
    movie = movies.create(json_body())
    return respond(201, message="Movie added successfully", data={"_id": movie["_id"]})


@movie_bp.route("/<movie_id>", methods=["GET"])
def get_movie(movie_id):
    return respond(data={"movie": movies.get(movie_id)})


@movie_bp.route("/<movie_id>", methods=["PUT"])
def update_movie(movie_id):
    # Only the supplied keys are overwritten.
    _, modified = movies.update(movie_id, json_body())
    return respond(message="Movie updated successfully", modifiedCount=modified)


@movie_bp.route("/<movie_id>", methods=["DELETE"])
def delete_movie(movie_id):
    movies.delete(movie_id)
    return respond(message="Movie deleted successfully")
