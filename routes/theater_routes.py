from flask import Blueprint

from repository import theaters
from routes.common import json_body, parse_limit, respond

theater_bp = Blueprint("theaters", __name__, url_prefix="/theaters")


@theater_bp.route("", methods=["GET"])
def list_theaters():
    return respond(data=theaters.list(limit=parse_limit()))


@theater_bp.route("", methods=["POST"])
def create_theater():
    theater = theaters.create(json_body())
    return respond(201, message="Theater added successfully", data=theater)


@theater_bp.route("/<theater_id>", methods=["GET"])
def get_theater(theater_id):
    return respond(data=theaters.get(theater_id))


@theater_bp.route("/<theater_id>", methods=["PUT"])
def update_theater(theater_id):
    # theaterId and location are both required and replace the stored values.
    changes, _ = theaters.update(theater_id, json_body())
    return respond(message="Theater updated successfully", data=changes)


@theater_bp.route("/<theater_id>", methods=["DELETE"])
def delete_theater(theater_id):
    theaters.delete(theater_id)
    return respond(message="Theater deleted successfully")
