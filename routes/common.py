from flask import jsonify, request

from errors import ValidationError


def json_body():
    payload = request.get_json(force=True, silent=True)
    if payload is None:
        if request.get_data(cache=True):
            raise ValidationError("Invalid request body", error="Body must be valid JSON")
        return {}
    if not isinstance(payload, dict):
        raise ValidationError("Invalid request body", error="Body must be a JSON object")
    return payload


def parse_limit():
    raw = request.args.get("limit")
    if raw is None:
        return None
    try:
        limit = int(raw)
        if limit <= 0:
            raise ValueError
    except ValueError:
        raise ValidationError("Invalid limit", error="limit must be a positive integer") from None
    return limit


def respond(status=200, **body):
    return jsonify({"status": status, **body}), status
