import logging

import bcrypt
from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import set_access_cookies, set_refresh_cookies

import tokens
from errors import AuthError, ConflictError, ForbiddenError
from models import (
    find_user_by_email,
    find_user_by_email_or_name,
    insert_user,
    new_user,
    public_user,
)
from repository import load_payload
from routes.common import json_body
from schemas import login_schema, register_schema

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__, url_prefix="/auth")

BCRYPT_ROUNDS = 10
BCRYPT_MAX_BYTES = 72
# Compared against when the email is unknown so both failure paths hash once.
_DUMMY_HASH = bcrypt.hashpw(b"not-a-real-password", bcrypt.gensalt(rounds=BCRYPT_ROUNDS))


def _password_bytes(password):
    # bcrypt only reads the first 72 bytes; longer input is truncated, not rejected.
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password):
    hashed = bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds=BCRYPT_ROUNDS))
    return hashed.decode("utf-8")


def verify_password(entered_password, stored_hash):
    if isinstance(stored_hash, str):
        stored_hash = stored_hash.encode("utf-8")
    try:
        return bcrypt.checkpw(_password_bytes(entered_password), stored_hash)
    except ValueError:
        # Stored value is not a bcrypt hash.
        return False


def authenticate(email, password):
    """Return the user owning ``email`` if ``password`` matches, without its hash."""
    user = find_user_by_email(email)
    if user is None:
        verify_password(password, _DUMMY_HASH)
        raise AuthError("Invalid credentials")
    if not verify_password(password, user.get("password") or ""):
        raise AuthError("Invalid credentials")
    return public_user(user)


def register_user(name, email, password):
    if find_user_by_email_or_name(email, name):
        raise ConflictError("User with this email or name already exists")
    user_id = insert_user(new_user(name, email, hash_password(password)))
    logger.info("Registered user %s", user_id)
    return user_id


def issue_session(subject):
    return tokens.issue_access_token(subject), tokens.issue_refresh_token(subject)


def attach_session(response, access_token, refresh_token):
    set_access_cookies(response, access_token)
    set_refresh_cookies(response, refresh_token)
    return response


def clear_session(response):
    config = current_app.config
    cookies = (
        (config["JWT_ACCESS_COOKIE_NAME"], config["JWT_ACCESS_COOKIE_PATH"]),
        (config["JWT_REFRESH_COOKIE_NAME"], config["JWT_REFRESH_COOKIE_PATH"]),
    )
    for name, path in cookies:
        response.set_cookie(name, "", max_age=0, httponly=True, path=path,
                            secure=config["JWT_COOKIE_SECURE"])
    return response


@auth_bp.route("/login", methods=["POST"])
def login():
    payload = load_payload(login_schema, json_body(), "Email and password are required")
    email = str(payload["email"])
    password = str(payload["password"])

    try:
        user = authenticate(email, password)
    except AuthError:
        logger.info("Failed login attempt for %s", email)
        raise

    access_token, refresh_token = issue_session(user["email"])
    response = jsonify({"status": 200, "message": "Authenticated", "jwt": access_token})
    return attach_session(response, access_token, refresh_token)


@auth_bp.route("/register", methods=["POST"])
def register():
    payload = load_payload(register_schema, json_body())
    name = str(payload["name"])
    email = str(payload["email"])
    password = str(payload["password"])

    user_id = register_user(name, email, password)

    access_token, refresh_token = issue_session(email)
    response = jsonify({
        "status": 200,
        "message": "User registered successfully",
        "data": {"_id": user_id},
    })
    return attach_session(response, access_token, refresh_token)


@auth_bp.route("/refresh", methods=["GET"])
def refresh():
    refresh_token = request.cookies.get(current_app.config["JWT_REFRESH_COOKIE_NAME"])
    if not refresh_token:
        raise AuthError("No refresh token provided")

    check = tokens.verify_refresh_token(refresh_token)
    if check.status is tokens.TokenStatus.EXPIRED:
        logger.info("Rejected expired refresh token")
        raise ForbiddenError("Refresh token expired")
    if not check.ok:
        logger.info("Rejected refresh token: %s", check.status.value)
        raise ForbiddenError("Invalid refresh token")

    # The refresh token itself is not rotated.
    new_token = tokens.issue_access_token(check.subject)
    response = jsonify({"status": 200, "token": new_token})
    set_access_cookies(response, new_token)
    return response


@auth_bp.route("/logout", methods=["POST"])
def logout():
    # Tokens already handed out stay valid until they expire.
    response = jsonify({"status": 200, "message": "Logged out"})
    return clear_session(response)


@auth_bp.route("/me", methods=["GET"])
def me():
    access_token = request.cookies.get(current_app.config["JWT_ACCESS_COOKIE_NAME"])
    check = tokens.verify_access_token(access_token)
    if check.status is tokens.TokenStatus.MISSING:
        raise AuthError("No access token provided")
    if check.status is tokens.TokenStatus.EXPIRED:
        raise AuthError("Access token expired")
    if not check.ok:
        raise AuthError("Invalid access token")

    user = find_user_by_email(check.subject)
    if user is None:
        raise AuthError("Invalid access token")
    return jsonify({"status": 200, "data": {"user": public_user(user)}})
