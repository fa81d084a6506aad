from datetime import datetime, timedelta, timezone

import jwt

import tokens
from tokens import TokenStatus


def _claims(app, token, setting):
    return jwt.decode(token, app.config[setting], algorithms=["HS256"])


def test_access_token_expires_after_fifteen_minutes(app):
    with app.app_context():
        token = tokens.issue_access_token("ana@x.com")
    claims = _claims(app, token, "JWT_SECRET_KEY")
    assert claims["sub"] == "ana@x.com"
    assert claims["type"] == "access"
    assert claims["exp"] - claims["iat"] == 15 * 60


def test_refresh_token_expires_after_seven_days(app):
    with app.app_context():
        token = tokens.issue_refresh_token("ana@x.com")
    claims = _claims(app, token, "JWT_REFRESH_SECRET_KEY")
    assert claims["type"] == "refresh"
    assert claims["exp"] - claims["iat"] == 7 * 24 * 60 * 60


def test_verify_returns_subject_for_valid_token(app):
    with app.app_context():
        check = tokens.verify_refresh_token(tokens.issue_refresh_token("ana@x.com"))
    assert check.ok
    assert check.status is TokenStatus.AUTHENTICATED
    assert check.subject == "ana@x.com"


def test_access_token_is_rejected_by_refresh_key(app):
    with app.app_context():
        check = tokens.verify_refresh_token(tokens.issue_access_token("ana@x.com"))
    assert check.status is TokenStatus.INVALID_SIGNATURE
    assert check.subject is None


def test_refresh_token_is_rejected_by_access_key(app):
    with app.app_context():
        check = tokens.verify_access_token(tokens.issue_refresh_token("ana@x.com"))
    assert check.status is TokenStatus.INVALID_SIGNATURE


def test_token_type_is_checked_even_with_shared_key():
    token = tokens.encode("ana@x.com", tokens.ACCESS, "shared-key-0123456789abcdef0123456789",
                          timedelta(minutes=15))
    check = tokens.verify(token, "shared-key-0123456789abcdef0123456789", tokens.REFRESH)
    assert check.status is TokenStatus.INVALID_SIGNATURE


def test_expired_token_is_reported_as_expired(app):
    issued = datetime.now(timezone.utc) - timedelta(days=8)
    with app.app_context():
        token = tokens.issue_refresh_token("ana@x.com", now=issued)
        check = tokens.verify_refresh_token(token)
    assert check.status is TokenStatus.EXPIRED
    assert not check.ok


def test_garbage_and_missing_tokens(app):
    with app.app_context():
        assert tokens.verify_access_token("not.a.token").status is TokenStatus.INVALID_SIGNATURE
        assert tokens.verify_access_token("").status is TokenStatus.MISSING
        assert tokens.verify_access_token(None).status is TokenStatus.MISSING
