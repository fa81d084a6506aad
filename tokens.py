"""Signed, time-limited access and refresh tokens.

Tokens are stateless: a token is valid when its signature checks out against
the key of its own class and it has not expired. Nothing is stored server
side, so logging out does not revoke a token that has already been issued.
"""

import enum
from datetime import datetime, timedelta, timezone
from typing import NamedTuple, Optional

import jwt
from flask import current_app

ALGORITHM = "HS256"
ACCESS = "access"
REFRESH = "refresh"

_KEYS = {ACCESS: "JWT_SECRET_KEY", REFRESH: "JWT_REFRESH_SECRET_KEY"}
_LIFETIMES = {ACCESS: "ACCESS_TOKEN_EXPIRES", REFRESH: "REFRESH_TOKEN_EXPIRES"}
_DEFAULT_LIFETIMES = {ACCESS: timedelta(minutes=15), REFRESH: timedelta(days=7)}


class TokenStatus(enum.Enum):
    AUTHENTICATED = "authenticated"
    INVALID_SIGNATURE = "invalid_signature"
    EXPIRED = "expired"
    MISSING = "missing"


class TokenCheck(NamedTuple):
    status: TokenStatus
    subject: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is TokenStatus.AUTHENTICATED


def signing_key(token_type: str) -> str:
    return current_app.config[_KEYS[token_type]]


def lifetime(token_type: str) -> timedelta:
    return current_app.config.get(_LIFETIMES[token_type], _DEFAULT_LIFETIMES[token_type])


def encode(subject: str, token_type: str, key: str, expires_in: timedelta,
           now: Optional[datetime] = None) -> str:
    issued = now or datetime.now(timezone.utc)
    claims = {
        "sub": subject,
        "type": token_type,
        "iat": issued,
        "exp": issued + expires_in,
    }
    return jwt.encode(claims, key, algorithm=ALGORITHM)


def verify(token: Optional[str], key: str, token_type: str) -> TokenCheck:
    """Check a token against ``key``; never raises for a bad token."""
    if not token:
        return TokenCheck(TokenStatus.MISSING)
    try:
        claims = jwt.decode(token, key, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError:
        return TokenCheck(TokenStatus.EXPIRED)
    except jwt.InvalidTokenError:
        return TokenCheck(TokenStatus.INVALID_SIGNATURE)
    if claims.get("type") != token_type or not claims.get("sub"):
        return TokenCheck(TokenStatus.INVALID_SIGNATURE)
    return TokenCheck(TokenStatus.AUTHENTICATED, claims["sub"])


def issue_access_token(subject: str, now: Optional[datetime] = None) -> str:
    return encode(subject, ACCESS, signing_key(ACCESS), lifetime(ACCESS), now)


def issue_refresh_token(subject: str, now: Optional[datetime] = None) -> str:
    return encode(subject, REFRESH, signing_key(REFRESH), lifetime(REFRESH), now)


def verify_access_token(token: Optional[str]) -> TokenCheck:
    return verify(token, signing_key(ACCESS), ACCESS)


def verify_refresh_token(token: Optional[str]) -> TokenCheck:
    return verify(token, signing_key(REFRESH), REFRESH)
