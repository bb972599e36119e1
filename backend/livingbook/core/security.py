# livingbook/core/security.py

import uuid
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from jose import jwt, JWTError, ExpiredSignatureError

from livingbook.core.config import settings


# --------------------------------------
# Verification errors
# --------------------------------------

class TokenError(Exception):
    """Base for every reason a session token is refused."""


class MissingToken(TokenError):
    pass


class InvalidToken(TokenError):
    pass


class ExpiredToken(TokenError):
    pass


def normalize_email(value: Optional[str]) -> str:
    return (value or "").strip().lower()


# --------------------------------------
# Token creation
# --------------------------------------

def create_session_token(
    claims: Dict[str, Any],
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Sign the caller's identity claims. `email` is required and becomes
    the subject; iat/exp/jti are always set here, never taken from claims.
    """
    email = normalize_email(claims.get("email"))
    if not email:
        raise ValueError("identity claims must include an email")

    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = claims.copy()
    now = datetime.utcnow()
    to_encode.update(
        {
            "email": email,
            "sub": email,
            "iat": now,
            "exp": now + expires_delta,
            "jti": uuid.uuid4().hex,
        }
    )
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


# --------------------------------------
# Token verification
# --------------------------------------

def verify_session_token(token: Optional[str]) -> Dict[str, Any]:
    """
    Stateless check of signature and expiry. Revocation is the guard's
    concern, not this function's.
    """
    if not token:
        raise MissingToken("no session token supplied")

    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
        )
    except ExpiredSignatureError as e:
        raise ExpiredToken(str(e)) from e
    except JWTError as e:
        raise InvalidToken(str(e)) from e

    if not payload.get("sub") or not payload.get("email"):
        raise InvalidToken("Missing email subject in token")

    return payload


def token_expiry(payload: Dict[str, Any]) -> datetime:
    """exp claim as a naive UTC datetime (same clock as datetime.utcnow)."""
    return datetime.utcfromtimestamp(int(payload["exp"]))
