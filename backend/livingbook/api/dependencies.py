# livingbook/api/dependencies.py
import logging
from typing import Annotated, Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from livingbook.core.config import settings
from livingbook.core.errors import Forbidden, Unauthorized
from livingbook.core.security import TokenError, normalize_email, verify_session_token
from livingbook.db import crud_users
from livingbook.db.session import get_db
from livingbook.schemas.auth import Identity

logger = logging.getLogger("uvicorn.error")


def session_token_from_cookie(request: Request) -> Optional[str]:
    """The session token is only ever read from the cookie jar."""
    return request.cookies.get(settings.AUTH_COOKIE_NAME)


async def get_current_identity(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> Identity:
    """
    Verify the session cookie and return the caller's identity.
    Every failure is the same 401 to the client; the reason is only logged.
    """
    token = session_token_from_cookie(request)
    try:
        payload = verify_session_token(token)
    except TokenError as e:
        logger.debug("rejected session token on %s: %s", request.url.path, type(e).__name__)
        raise Unauthorized()

    if settings.SESSION_DENYLIST_ENABLED and await crud_users.is_token_revoked(db, payload.get("jti")):
        logger.debug("rejected revoked session token on %s", request.url.path)
        raise Unauthorized()

    try:
        identity = Identity.model_validate(payload)
    except ValueError:
        raise Unauthorized()

    # request-scoped, never shared between requests
    request.state.identity = identity
    return identity


def ensure_owner(identity: Identity, email: Optional[str]) -> None:
    """403 unless the email a handler is scoped to is the caller's own."""
    if normalize_email(identity.email) != normalize_email(email):
        raise Forbidden()


CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]
