# livingbook/api/routers/auth.py
import logging

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from livingbook.api.dependencies import session_token_from_cookie
from livingbook.core.config import settings
from livingbook.core.security import (
    TokenError,
    create_session_token,
    token_expiry,
    verify_session_token,
)
from livingbook.db import crud_users
from livingbook.db.session import get_db
from livingbook.schemas.auth import Identity, TokenResponse

logger = logging.getLogger("uvicorn.error")

router = APIRouter()


@router.post("/jwt", response_model=TokenResponse)
async def issue_token(identity: Identity, response: Response):
    """
    Mint a session token for the posted identity and hand it over as an
    http-only cookie (the body copy is for non-browser clients).
    """
    token = create_session_token(identity.model_dump())
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        **settings.cookie_options(),
    )
    return TokenResponse(token=token)


@router.post("/logout")
async def logout(
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    token = session_token_from_cookie(request)
    if token and settings.SESSION_DENYLIST_ENABLED:
        try:
            payload = verify_session_token(token)
        except TokenError:
            # already unusable; nothing to denylist
            payload = None
        if payload and payload.get("jti"):
            await crud_users.revoke_token(db, payload["jti"], token_expiry(payload))
            logger.info("session %s revoked at logout", payload["jti"])

    response.delete_cookie(settings.AUTH_COOKIE_NAME, **settings.cookie_options())
    return {"success": True}
