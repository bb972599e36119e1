# livingbook/db/crud_users.py

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import select, delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from livingbook.core.security import normalize_email
from livingbook.db.models import User, RevokedToken


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    res = await db.execute(select(User).where(User.email == normalize_email(email)))
    return res.scalar_one_or_none()


async def list_users(db: AsyncSession) -> List[User]:
    res = await db.execute(select(User).order_by(User.created_at.desc()))
    return list(res.scalars().all())


async def create_user(
    db: AsyncSession,
    *,
    email: str,
    name: Optional[str] = None,
    photo_url: Optional[str] = None,
    attributes: Optional[Dict[str, Any]] = None,
) -> Tuple[User, bool]:
    """
    Register a user. Returns (user, created); created is False when the
    email is already registered (unique index on users.email).
    """
    user = User(
        email=normalize_email(email),
        name=name,
        photo_url=photo_url,
        attributes=attributes or {},
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        existing = await get_user_by_email(db, email)
        if existing is None:
            raise
        return existing, False
    await db.refresh(user)
    return user, True


# --------------------------------------
# Session token denylist
# --------------------------------------

async def revoke_token(db: AsyncSession, jti: str, expires_at: datetime) -> None:
    """
    Denylist a token id until its own expiry. Expired rows are purged
    on the way in.
    """
    now = datetime.utcnow()
    await db.execute(delete(RevokedToken).where(RevokedToken.expires_at <= now))
    if expires_at > now and await db.get(RevokedToken, jti) is None:
        db.add(RevokedToken(jti=jti, expires_at=expires_at))
    await db.commit()


async def is_token_revoked(db: AsyncSession, jti: Optional[str]) -> bool:
    if not jti:
        return False
    row = await db.get(RevokedToken, jti)
    return row is not None and row.expires_at > datetime.utcnow()
