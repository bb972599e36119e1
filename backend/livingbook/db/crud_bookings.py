# livingbook/db/crud_bookings.py

import logging
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from livingbook.core.errors import BookingConflict, Forbidden, NotFound, UpdateFailed
from livingbook.core.security import normalize_email
from livingbook.db.models import Booking

logger = logging.getLogger("uvicorn.error")


async def get_booking(db: AsyncSession, booking_id: str) -> Optional[Booking]:
    return await db.get(Booking, booking_id)


async def find_booking(
    db: AsyncSession,
    *,
    property_id: str,
    booking_date: date,
    user_email: str,
) -> Optional[Booking]:
    res = await db.execute(
        select(Booking).where(
            Booking.property_id == property_id,
            Booking.booking_date == booking_date,
            Booking.user_email == normalize_email(user_email),
        )
    )
    return res.scalar_one_or_none()


async def list_bookings_for_user(db: AsyncSession, user_email: str) -> List[Booking]:
    stmt = (
        select(Booking)
        .where(Booking.user_email == normalize_email(user_email))
        .order_by(Booking.booking_date.asc(), Booking.created_at.asc())
    )
    res = await db.execute(stmt)
    return list(res.scalars().all())


async def create_booking(
    db: AsyncSession,
    *,
    property_id: str,
    booking_date: date,
    user_email: str,
    attributes: Optional[Dict[str, Any]] = None,
) -> Tuple[Booking, bool]:
    """
    Record a booking at most once per (property, date, user).

    There is no separate existence check: the insert itself is the test,
    and uq_booking_property_date_user turns a duplicate (including one
    racing in from a concurrent request) into an IntegrityError. Returns
    (booking, created); on a duplicate the already-stored booking comes
    back with created=False.
    """
    booking = Booking(
        property_id=property_id,
        booking_date=booking_date,
        user_email=normalize_email(user_email),
        attributes=attributes or {},
    )
    db.add(booking)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        existing = await find_booking(
            db,
            property_id=property_id,
            booking_date=booking_date,
            user_email=user_email,
        )
        if existing is None:
            # violated something other than the booking triple
            raise
        logger.info(
            "duplicate booking for property=%s date=%s, keeping %s",
            property_id,
            booking_date,
            existing.id,
        )
        return existing, False

    await db.refresh(booking)
    return booking, True


def ensure_booking_owner(booking: Booking, requester_email: str) -> None:
    if booking.user_email != normalize_email(requester_email):
        raise Forbidden()


async def get_owned_booking(db: AsyncSession, booking_id: str, requester_email: str) -> Booking:
    booking = await get_booking(db, booking_id)
    if booking is None:
        raise NotFound("Booking not found")
    ensure_booking_owner(booking, requester_email)
    return booking


async def update_booking_date(
    db: AsyncSession,
    booking_id: str,
    new_date: date,
    requester_email: str,
) -> int:
    """
    Move a booking to a new date on behalf of its owner.

    Raises NotFound, Forbidden (requester is not the owner),
    BookingConflict (owner already holds this property on new_date) or
    UpdateFailed (store modified nothing). Returns the modified count.
    """
    booking = await get_owned_booking(db, booking_id, requester_email)

    if booking.booking_date != new_date:
        clash = await find_booking(
            db,
            property_id=booking.property_id,
            booking_date=new_date,
            user_email=booking.user_email,
        )
        if clash is not None:
            raise BookingConflict()

    try:
        res = await db.execute(
            update(Booking)
            .where(Booking.id == booking.id, Booking.user_email == booking.user_email)
            .values(booking_date=new_date)
            .execution_options(synchronize_session=False)
        )
        await db.commit()
    except IntegrityError:
        # a concurrent request took the new date between check and update
        await db.rollback()
        raise BookingConflict()

    if res.rowcount != 1:
        raise UpdateFailed("Booking date was not updated")
    return res.rowcount
