from typing import Any, Optional

from fastapi import APIRouter, Body, Depends
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from livingbook.api.dependencies import CurrentIdentity, ensure_owner
from livingbook.db import crud_bookings
from livingbook.db.session import get_db
from livingbook.schemas.booking import BookingCreate, BookingDateUpdate, BookingOut

router = APIRouter()


@router.get("/bookings")
async def list_bookings(
    identity: CurrentIdentity,
    email: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    """
    The caller's own bookings. Without ?email= the token's email is used;
    asking for anyone else's is a 403.
    """
    if email is None:
        email = identity.email
    ensure_owner(identity, email)
    bookings = await crud_bookings.list_bookings_for_user(db, email)
    return [BookingOut.from_row(b) for b in bookings]


@router.post("/bookings")
async def create_booking(body: BookingCreate, db: AsyncSession = Depends(get_db)):
    booking, created = await crud_bookings.create_booking(
        db,
        property_id=body.property_id,
        booking_date=body.booking_date,
        user_email=body.user_email,
        attributes=body.extra_attributes(),
    )
    if not created:
        # idempotent: a repeat is a success, not an error
        return {"message": "Booking already exists for this date."}
    return JSONResponse(
        status_code=201,
        content={"message": "Booking created successfully.", "bookingId": booking.id},
    )


@router.get("/bookings/{booking_id}")
async def get_booking(
    booking_id: str,
    identity: CurrentIdentity,
    db: AsyncSession = Depends(get_db),
):
    booking = await crud_bookings.get_owned_booking(db, booking_id, identity.email)
    return BookingOut.from_row(booking)


@router.put("/bookings/{booking_id}")
async def update_booking_date(
    booking_id: str,
    identity: CurrentIdentity,
    body: Any = Body(None),
    db: AsyncSession = Depends(get_db),
):
    # ownership first: a stranger gets 403 whatever the payload looks like
    await crud_bookings.get_owned_booking(db, booking_id, identity.email)
    try:
        change = BookingDateUpdate.model_validate(body)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False, include_context=False))

    modified = await crud_bookings.update_booking_date(
        db,
        booking_id,
        change.booking_date,
        identity.email,
    )
    return {"message": "Booking date updated.", "modifiedCount": modified}
