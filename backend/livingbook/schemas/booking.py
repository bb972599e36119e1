# backend/livingbook/schemas/booking.py
from datetime import date, datetime

from pydantic import EmailStr, Field, field_validator

from livingbook.schemas.document import DocumentModel


def _date_part(value):
    """
    Bookings are per calendar day: any ISO 8601 date or datetime string
    ("2024-06-01", "2024-06-01 10:00", "2024-06-01T00:00:00.000Z") is cut
    down to its date. Numeric timestamps are refused.
    """
    if isinstance(value, (datetime, date)):
        return value.date() if isinstance(value, datetime) else value
    if not isinstance(value, str):
        raise ValueError("bookingDate must be an ISO 8601 date string")
    text = value.strip()
    if text.isdigit():
        raise ValueError("bookingDate must be an ISO 8601 date string, not a timestamp")
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        raise ValueError(f"invalid bookingDate: {value!r}")


class BookingCreate(DocumentModel):
    property_id: str = Field(alias="hotelId", min_length=1)
    booking_date: date = Field(alias="bookingDate")
    user_email: EmailStr = Field(alias="userEmail")

    @field_validator("property_id", mode="before")
    @classmethod
    def _stringify_id(cls, value):
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("booking_date", mode="before")
    @classmethod
    def _strip_time(cls, value):
        return _date_part(value)


class BookingDateUpdate(DocumentModel):
    booking_date: date = Field(alias="bookingDate")

    @field_validator("booking_date", mode="before")
    @classmethod
    def _strip_time(cls, value):
        return _date_part(value)


class BookingOut(DocumentModel):
    id: str
    property_id: str = Field(alias="hotelId")
    booking_date: date = Field(alias="bookingDate")
    user_email: str = Field(alias="userEmail")
    created_at: datetime = Field(alias="createdAt")

    @classmethod
    def from_row(cls, booking) -> "BookingOut":
        return cls.from_document(
            booking.attributes,
            id=booking.id,
            property_id=booking.property_id,
            booking_date=booking.booking_date,
            user_email=booking.user_email,
            created_at=booking.created_at,
        )
