# livingbook/db/models.py

from datetime import datetime

from sqlalchemy import (
    Column,
    String,
    DateTime,
    Date,
    Text,
    Float,
    JSON,
    UniqueConstraint,
)

from livingbook.db.base import Base, new_id


# Every collection keeps the fields we query on as columns and the
# rest of the submitted document in `attributes`.


class User(Base):
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=new_id)
    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=True)
    photo_url = Column(Text, nullable=True)

    attributes = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Property(Base):
    __tablename__ = "properties"

    id = Column(String(32), primary_key=True, default=new_id)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Float, nullable=False)
    location = Column(String(255), nullable=False, index=True)

    # list[str] as JSON in DB
    images = Column(JSON, nullable=False, default=list)

    # listing owner; plain email, no FK (users are keyed by email)
    host_email = Column(String(255), nullable=True, index=True)

    attributes = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class FeaturedListing(Base):
    __tablename__ = "featured"

    id = Column(String(32), primary_key=True, default=new_id)
    property_id = Column(String(64), nullable=True, index=True)

    title = Column(String(255), nullable=False)
    image = Column(Text, nullable=True)
    description = Column(Text, nullable=True)

    attributes = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(String(32), primary_key=True, default=new_id)

    # opaque id of the booked property/hotel; not a FK
    property_id = Column(String(64), nullable=False, index=True)
    booking_date = Column(Date, nullable=False)
    user_email = Column(String(255), nullable=False, index=True)

    attributes = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        # one booking per property, date and user
        UniqueConstraint(
            "property_id",
            "booking_date",
            "user_email",
            name="uq_booking_property_date_user",
        ),
    )


class RevokedToken(Base):
    __tablename__ = "revoked_tokens"

    jti = Column(String(64), primary_key=True)
    # row is useless once the token itself has expired
    expires_at = Column(DateTime, nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
