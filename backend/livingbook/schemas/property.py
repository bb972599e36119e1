# backend/livingbook/schemas/property.py
from datetime import datetime
from typing import Annotated, Optional, List

from pydantic import AfterValidator, Field
from pydantic.networks import validate_email

from livingbook.schemas.document import DocumentModel


def _checked_email(value: str) -> str:
    # validate like EmailStr but keep the address exactly as submitted
    validate_email(value)
    return value


HostEmail = Annotated[str, AfterValidator(_checked_email)]


class PropertyCreate(DocumentModel):
    title: str
    description: Optional[str] = None
    price: float = Field(ge=0)
    location: str
    images: List[str] = []
    host_email: Optional[HostEmail] = Field(None, alias="hostEmail")


class PropertyUpdate(DocumentModel):
    """PATCH body: only the fields that were sent are applied."""

    title: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    location: Optional[str] = None
    images: Optional[List[str]] = None
    host_email: Optional[HostEmail] = Field(None, alias="hostEmail")


class PropertyOut(DocumentModel):
    id: str
    title: str
    description: Optional[str] = None
    price: float
    location: str
    images: List[str] = []
    host_email: Optional[str] = Field(None, alias="hostEmail")
    created_at: datetime = Field(alias="createdAt")

    @classmethod
    def from_row(cls, prop) -> "PropertyOut":
        return cls.from_document(
            prop.attributes,
            id=prop.id,
            title=prop.title,
            description=prop.description,
            price=prop.price,
            location=prop.location,
            images=prop.images or [],
            host_email=prop.host_email,
            created_at=prop.created_at,
        )
