# backend/livingbook/schemas/user.py
from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from livingbook.schemas.document import DocumentModel


class UserCreate(DocumentModel):
    email: EmailStr
    name: Optional[str] = None
    photo_url: Optional[str] = Field(None, alias="photoURL")


class UserOut(DocumentModel):
    id: str
    email: EmailStr
    name: Optional[str] = None
    photo_url: Optional[str] = Field(None, alias="photoURL")
    created_at: datetime = Field(alias="createdAt")

    @classmethod
    def from_row(cls, user) -> "UserOut":
        return cls.from_document(
            user.attributes,
            id=user.id,
            email=user.email,
            name=user.name,
            photo_url=user.photo_url,
            created_at=user.created_at,
        )
