# backend/livingbook/schemas/featured.py
from datetime import datetime
from typing import Optional

from pydantic import Field

from livingbook.schemas.document import DocumentModel


class FeaturedCreate(DocumentModel):
    title: str
    property_id: Optional[str] = Field(None, alias="propertyId")
    image: Optional[str] = None
    description: Optional[str] = None


class FeaturedOut(FeaturedCreate):
    id: str
    created_at: datetime = Field(alias="createdAt")

    @classmethod
    def from_row(cls, item) -> "FeaturedOut":
        return cls.from_document(
            item.attributes,
            id=item.id,
            title=item.title,
            property_id=item.property_id,
            image=item.image,
            description=item.description,
            created_at=item.created_at,
        )
