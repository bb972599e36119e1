from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from livingbook.db import crud_properties
from livingbook.db.session import get_db
from livingbook.schemas.featured import FeaturedOut

router = APIRouter()


@router.get("/featured")
async def list_featured(db: AsyncSession = Depends(get_db)):
    items = await crud_properties.list_featured(db)
    return [FeaturedOut.from_row(f) for f in items]
