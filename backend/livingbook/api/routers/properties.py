# livingbook/api/routers/properties.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from sqlalchemy.ext.asyncio import AsyncSession

from livingbook.core.errors import NotFound
from livingbook.db import crud_properties
from livingbook.db.session import get_db
from livingbook.schemas.property import PropertyCreate, PropertyOut, PropertyUpdate

router = APIRouter()


async def _get_or_404(db: AsyncSession, prop_id: str):
    prop = await crud_properties.get_property(db, prop_id)
    if not prop:
        raise NotFound("Property not found")
    return prop


@router.get("/properties")
async def list_properties(
    db: AsyncSession = Depends(get_db),
    location: Optional[str] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
    host_email: Optional[str] = Query(None, alias="hostEmail"),
    sort: Optional[str] = None,
    page: int = Query(1, ge=1),
    per_page: int = Query(50, ge=1, le=200),
):
    filters = {
        "location": location,
        "min_price": min_price,
        "max_price": max_price,
        "host_email": host_email,
        "sort": sort,
    }
    items = await crud_properties.list_properties(
        db,
        filters=filters,
        page=page,
        per_page=per_page,
    )
    return [PropertyOut.from_row(p) for p in items]


@router.post("/properties")
async def create_property(body: PropertyCreate, db: AsyncSession = Depends(get_db)):
    prop = await crud_properties.create_property(
        db,
        body.model_dump(),
        attributes=body.extra_attributes(),
    )
    return JSONResponse(
        status_code=201,
        content=jsonable_encoder(
            {"success": True, "insertedId": prop.id, "data": PropertyOut.from_row(prop)}
        ),
    )


@router.get("/properties/{prop_id}")
async def get_property(prop_id: str, db: AsyncSession = Depends(get_db)):
    prop = await _get_or_404(db, prop_id)
    return PropertyOut.from_row(prop)


@router.put("/properties/{prop_id}")
async def replace_property(
    prop_id: str,
    body: PropertyCreate,
    db: AsyncSession = Depends(get_db),
):
    """Full update: the body becomes the whole listing."""
    prop = await _get_or_404(db, prop_id)
    prop = await crud_properties.replace_property(
        db,
        prop,
        body.model_dump(),
        attributes=body.extra_attributes(),
    )
    return {"success": True, "modifiedCount": 1, "data": PropertyOut.from_row(prop)}


@router.patch("/properties/{prop_id}")
async def update_property(
    prop_id: str,
    body: PropertyUpdate,
    db: AsyncSession = Depends(get_db),
):
    prop = await _get_or_404(db, prop_id)
    prop = await crud_properties.update_property(
        db,
        prop,
        body.model_dump(exclude_unset=True),
        attributes=body.extra_attributes(),
    )
    return {"success": True, "modifiedCount": 1, "data": PropertyOut.from_row(prop)}


@router.delete("/properties/{prop_id}")
async def delete_property(prop_id: str, db: AsyncSession = Depends(get_db)):
    deleted = await crud_properties.delete_property(db, prop_id)
    if not deleted:
        raise NotFound("Property not found")
    return {"success": True, "deletedCount": deleted}
