# livingbook/db/crud_properties.py
from typing import Any, Dict, List, Optional

from sqlalchemy import select, delete, and_, func
from sqlalchemy.ext.asyncio import AsyncSession

from livingbook.core.security import normalize_email
from livingbook.db.models import Property, FeaturedListing

# columns a PUT/PATCH may touch; everything else goes to attributes
PROPERTY_FIELDS = ("title", "description", "price", "location", "images", "host_email")


async def list_properties(
    db: AsyncSession,
    filters: Optional[dict] = None,
    page: int = 1,
    per_page: int = 50,
) -> List[Property]:
    """
    Public listing with optional location/price filters and sorting.
    """
    filters = filters or {}
    stmt = select(Property)

    where_clauses = []
    if filters.get("location"):
        where_clauses.append(Property.location == filters["location"])
    if filters.get("min_price") is not None:
        where_clauses.append(Property.price >= float(filters["min_price"]))
    if filters.get("max_price") is not None:
        where_clauses.append(Property.price <= float(filters["max_price"]))
    if filters.get("host_email"):
        where_clauses.append(func.lower(Property.host_email) == normalize_email(filters["host_email"]))

    if where_clauses:
        stmt = stmt.where(and_(*where_clauses))

    sort = filters.get("sort")
    if sort == "price_asc":
        stmt = stmt.order_by(Property.price.asc())
    elif sort == "price_desc":
        stmt = stmt.order_by(Property.price.desc())
    else:
        # default: recent first
        stmt = stmt.order_by(Property.created_at.desc())

    offset = (page - 1) * per_page
    res = await db.execute(stmt.offset(offset).limit(per_page))
    return list(res.scalars().all())


async def get_property(db: AsyncSession, prop_id: str) -> Optional[Property]:
    return await db.get(Property, prop_id)


def _column_values(data: Dict[str, Any]) -> Dict[str, Any]:
    # stored exactly as submitted; lookups compare case-insensitively
    return {k: data[k] for k in PROPERTY_FIELDS if k in data}


async def create_property(
    db: AsyncSession,
    data: Dict[str, Any],
    attributes: Optional[Dict[str, Any]] = None,
) -> Property:
    prop = Property(**_column_values(data), attributes=attributes or {})
    db.add(prop)
    await db.commit()
    await db.refresh(prop)
    return prop


async def replace_property(
    db: AsyncSession,
    prop: Property,
    data: Dict[str, Any],
    attributes: Optional[Dict[str, Any]] = None,
) -> Property:
    """
    Full update: every known column is overwritten (missing optional
    ones are cleared) and the free-form attributes are replaced.
    """
    values = _column_values(data)
    for k in PROPERTY_FIELDS:
        setattr(prop, k, values.get(k))
    if prop.images is None:
        prop.images = []
    prop.attributes = attributes or {}
    await db.commit()
    await db.refresh(prop)
    return prop


async def update_property(
    db: AsyncSession,
    prop: Property,
    data: Dict[str, Any],
    attributes: Optional[Dict[str, Any]] = None,
) -> Property:
    """Partial update: only keys present (and not None) in data change."""
    for k, v in _column_values(data).items():
        if v is not None:
            setattr(prop, k, v)
    if attributes:
        # reassign so the JSON column is flagged dirty
        prop.attributes = {**(prop.attributes or {}), **attributes}
    await db.commit()
    await db.refresh(prop)
    return prop


async def delete_property(db: AsyncSession, prop_id: str) -> int:
    res = await db.execute(delete(Property).where(Property.id == prop_id))
    await db.commit()
    return res.rowcount


# --- featured listings ---

async def list_featured(db: AsyncSession) -> List[FeaturedListing]:
    res = await db.execute(
        select(FeaturedListing).order_by(FeaturedListing.created_at.desc())
    )
    return list(res.scalars().all())


async def create_featured(
    db: AsyncSession,
    *,
    title: str,
    property_id: Optional[str] = None,
    image: Optional[str] = None,
    description: Optional[str] = None,
    attributes: Optional[Dict[str, Any]] = None,
) -> FeaturedListing:
    item = FeaturedListing(
        title=title,
        property_id=property_id,
        image=image,
        description=description,
        attributes=attributes or {},
    )
    db.add(item)
    await db.commit()
    await db.refresh(item)
    return item
