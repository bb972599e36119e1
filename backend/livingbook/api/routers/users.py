from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from livingbook.api.dependencies import CurrentIdentity, ensure_owner
from livingbook.core.errors import NotFound
from livingbook.db import crud_users
from livingbook.db.session import get_db
from livingbook.schemas.user import UserCreate, UserOut

router = APIRouter()


@router.get("/users")
async def list_users(db: AsyncSession = Depends(get_db)):
    users = await crud_users.list_users(db)
    return [UserOut.from_row(u) for u in users]


@router.post("/users")
async def register_user(body: UserCreate, db: AsyncSession = Depends(get_db)):
    user, created = await crud_users.create_user(
        db,
        email=body.email,
        name=body.name,
        photo_url=body.photo_url,
        attributes=body.extra_attributes(),
    )
    if not created:
        return {"message": "User already exists", "insertedId": None}
    return JSONResponse(
        status_code=201,
        content={"message": "User created", "insertedId": user.id},
    )


@router.get("/users/{email}")
async def get_user(
    email: str,
    identity: CurrentIdentity,
    db: AsyncSession = Depends(get_db),
):
    ensure_owner(identity, email)
    user = await crud_users.get_user_by_email(db, email)
    if not user:
        raise NotFound("User not found")
    return UserOut.from_row(user)
