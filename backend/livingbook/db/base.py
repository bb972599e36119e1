import uuid

from sqlalchemy.orm import declarative_base

Base = declarative_base()


def new_id() -> str:
    """Opaque store-assigned identifier."""
    return uuid.uuid4().hex
