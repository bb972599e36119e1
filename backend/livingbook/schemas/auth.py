# livingbook/schemas/auth.py
from pydantic import BaseModel, ConfigDict, EmailStr


class Identity(BaseModel):
    """
    Identity claims. Posted to /jwt by the client, and rebuilt from a
    verified token by the guard (iat/exp/jti/sub then ride along as extras).
    """

    email: EmailStr

    model_config = ConfigDict(extra="allow")


class TokenResponse(BaseModel):
    success: bool = True
    token: str
