from datetime import datetime
from pydantic import Field
from typing import Literal, Optional

from portfolio_api.schemas.common import CamelModel


class LoginRequest(CamelModel):
    password: str = Field(..., min_length=1)


class LoginResponse(CamelModel):
    success: bool = True
    message: str = "Login successful"
    token: str
    expires_at: datetime


class SessionUser(CamelModel):
    username: str
    role: str


class AuthStatus(CamelModel):
    authenticated: bool = True
    user: SessionUser
    via: Literal["bearer", "cookie", "api_key"]
    expires_at: Optional[datetime] = None
