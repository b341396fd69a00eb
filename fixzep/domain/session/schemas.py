"""Session domain schemas"""

from typing import Any, Optional

from pydantic import BaseModel, Field


class AuthUser(BaseModel):
    """Profile snapshot of the logged-in customer"""

    id: Optional[str] = Field(default=None, alias="_id")
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    role: Optional[str] = None
    profile: Optional[dict[str, Any]] = None

    class Config:
        populate_by_name = True
        extra = "allow"


class AuthResponse(BaseModel):
    """Body returned by the login and register endpoints"""

    token: str
    user: AuthUser
