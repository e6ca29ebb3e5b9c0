"""
Admin authentication request/response schemas
"""

from pydantic import BaseModel, EmailStr, Field
from typing import Optional


class LoginRequest(BaseModel):
    email: EmailStr = Field(description="Admin email")
    password: str = Field(min_length=6, description="Plaintext password")

    model_config = {
        "json_schema_extra": {
            "example": {
                "email": "admin@example.com",
                "password": "secret1"
            }
        }
    }


class AdminInfo(BaseModel):
    email: str = Field(description="Admin email")


class LoginResponse(BaseModel):
    success: bool = Field(True, description="Login succeeded")
    admin: AdminInfo


class SessionResponse(BaseModel):
    """Current session; admin is null when the cookie is missing or invalid"""
    admin: Optional[AdminInfo] = None
