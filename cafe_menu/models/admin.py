"""
Admin identity models
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class Admin(BaseModel):
    """Seeded admin account as stored"""
    id: int = Field(..., description="Admin id")
    email: str = Field(..., description="Login email, unique")
    password_hash: str = Field(..., description="bcrypt hash")
    created_at: Optional[datetime] = None


class AdminIdentity(BaseModel):
    """Verified identity carried by a valid token"""
    admin_id: int
    email: str


class AdminClaims(AdminIdentity):
    """Decoded token claims"""
    issued_at: int
    expires_at: int
