"""
Base data models shared by entities and API schemas.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Optional


class CamelModel(BaseModel):
    """Serialized with camelCase keys; accepts camelCase or snake_case input"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class TimestampMixin(CamelModel):
    created_at: Optional[datetime] = Field(None, description="Creation time")


class BaseEntity(CamelModel):
    """Persisted entity with an integer id"""
    id: int = Field(..., description="Primary key")
