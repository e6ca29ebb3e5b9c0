"""
Menu assistant request/response schemas
"""

from pydantic import BaseModel, Field
from typing import Optional


class AssistantRequest(BaseModel):
    message: Optional[str] = Field(None, description="Customer question")


class AssistantResponse(BaseModel):
    reply: str = Field(description="Generated answer, unmodified")
