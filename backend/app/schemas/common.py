# app/schemas/common.py
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class SchemaBase(BaseModel):
    """
    Pydantic v2 base schema.
    - populate_by_name: lets aliased fields be filled by attribute name too
    - extra=ignore: unknown keys in request bodies are dropped, not rejected
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class MessageResponse(SchemaBase):
    """Envelope for every answer that carries a message instead of data."""
    success: bool = Field(False, description="Always false for message answers")
    message: str = Field(..., description="Human-readable message shown in the chat")


class HealthResponse(SchemaBase):
    status: str = Field("healthy")
    database: bool = Field(..., description="Whether the store client was initialized")
    timestamp: datetime


class ServiceInfo(SchemaBase):
    service: str
    env: str
