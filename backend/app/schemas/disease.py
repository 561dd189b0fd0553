# app/schemas/disease.py
from __future__ import annotations

from typing import List

from pydantic import Field, StrictStr, field_validator

from app.schemas.common import SchemaBase


class DiseaseQueryRequest(SchemaBase):
    # StrictStr: numbers and other types are rejected, never coerced
    query: StrictStr = Field(..., description="Free-text question, disease name or symptom")

    @field_validator("query")
    @classmethod
    def _trim_non_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("query must not be blank")
        return v


class DiseaseAnswer(SchemaBase):
    name: str
    symptoms: List[str]
    treatments: List[str]
    medicines: List[str]


class DiseaseQueryResponse(SchemaBase):
    success: bool = True
    data: DiseaseAnswer
