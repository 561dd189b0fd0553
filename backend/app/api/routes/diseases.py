# app/api/routes/diseases.py
from __future__ import annotations

from typing import Any, Optional, Union

from fastapi import APIRouter, Depends
from supabase import Client

from app.api.deps import get_app_settings, get_db, read_payload
from app.core.config import Settings
from app.schemas.common import MessageResponse
from app.schemas.disease import DiseaseQueryRequest, DiseaseQueryResponse
from app.services.disease_service import DiseaseService

router = APIRouter(tags=["diseases"])

_QUERY_SCHEMA = DiseaseQueryRequest.model_json_schema()


@router.post(
    "/disease-query",
    response_model=Union[DiseaseQueryResponse, MessageResponse],
    responses={400: {"model": MessageResponse}, 500: {"model": MessageResponse}},
    openapi_extra={
        "requestBody": {
            "content": {
                "application/json": {"schema": _QUERY_SCHEMA, "example": {"query": "fever"}},
                "application/x-www-form-urlencoded": {"schema": _QUERY_SCHEMA},
            },
        }
    },
)
def disease_query(
    payload: Optional[Any] = Depends(read_payload),
    sb: Client = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> Union[DiseaseQueryResponse, MessageResponse]:
    # body is read raw so a missing or non-string `query` becomes our 400, not FastAPI's 422
    return DiseaseService.answer_query(
        sb,
        payload,
        limit=settings.search_limit,
        table=settings.disease_table,
    )
