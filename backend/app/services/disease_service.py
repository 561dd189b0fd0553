# app/services/disease_service.py
from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError
from supabase import Client

from app.db.repositories.disease_repo import DiseaseRepo
from app.schemas.common import MessageResponse
from app.schemas.disease import DiseaseAnswer, DiseaseQueryRequest, DiseaseQueryResponse
from app.services.search_service import DiseaseSearchService

INVALID_QUESTION_MESSAGE = "Please enter a valid question."
NOT_FOUND_MESSAGE = "🤖 I couldn't find any matching diseases. Try different symptoms."
GENERIC_ERROR_MESSAGE = "Oops! Something went wrong."

UNKNOWN_DISEASE = "Unknown Disease"
NOT_SPECIFIED = "Not specified"
LIST_DELIMITER = ";"


class QueryValidationError(ValueError):
    """The request body has no usable `query`."""

    def __init__(self, message: str = INVALID_QUESTION_MESSAGE):
        super().__init__(message)


def _split_list(value: Any) -> List[str]:
    if not value:
        return [NOT_SPECIFIED]
    return str(value).split(LIST_DELIMITER)


def to_disease_answer(row: Dict[str, Any]) -> DiseaseAnswer:
    name = row.get(DiseaseRepo.NAME)
    return DiseaseAnswer(
        name=str(name) if name else UNKNOWN_DISEASE,
        symptoms=_split_list(row.get(DiseaseRepo.SYMPTOMS)),
        treatments=_split_list(row.get(DiseaseRepo.TREATMENTS)),
        medicines=_split_list(row.get(DiseaseRepo.MEDICINES)),
    )


class DiseaseService:
    @staticmethod
    def parse_query(payload: Optional[Any]) -> str:
        """Return the trimmed query or raise QueryValidationError."""
        try:
            req = DiseaseQueryRequest.model_validate(payload)
        except ValidationError as e:
            raise QueryValidationError() from e
        return req.query

    @staticmethod
    def answer_query(
        sb: Client,
        payload: Optional[Any],
        *,
        limit: int = 5,
        table: str = DiseaseRepo.TABLE,
    ) -> Union[DiseaseQueryResponse, MessageResponse]:
        """
        Validate, search, and shape the first match.

        Only the first row of the winning tier is answered with. A failed
        lookup propagates as DiseaseLookupError for the app's handler to
        turn into the generic 500.
        """
        query = DiseaseService.parse_query(payload)
        rows = DiseaseSearchService.search(sb, query, limit=limit, table=table)

        if not rows:
            return MessageResponse(success=False, message=NOT_FOUND_MESSAGE)

        return DiseaseQueryResponse(success=True, data=to_disease_answer(rows[0]))
