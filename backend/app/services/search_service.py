# app/services/search_service.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

from supabase import Client

from app.db.repositories.disease_repo import DiseaseRepo
from app.db.supabase_client import DBQueryError

logger = logging.getLogger(__name__)


class DiseaseLookupError(DBQueryError):
    """A search tier failed against the store; the cascade was aborted."""

    def __init__(self, message: str, *, tier: str):
        super().__init__(message)
        self.tier = tier


@dataclass(frozen=True)
class SearchTier:
    label: str
    column: str


# priority order: the first tier returning rows wins
SEARCH_TIERS: Sequence[SearchTier] = (
    SearchTier(label="name", column=DiseaseRepo.NAME),
    SearchTier(label="symptoms", column=DiseaseRepo.SYMPTOMS),
    SearchTier(label="causes", column=DiseaseRepo.CAUSES),
)


class DiseaseSearchService:
    @staticmethod
    def search(
        sb: Client,
        query: str,
        *,
        limit: int = 5,
        table: str = DiseaseRepo.TABLE,
        tiers: Sequence[SearchTier] = SEARCH_TIERS,
    ) -> List[Dict[str, Any]]:
        """
        Run the tiers in order and return the rows of the first non-empty one.

        Returns an empty list when every tier comes back empty. A failing tier
        stops the cascade right there and raises DiseaseLookupError; later
        tiers are not queried.
        """
        for tier in tiers:
            try:
                rows = DiseaseRepo.search_column(sb, tier.column, query, limit=limit, table=table)
            except DBQueryError as e:
                logger.error("Disease search error", extra={"error": str(e), "tier": tier.label})
                raise DiseaseLookupError(str(e), tier=tier.label) from e

            if rows:
                logger.debug("Disease search hit", extra={"tier": tier.label, "count": len(rows)})
                return rows

        return []
