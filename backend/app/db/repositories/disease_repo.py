# app/db/repositories/disease_repo.py
from __future__ import annotations

from typing import Any, Dict, List

from supabase import Client

from app.db.supabase_client import ensure_list, execute


class DiseaseRepo:
    TABLE = "diseases"

    # column names as they exist in the table (spaces included)
    NAME = "Disease Name"
    SYMPTOMS = "Symptoms"
    CAUSES = "Causes"
    TREATMENTS = "Treatment Options"
    MEDICINES = "Medicine Options"

    DEFAULT_SELECT = "*"

    @staticmethod
    def quote_column(column: str) -> str:
        """PostgREST needs identifiers with spaces wrapped in double quotes."""
        if " " in column and not column.startswith('"'):
            return f'"{column}"'
        return column

    @staticmethod
    def search_column(
        sb: Client,
        column: str,
        text: str,
        *,
        limit: int = 5,
        table: str = TABLE,
        select: str = DEFAULT_SELECT,
    ) -> List[Dict[str, Any]]:
        """
        Case-insensitive substring match of `text` against one column.
        An empty `text` matches every row.
        """
        q = (
            sb.table(table)
            .select(select)
            .ilike(DiseaseRepo.quote_column(column), f"%{text}%")
            .limit(limit)
        )
        res = execute(q)
        return ensure_list(res.data)

    @staticmethod
    def probe(sb: Client, *, table: str = TABLE) -> None:
        """Cheap read used by the optional startup check."""
        execute(sb.table(table).select(DiseaseRepo.DEFAULT_SELECT).limit(1))
