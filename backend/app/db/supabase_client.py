# app/db/supabase_client.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, List, Optional

from postgrest.exceptions import APIError as PostgrestAPIError
from supabase import Client, create_client

from app.core.config import Settings, get_settings

logger = logging.getLogger(__name__)


# -----------------------
# Exceptions
# -----------------------
class DBError(Exception):
    """DB layer base exception."""


class DBQueryError(DBError):
    """Supabase/PostgREST query failed."""


@dataclass(frozen=True)
class DBResult:
    data: Any


# -----------------------
# Client (singleton)
# -----------------------
@lru_cache(maxsize=1)
def get_supabase_client(settings: Optional[Settings] = None) -> Client:
    """
    Create the Supabase client from SUPABASE_URL / SUPABASE_KEY.
    - Cached for process lifetime
    - The app stores it on app.state at startup and hands it to routes via get_db
    """
    s = settings or get_settings()
    client = create_client(s.supabase_url, s.supabase_key)
    logger.info("Supabase client initialized successfully")
    return client


# -----------------------
# Helpers
# -----------------------
def _get_data(resp: Any) -> Any:
    # supabase-py v2 response typically has .data
    if hasattr(resp, "data"):
        return resp.data
    if isinstance(resp, dict):
        return resp.get("data")
    return None


def execute(query: Any) -> DBResult:
    """
    Execute a built postgrest query and normalize the response.
    """
    try:
        resp = query.execute()
    except PostgrestAPIError as e:
        # message/details/hint come from PostgREST
        raise DBQueryError(str(e)) from e
    except Exception as e:
        raise DBQueryError(str(e)) from e
    return DBResult(data=_get_data(resp))


def ensure_list(data: Any) -> List[Dict[str, Any]]:
    if data is None:
        return []
    if isinstance(data, list):
        return data
    raise DBQueryError(f"Unexpected response data type: {type(data)}")
