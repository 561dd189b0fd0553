# app/api/deps.py
from __future__ import annotations

import json
from typing import Any, Optional

from fastapi import Request
from supabase import Client

from app.core.config import Settings
from app.db.supabase_client import get_supabase_client
from app.services.disease_service import QueryValidationError

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db(request: Request) -> Client:
    """
    The store client created at startup.
    Tests swap it through app.dependency_overrides[get_db].
    """
    sb = getattr(request.app.state, "db", None)
    if sb is None:
        sb = get_supabase_client(request.app.state.settings)
        request.app.state.db = sb
    return sb


async def read_payload(request: Request) -> Optional[Any]:
    """
    Request body as plain data: form fields for form posts, decoded JSON otherwise.

    Returns None for an empty body or an unsupported content type; the service
    turns that into the usual 400.
    """
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()

    if content_type in FORM_CONTENT_TYPES:
        form = await request.form()
        return {key: value for key, value in form.items()}

    if content_type and "json" not in content_type:
        return None

    body = await request.body()
    if not body.strip():
        return None
    try:
        return json.loads(body)
    except ValueError as e:
        raise QueryValidationError() from e
