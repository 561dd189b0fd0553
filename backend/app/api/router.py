# app/api/router.py
from __future__ import annotations

from fastapi import APIRouter

from app.api.routes import diseases

router = APIRouter()
router.include_router(diseases.router)
