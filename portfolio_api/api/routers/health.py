from __future__ import annotations

from fastapi import APIRouter

from portfolio_api.db.mappers import iso_utc
from portfolio_api.db.models import utcnow

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    return {"status": "ok", "timestamp": iso_utc(utcnow())}
