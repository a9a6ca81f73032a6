"""Liveness endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter

from query_tracker_api.app.schemas.common import HealthRead

router = APIRouter()


@router.get("", response_model=HealthRead)
async def health() -> HealthRead:
    return HealthRead(status="OK", timestamp=datetime.now(timezone.utc))
