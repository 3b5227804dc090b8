from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Query

from api.responses import is_pretty, json_response

router = APIRouter(prefix="/api", tags=["health"])

API_NAME = "aus-fixtures-api"


@router.get("/health", summary="Health check")
def health(pretty: Optional[str] = Query(None, description="1 per JSON indentato")):
    """
    Health endpoint minimale.
    """
    now = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return json_response({"ok": True, "name": API_NAME, "time": now}, pretty=is_pretty(pretty))
