from __future__ import annotations

import json
from typing import Any, Dict, Optional

from fastapi.responses import Response

from core.config import get_settings


def api_headers(extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    headers = {"cache-control": "no-store"}
    if get_settings().cors_enabled:
        headers["access-control-allow-origin"] = "*"
    if extra:
        headers.update(extra)
    return headers


def json_response(obj: Any, *, status_code: int = 200, pretty: bool = False) -> Response:
    body = json.dumps(obj, ensure_ascii=False, indent=2 if pretty else None)
    return Response(
        content=body,
        status_code=status_code,
        media_type="application/json; charset=utf-8",
        headers=api_headers(),
    )


def text_response(
    text: str,
    *,
    media_type: str = "text/plain; charset=utf-8",
    headers: Optional[Dict[str, str]] = None,
) -> Response:
    return Response(content=text, media_type=media_type, headers=api_headers(headers))


def is_pretty(value: Optional[str]) -> bool:
    return value == "1"
