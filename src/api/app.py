from __future__ import annotations

from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import get_settings
from core.dataset import DatasetLoadError
from core.logging import get_logger

from api.responses import json_response
from api.routes.health import router as health_router
from api.routes.fixtures import router as fixtures_router

logger = get_logger("api.app")


async def _dataset_error_handler(request: Request, exc: DatasetLoadError):
    logger.error("Errore caricamento dataset: %s", exc)
    return json_response(
        {"ok": False, "error": "API_ERROR", "message": str(exc)},
        status_code=500,
        pretty=True,
    )


async def _http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return json_response({"ok": False, "error": "Not found"}, status_code=404)
    return json_response({"ok": False, "error": str(exc.detail)}, status_code=exc.status_code)


def create_app() -> FastAPI:
    app = FastAPI(
        title="Australia Cricket Fixtures (Free) - API",
        version="1.0.0",
        description="Read-only fixtures API with JSON and iCalendar output.",
        openapi_url="/api/openapi.json",
        docs_url="/api/docs",
        redoc_url=None,
    )
    try:
        settings = get_settings()
        logger.setLevel(settings.log_level)
    except Exception as exc:  # pragma: no cover
        logger.error("Impossibile caricare settings: %s", exc)

    app.add_exception_handler(DatasetLoadError, _dataset_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)

    app.include_router(health_router)
    app.include_router(fixtures_router)
    return app


app = create_app()


# Avvio rapido: python -m api.app
if __name__ == "__main__":
    import uvicorn

    uvicorn.run("api.app:app", host="0.0.0.0", port=8000, reload=False)
