"""
Gestionnaires d'exceptions.
- Erreurs métier (BoutiqueError) -> {"error": message} avec leur code HTTP.
- 404 -> page dédiée (HTML) ou {"error": "Not found"} sous /api/.
- HTTPException (401 admin, 429 rate limit...) -> JSON {"detail"} en conservant les en-têtes.
- Toute autre exception -> log + 500 générique, jamais de crash.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from boutique.errors import BoutiqueError
from boutique.utils.templates import render_not_found

logger = logging.getLogger(__name__)


def _is_api(request: Request) -> bool:
    return request.url.path.startswith("/api/")


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(BoutiqueError)
    async def boutique_error(request: Request, exc: BoutiqueError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            if _is_api(request):
                return JSONResponse(status_code=404, content={"error": "Not found"})
            return render_not_found(request)
        if exc.status_code == 401 and not _is_api(request):
            return PlainTextResponse(str(exc.detail), status_code=401, headers=getattr(exc, "headers", None))
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        if _is_api(request):
            return JSONResponse(status_code=500, content={"error": "Erreur interne"})
        return PlainTextResponse("Erreur interne", status_code=500)
