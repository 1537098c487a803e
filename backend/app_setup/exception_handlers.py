"""
Gestionnaires d’exceptions.
- CheckoutError (payments): {"error": message} avec le code HTTP porté par l’erreur.
- HTTPException 404: page public/404.html pour un navigateur hors /api/*, sinon JSON {"error": "Route not found."}.
- Autres HTTPException: {"error": detail}.
"""
import logging
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import FileResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.payments.errors import CheckoutError

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Route not found."


def _wants_html(request: Request) -> bool:
    accept = (request.headers.get("accept") or "").lower()
    is_api = request.url.path.startswith("/api/")
    return "text/html" in accept and not is_api


def register_exception_handlers(app: FastAPI, public_dir: Path) -> None:
    """
    Enregistre les handlers d’erreurs.
    - UX web: page 404 statique si disponible.
    - UX API: corps JSON {"error": ...} attendu par le front de paiement.
    """
    not_found_page = public_dir / "404.html"

    @app.exception_handler(CheckoutError)
    async def checkout_error_handler(request: Request, exc: CheckoutError):
        if exc.status_code >= 500:
            logger.error("checkout error path=%s status=%s error=%s", request.url.path, exc.status_code, exc.message)
        else:
            logger.info("checkout rejected path=%s status=%s error=%s", request.url.path, exc.status_code, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    # Enregistré sur la classe Starlette pour couvrir aussi les 404/405 du routeur et des StaticFiles
    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: HTTPException):
        if exc.status_code == 404:
            if _wants_html(request) and not_found_page.exists():
                return FileResponse(str(not_found_page), status_code=404, media_type="text/html")
            return JSONResponse(status_code=404, content={"error": NOT_FOUND_MESSAGE})
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )
