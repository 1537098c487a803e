"""
Middlewares transverses de l’application.
- register_basic_middlewares: CORS depuis Settings.cors_origins.
- register_no_cache_middleware: empêche la mise en cache des réponses /api/* et /config.
Notes:
- L’ordre d’ajout est important: le dernier middleware ajouté s’exécute en premier.
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from backend.config import Settings


def register_basic_middlewares(app: FastAPI, settings: Settings) -> None:
    """
    Ajoute CORS pour les origines configurées.
    - "*" ne peut pas être combiné avec allow_credentials (norme CORS).
    """
    origins = list(settings.cors_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )


def register_no_cache_middleware(app: FastAPI) -> None:
    """
    Les réponses de paiement et la config publique ne doivent pas être mises en cache
    (un résultat de paiement n’est valable que pour la tentative qui l’a produit).
    """
    @app.middleware("http")
    async def no_cache_for_api(request: Request, call_next):
        response = await call_next(request)
        path = request.url.path.rstrip("/")
        if path == "/config" or path.startswith("/api"):
            response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate, max-age=0"
            response.headers["Pragma"] = "no-cache"
            response.headers["Expires"] = "0"
        return response
