"""
Lifespan FastAPI: vérifications au démarrage.
- Identifiants Square manquants: le serveur démarre quand même (mode dégradé, utile pour travailler l’UI)
  mais un warning liste les variables absentes; les paiements échoueront à l’étape gateway.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger = logging.getLogger("uvicorn.error")
    settings = app.state.settings

    missing = settings.missing_secrets()
    if missing:
        logger.warning(
            "Missing required Square environment variables: %s. "
            "The server will still start so you can work on the UI, "
            "but API requests to Square will fail until these values are provided.",
            ", ".join(missing),
        )
    logger.info("Checkout server ready (environment=%s, currency=%s)", settings.environment, settings.currency)

    yield
