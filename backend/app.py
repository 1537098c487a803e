# module backend.app
from typing import Optional

from fastapi import FastAPI

from backend.config import Settings, load_settings
from backend.app_setup.middlewares import register_basic_middlewares, register_no_cache_middleware
from backend.app_setup.security import register_security_middleware
from backend.app_setup.exception_handlers import register_exception_handlers
from backend.app_setup.routes import register_routes
from backend.app_setup.routers import register_routers
from backend.app_setup.static import mount_static_files
from backend.app_setup.lifespan import lifespan as app_lifespan


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Crée et configure l’instance FastAPI de l’application.
    Étapes et ordre:
      1) Settings: objet immuable (load_settings() par défaut) posé sur app.state.settings.
      2) register_basic_middlewares: CORS.
      3) mount_static_files: expose /static, /css, /js.
      4) register_security_middleware: en-têtes de sécurité + CSP (SDK Square).
      5) register_no_cache_middleware: pas de cache sur /api/* et /config.
      6) register_exception_handlers: {"error": ...} pour l’API, page 404 pour le web.
      7) register_routes: /, /index.html, favicon.
      8) register_routers: /config, /api/payments, /health.
    Retourne:
      - FastAPI: l’application prête à être servie (ASGI).
    """
    settings = settings or load_settings()
    app = FastAPI(title="Checkout API", lifespan=app_lifespan)
    app.state.settings = settings
    register_basic_middlewares(app, settings)
    mount_static_files(app, settings.public_dir)
    register_security_middleware(app, settings)
    register_no_cache_middleware(app)
    register_exception_handlers(app, settings.public_dir)
    register_routes(app, settings.public_dir)
    register_routers(app)
    return app
