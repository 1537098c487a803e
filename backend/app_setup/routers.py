"""
Registre central des routers.
- Config publique: public_config_router (/config)
- API: payments_router (/api/payments)
- Health: health_router (/health)
"""
from fastapi import FastAPI
from backend.public_config.views import router as public_config_router
from backend.payments.views import router as payments_router
from backend.health.router import router as health_router

def register_routers(app: FastAPI) -> None:
    app.include_router(public_config_router)
    app.include_router(payments_router)
    # Health & monitoring
    app.include_router(health_router)
