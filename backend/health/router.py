from fastapi import APIRouter, Depends

from backend.config import Settings
from backend.utils.dependencies import get_settings

router = APIRouter(prefix="/health", tags=["Health"])

@router.get("")
def health_root():
    return {"ok": True}

@router.get("/processor")
def health_processor(settings: Settings = Depends(get_settings)):
    # Noms des variables manquantes uniquement, jamais leurs valeurs
    missing = settings.missing_secrets()
    return {
        "configured": not missing,
        "environment": settings.environment,
        "missing": missing,
    }
