# module backend.public_config.views
"""Configuration publique pour le front (évite de hardcoder les identifiants Square dans index.html).
- GET /config: {applicationId, locationId, currency}
- Le token d'accès Square n'est jamais exposé.
"""
from typing import Dict

from fastapi import APIRouter, Depends

from backend.config import Settings
from backend.utils.dependencies import get_settings

router = APIRouter(tags=["Config"])


@router.get("/config")
def get_public_config(settings: Settings = Depends(get_settings)) -> Dict[str, str]:
    return settings.public_config()
