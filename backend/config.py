# backend.config
"""
Configuration centrale du backend.

- Charge le fichier .env à la racine du projet (BASE_DIR/.env) sans écraser l'environnement réel
- Expose les chemins utiles (PUBLIC_DIR)
- Construit un objet Settings immuable, passé explicitement à l'app et aux services
"""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Tuple

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"
PUBLIC_DIR = BASE_DIR / "public"

DEFAULT_CURRENCY = "USD"
DEFAULT_PORT = 3000

# Variables sans lesquelles les paiements Square ne peuvent pas aboutir
REQUIRED_SECRETS = ("SQUARE_APPLICATION_ID", "SQUARE_LOCATION_ID", "SQUARE_ACCESS_TOKEN")


def _clean_env(v: Optional[str]) -> str:
    """
    Nettoie une valeur d'environnement:
    - supprime les espaces et guillemets (simples, doubles) et backticks
    - retourne toujours une chaîne (jamais None)
    """
    return (v or "").strip().strip("'").strip('"').strip("`")


def _split_list(v: Optional[str], default: str) -> Tuple[str, ...]:
    raw = v if v is not None else default
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    """
    Configuration du processus, figée au démarrage.
    - access_token est le seul secret: il ne sort jamais vers le navigateur.
    - environment: "production" ou "sandbox" (toute autre valeur = sandbox).
    """
    application_id: str = ""
    location_id: str = ""
    access_token: str = field(default="", repr=False)
    environment: str = "sandbox"
    currency: str = DEFAULT_CURRENCY
    port: int = DEFAULT_PORT
    cors_origins: Tuple[str, ...] = ("*",)
    public_dir: Path = PUBLIC_DIR

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def missing_secrets(self) -> List[str]:
        values = {
            "SQUARE_APPLICATION_ID": self.application_id,
            "SQUARE_LOCATION_ID": self.location_id,
            "SQUARE_ACCESS_TOKEN": self.access_token,
        }
        return [name for name in REQUIRED_SECRETS if not values[name]]

    def public_config(self) -> Dict[str, str]:
        """Vue non secrète exposée au front (GET /config)."""
        return {
            "applicationId": self.application_id,
            "locationId": self.location_id,
            "currency": self.currency,
        }


def load_settings(environ: Optional[Mapping[str, str]] = None, *, use_dotenv: bool = True) -> Settings:
    """
    Construit Settings depuis l'environnement (os.environ par défaut).
    - use_dotenv: charge BASE_DIR/.env au préalable (override=False: l'environnement réel gagne).
    - PORT invalide -> port par défaut.
    """
    if environ is None:
        if use_dotenv:
            load_dotenv(dotenv_path=ENV_PATH, override=False)
        environ = os.environ

    environment = _clean_env(environ.get("SQUARE_ENVIRONMENT")).lower() or "sandbox"
    if environment != "production":
        environment = "sandbox"

    currency = (_clean_env(environ.get("SQUARE_CURRENCY")) or DEFAULT_CURRENCY).upper()

    try:
        port = int(_clean_env(environ.get("PORT")) or DEFAULT_PORT)
    except ValueError:
        port = DEFAULT_PORT

    return Settings(
        application_id=_clean_env(environ.get("SQUARE_APPLICATION_ID")),
        location_id=_clean_env(environ.get("SQUARE_LOCATION_ID")),
        access_token=_clean_env(environ.get("SQUARE_ACCESS_TOKEN")),
        environment=environment,
        currency=currency,
        port=port,
        cors_origins=_split_list(environ.get("CORS_ORIGINS"), "*"),
    )
