"""
Adaptateur Square: centralise les appels à l'API Payments côté serveur.
- Interface étroite PaymentProcessor.create_payment(charge) -> payment (dict)
- SquarePaymentsClient: implémentation httpx vers POST /v2/payments
Les tests substituent un double via les dependency overrides FastAPI (aucun appel réseau).
"""
import logging
from typing import Any, Dict, Optional, Protocol

import httpx

from backend.config import Settings
from .errors import PaymentConfigurationError, ProcessorError
from .models import ChargeRequest

logger = logging.getLogger(__name__)

SQUARE_BASE_URLS = {
    "production": "https://connect.squareup.com",
    "sandbox": "https://connect.squareupsandbox.com",
}
SQUARE_VERSION = "2024-11-20"
PAYMENTS_PATH = "/v2/payments"


class PaymentProcessor(Protocol):
    async def create_payment(self, charge: ChargeRequest) -> Dict[str, Any]:
        ...


# module backend.payments.square_client
class SquarePaymentsClient:
    """
    Client Square Payments (API REST v2).
    - access_token manquant: PaymentConfigurationError au moment de l'appel, pas à la construction
      (le serveur démarre en mode dégradé).
    - transport: injectable (httpx.MockTransport en tests).
    - Timeout: valeur par défaut de httpx.
    """

    def __init__(
        self,
        access_token: str,
        environment: str = "sandbox",
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._access_token = access_token
        self.base_url = SQUARE_BASE_URLS["production" if environment == "production" else "sandbox"]
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "SquarePaymentsClient":
        return cls(settings.access_token, settings.environment, **kwargs)

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._access_token}",
            "Square-Version": SQUARE_VERSION,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def create_payment(self, charge: ChargeRequest) -> Dict[str, Any]:
        """
        Crée (et capture, autocomplete=True) un paiement Square.
        Retour: l'objet "payment" renvoyé par Square.
        Erreurs:
          - PaymentConfigurationError si le token d'accès n'est pas configuré
          - ProcessorError si Square répond en erreur (errors[] conservé) ou si le transport échoue
        """
        if not self._access_token:
            raise PaymentConfigurationError("Square access token is not configured.")

        try:
            async with httpx.AsyncClient(base_url=self.base_url, transport=self._transport) as client:
                response = await client.post(PAYMENTS_PATH, json=charge.to_square_body(), headers=self._headers())
        except httpx.HTTPError as e:
            raise ProcessorError(str(e) or None) from e

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        errors = body.get("errors") or []
        if response.is_error or errors:
            logger.warning(
                "square.create_payment failed status=%s idempotency_key=%s codes=%s",
                response.status_code,
                charge.idempotency_key,
                [e.get("code") for e in errors if isinstance(e, dict)],
            )
            raise ProcessorError(
                f"Square API error (HTTP {response.status_code})",
                errors=errors,
                http_status=response.status_code,
            )

        return body.get("payment") or {}
