"""
Adaptateur du SDK de tokenisation carte (Square Web Payments).
- fetch_public_config: GET /config sur le backend
- PaymentClientAdapter: possède l'instance carte (créée à initialize, détruite à close)
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Protocol, Sequence

import httpx

from .errors import CardTokenizationError, PaymentConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONTAINER = "#card-container"


@dataclass(frozen=True)
class PublicConfig:
    application_id: str
    location_id: str
    currency: str = "USD"

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "PublicConfig":
        return cls(
            application_id=str(data.get("applicationId") or ""),
            location_id=str(data.get("locationId") or ""),
            currency=str(data.get("currency") or "USD").upper(),
        )


@dataclass(frozen=True)
class TokenResult:
    """Résultat brut de card.tokenize(): status "OK" + token, ou errors [{message}, ...]."""
    status: str
    token: Optional[str] = None
    errors: Sequence[Any] = field(default_factory=tuple)


class Card(Protocol):
    async def attach(self, selector: str) -> None:
        ...

    async def tokenize(self) -> TokenResult:
        ...

    async def destroy(self) -> None:
        ...


class PaymentsSdk(Protocol):
    async def card(self) -> Card:
        ...


# Équivalent de Square.payments(applicationId, locationId)
SdkFactory = Callable[[str, str], PaymentsSdk]


def _first_error_message(errors: Sequence[Any]) -> Optional[str]:
    if not errors:
        return None
    first = errors[0]
    if isinstance(first, Mapping):
        return first.get("message") or None
    return getattr(first, "message", None) or None


async def fetch_public_config(http: httpx.AsyncClient) -> PublicConfig:
    """
    Charge la config publique du backend.
    Erreurs: PaymentConfigurationError si le serveur est injoignable ou répond en erreur.
    """
    try:
        response = await http.get("/config")
    except httpx.HTTPError as e:
        raise PaymentConfigurationError() from e
    if response.is_error:
        raise PaymentConfigurationError()
    try:
        data = response.json()
    except ValueError as e:
        raise PaymentConfigurationError() from e
    return PublicConfig.from_json(data if isinstance(data, Mapping) else {})


class PaymentClientAdapter:
    """
    Transforme les données carte en token à usage unique.
    Utilisable en context manager asynchrone: la carte est détruite à la sortie.
    """

    def __init__(self, sdk_factory: SdkFactory, container: str = DEFAULT_CONTAINER):
        self._sdk_factory = sdk_factory
        self._container = container
        self._card: Optional[Card] = None

    @property
    def ready(self) -> bool:
        return self._card is not None

    async def initialize(self, config: PublicConfig) -> None:
        """
        Crée et attache la carte.
        Échoue immédiatement si applicationId ou locationId manque.
        """
        if not config.application_id or not config.location_id:
            raise PaymentConfigurationError(
                "Square application ID and location ID must be configured. "
                "Update your .env file and restart the server."
            )
        if self._card is not None:
            return
        payments = self._sdk_factory(config.application_id, config.location_id)
        card = await payments.card()
        await card.attach(self._container)
        self._card = card

    async def tokenize_card(self) -> str:
        if self._card is None:
            raise CardTokenizationError("Card payments are not initialized.")
        result = await self._card.tokenize()
        if result.status != "OK" or not result.token:
            message = _first_error_message(result.errors)
            logger.info("card.tokenize failed status=%s", result.status)
            raise CardTokenizationError(message)
        return result.token

    async def close(self) -> None:
        card, self._card = self._card, None
        if card is not None:
            await card.destroy()

    async def __aenter__(self) -> "PaymentClientAdapter":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
