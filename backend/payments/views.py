import json
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request

from backend.config import Settings
from backend.utils.dependencies import get_payment_processor, get_settings
from backend.payments import service as payments_service
from backend.payments.errors import CheckoutError, PaymentValidationError
from backend.payments.square_client import PaymentProcessor

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/payments", tags=["Payments API"])


# module backend.payments.views
@router.post("")
async def create_payment(
    request: Request,
    settings: Settings = Depends(get_settings),
    processor: PaymentProcessor = Depends(get_payment_processor),
) -> Dict[str, Any]:
    """
    Relaye un paiement tokenisé vers Square.
    - Entrée JSON: { "sourceId": "<token>", "amount": <int, centimes>, "currency"?, "buyerEmail"?, "note"? }
    - Étapes:
      1) Valider le corps (payments_service.parse_payment_request) -> 400 {"error"}
      2) Construire la charge idempotente et appeler le processeur (payments_service.create_payment)
    - Réponses: 200 {"payment", "message"} ou 500 {"error"} (détail Square si disponible)
    """
    try:
        raw = await request.body()
        body = json.loads(raw or b"null")
    except ValueError:
        raise PaymentValidationError("Request body must be valid JSON.")

    payment = payments_service.parse_payment_request(body)
    try:
        return await payments_service.create_payment(payment, settings, processor)
    except CheckoutError:
        raise
    except Exception as e:
        logger.exception("Erreur create_payment")
        raise CheckoutError(payments_service.error_message_from(e))
