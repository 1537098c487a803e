"""
Cas d'usage 'payments': valide la requête, construit la charge idempotente, appelle le processeur.
"""
import logging
import math
from typing import Any, Dict, Mapping, Optional
from uuid import uuid4

from backend.config import DEFAULT_CURRENCY, Settings
from .errors import CheckoutError, PaymentValidationError, ProcessorError
from .models import ChargeRequest, Money, PaymentRequest
from .square_client import PaymentProcessor

logger = logging.getLogger(__name__)

MISSING_SOURCE_MESSAGE = "Missing card token from Square Web Payments SDK."
INVALID_AMOUNT_MESSAGE = (
    "Payment amount must be provided as a positive integer of the lowest currency "
    "denomination (for USD, cents)."
)
SUCCESS_MESSAGE = "Payment completed successfully!"
FALLBACK_ERROR_MESSAGE = "Failed to process payment."


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_amount(value: Any) -> int:
    # bool est une sous-classe d'int: true/false ne sont pas des montants
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PaymentValidationError(INVALID_AMOUNT_MESSAGE)
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value) or not value.is_integer():
            raise PaymentValidationError(INVALID_AMOUNT_MESSAGE)
        value = int(value)
    if value <= 0:
        raise PaymentValidationError(INVALID_AMOUNT_MESSAGE)
    return value


def parse_payment_request(body: Any) -> PaymentRequest:
    """
    Valide le corps JSON de POST /api/payments, dans l'ordre:
      1) objet JSON
      2) sourceId présent et non vide
      3) amount: nombre, ni NaN ni infini, entier (pas de fraction de centime), > 0
    Soulève PaymentValidationError (400) au premier échec.
    """
    if not isinstance(body, Mapping):
        raise PaymentValidationError("Request body must be a JSON object.")

    source_id = body.get("sourceId")
    if not isinstance(source_id, str) or not source_id.strip():
        raise PaymentValidationError(MISSING_SOURCE_MESSAGE)

    amount = _parse_amount(body.get("amount"))

    return PaymentRequest(
        source_id=source_id,
        amount=amount,
        currency=_optional_text(body.get("currency")),
        buyer_email=_optional_text(body.get("buyerEmail")),
        note=_optional_text(body.get("note")),
    )


def build_charge_request(
    payment: PaymentRequest,
    settings: Settings,
    *,
    idempotency_key: Optional[str] = None,
) -> ChargeRequest:
    """
    Construit la charge Square.
    - idempotency_key: UUID4 neuf par appel (une nouvelle tentative = une nouvelle clé).
    - currency: requête, sinon défaut serveur, sinon USD; toujours en majuscules.
    - autocomplete: toujours True (pas d'étape authorize/capture séparée).
    """
    currency = (payment.currency or settings.currency or DEFAULT_CURRENCY).upper()
    return ChargeRequest(
        source_id=payment.source_id,
        idempotency_key=idempotency_key or str(uuid4()),
        amount_money=Money(amount=payment.amount, currency=currency),
        autocomplete=True,
        buyer_email_address=payment.buyer_email,
        note=payment.note,
    )


def error_message_from(exc: BaseException) -> str:
    """
    Message lisible pour une erreur du processeur:
    détail structuré Square s'il existe, sinon message de l'exception, sinon message générique.
    """
    if isinstance(exc, ProcessorError) and exc.detail:
        return exc.detail
    if isinstance(exc, CheckoutError):
        return exc.message or FALLBACK_ERROR_MESSAGE
    return str(exc) or FALLBACK_ERROR_MESSAGE


async def create_payment(
    payment: PaymentRequest,
    settings: Settings,
    processor: PaymentProcessor,
) -> Dict[str, Any]:
    """
    Envoie la charge au processeur et renvoie {"payment": ..., "message": ...}.
    Toute erreur d'appel est journalisée puis traduite en CheckoutError (500) avec un message lisible.
    """
    charge = build_charge_request(payment, settings)
    try:
        result = await processor.create_payment(charge)
    except Exception as e:
        logger.exception("Error creating payment with Square idempotency_key=%s", charge.idempotency_key)
        raise CheckoutError(error_message_from(e)) from e

    logger.info(
        "payments.create ok payment_id=%s amount=%s currency=%s",
        (result or {}).get("id"),
        charge.amount_money.amount,
        charge.amount_money.currency,
    )
    return {"payment": result, "message": SUCCESS_MESSAGE}
